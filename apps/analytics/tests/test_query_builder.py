from datetime import date

from django.test import TestCase

from apps.analytics.repositories import ScopedQueryBuilder
from apps.analytics.repositories.query_builder import coerce_date
from apps.authentication.principal import AdminScope, ClientScope, MarketScope, Principal
from .fixtures import create_dataset


def ids(queryset):
    return sorted(queryset.values_list('id', flat=True))


class ScopedQueryBuilderTest(TestCase):
    def setUp(self):
        self.data = create_dataset()
        self.admin = Principal(user_id=1, scope=AdminScope())
        self.client_x = Principal(user_id=2, scope=ClientScope(client_id='X'))
        self.north = Principal(user_id=3, scope=MarketScope(market_id='m1'))
        self.south = Principal(user_id=4, scope=MarketScope(market_id='m2'))
        self.nobody = Principal(user_id=5, scope=None)

    def test_admin_sees_everything(self):
        builder = ScopedQueryBuilder(self.admin)
        self.assertEqual(ids(builder.campaigns()), ['A', 'B'])
        self.assertEqual(ids(builder.playbacks()), ['p1', 'p2', 'p3'])
        self.assertEqual(ids(builder.devices()), ['d1', 'd2', 'd3'])
        self.assertEqual(ids(builder.markets()), ['m1', 'm2'])
        self.assertEqual(ids(builder.reports()), ['r1', 'r2'])

    def test_client_campaigns_restricted_to_own_client(self):
        campaigns = ScopedQueryBuilder(self.client_x).campaigns()
        self.assertEqual(ids(campaigns), ['A'])
        self.assertTrue(all(campaign.client == 'X' for campaign in campaigns))

    def test_client_playbacks_and_reports_follow_campaign_ids(self):
        builder = ScopedQueryBuilder(self.client_x)
        self.assertEqual(ids(builder.playbacks()), ['p1', 'p2'])
        self.assertEqual(ids(builder.reports()), ['r1'])

    def test_client_without_rule_is_denied(self):
        builder = ScopedQueryBuilder(self.client_x)
        self.assertEqual(ids(builder.devices()), [])
        self.assertEqual(ids(builder.audiences()), [])
        self.assertEqual(ids(builder.markets()), [])

    def test_market_playbacks_subset_of_market_devices(self):
        playbacks = ScopedQueryBuilder(self.north).playbacks()
        self.assertEqual(ids(playbacks), ['p1', 'p3'])
        self.assertTrue(all(playback.device.market_id == 'm1' for playback in playbacks))

    def test_market_devices_audiences_and_market(self):
        builder = ScopedQueryBuilder(self.north)
        self.assertEqual(ids(builder.devices()), ['d1', 'd2'])
        self.assertEqual(ids(builder.audiences()), ['au1'])
        self.assertEqual(ids(builder.markets()), ['m1'])

    def test_market_campaigns_derived_from_device_playbacks(self):
        self.assertEqual(ids(ScopedQueryBuilder(self.north).campaigns()), ['A', 'B'])
        self.assertEqual(ids(ScopedQueryBuilder(self.south).campaigns()), ['A'])
        self.assertEqual(ids(ScopedQueryBuilder(self.south).reports()), ['r1'])

    def test_missing_scope_denies_every_entity(self):
        builder = ScopedQueryBuilder(self.nobody)
        for queryset in (builder.campaigns(), builder.playbacks(), builder.reports(),
                         builder.devices(), builder.audiences(), builder.markets()):
            self.assertFalse(queryset.exists())

    def test_date_range_uses_overlap_for_campaigns(self):
        builder = ScopedQueryBuilder(self.admin).add_date_range('2024-06-25', '2024-07-02')
        self.assertEqual(ids(builder.campaigns()), ['A', 'B'])
        self.assertEqual(ids(builder.playbacks()), [])

    def test_date_range_bounds_are_inclusive(self):
        builder = ScopedQueryBuilder(self.admin).add_date_range(date(2024, 6, 10), date(2024, 6, 20))
        self.assertEqual(ids(builder.playbacks()), ['p1', 'p2'])

    def test_market_filter(self):
        builder = ScopedQueryBuilder(self.admin).add_market_filter('m2')
        self.assertEqual(ids(builder.playbacks()), ['p2'])
        self.assertEqual(ids(builder.devices()), ['d3'])

    def test_market_filter_all_sentinel(self):
        builder = ScopedQueryBuilder(self.admin).add_market_filter('all')
        self.assertIsNone(builder.market_id)
        self.assertEqual(ids(builder.playbacks()), ['p1', 'p2', 'p3'])

    def test_market_filter_combines_with_scope(self):
        builder = ScopedQueryBuilder(self.north).add_market_filter('m2')
        self.assertEqual(ids(builder.playbacks()), [])

    def test_start_after_end_rejected(self):
        with self.assertRaises(ValueError):
            ScopedQueryBuilder(self.admin).add_date_range('2024-06-30', '2024-06-01')

    def test_invalid_date_rejected(self):
        with self.assertRaises(ValueError):
            coerce_date('30/06/2024')

    def test_unknown_entity_rejected(self):
        with self.assertRaises(ValueError):
            ScopedQueryBuilder(self.admin).build('impressions')

    def test_resolved_ids_memoised_per_builder(self):
        builder = ScopedQueryBuilder(self.north)
        builder.market_device_ids('m1')
        with self.assertNumQueries(0):
            self.assertEqual(sorted(builder.market_device_ids('m1')), ['d1', 'd2'])
