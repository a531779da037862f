# apps/analytics/repositories/query_builder.py
import logging
from datetime import date

from django.db.models import Q
from django.utils.dateparse import parse_date

from apps.authentication.principal import AdminScope, ClientScope, MarketScope
from apps.campaigns.models import Campaign
from apps.events.models import Playback, Audience
from apps.markets.models import Market, Device
from apps.reports.models import Report
from .performance import monitor_query_performance

logger = logging.getLogger(__name__)

CAMPAIGNS = 'campaigns'
PLAYBACKS = 'playbacks'
REPORTS = 'reports'
DEVICES = 'devices'
AUDIENCES = 'audiences'
MARKETS = 'markets'

ENTITY_MODELS = {
    CAMPAIGNS: Campaign,
    PLAYBACKS: Playback,
    REPORTS: Report,
    DEVICES: Device,
    AUDIENCES: Audience,
    MARKETS: Market,
}

ALL_MARKETS = 'all'

# Matches nothing; used for every (role, entity) pair without an explicit rule
DENY = Q(pk__in=[])


def coerce_date(value):
    if isinstance(value, date):
        return value
    parsed = parse_date(value) if isinstance(value, str) else None
    if parsed is None:
        raise ValueError(f"Invalid date: {value!r}")
    return parsed


class ScopedQueryBuilder:
    """Narrows entity querysets to the rows a principal may see.

    Client and market visibility is resolved in two phases: the ids the
    principal owns (campaigns of the client, devices of the market) are
    fetched first and the target rows are then filtered by membership.
    Resolved id lists are memoised per builder.
    """

    def __init__(self, principal):
        self.principal = principal
        self.start_date = None
        self.end_date = None
        self.market_id = None
        self._resolved = {}

    def add_date_range(self, start_date, end_date):
        start_date, end_date = coerce_date(start_date), coerce_date(end_date)
        if start_date > end_date:
            raise ValueError("start_date must not be after end_date")
        self.start_date = start_date
        self.end_date = end_date
        return self

    def add_market_filter(self, market_id):
        self.market_id = None if market_id in (None, '', ALL_MARKETS) else str(market_id)
        return self

    # Phase one: id resolution

    def _memo(self, key, loader):
        if key not in self._resolved:
            self._resolved[key] = loader()
        return self._resolved[key]

    @monitor_query_performance
    def client_campaign_ids(self, client_id):
        return self._memo(('client_campaigns', client_id), lambda: list(
            Campaign.objects.filter(client=client_id).values_list('id', flat=True)
        ))

    @monitor_query_performance
    def market_device_ids(self, market_id):
        return self._memo(('market_devices', market_id), lambda: list(
            Device.objects.filter(market_id=market_id).values_list('id', flat=True)
        ))

    @monitor_query_performance
    def market_campaign_ids(self, market_id):
        """Campaigns with at least one playback on the market's devices."""
        device_ids = self.market_device_ids(market_id)
        return self._memo(('market_campaigns', market_id), lambda: list(
            Playback.objects.filter(device_id__in=device_ids)
            .values_list('campaign_id', flat=True)
            .distinct()
        ))

    # Scope predicates

    def scope_filter(self, entity):
        if entity not in ENTITY_MODELS:
            raise ValueError(f"Unknown entity type: {entity}")

        scope = self.principal.scope
        if isinstance(scope, AdminScope):
            return Q()
        if isinstance(scope, ClientScope):
            return self._client_filter(entity, scope.client_id)
        if isinstance(scope, MarketScope):
            return self._market_filter(entity, scope.market_id)

        logger.warning(f"Denying {entity} access for user {self.principal.user_id} without role scope")
        return DENY

    def _client_filter(self, entity, client_id):
        if entity == CAMPAIGNS:
            return Q(client=client_id)
        if entity in (PLAYBACKS, REPORTS):
            return Q(campaign_id__in=self.client_campaign_ids(client_id))
        return DENY

    def _market_filter(self, entity, market_id):
        if entity == MARKETS:
            return Q(id=market_id)
        if entity == DEVICES:
            return Q(market_id=market_id)
        if entity in (PLAYBACKS, AUDIENCES):
            return Q(device_id__in=self.market_device_ids(market_id))
        if entity == CAMPAIGNS:
            return Q(id__in=self.market_campaign_ids(market_id))
        if entity == REPORTS:
            return Q(campaign_id__in=self.market_campaign_ids(market_id))
        return DENY

    # Report filters

    def _range_filter(self, entity):
        if self.start_date is None:
            return Q()
        if entity == CAMPAIGNS:
            # Overlap of [start_date, end_date] with the requested range
            return Q(start_date__lte=self.end_date, end_date__gte=self.start_date)
        if entity in (PLAYBACKS, AUDIENCES):
            return Q(date__gte=self.start_date, date__lte=self.end_date)
        return Q()

    def _market_selection_filter(self, entity):
        if self.market_id is None:
            return Q()
        if entity in (PLAYBACKS, AUDIENCES):
            return Q(device_id__in=self.market_device_ids(self.market_id))
        if entity == DEVICES:
            return Q(market_id=self.market_id)
        return Q()

    def build(self, entity):
        model = ENTITY_MODELS.get(entity)
        if model is None:
            raise ValueError(f"Unknown entity type: {entity}")
        predicate = (
            self.scope_filter(entity) &
            self._range_filter(entity) &
            self._market_selection_filter(entity)
        )
        return model.objects.filter(predicate)

    def campaigns(self):
        return self.build(CAMPAIGNS)

    def playbacks(self):
        return self.build(PLAYBACKS)

    def reports(self):
        return self.build(REPORTS)

    def devices(self):
        return self.build(DEVICES)

    def audiences(self):
        return self.build(AUDIENCES)

    def markets(self):
        return self.build(MARKETS)
