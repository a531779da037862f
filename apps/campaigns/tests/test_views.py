from datetime import date

from django.core.exceptions import ValidationError
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.analytics.tests.fixtures import create_dataset, create_role_users
from apps.campaigns.models import Campaign


class CampaignModelTest(TestCase):
    def test_is_active_on(self):
        campaign = Campaign(name='Invierno', client='X', start_date=date(2024, 6, 1), end_date=date(2024, 6, 30))
        self.assertTrue(campaign.is_active_on(date(2024, 6, 1)))
        self.assertFalse(campaign.is_active_on(date(2024, 7, 1)))

    def test_clean_rejects_inverted_dates(self):
        campaign = Campaign(name='Invierno', client='X', start_date=date(2024, 6, 30), end_date=date(2024, 6, 1))
        with self.assertRaises(ValidationError):
            campaign.clean()


class CampaignViewSetTest(APITestCase):
    def setUp(self):
        self.data = create_dataset()
        self.users = create_role_users(self.data.south)

    def ids(self, response):
        return sorted(row['id'] for row in response.data['results'])

    def test_admin_lists_all(self):
        self.client.force_authenticate(user=self.users.admin)
        response = self.client.get(reverse('campaign-list'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.ids(response), ['A', 'B'])

    def test_client_lists_own_campaigns(self):
        self.client.force_authenticate(user=self.users.client)
        response = self.client.get(reverse('campaign-list'))
        self.assertEqual(self.ids(response), ['A'])

    def test_market_lists_campaigns_played_on_its_devices(self):
        self.client.force_authenticate(user=self.users.market)
        response = self.client.get(reverse('campaign-list'))
        self.assertEqual(self.ids(response), ['A'])

    def test_client_cannot_retrieve_other_client_campaign(self):
        self.client.force_authenticate(user=self.users.client)
        response = self.client.get(reverse('campaign-detail', args=['B']))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_anonymous_rejected(self):
        response = self.client.get(reverse('campaign-list'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
