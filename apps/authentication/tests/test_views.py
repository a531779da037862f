from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.authentication.models import User
from apps.markets.models import Market


class AuthenticationViewsTest(APITestCase):
    def setUp(self):
        self.market = Market.objects.create(id='m1', name='Plaza Norte', city='Lima')
        self.admin = User.objects.create_user(username='admin', email='admin@canal.test',
                                              password='adminpass123', role=User.ROLE_ADMIN)
        self.client_user = User.objects.create_user(username='cliente', email='cliente@canal.test',
                                                    password='clientpass123', role=User.ROLE_CLIENT,
                                                    client_id='X')

    def test_login_returns_tokens_and_principal(self):
        response = self.client.post(reverse('login'), {
            'email': 'cliente@canal.test',
            'password': 'clientpass123',
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)
        self.assertEqual(response.data['principal'], {
            'user_id': self.client_user.pk, 'role': 'client', 'client_id': 'X',
        })

    def test_login_invalid_credentials(self):
        response = self.client.post(reverse('login'), {
            'email': 'cliente@canal.test',
            'password': 'wrong',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_access_token_authenticates(self):
        login = self.client.post(reverse('login'), {
            'email': 'cliente@canal.test',
            'password': 'clientpass123',
        })
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
        response = self.client.get(reverse('me'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user']['email'], 'cliente@canal.test')

    def test_register_requires_admin(self):
        self.client.force_authenticate(user=self.client_user)
        response = self.client.post(reverse('register'), {
            'username': 'nuevo', 'email': 'nuevo@canal.test', 'password': 'nuevopass123',
            'role': 'client', 'client_id': 'Z',
        })
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_registers_market_user(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(reverse('register'), {
            'username': 'mercado', 'email': 'mercado@canal.test', 'password': 'mercadopass123',
            'role': 'market', 'market': 'm1',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn('access', response.data)
        user = User.objects.get(email='mercado@canal.test')
        self.assertEqual(user.market_id, 'm1')
        self.assertTrue(user.check_password('mercadopass123'))

    def test_register_client_requires_client_id(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(reverse('register'), {
            'username': 'nuevo', 'email': 'nuevo@canal.test', 'password': 'nuevopass123',
            'role': 'client',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('client_id', response.data)

    def test_logout_blacklists_refresh_token(self):
        login = self.client.post(reverse('login'), {
            'email': 'cliente@canal.test',
            'password': 'clientpass123',
        })
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
        response = self.client.post(reverse('logout'), {'refresh': login.data['refresh']})
        self.assertEqual(response.status_code, status.HTTP_205_RESET_CONTENT)

        response = self.client.post(reverse('token_refresh'), {'refresh': login.data['refresh']})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
