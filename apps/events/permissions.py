import hmac

from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import BasePermission

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'authorization, x-client-info, apikey, content-type',
}

SERVICE_AUTH = 'service-key'


def _matches(candidate, expected):
    return bool(candidate) and hmac.compare_digest(str(candidate), str(expected))


class ServiceKeyAuthentication(BaseAuthentication):
    """Service-key check for the insertion endpoint.

    Requires both ``Authorization: Bearer <key>`` and ``apikey: <key>``.
    Preflight requests are not authenticated.
    """

    def authenticate(self, request):
        if request.method == 'OPTIONS':
            return None

        expected = settings.INGESTION_SERVICE_KEY
        header = request.META.get('HTTP_AUTHORIZATION', '')
        token = header.split(' ', 1)[1].strip() if header.startswith('Bearer ') else None
        if not (_matches(token, expected) and _matches(request.META.get('HTTP_APIKEY'), expected)):
            raise AuthenticationFailed('Invalid or missing service key')
        return AnonymousUser(), SERVICE_AUTH

    def authenticate_header(self, request):
        return 'Bearer'


class HasIngestionKey(BasePermission):
    message = 'Invalid or missing service key'

    def has_permission(self, request, view):
        return request.method == 'OPTIONS' or request.auth == SERVICE_AUTH
