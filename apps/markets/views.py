from rest_framework import viewsets

from apps.analytics.repositories import ScopedQueryBuilder
from apps.authentication.permissions import HasRole, IsAdminRole
from apps.authentication.principal import principal_for
from .models import Market
from .serializers import MarketSerializer, DeviceSerializer


class MarketViewSet(viewsets.ReadOnlyModelViewSet):
    permission_classes = [IsAdminRole]
    serializer_class = MarketSerializer

    def get_queryset(self):
        return Market.objects.order_by('name')


class DeviceViewSet(viewsets.ReadOnlyModelViewSet):
    permission_classes = [HasRole]
    allowed_roles = ('admin', 'market')
    serializer_class = DeviceSerializer

    def get_queryset(self):
        principal = principal_for(self.request.user)
        return (
            ScopedQueryBuilder(principal)
            .devices()
            .select_related('market')
            .order_by('name')
        )
