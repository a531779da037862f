from rest_framework import viewsets

from apps.analytics.repositories import ScopedQueryBuilder
from apps.authentication.permissions import HasRoleScope
from apps.authentication.principal import principal_for
from .serializers import CampaignSerializer


class CampaignViewSet(viewsets.ReadOnlyModelViewSet):
    permission_classes = [HasRoleScope]
    serializer_class = CampaignSerializer

    def get_queryset(self):
        principal = principal_for(self.request.user)
        return ScopedQueryBuilder(principal).campaigns().order_by('-created_at')
