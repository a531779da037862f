from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from apps.authentication.permissions import HasRoleScope
from apps.authentication.principal import principal_for
from .aggregation import ReportGenerationError, dashboard_summary
from .repositories import ScopedQueryBuilder, ALL_MARKETS, cache_heavy_query


@cache_heavy_query('market_options')
def market_options_for(principal):
    """Choices for the report market filter, led by the "all" option"""
    markets = ScopedQueryBuilder(principal).markets().order_by('name').values('id', 'name', 'city')
    return [{'value': ALL_MARKETS, 'label': 'Todos los mercados'}] + [{
        'value': market['id'],
        'label': f"{market['name']} - {market['city']}",
    } for market in markets]


@api_view(['GET'])
@permission_classes([HasRoleScope])
def dashboard(request):
    """Totals and per-market playback counts visible to the caller"""
    principal = principal_for(request.user)
    try:
        data = dashboard_summary(principal, timezone.localdate())
    except ReportGenerationError as e:
        return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response({
        'principal': principal.as_dict(),
        **data,
    })


@api_view(['GET'])
@permission_classes([HasRoleScope])
def market_options(request):
    options = market_options_for(principal_for(request.user))
    return Response({
        'options': options,
        'total_markets': len(options) - 1,
    })
