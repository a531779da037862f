# apps/reports/views.py
import logging

from django.http import HttpResponse
from rest_framework import status, viewsets
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.analytics.aggregation import ReportGenerationError, build_report_data
from apps.analytics.repositories import ScopedQueryBuilder
from apps.authentication.permissions import HasRoleScope
from apps.authentication.principal import principal_for
from .exporters import CONTENT_TYPES, EXPORTERS, report_filename
from .serializers import ReportSerializer, ReportExportParamsSerializer

logger = logging.getLogger(__name__)


class ReportViewSet(viewsets.ReadOnlyModelViewSet):
    permission_classes = [HasRoleScope]
    serializer_class = ReportSerializer

    def get_queryset(self):
        principal = principal_for(self.request.user)
        return (
            ScopedQueryBuilder(principal)
            .reports()
            .select_related('campaign')
            .order_by('-created_at')
        )


class ReportExportView(APIView):
    """Download the caller's campaign report as a PDF or Excel file"""
    permission_classes = [HasRoleScope]

    def get(self, request):
        params = ReportExportParamsSerializer(data=request.query_params)
        if not params.is_valid():
            return Response({'error': params.errors}, status=status.HTTP_400_BAD_REQUEST)

        principal = principal_for(request.user)
        try:
            report_data = build_report_data(
                principal,
                params.validated_data['start_date'],
                params.validated_data['end_date'],
                params.validated_data['market'],
            )
        except ValueError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except ReportGenerationError as e:
            return Response({'error': f'Error generating report: {e}'},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        exporter, extension = EXPORTERS[params.validated_data['type']]
        content = exporter(report_data)
        filename = report_filename(extension)

        logger.info(
            f"Report {filename} exported for user {principal.user_id}: "
            f"{report_data.total_playbacks} playbacks, {report_data.total_duration}s"
        )

        response = HttpResponse(content, content_type=CONTENT_TYPES[extension])
        response['Content-Disposition'] = f'attachment; filename="{filename}"'
        return response
