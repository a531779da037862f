# apps/events/views.py
import logging

from django.db import DatabaseError
from django.http import HttpResponse
from rest_framework import status, viewsets
from rest_framework.exceptions import ParseError, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.analytics.repositories import ScopedQueryBuilder
from apps.authentication.permissions import HasRole, HasRoleScope
from apps.authentication.principal import principal_for
from .permissions import CORS_HEADERS, HasIngestionKey, ServiceKeyAuthentication
from .serializers import PlaybackSerializer, AudienceSerializer

logger = logging.getLogger(__name__)

REQUIRED_PLAYBACK_FIELDS = ('campaign_id', 'device_id', 'date', 'time', 'duration')


def missing_fields(payload, required=REQUIRED_PLAYBACK_FIELDS):
    return [field for field in required if payload.get(field) in (None, '')]


class InsertPlaybackView(APIView):
    """Insert one playback row pushed by the ingestion job"""
    authentication_classes = [ServiceKeyAuthentication]
    permission_classes = [HasIngestionKey]
    http_method_names = ['post', 'options']

    def finalize_response(self, request, response, *args, **kwargs):
        # Error responses raised by DRF (401 included) carry the CORS headers too
        response = super().finalize_response(request, response, *args, **kwargs)
        for header, value in CORS_HEADERS.items():
            response[header] = value
        return response

    def options(self, request, *args, **kwargs):
        return HttpResponse('ok')

    def post(self, request):
        try:
            data = request.data
        except ParseError as e:
            return Response({'error': str(e.detail)}, status=status.HTTP_400_BAD_REQUEST)

        if not isinstance(data, dict):
            return Response({
                'error': 'Request body must be a JSON object'
            }, status=status.HTTP_400_BAD_REQUEST)

        missing = missing_fields(data)
        if missing:
            return Response({
                'error': f"Missing required fields: {', '.join(missing)}"
            }, status=status.HTTP_400_BAD_REQUEST)

        try:
            serializer = PlaybackSerializer(data={field: data[field] for field in REQUIRED_PLAYBACK_FIELDS})
            if not serializer.is_valid():
                return Response({
                    'error': 'Invalid playback data',
                    'details': serializer.errors
                }, status=status.HTTP_400_BAD_REQUEST)

            playback = serializer.save()
            logger.info(f"Playback {playback.id} inserted: {playback.date} {playback.time} - {playback.duration}s")

            return Response({
                'success': True,
                'data': PlaybackSerializer(playback).data,
                'message': 'Playback data inserted successfully'
            }, status=status.HTTP_200_OK)

        except DatabaseError as e:
            logger.error(f"Error inserting playback: {str(e)}")
            return Response({
                'error': str(e)
            }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        except Exception:
            logger.exception("Unexpected error inserting playback")
            return Response({
                'error': 'Internal server error'
            }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class ScopedDateRangeMixin:
    """Builds the caller's scoped query, narrowed by optional ``start_date``/``end_date``."""

    def scoped_builder(self):
        builder = ScopedQueryBuilder(principal_for(self.request.user))
        start_date = self.request.query_params.get('start_date')
        end_date = self.request.query_params.get('end_date')
        if not start_date and not end_date:
            return builder
        if not (start_date and end_date):
            raise ValidationError({'error': 'start_date and end_date must be provided together'})
        try:
            return builder.add_date_range(start_date, end_date)
        except ValueError as e:
            raise ValidationError({'error': str(e)})


class PlaybackViewSet(ScopedDateRangeMixin, viewsets.ReadOnlyModelViewSet):
    permission_classes = [HasRoleScope]
    serializer_class = PlaybackSerializer

    def get_queryset(self):
        return self.scoped_builder().playbacks().order_by('-date', '-time')


class AudienceViewSet(ScopedDateRangeMixin, viewsets.ReadOnlyModelViewSet):
    permission_classes = [HasRole]
    allowed_roles = ('admin', 'market')
    serializer_class = AudienceSerializer

    def get_queryset(self):
        return self.scoped_builder().audiences().order_by('-date', '-time')
