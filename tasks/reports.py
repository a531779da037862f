import logging
from datetime import date, timedelta

from celery import shared_task
from django.db.models import Count, Sum
from django.utils import timezone

from apps.events.models import Playback
from apps.reports.models import Report

logger = logging.getLogger(__name__)


def daily_campaign_totals(day):
    return (
        Playback.objects.filter(date=day)
        .values('campaign_id')
        .annotate(playbacks=Count('id'), total_duration=Sum('duration'))
        .order_by('campaign_id')
    )


@shared_task
def generate_daily_reports(day=None):
    """Store one Report per campaign with playbacks on ``day`` (default: yesterday)"""
    if day is None:
        day = timezone.localdate() - timedelta(days=1)
    elif isinstance(day, str):
        day = date.fromisoformat(day)

    reports = [
        Report(
            campaign_id=row['campaign_id'],
            summary_json={
                'date': day.isoformat(),
                'playbacks': row['playbacks'],
                'total_duration': row['total_duration'] or 0,
            },
        )
        for row in daily_campaign_totals(day)
    ]
    Report.objects.bulk_create(reports)

    logger.info(f"Generated {len(reports)} daily reports for {day}")
    return {'date': day.isoformat(), 'reports_created': len(reports)}
