# apps/analytics/aggregation.py
import logging
from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Tuple

from django.db import DatabaseError
from django.db.models import Count, Sum

from apps.campaigns.models import Campaign
from apps.events.models import Playback
from apps.markets.models import Market
from .repositories import ScopedQueryBuilder, ALL_MARKETS, monitor_query_performance

logger = logging.getLogger(__name__)


class ReportGenerationError(Exception):
    """A backend query failed while building report data."""


def round_half_up(value: int, divisor: int) -> int:
    return (value + divisor // 2) // divisor


def seconds_to_minutes(seconds: int) -> int:
    return round_half_up(seconds, 60)


def seconds_to_hours(seconds: int) -> int:
    return round_half_up(seconds, 3600)


@dataclass(frozen=True)
class ReportData:
    """Snapshot of scoped campaigns and playbacks for one date range."""

    campaigns: Tuple[Campaign, ...]
    playbacks: Tuple[Playback, ...]
    start_date: date
    end_date: date
    market_id: str = ALL_MARKETS
    market: Optional[Market] = None

    def playback_counts(self) -> Dict[str, int]:
        return Counter(playback.campaign_id for playback in self.playbacks)

    @property
    def total_playbacks(self) -> int:
        return len(self.playbacks)

    @property
    def total_duration(self) -> int:
        return sum(playback.duration for playback in self.playbacks)

    @property
    def total_minutes(self) -> int:
        return seconds_to_minutes(self.total_duration)

    @property
    def total_hours(self) -> int:
        return seconds_to_hours(self.total_duration)

    def summary(self) -> dict:
        return {
            'start_date': self.start_date.isoformat(),
            'end_date': self.end_date.isoformat(),
            'market': self.market_id,
            'total_campaigns': len(self.campaigns),
            'total_playbacks': self.total_playbacks,
            'total_duration_seconds': self.total_duration,
            'total_duration_minutes': self.total_minutes,
            'total_duration_hours': self.total_hours,
        }


@monitor_query_performance
def build_report_data(principal, start_date, end_date, market_id=ALL_MARKETS) -> ReportData:
    """Fetch the principal's campaigns and playbacks for ``[start_date, end_date]``.

    Raises ``ValueError`` for an invalid range and ``ReportGenerationError``
    when any backend query fails; no partial report is produced.
    """
    builder = (
        ScopedQueryBuilder(principal)
        .add_date_range(start_date, end_date)
        .add_market_filter(market_id)
    )

    try:
        campaigns = tuple(builder.campaigns().order_by('start_date', 'name', 'id'))
        playbacks = tuple(builder.playbacks().order_by('date', 'time', 'id'))
        # Label only; rows are already narrowed by the scoped playback query
        market = None
        if builder.market_id is not None:
            market = Market.objects.filter(pk=builder.market_id).first()
    except DatabaseError as e:
        logger.exception(f"Report data query failed for user {principal.user_id}")
        raise ReportGenerationError(str(e)) from e

    logger.info(
        f"Report data for user {principal.user_id}: {len(campaigns)} campaigns, "
        f"{len(playbacks)} playbacks ({builder.start_date} - {builder.end_date}, market={builder.market_id or ALL_MARKETS})"
    )

    return ReportData(
        campaigns=campaigns,
        playbacks=playbacks,
        start_date=builder.start_date,
        end_date=builder.end_date,
        market_id=builder.market_id or ALL_MARKETS,
        market=market,
    )


def dashboard_summary(principal, today: date) -> dict:
    """Totals for the dashboard: current campaigns, playbacks and per-market counts."""
    builder = ScopedQueryBuilder(principal)

    try:
        current_campaigns = list(builder.campaigns().filter(end_date__gte=today))
        playbacks = builder.playbacks()
        totals = playbacks.aggregate(total=Count('id'), duration=Sum('duration'))
        markets: List[dict] = list(builder.markets().order_by('name').values('id', 'name', 'city'))
        by_market = list(
            playbacks.values('device__market_id', 'device__market__name')
            .annotate(playbacks=Count('id'))
            .order_by('device__market__name')
        )
    except DatabaseError as e:
        logger.exception(f"Dashboard query failed for user {principal.user_id}")
        raise ReportGenerationError(str(e)) from e

    return {
        'total_campaigns': len(current_campaigns),
        'active_campaigns': sum(1 for campaign in current_campaigns if campaign.is_active_on(today)),
        'total_playbacks': totals['total'] or 0,
        'total_duration_minutes': seconds_to_minutes(totals['duration'] or 0),
        'markets': markets,
        'playbacks_by_market': [{
            'market_id': row['device__market_id'],
            'market': row['device__market__name'],
            'playbacks': row['playbacks'],
        } for row in by_market],
    }
