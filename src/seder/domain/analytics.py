"""Analytics service: KPIs and chart data over stored entries."""

import logging
from dataclasses import dataclass
from datetime import date

from seder.database.base import Database
from seder.domain.buckets import group_entries_by_category, group_entries_by_time, needs_attention
from seder.domain.entities import (
    AnalyticsKPI,
    CategoryBucket,
    KPIData,
    MonthPaymentStatus,
    NeedsAttentionJob,
    TimeBucket,
)
from seder.domain.kpi import analytics_kpis, calculate_kpis, month_payment_statuses

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RangeAnalytics:
    """Everything the analytics page shows for one date range."""

    start: date
    end: date
    kpis: AnalyticsKPI
    timeline: list[TimeBucket]
    categories: list[CategoryBucket]
    attention: list[NeedsAttentionJob]


class AnalyticsService:
    """Read-only aggregations over the stored income entries."""

    def __init__(self, db: Database):
        """Initialize analytics service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_kpis(self, year: int, month: int, today: date) -> KPIData:
        """Income page KPIs for a month.

        All entries are loaded, since the backlog figures are not limited
        to the selected month.
        """
        return calculate_kpis(self.db.list_income_entries(), year, month, today)

    def get_range_analytics(self, start: date, end: date) -> RangeAnalytics:
        """KPIs, timeline, category split and follow-ups for [start, end]."""
        entries = self.db.list_income_entries(start_date=start, end_date=end)
        logger.debug("Analytics for %s..%s over %d entries", start, end, len(entries))
        return RangeAnalytics(
            start=start,
            end=end,
            kpis=analytics_kpis(entries),
            timeline=group_entries_by_time(entries, start, end),
            categories=group_entries_by_category(entries),
            attention=needs_attention(entries),
        )

    def get_month_payment_statuses(self, year: int, today: date) -> dict[int, MonthPaymentStatus]:
        start, end = date(year, 1, 1), date(year, 12, 31)
        entries = self.db.list_income_entries(start_date=start, end_date=end)
        return month_payment_statuses(entries, year, today)
