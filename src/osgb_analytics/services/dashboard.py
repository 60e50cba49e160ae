"""
Dashboard view: everything the home page shows, computed from one snapshot.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional
import pandas as pd
from osgb_analytics.analytics.aggregate import (
    CompanyCount, ScreeningSummary, aggregate_screenings, round_half_up, top_companies,
)
from osgb_analytics.analytics.documents import DocumentSummary, aggregate_documents
from osgb_analytics.analytics.filters import FilterCriteria, filter_screenings
from osgb_analytics.analytics.trends import (
    TrendResult, compare_trend, month_windows, records_in_window, week_windows, weekly_series,
)
from osgb_analytics.core.config import (
    EXPIRY_WARNING_DAYS, MONTHLY_TARGET, NO_SHOW_ALERT_PERCENT, RECENT_UPLOAD_DAYS,
)
from osgb_analytics.models.records import Screening, ScreeningStatus
from osgb_analytics.services.cache import AnalyticsCache
from osgb_analytics.services.series import monthly_counts
from osgb_analytics.services.snapshot import Snapshot

log = logging.getLogger(__name__)

UPCOMING_LIMIT = 5
RECENT_LIMIT = 10
TOP_COMPANIES_LIMIT = 5


@dataclass(frozen=True)
class Alert:
    level: str  # "info" | "warning"
    title: str
    message: str


@dataclass(frozen=True)
class MonthlyTarget:
    target: int
    current: int
    progress: int


@dataclass(frozen=True)
class Dashboard:
    today: date
    summary: ScreeningSummary
    top_companies: list[CompanyCount]
    todays_screenings: list[Screening]
    upcoming: list[Screening]
    overdue_count: int
    weekly: TrendResult
    monthly_trend: TrendResult
    monthly_target: MonthlyTarget
    weekly_series: list[tuple[date, int]]
    monthly_series: pd.DataFrame
    recent: list[Screening]
    documents: DocumentSummary
    alerts: list[Alert] = field(default_factory=list)


def _sort_key_day_time(s: Screening):
    return (s.date, s.time_start)


def monthly_target(records: list[Screening], today: date, target: int = MONTHLY_TARGET) -> MonthlyTarget:
    current_month, _ = month_windows(today)
    count = len(records_in_window(records, current_month))
    progress = 0 if target <= 0 else round_half_up(count * 100 / target)
    return MonthlyTarget(target=target, current=count, progress=min(progress, 100))


def build_alerts(screenings: list[Screening], summary: ScreeningSummary,
                 todays: list[Screening], overdue: int, docs: Optional[DocumentSummary]) -> list[Alert]:
    alerts = []
    if todays:
        alerts.append(Alert("info", "Today's appointments",
                            f"{len(todays)} appointment(s) take place today"))
    if overdue:
        alerts.append(Alert("warning", "Overdue appointments",
                            f"{overdue} past appointment(s) are still marked scheduled"))

    no_show = summary.by_status[ScreeningStatus.NO_SHOW]
    if screenings and no_show:
        rate = no_show / len(screenings) * 100
        if rate > NO_SHOW_ALERT_PERCENT:
            alerts.append(Alert("warning", "High no-show rate", f"{rate:.0f}% no-show rate detected"))

    if docs is not None:
        if docs.expired_count:
            alerts.append(Alert("warning", "Expired documents",
                                f"{docs.expired_count} document(s) have expired and need renewal"))
        if docs.expiring_within_30_days:
            alerts.append(Alert("info", "Documents expiring soon",
                                f"{docs.expiring_within_30_days} document(s) expire within "
                                f"{EXPIRY_WARNING_DAYS} days"))
    return alerts


def _compute(snapshot: Snapshot, now: datetime, criteria: Optional[FilterCriteria]) -> Dashboard:
    today = now.date()
    screenings = filter_screenings(snapshot.screenings, criteria, snapshot.company_map)
    summary = aggregate_screenings(screenings)

    todays = sorted((s for s in screenings if s.date == today), key=lambda s: s.time_start)
    upcoming = sorted(
        (s for s in screenings if s.date >= today and s.status == ScreeningStatus.SCHEDULED),
        key=_sort_key_day_time,
    )[:UPCOMING_LIMIT]
    overdue = sum(1 for s in screenings if s.date < today and s.status == ScreeningStatus.SCHEDULED)

    this_week, last_week = week_windows(today)
    this_month, last_month = month_windows(today)

    # records without created_at sort last
    recent = sorted(
        screenings,
        key=lambda s: (s.created_at is not None, s.created_at or datetime.min),
        reverse=True,
    )[:RECENT_LIMIT]

    docs = aggregate_documents(
        snapshot.documents, now, snapshot.company_map,
        warning_days=EXPIRY_WARNING_DAYS, recent_days=RECENT_UPLOAD_DAYS,
    )

    return Dashboard(
        today=today,
        summary=summary,
        top_companies=top_companies(screenings, snapshot.company_map, limit=TOP_COMPANIES_LIMIT),
        todays_screenings=todays,
        upcoming=upcoming,
        overdue_count=overdue,
        weekly=compare_trend(records_in_window(screenings, this_week),
                             records_in_window(screenings, last_week)),
        monthly_trend=compare_trend(records_in_window(screenings, this_month),
                                    records_in_window(screenings, last_month)),
        monthly_target=monthly_target(screenings, today),
        weekly_series=weekly_series(screenings, today),
        monthly_series=monthly_counts(screenings, today.year),
        recent=recent,
        documents=docs,
        alerts=build_alerts(screenings, summary, todays, overdue, docs),
    )


def build_dashboard(snapshot: Snapshot, now: Optional[datetime] = None,
                    criteria: Optional[FilterCriteria] = None,
                    cache: Optional[AnalyticsCache] = None) -> Dashboard:
    now = now or datetime.now()
    if cache is None:
        return _compute(snapshot, now, criteria)
    # keyed on the day, not the instant
    key = ("dashboard", snapshot, criteria or FilterCriteria(), now.date())
    return cache.get_or_compute(key, lambda: _compute(snapshot, now, criteria))
