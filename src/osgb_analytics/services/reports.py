"""
Reports view: filtered and sorted screening list, statistics, top companies,
previous-period comparison and pagination.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence, TypeVar
import pandas as pd
from osgb_analytics.analytics.aggregate import (
    CompanyCount, ScreeningSummary, aggregate_screenings, top_companies,
)
from osgb_analytics.analytics.filters import FilterCriteria, filter_screenings
from osgb_analytics.analytics.trends import (
    TrendResult, compare_trend, previous_period, records_in_window,
)
from osgb_analytics.models.records import Screening
from osgb_analytics.services.cache import AnalyticsCache
from osgb_analytics.services.series import monthly_counts
from osgb_analytics.services.snapshot import Snapshot

log = logging.getLogger(__name__)

SORT_FIELDS = ("date", "company", "status")
TOP_COMPANIES_LIMIT = 10

T = TypeVar("T")


@dataclass(frozen=True)
class Report:
    criteria: FilterCriteria
    screenings: list[Screening]
    summary: ScreeningSummary
    top_companies: list[CompanyCount]
    trend: Optional[TrendResult]
    monthly_series: pd.DataFrame


@dataclass(frozen=True)
class Page:
    items: list
    page: int
    page_size: int
    total_pages: int
    total_items: int


def sort_screenings(records: Sequence[Screening], snapshot: Snapshot,
                    sort_by: str = "date", descending: bool = False) -> list[Screening]:
    if sort_by not in SORT_FIELDS:
        raise ValueError(f"sort_by must be one of {SORT_FIELDS}, got {sort_by!r}")

    companies = snapshot.company_map
    if sort_by == "date":
        key = lambda s: s.date
    elif sort_by == "company":
        key = lambda s: companies[s.company_id].name.casefold() if s.company_id in companies else ""
    else:
        key = lambda s: s.status.value
    return sorted(records, key=key, reverse=descending)


def paginate(items: Sequence[T], page: int = 1, page_size: int = 25) -> Page:
    if page_size < 1:
        raise ValueError("page_size must be positive")
    total_pages = max(1, math.ceil(len(items) / page_size))
    page = min(max(page, 1), total_pages)
    start = (page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        total_items=len(items),
    )


def period_trend(snapshot: Snapshot, current: Sequence[Screening],
                 criteria: FilterCriteria) -> Optional[TrendResult]:
    """
    Compares the filtered set against every screening in the equally long
    period before it. Only defined when both date bounds are set.
    """
    if not (criteria.date_start and criteria.date_end):
        return None
    window = previous_period(criteria.date_start, criteria.date_end)
    return compare_trend(current, records_in_window(snapshot.screenings, window))


def _compute(snapshot: Snapshot, criteria: FilterCriteria, sort_by: str,
             descending: bool, year: int) -> Report:
    filtered = filter_screenings(snapshot.screenings, criteria, snapshot.company_map)
    ordered = sort_screenings(filtered, snapshot, sort_by, descending)
    report = Report(
        criteria=criteria,
        screenings=ordered,
        summary=aggregate_screenings(ordered),
        top_companies=top_companies(ordered, snapshot.company_map, limit=TOP_COMPANIES_LIMIT),
        trend=period_trend(snapshot, ordered, criteria),
        monthly_series=monthly_counts(ordered, year),
    )
    log.info("Report built: %d of %d screenings match", len(ordered), len(snapshot.screenings))
    return report


def build_report(snapshot: Snapshot, criteria: Optional[FilterCriteria] = None,
                 sort_by: str = "date", descending: bool = False,
                 year: Optional[int] = None,
                 cache: Optional[AnalyticsCache] = None) -> Report:
    criteria = criteria or FilterCriteria()
    year = year or date.today().year
    if cache is None:
        return _compute(snapshot, criteria, sort_by, descending, year)
    key = ("report", snapshot, criteria, sort_by, descending, year)
    return cache.get_or_compute(key, lambda: _compute(snapshot, criteria, sort_by, descending, year))
