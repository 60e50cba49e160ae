"""
Pure analytics over screening and document collections.

Nothing here performs I/O or mutates its inputs.
"""

from osgb_analytics.analytics.aggregate import (
    CompanyCount, ScreeningSummary, aggregate_screenings, status_breakdown,
    top_companies, type_breakdown,
)
from osgb_analytics.analytics.conflicts import (
    Slot, detect_conflicts, find_all_conflicts, suggest_alternative_slots,
)
from osgb_analytics.analytics.documents import (
    DocumentSummary, aggregate_documents, expiring_documents,
)
from osgb_analytics.analytics.expiry import ExpiryInfo, classify_expiry
from osgb_analytics.analytics.filters import (
    ALL, FilterCriteria, filter_documents, filter_screenings,
)
from osgb_analytics.analytics.trends import (
    DateWindow, TrendResult, compare_counts, compare_trend, month_windows,
    previous_period, records_in_window, week_windows, weekly_series,
)

__all__ = [
    "ALL",
    "CompanyCount",
    "DateWindow",
    "DocumentSummary",
    "ExpiryInfo",
    "FilterCriteria",
    "ScreeningSummary",
    "Slot",
    "TrendResult",
    "aggregate_documents",
    "aggregate_screenings",
    "classify_expiry",
    "compare_counts",
    "compare_trend",
    "detect_conflicts",
    "expiring_documents",
    "filter_documents",
    "filter_screenings",
    "find_all_conflicts",
    "month_windows",
    "previous_period",
    "records_in_window",
    "status_breakdown",
    "suggest_alternative_slots",
    "top_companies",
    "type_breakdown",
    "week_windows",
    "weekly_series",
]
