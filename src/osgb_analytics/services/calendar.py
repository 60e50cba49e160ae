"""
Calendar view: per-day grouping, period counts, conflict map and
reschedule suggestions.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional
from osgb_analytics.analytics.conflicts import (
    Slot, detect_conflicts, find_all_conflicts, suggest_alternative_slots,
)
from osgb_analytics.analytics.filters import FilterCriteria, filter_screenings
from osgb_analytics.analytics.trends import DateWindow, month_windows, records_in_window
from osgb_analytics.models.records import Screening
from osgb_analytics.services.snapshot import Snapshot

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarCounts:
    total: int
    today: int
    this_week: int
    this_month: int
    total_employees: int


@dataclass(frozen=True)
class RescheduleCheck:
    screening: Screening
    conflicts: list[Screening]
    alternatives: list[Slot]


def week_of(today: date) -> DateWindow:
    """Sunday-to-Saturday week containing `today`."""
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return DateWindow(start, start + timedelta(days=6))


def by_day(records: list[Screening]) -> dict[date, list[Screening]]:
    days: dict[date, list[Screening]] = {}
    for s in sorted(records, key=lambda s: (s.date, s.time_start)):
        days.setdefault(s.date, []).append(s)
    return days


def calendar_counts(records: list[Screening], today: date) -> CalendarCounts:
    this_month, _ = month_windows(today)
    return CalendarCounts(
        total=len(records),
        today=sum(1 for s in records if s.date == today),
        this_week=len(records_in_window(records, week_of(today))),
        this_month=len(records_in_window(records, this_month)),
        total_employees=sum(s.employee_count for s in records),
    )


def conflict_map(snapshot: Snapshot, criteria: Optional[FilterCriteria] = None) -> dict[int, list[Screening]]:
    visible = filter_screenings(snapshot.screenings, criteria, snapshot.company_map)
    conflicts = find_all_conflicts(visible)
    if conflicts:
        log.info("Calendar: %d screenings have scheduling conflicts", len(conflicts))
    return conflicts


def check_reschedule(snapshot: Snapshot, moved: Screening, limit: int = 3) -> RescheduleCheck:
    """
    Conflicts for a screening at its proposed new date/time, with free
    alternatives when it clashes. `moved` carries the proposed values.
    """
    conflicts = detect_conflicts(moved, snapshot.screenings)
    alternatives = suggest_alternative_slots(moved, snapshot.screenings, limit=limit) if conflicts else []
    return RescheduleCheck(screening=moved, conflicts=conflicts, alternatives=alternatives)
