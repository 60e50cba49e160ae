"""
Trend comparison between two windows, plus the window helpers the pages use.

The comparator only counts what it is given; choosing the windows is the
caller's job. An empty previous window yields a 0% change.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Sequence

from osgb_analytics.analytics.aggregate import round_half_up
from osgb_analytics.models.records import Screening


@dataclass(frozen=True)
class TrendResult:
    current_count: int
    previous_count: int
    change_percent: int
    is_positive: bool


@dataclass(frozen=True)
class DateWindow:
    start: date
    end: date
    end_inclusive: bool = True

    def contains(self, day: date) -> bool:
        if isinstance(day, datetime):
            day = day.date()
        if day < self.start:
            return False
        return day <= self.end if self.end_inclusive else day < self.end


def compare_counts(current: int, previous: int) -> TrendResult:
    change = 0 if previous == 0 else round_half_up(100 * (current - previous) / previous)
    return TrendResult(
        current_count=current,
        previous_count=previous,
        change_percent=change,
        is_positive=change >= 0,
    )


def compare_trend(current_records: Iterable, previous_records: Iterable) -> TrendResult:
    return compare_counts(len(list(current_records)), len(list(previous_records)))


def records_in_window(records: Iterable[Screening], window: DateWindow) -> list[Screening]:
    return [s for s in records if window.contains(s.date)]


def week_windows(today: date) -> tuple[DateWindow, DateWindow]:
    """This week is the last seven days up to today; last week is the seven before."""
    one_week_ago = today - timedelta(days=7)
    two_weeks_ago = today - timedelta(days=14)
    return (
        DateWindow(one_week_ago, today),
        DateWindow(two_weeks_ago, one_week_ago, end_inclusive=False),
    )


def _month_bounds(year: int, month: int) -> DateWindow:
    first = date(year, month, 1)
    nxt = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return DateWindow(first, nxt, end_inclusive=False)


def month_windows(today: date) -> tuple[DateWindow, DateWindow]:
    current = _month_bounds(today.year, today.month)
    if today.month == 1:
        previous = _month_bounds(today.year - 1, 12)
    else:
        previous = _month_bounds(today.year, today.month - 1)
    return current, previous


def previous_period(start: date, end: date) -> DateWindow:
    """Window of the same length immediately before [start, end]."""
    return DateWindow(start - (end - start), start, end_inclusive=False)


def weekly_series(records: Sequence[Screening], today: date, weeks: int = 5) -> list[tuple[date, int]]:
    """Counts per trailing seven-day bucket, oldest first, each keyed by its start."""
    out = []
    for i in range(weeks):
        start = today - timedelta(days=7 * (weeks - 1 - i))
        window = DateWindow(start, start + timedelta(days=7), end_inclusive=False)
        out.append((start, len(records_in_window(records, window))))
    return out
