"""
Tests for the composed page views: dashboard, reports, calendar and the cache
"""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import date
import pytest
from osgb_analytics.analytics.conflicts import Slot
from osgb_analytics.analytics.filters import FilterCriteria
from osgb_analytics.models.records import ScreeningStatus
from osgb_analytics.services.cache import AnalyticsCache
from osgb_analytics.services.calendar import (
    by_day, calendar_counts, check_reschedule, conflict_map, week_of,
)
from osgb_analytics.services.dashboard import build_dashboard, monthly_target
from osgb_analytics.services.reports import build_report, paginate, sort_screenings
from osgb_analytics.services.snapshot import Snapshot


def ids(records):
    return [r.id for r in records]


def test_dashboard_appointments(snapshot, now):
    """Today, upcoming and overdue lists"""
    d = build_dashboard(snapshot, now=now)
    assert d.today == date(2024, 1, 10)
    assert ids(d.todays_screenings) == [1, 2, 3, 4]
    assert ids(d.upcoming) == [1, 6]
    assert d.overdue_count == 1
    # newest first, records without created_at last
    assert ids(d.recent) == [6, 5, 3, 2, 1, 7, 4]


def test_dashboard_trends_and_target(snapshot, now):
    """Week over week, month over month and the monthly target"""
    d = build_dashboard(snapshot, now=now)
    assert (d.weekly.current_count, d.weekly.previous_count, d.weekly.change_percent) == (5, 1, 400)
    assert (d.monthly_trend.current_count, d.monthly_trend.previous_count) == (6, 1)
    assert d.monthly_target.current == 6
    assert d.monthly_target.progress == 12
    jan = d.monthly_series.iloc[0]
    assert (jan["month"], jan["total"], jan["completed"]) == ("Jan", 6, 2)
    assert len(d.monthly_series) == 12


def test_dashboard_alerts(snapshot, now):
    """Alerts for today's appointments, overdue ones and document expiry"""
    d = build_dashboard(snapshot, now=now)
    assert [a.title for a in d.alerts] == [
        "Today's appointments", "Overdue appointments",
        "Expired documents", "Documents expiring soon",
    ]
    assert d.documents.total == 4


def test_no_show_alert(companies, make, now):
    """A no-show rate above 15% raises a warning"""
    snap = Snapshot(tuple(companies), (make(1), make(2, status=ScreeningStatus.NO_SHOW)), ())
    alerts = build_dashboard(snap, now=now).alerts
    assert "High no-show rate" in [a.title for a in alerts]


def test_dashboard_respects_filters(snapshot, now):
    """Dashboard numbers follow the active filter"""
    d = build_dashboard(snapshot, now=now, criteria=FilterCriteria(company_id=3))
    assert d.summary.total == 2
    assert d.todays_screenings == []
    assert [c.name for c in d.top_companies] == ["Gamma Foods"]


def test_monthly_target_is_capped(make):
    """Progress never goes past 100"""
    records = [make(i) for i in range(1, 8)]
    t = monthly_target(records, date(2024, 1, 10), target=5)
    assert (t.current, t.progress) == (7, 100)


def test_cache_reuses_equal_inputs(snapshot, companies, screenings, documents, now):
    """Equal snapshot, criteria and day give the cached object back"""
    cache = AnalyticsCache()
    first = build_dashboard(snapshot, now=now, cache=cache)
    copy = Snapshot(tuple(companies), tuple(screenings), tuple(documents))
    assert build_dashboard(copy, now=now, cache=cache) is first
    assert (cache.hits, cache.misses) == (1, 1)

    build_dashboard(snapshot, now=now, criteria=FilterCriteria(status="completed"), cache=cache)
    changed = Snapshot(tuple(companies), tuple(screenings[:-1]), tuple(documents))
    assert build_dashboard(changed, now=now, cache=cache) is not first
    assert cache.misses == 3


def test_cache_evicts_least_recently_used():
    """Oldest untouched entry goes first"""
    cache = AnalyticsCache(maxsize=2)
    cache.get_or_compute("a", lambda: 1)
    cache.get_or_compute("b", lambda: 2)
    cache.get_or_compute("a", lambda: 0)
    cache.get_or_compute("c", lambda: 3)
    assert len(cache) == 2
    assert cache.get_or_compute("a", lambda: 99) == 1
    assert cache.get_or_compute("b", lambda: 42) == 42
    cache.clear()
    assert len(cache) == 0
    with pytest.raises(ValueError):
        AnalyticsCache(maxsize=0)


def test_report_previous_period_uses_all_screenings(snapshot):
    """Current period is filtered, the previous one is not"""
    c = FilterCriteria(company_id=1, date_start=date(2024, 1, 1), date_end=date(2024, 1, 10))
    r = build_report(snapshot, c, year=2024)
    assert ids(r.screenings) == [1, 2]
    assert (r.trend.current_count, r.trend.previous_count, r.trend.change_percent) == (2, 1, 100)
    assert r.summary.total == 2
    assert r.top_companies[0].name == "Acme Health"


def test_report_without_full_range_has_no_trend(snapshot):
    """Trend needs both bounds"""
    assert build_report(snapshot, FilterCriteria(date_start=date(2024, 1, 1))).trend is None
    assert build_report(snapshot).trend is None


def test_report_sorting(snapshot):
    """Sort by date, company name or status; ties keep their order"""
    assert ids(build_report(snapshot, year=2024).screenings) == [7, 5, 1, 2, 3, 4, 6]
    by_company = sort_screenings(snapshot.screenings, snapshot, "company")
    assert ids(by_company) == [1, 2, 6, 3, 4, 5, 7]
    by_status = sort_screenings(snapshot.screenings, snapshot, "status")
    assert ids(by_status) == [4, 2, 3, 7, 1, 5, 6]
    newest = build_report(snapshot, sort_by="date", descending=True, year=2024)
    assert newest.screenings[0].id == 6
    with pytest.raises(ValueError):
        sort_screenings(snapshot.screenings, snapshot, "participants")


def test_paginate():
    """Pages are clamped and there is always at least one"""
    items = list(range(7))
    page = paginate(items, page=3, page_size=3)
    assert (page.items, page.total_pages, page.total_items) == ([6], 3, 7)
    assert paginate(items, page=99, page_size=3).page == 3
    assert paginate(items, page=0, page_size=3).items == [0, 1, 2]
    empty = paginate([], page=1, page_size=10)
    assert (empty.items, empty.total_pages) == ([], 1)


def test_calendar_counts(snapshot):
    """Week runs Sunday to Saturday"""
    today = date(2024, 1, 10)
    week = week_of(today)
    assert (week.start, week.end) == (date(2024, 1, 7), date(2024, 1, 13))
    counts = calendar_counts(list(snapshot.screenings), today)
    assert (counts.today, counts.this_week, counts.this_month) == (4, 5, 6)
    assert counts.total_employees == 63
    days = by_day(list(snapshot.screenings))
    assert list(days)[0] == date(2023, 12, 28)
    assert ids(days[today]) == [1, 2, 3, 4]


def test_conflict_map(snapshot):
    """Only the overlapping morning pair is flagged"""
    out = conflict_map(snapshot)
    assert {k: ids(v) for k, v in out.items()} == {1: [2], 2: [1]}
    assert conflict_map(snapshot, FilterCriteria(status="completed")) == {}


def test_check_reschedule(snapshot):
    """Moving into a busy slot lists the clashes and free alternatives"""
    moved = replace(snapshot.screening(3), time_start="09:00", time_end="10:00")
    check = check_reschedule(snapshot, moved)
    assert ids(check.conflicts) == [1, 2]
    assert check.alternatives[0] == Slot(date(2024, 1, 10), "10:30", "11:30")
    free = check_reschedule(snapshot, replace(moved, time_start="15:00", time_end="16:00"))
    assert free.conflicts == [] and free.alternatives == []


def test_cache_shared_between_threads():
    """Concurrent lookups on a tiny cache neither raise nor lose count"""
    cache = AnalyticsCache(maxsize=2)

    def lookup(i):
        key = i % 5
        return cache.get_or_compute(key, lambda: key * 10)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lookup, range(2000)))

    assert results == [(i % 5) * 10 for i in range(2000)]
    assert cache.hits + cache.misses == 2000
    assert len(cache) <= 2
