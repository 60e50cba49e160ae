"""
Tests for the screening aggregator
"""
from osgb_analytics.analytics.aggregate import (
    UNKNOWN_COMPANY, aggregate_screenings, percent, round_half_up,
    status_breakdown, top_companies,
)
from osgb_analytics.models.records import ScreeningStatus, ScreeningType


def test_empty_collection_is_all_zero():
    """No division by zero on an empty input"""
    s = aggregate_screenings([])
    assert s.total == 0
    assert s.completion_rate == 0
    assert s.cancellation_rate == 0
    assert s.avg_participants == 0
    assert all(v == 0 for v in s.by_status.values())
    assert set(s.by_status) == set(ScreeningStatus)
    assert set(s.by_type) == set(ScreeningType)


def test_four_screenings_on_one_day(scenario_a):
    """1 scheduled, 2 completed, 1 cancelled"""
    s = aggregate_screenings(scenario_a)
    assert s.total == 4
    assert s.as_dict()["byStatus"] == {"scheduled": 1, "completed": 2, "cancelled": 1, "no-show": 0}
    assert s.completion_rate == 50
    assert s.cancellation_rate == 25
    assert s.total_participants == 40
    assert s.avg_participants == 10
    assert s.by_company == {1: 2, 2: 2}


def test_no_show_counts_as_cancellation(screenings):
    """Cancelled and no-show both count toward the cancellation rate"""
    s = aggregate_screenings(screenings)
    assert s.by_status[ScreeningStatus.NO_SHOW] == 1
    # 2 of 7 -> 28.57
    assert s.cancellation_rate == 29
    assert sum(s.by_status.values()) == s.total == 7


def test_rounding_is_half_up():
    """x.5 always rounds up"""
    assert round_half_up(12.5) == 13
    assert round_half_up(2.5) == 3
    assert percent(1, 8) == 13
    assert percent(0, 0) == 0


def test_top_companies_ties_keep_first_seen_order(make, company_map):
    """Companies with equal counts stay in encounter order"""
    records = [make(1, company_id=2), make(2, company_id=1), make(3, company_id=2),
               make(4, company_id=1), make(5, company_id=3)]
    top = top_companies(records, company_map, limit=2)
    assert [(c.company_id, c.count) for c in top] == [(2, 2), (1, 2)]
    assert top[0].name == "Beta Build"
    assert top[0].participants == 20


def test_top_companies_unknown_name(make):
    """A company missing from the lookup gets a placeholder name"""
    top = top_companies([make(1, company_id=42)])
    assert top[0].name == UNKNOWN_COMPANY


def test_status_breakdown_drops_empty_buckets(scenario_a):
    """Only statuses that occur are listed"""
    labels = dict(status_breakdown(aggregate_screenings(scenario_a)))
    assert labels == {"Scheduled": 1, "Completed": 2, "Cancelled": 1}
