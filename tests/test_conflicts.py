"""
Tests for scheduling conflict detection and slot suggestions
"""
from dataclasses import replace
from datetime import date
from osgb_analytics.analytics.conflicts import (
    Slot, detect_conflicts, find_all_conflicts, suggest_alternative_slots,
)
from osgb_analytics.models.records import ScreeningStatus


def test_overlap_then_cancel(make):
    """A 09:00-10:00 and B 09:30-10:30 clash until B is cancelled"""
    a = make(1, start="09:00", end="10:00")
    b = make(2, start="09:30", end="10:30")
    assert detect_conflicts(a, [b]) == [b]
    cancelled = replace(b, status=ScreeningStatus.CANCELLED)
    assert detect_conflicts(a, [cancelled]) == []


def test_conflicts_are_symmetric(make):
    """If A clashes with B then B clashes with A"""
    a = make(1, start="08:00", end="12:00")
    b = make(2, start="10:00", end="10:15")
    assert detect_conflicts(a, [b]) == [b]
    assert detect_conflicts(b, [a]) == [a]


def test_target_never_conflicts_with_itself(make):
    """The target is excluded from its own pool by id"""
    a = make(1)
    moved = replace(a, time_start="09:15")
    assert detect_conflicts(a, [a, moved]) == []


def test_back_to_back_is_not_a_conflict(make):
    """Intervals are half-open"""
    a = make(1, start="09:00", end="10:00")
    b = make(2, start="10:00", end="11:00")
    assert detect_conflicts(a, [b]) == []


def test_other_days_never_conflict(make):
    """Only the same calendar day is compared"""
    a = make(1)
    b = make(2, date=date(2024, 1, 11))
    assert detect_conflicts(a, [b]) == []


def test_completed_and_no_show_still_conflict(make):
    """Only cancelled screenings free their slot"""
    a = make(1)
    done = make(2, status=ScreeningStatus.COMPLETED)
    missed = make(3, status=ScreeningStatus.NO_SHOW)
    assert detect_conflicts(a, [done, missed]) == [done, missed]


def test_find_all_conflicts(scenario_a):
    """Only the two overlapping morning appointments are reported"""
    out = find_all_conflicts(scenario_a)
    assert {k: [s.id for s in v] for k, v in out.items()} == {1: [2], 2: [1]}


def test_alternative_slots_keep_duration(scenario_a):
    """Suggestions step forward in 30 minute increments past the busy morning"""
    moved = replace(scenario_a[2], time_start="09:00", time_end="10:00")
    slots = suggest_alternative_slots(moved, scenario_a)
    assert slots == [
        Slot(date(2024, 1, 10), "10:30", "11:30"),
        Slot(date(2024, 1, 10), "11:00", "12:00"),
        Slot(date(2024, 1, 10), "11:30", "12:30"),
    ]


def test_alternative_slots_skip_past_midnight(make):
    """A late slot rolls over to the next day instead of crossing midnight"""
    late = make(1, start="22:30", end="23:30")
    slots = suggest_alternative_slots(late, [], limit=2)
    assert slots == [
        Slot(date(2024, 1, 11), "00:00", "01:00"),
        Slot(date(2024, 1, 11), "00:30", "01:30"),
    ]
