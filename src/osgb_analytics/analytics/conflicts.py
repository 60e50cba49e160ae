"""
Scheduling conflicts between screenings.

Two screenings conflict when they fall on the same calendar day and their
[start, end) intervals overlap. Cancelled screenings never conflict, and
back-to-back appointments (one ends when the next starts) do not overlap.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Iterable, Sequence

from osgb_analytics.models.records import Screening, ScreeningStatus

log = logging.getLogger(__name__)

TIME_FMT = "%H:%M"


@dataclass(frozen=True)
class Slot:
    date: date
    time_start: str
    time_end: str


def overlaps(a: Screening, b: Screening) -> bool:
    # HH:MM strings are zero padded, so string order is time order
    return a.time_start < b.time_end and a.time_end > b.time_start


def detect_conflicts(target: Screening, pool: Iterable[Screening]) -> list[Screening]:
    return [
        s for s in pool
        if s.id != target.id
        and s.date == target.date
        and s.status != ScreeningStatus.CANCELLED
        and overlaps(target, s)
    ]


def find_all_conflicts(pool: Sequence[Screening]) -> dict[int, list[Screening]]:
    """Conflict lists keyed by screening id, for every non-cancelled screening that has any."""
    by_day: dict[date, list[Screening]] = {}
    for s in pool:
        by_day.setdefault(s.date, []).append(s)

    out: dict[int, list[Screening]] = {}
    for s in pool:
        if s.status == ScreeningStatus.CANCELLED:
            continue
        hits = detect_conflicts(s, by_day[s.date])
        if hits:
            out[s.id] = hits
    log.debug("find_all_conflicts: %d of %d screenings conflict", len(out), len(pool))
    return out


def _at(day: date, hhmm: str) -> datetime:
    t = datetime.strptime(hhmm, TIME_FMT).time()
    return datetime.combine(day, t)


def suggest_alternative_slots(target: Screening, pool: Sequence[Screening], limit: int = 3,
                              step_minutes: int = 30, max_steps: int = 7 * 24 * 2) -> list[Slot]:
    """
    Free slots after the target's current start, keeping its duration.

    Candidates move forward in `step_minutes` increments for at most `max_steps`
    steps. Candidates whose end would fall on the next day are skipped.
    """
    start = _at(target.date, target.time_start)
    duration = _at(target.date, target.time_end) - start
    step = timedelta(minutes=step_minutes)

    slots: list[Slot] = []
    candidate = start
    for _ in range(max_steps):
        if len(slots) >= limit:
            break
        candidate = candidate + step
        end = candidate + duration
        if end.date() != candidate.date():
            continue
        moved = replace(
            target,
            date=candidate.date(),
            time_start=candidate.strftime(TIME_FMT),
            time_end=end.strftime(TIME_FMT),
        )
        if not detect_conflicts(moved, pool):
            slots.append(Slot(moved.date, moved.time_start, moved.time_end))
    return slots
