"""
Screening aggregator: status/type/company histograms, participant totals and rates.

Every status and type bucket is always present (zero when unseen). Rates are
integer percentages rounded half-up, and are 0 for an empty collection.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from osgb_analytics.models.records import (
    Company, Screening, ScreeningStatus, ScreeningType,
)

log = logging.getLogger(__name__)

UNKNOWN_COMPANY = "Unknown company"

STATUS_LABELS = {
    ScreeningStatus.SCHEDULED: "Scheduled",
    ScreeningStatus.COMPLETED: "Completed",
    ScreeningStatus.CANCELLED: "Cancelled",
    ScreeningStatus.NO_SHOW: "No-show",
}
TYPE_LABELS = {
    ScreeningType.PERIODIC: "Periodic",
    ScreeningType.INITIAL: "Initial",
    ScreeningType.SPECIAL: "Special",
}


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def percent(part: int, whole: int) -> int:
    return 0 if whole == 0 else round_half_up(100 * part / whole)


@dataclass(frozen=True)
class ScreeningSummary:
    total: int
    by_status: dict[ScreeningStatus, int]
    by_type: dict[ScreeningType, int]
    by_company: dict[int, int] = field(default_factory=dict)
    total_participants: int = 0
    avg_participants: int = 0
    completion_rate: int = 0
    cancellation_rate: int = 0

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "byStatus": {k.value: v for k, v in self.by_status.items()},
            "byType": {k.value: v for k, v in self.by_type.items()},
            "byCompany": dict(self.by_company),
            "totalParticipants": self.total_participants,
            "avgParticipants": self.avg_participants,
            "completionRate": self.completion_rate,
            "cancellationRate": self.cancellation_rate,
        }


@dataclass(frozen=True)
class CompanyCount:
    company_id: int
    name: str
    count: int
    participants: int


def aggregate_screenings(records: Iterable[Screening]) -> ScreeningSummary:
    by_status = {s: 0 for s in ScreeningStatus}
    by_type = {t: 0 for t in ScreeningType}
    by_company: dict[int, int] = {}
    participants = 0
    total = 0

    for s in records:
        total += 1
        by_status[ScreeningStatus(s.status)] += 1
        by_type[ScreeningType(s.type)] += 1
        by_company[s.company_id] = by_company.get(s.company_id, 0) + 1
        participants += s.employee_count

    completed = by_status[ScreeningStatus.COMPLETED]
    dropped = by_status[ScreeningStatus.CANCELLED] + by_status[ScreeningStatus.NO_SHOW]

    summary = ScreeningSummary(
        total=total,
        by_status=by_status,
        by_type=by_type,
        by_company=by_company,
        total_participants=participants,
        avg_participants=0 if total == 0 else round_half_up(participants / total),
        completion_rate=percent(completed, total),
        cancellation_rate=percent(dropped, total),
    )
    log.debug("aggregate_screenings: total=%d completion=%d%%", total, summary.completion_rate)
    return summary


def top_companies(records: Iterable[Screening],
                  companies: Optional[Mapping[int, Company]] = None,
                  limit: Optional[int] = 5) -> list[CompanyCount]:
    """
    Per-company screening counts, busiest first.
    Ties keep the order in which companies were first encountered.
    """
    counts: dict[int, int] = {}
    participants: dict[int, int] = {}
    for s in records:
        counts[s.company_id] = counts.get(s.company_id, 0) + 1
        participants[s.company_id] = participants.get(s.company_id, 0) + s.employee_count

    companies = companies or {}
    rows = [
        CompanyCount(
            company_id=cid,
            name=companies[cid].name if cid in companies else UNKNOWN_COMPANY,
            count=n,
            participants=participants[cid],
        )
        for cid, n in counts.items()
    ]
    rows = sorted(rows, key=lambda r: r.count, reverse=True)
    return rows if limit is None else rows[:limit]


def status_breakdown(summary: ScreeningSummary) -> list[tuple[str, int]]:
    return [(STATUS_LABELS[s], n) for s, n in summary.by_status.items() if n > 0]


def type_breakdown(summary: ScreeningSummary) -> list[tuple[str, int]]:
    return [(TYPE_LABELS[t], n) for t, n in summary.by_type.items() if n > 0]
