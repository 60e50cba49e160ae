"""
Tabular views of screening records for charts and tables.
"""

from __future__ import annotations
from dataclasses import asdict
from typing import Iterable, Mapping, Optional
import pandas as pd
from osgb_analytics.analytics.aggregate import UNKNOWN_COMPANY
from osgb_analytics.models.records import Company, Screening, ScreeningStatus

MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

FRAME_COLS = [
    "id", "company_id", "company_name", "participant_name", "date", "time_start",
    "time_end", "employee_count", "type", "status", "notes", "created_at",
]


def to_frame(records: Iterable[Screening],
             companies: Optional[Mapping[int, Company]] = None) -> pd.DataFrame:
    companies = companies or {}
    rows = []
    for s in records:
        row = asdict(s)
        row["type"] = s.type.value
        row["status"] = s.status.value
        row["company_name"] = companies[s.company_id].name if s.company_id in companies else UNKNOWN_COMPANY
        rows.append(row)
    df = pd.DataFrame(rows, columns=FRAME_COLS)
    df["date"] = pd.to_datetime(df["date"])
    return df


def monthly_counts(records: Iterable[Screening], year: int) -> pd.DataFrame:
    """Screenings and completed screenings per month of `year`; all twelve months present."""
    df = to_frame(records)
    df = df[df["date"].dt.year == year]
    month = df["date"].dt.month
    total = month.value_counts()
    completed = month[df["status"] == ScreeningStatus.COMPLETED.value].value_counts()
    out = pd.DataFrame({"month": MONTH_LABELS})
    idx = range(1, 13)
    out["total"] = total.reindex(idx, fill_value=0).to_numpy()
    out["completed"] = completed.reindex(idx, fill_value=0).to_numpy()
    return out
