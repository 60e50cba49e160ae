"""
Transform screenings: normalize enums, dates and times, validate basics and
referential integrity, build Screening records and log dropped rows.
"""

from __future__ import annotations
import logging
from pathlib import Path
import pandas as pd
from osgb_analytics.core.config import SCREENINGS_CLEAN, SCREENINGS_LOGS
from osgb_analytics.core.logging_setup import setup_logging
from osgb_analytics.extract.extract_csv import read_screenings
from osgb_analytics.models.records import Screening, ScreeningStatus, ScreeningType
from osgb_analytics.transforms.common import (
    add_flag, clean_str, normalize_time, parse_date, parse_datetime, parse_int, write_drop_log,
)

log = logging.getLogger(__name__)

STATUS_MAP = {
    "scheduled": "scheduled", "planned": "scheduled", "planlandı": "scheduled",
    "completed": "completed", "done": "completed", "tamamlandı": "completed",
    "cancelled": "cancelled", "canceled": "cancelled", "iptal": "cancelled",
    "no-show": "no-show", "no_show": "no-show", "noshow": "no-show", "gelmedi": "no-show",
}
TYPE_MAP = {
    "periodic": "periodic", "periyodik": "periodic",
    "initial": "initial", "işe giriş": "initial", "ise giris": "initial",
    "special": "special", "özel": "special", "ozel": "special",
}

OUT_COLS = [
    "id", "company_id", "participant_name", "date", "time_start", "time_end",
    "employee_count", "type", "status", "notes", "created_at",
]
DROP_LOG_COLS = OUT_COLS + ["qa_flags", "source_file"]

# rows carrying any of these never reach the analytics layer
FATAL_FLAGS = (
    "MISSING_ID", "MISSING_COMPANY", "INVALID_DATE", "INVALID_TIME",
    "TIME_RANGE_INVALID", "INVALID_EMPLOYEE_COUNT", "INVALID_TYPE", "INVALID_STATUS",
    "FK_VIOLATION", "DUPLICATE_ID",
)

def _map_enum(series: pd.Series, mapping: dict) -> pd.Series:
    return series.map(lambda x: mapping.get(str(x).strip().lower()) if clean_str(x) else None)

def transform(df: pd.DataFrame, valid_company_ids: set[int] | None = None) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Return (clean, dropped). Neither frame shares memory with the input."""
    df = df.copy()
    for col in OUT_COLS:
        if col not in df.columns:
            df[col] = None
    if "source_file" not in df.columns:
        df["source_file"] = ""

    df["id"] = df["id"].apply(parse_int)
    df["company_id"] = df["company_id"].apply(parse_int)
    df["participant_name"] = df["participant_name"].apply(clean_str)
    df["notes"] = df["notes"].apply(clean_str)
    df["date_raw"] = df["date"]
    df["date"] = df["date"].apply(parse_date)
    df["time_start"] = df["time_start"].apply(normalize_time)
    df["time_end"] = df["time_end"].apply(normalize_time)
    df["employee_count"] = df["employee_count"].apply(parse_int)
    df["type"] = _map_enum(df["type"], TYPE_MAP)
    df["status"] = _map_enum(df["status"], STATUS_MAP)
    df["created_at"] = df["created_at"].apply(parse_datetime)

    df["qa_flags"] = ""
    add_flag(df, df["id"].isna(), "MISSING_ID")
    add_flag(df, df["company_id"].isna(), "MISSING_COMPANY")
    add_flag(df, df["participant_name"].isna(), "MISSING_PARTICIPANT")
    add_flag(df, df["date"].isna(), "INVALID_DATE")
    add_flag(df, df["time_start"].isna() | df["time_end"].isna(), "INVALID_TIME")
    times_ok = df["time_start"].notna() & df["time_end"].notna()
    add_flag(df, times_ok & (df["time_start"].fillna("") >= df["time_end"].fillna("")), "TIME_RANGE_INVALID")
    add_flag(df, df["employee_count"].isna() | (df["employee_count"].fillna(0) <= 0), "INVALID_EMPLOYEE_COUNT")
    add_flag(df, df["type"].isna(), "INVALID_TYPE")
    add_flag(df, df["status"].isna(), "INVALID_STATUS")
    if valid_company_ids is not None:
        add_flag(df, df["company_id"].notna() & ~df["company_id"].isin(valid_company_ids), "FK_VIOLATION")
    add_flag(df, df["id"].notna() & df["id"].duplicated(keep="first"), "DUPLICATE_ID")

    fatal = df["qa_flags"].str.contains("|".join(FATAL_FLAGS), na=False)
    dropped = df[fatal].copy()
    if not dropped.empty:
        dropped["date"] = dropped["date_raw"]
        dropped = dropped.reindex(columns=DROP_LOG_COLS)
        log.warning("Screenings: dropping %d invalid rows", len(dropped))

    clean = df[~fatal].copy()
    clean["participant_name"] = clean["participant_name"].fillna("")
    clean.loc[clean["qa_flags"].eq(""), "qa_flags"] = "OK"
    log.info("Screenings transform complete: %d rows kept", len(clean))
    return clean.reindex(columns=OUT_COLS + ["qa_flags", "source_file"]), dropped

def to_records(clean: pd.DataFrame) -> list[Screening]:
    return [
        Screening(
            id=int(r["id"]),
            company_id=int(r["company_id"]),
            participant_name=r["participant_name"],
            date=r["date"],
            time_start=r["time_start"],
            time_end=r["time_end"],
            employee_count=int(r["employee_count"]),
            type=ScreeningType(r["type"]),
            status=ScreeningStatus(r["status"]),
            notes=clean_str(r["notes"]),
            created_at=parse_datetime(r["created_at"]),
        )
        for r in clean.to_dict("records")
    ]

def main():
    df_raw = read_screenings()
    clean, dropped = transform(df_raw)
    if not dropped.empty:
        write_drop_log(dropped, SCREENINGS_LOGS)
        log.warning("Wrote drop log: %s (%d rows)", SCREENINGS_LOGS, len(dropped))

    Path(SCREENINGS_CLEAN).parent.mkdir(parents=True, exist_ok=True)
    clean.to_csv(SCREENINGS_CLEAN, index=False)
    log.info("Saved cleaned screenings: %s (%d rows)", SCREENINGS_CLEAN, len(clean))

if __name__ == "__main__":
    setup_logging()
    main()
