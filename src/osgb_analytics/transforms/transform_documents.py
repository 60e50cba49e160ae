"""
Transform documents: normalize category/status, parse expiry and upload dates,
build Document records and log dropped rows.
"""

from __future__ import annotations
import logging
from pathlib import Path
import pandas as pd
from osgb_analytics.core.config import DOCUMENTS_CLEAN, DOCUMENTS_LOGS
from osgb_analytics.core.logging_setup import setup_logging
from osgb_analytics.extract.extract_csv import read_documents
from osgb_analytics.models.records import Document, DocumentCategory, DocumentStatus
from osgb_analytics.transforms.common import (
    add_flag, clean_str, is_missing, parse_date, parse_datetime, parse_int, write_drop_log,
)

log = logging.getLogger(__name__)

VALID_CATEGORIES = {c.value for c in DocumentCategory}
VALID_STATUSES = {s.value for s in DocumentStatus}

OUT_COLS = [
    "id", "title", "file_name", "category", "status", "file_url", "file_size", "file_type",
    "company_id", "employee_id", "screening_id", "expiry_date", "upload_date", "employee_name",
]
DROP_LOG_COLS = OUT_COLS + ["qa_flags", "source_file"]
FATAL_FLAGS = ("MISSING_ID", "MISSING_TITLE", "INVALID_CATEGORY", "INVALID_STATUS", "DUPLICATE_ID")

def _category(x) -> str | None:
    s = clean_str(x)
    if s is None:
        return None
    s = s.lower().replace("-", "_").replace(" ", "_")
    return s if s in VALID_CATEGORIES else None

def _status(x) -> str | None:
    # the upload form defaults to active
    if is_missing(x):
        return DocumentStatus.ACTIVE.value
    s = str(x).strip().lower()
    return s if s in VALID_STATUSES else None

def transform(df: pd.DataFrame) -> tuple[pd.DataFrame, pd.DataFrame]:
    df = df.copy()
    for col in OUT_COLS:
        if col not in df.columns:
            df[col] = None
    if "source_file" not in df.columns:
        df["source_file"] = ""

    for col in ("id", "file_size", "company_id", "employee_id", "screening_id"):
        df[col] = df[col].apply(parse_int)
    for col in ("title", "file_name", "file_url", "file_type", "employee_name"):
        df[col] = df[col].apply(clean_str)
    df["file_name"] = df["file_name"].fillna(df["title"])
    df["category"] = df["category"].apply(_category)
    df["status"] = df["status"].apply(_status)
    df["expiry_raw"] = df["expiry_date"]
    df["expiry_date"] = df["expiry_date"].apply(parse_date)
    df["upload_date"] = df["upload_date"].apply(parse_datetime)

    df["qa_flags"] = ""
    add_flag(df, df["id"].isna(), "MISSING_ID")
    add_flag(df, df["title"].isna(), "MISSING_TITLE")
    add_flag(df, df["category"].isna(), "INVALID_CATEGORY")
    add_flag(df, df["status"].isna(), "INVALID_STATUS")
    add_flag(df, df["expiry_raw"].apply(lambda x: not is_missing(x)) & df["expiry_date"].isna(), "INVALID_EXPIRY")
    add_flag(df, df["id"].notna() & df["id"].duplicated(keep="first"), "DUPLICATE_ID")

    fatal = df["qa_flags"].str.contains("|".join(FATAL_FLAGS), na=False)
    dropped = df[fatal].reindex(columns=DROP_LOG_COLS)
    if not dropped.empty:
        log.warning("Documents: dropping %d invalid rows", len(dropped))

    unparsed_expiry = df["qa_flags"].str.contains("INVALID_EXPIRY", na=False) & ~fatal
    if unparsed_expiry.any():
        log.warning("Documents: %d rows kept with unparseable expiry date (treated as no expiry)",
                    int(unparsed_expiry.sum()))

    clean = df[~fatal].copy()
    clean.loc[clean["qa_flags"].eq(""), "qa_flags"] = "OK"
    log.info("Documents transform complete: %d rows kept", len(clean))
    return clean.reindex(columns=OUT_COLS + ["qa_flags", "source_file"]), dropped

def _opt_int(x) -> int | None:
    return None if is_missing(x) else int(x)

def to_records(clean: pd.DataFrame) -> list[Document]:
    out = []
    for r in clean.to_dict("records"):
        out.append(Document(
            id=int(r["id"]),
            title=r["title"],
            file_name=r["file_name"],
            category=DocumentCategory(r["category"]),
            status=DocumentStatus(r["status"]),
            file_url=clean_str(r["file_url"]) or "",
            file_size=_opt_int(r["file_size"]),
            file_type=clean_str(r["file_type"]) or "",
            company_id=_opt_int(r["company_id"]),
            employee_id=_opt_int(r["employee_id"]),
            screening_id=_opt_int(r["screening_id"]),
            expiry_date=parse_date(r["expiry_date"]),
            upload_date=parse_datetime(r["upload_date"]),
            employee_name=clean_str(r["employee_name"]),
        ))
    return out

def main():
    df_raw = read_documents()
    clean, dropped = transform(df_raw)
    if not dropped.empty:
        write_drop_log(dropped, DOCUMENTS_LOGS)
        log.warning("Wrote drop log: %s (%d rows)", DOCUMENTS_LOGS, len(dropped))

    Path(DOCUMENTS_CLEAN).parent.mkdir(parents=True, exist_ok=True)
    clean.to_csv(DOCUMENTS_CLEAN, index=False)
    log.info("Saved cleaned documents: %s (%d rows)", DOCUMENTS_CLEAN, len(clean))

if __name__ == "__main__":
    setup_logging()
    main()
