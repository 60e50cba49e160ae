"""
Transform companies: trim fields, drop rows without id/name, de-duplicate ids.
"""

from __future__ import annotations
import logging
from pathlib import Path
import pandas as pd
from osgb_analytics.core.config import COMPANIES_CLEAN
from osgb_analytics.core.logging_setup import setup_logging
from osgb_analytics.extract.extract_csv import read_companies
from osgb_analytics.models.records import Company
from osgb_analytics.transforms.common import clean_str, parse_int

log = logging.getLogger(__name__)

OUT_COLS = ["id", "name", "address", "contact_person", "phone", "email"]

def transform(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    for col in OUT_COLS:
        if col not in df.columns:
            df[col] = None
    df["id"] = df["id"].apply(parse_int)
    for col in OUT_COLS[1:]:
        df[col] = df[col].apply(clean_str)

    before = len(df)
    df = df[df["id"].notna() & df["name"].notna()]
    df = df.drop_duplicates(subset=["id"], keep="first")
    if len(df) < before:
        log.warning("Companies: removed %d rows without id/name or with duplicate id", before - len(df))
    return df[OUT_COLS].copy()

def to_records(clean: pd.DataFrame) -> list[Company]:
    return [
        Company(
            id=int(r["id"]),
            name=r["name"],
            address=clean_str(r["address"]) or "",
            contact_person=clean_str(r["contact_person"]) or "",
            phone=clean_str(r["phone"]) or "",
            email=clean_str(r["email"]) or "",
        )
        for r in clean.to_dict("records")
    ]

def main():
    df_raw = read_companies()
    clean = transform(df_raw)
    Path(COMPANIES_CLEAN).parent.mkdir(parents=True, exist_ok=True)
    clean.to_csv(COMPANIES_CLEAN, index=False)
    log.info("Saved cleaned companies: %s (%d rows)", COMPANIES_CLEAN, len(clean))

if __name__ == "__main__":
    setup_logging()
    main()
