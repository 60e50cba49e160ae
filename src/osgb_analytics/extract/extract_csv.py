"""
Extract raw CSV exports of the application (companies, screenings, documents):
- Accepts camelCase API headers or snake_case DB headers
- Skips blank rows
- Returns a DataFrame with a source_file column
"""

from __future__ import annotations
import logging
import re
from pathlib import Path
import pandas as pd
from osgb_analytics.core.config import COMPANIES_FILE, DOCUMENTS_FILE, SCREENINGS_FILE

log = logging.getLogger(__name__)

_CAMEL_RX = re.compile(r"(?<!^)(?=[A-Z])")

def to_snake(name: str) -> str:
    return _CAMEL_RX.sub("_", str(name).strip()).lower()

def read_export(path: str | Path) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        log.error("Export not found: %s", path)
        raise FileNotFoundError(path)

    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [to_snake(c) for c in df.columns]
    df = df.replace({"": pd.NA})
    df = df.dropna(how="all")
    df["source_file"] = path.name
    log.info("Extracted %s (%d rows)", path, len(df))
    return df

def read_companies(path: str | Path = COMPANIES_FILE) -> pd.DataFrame:
    return read_export(path)

def read_screenings(path: str | Path = SCREENINGS_FILE) -> pd.DataFrame:
    return read_export(path)

def read_documents(path: str | Path = DOCUMENTS_FILE) -> pd.DataFrame:
    return read_export(path)
