"""
Shared cleaning helpers for the screening/document/company transforms.
"""

from __future__ import annotations
import re
from datetime import date, datetime
from pathlib import Path
import pandas as pd

MISSING_TOKENS = {t.lower() for t in ["", " ", "NA", "N/A", "NULL", "None", "nan"]}
TIME_RX = re.compile(r"^\s*(\d{1,2})[:.](\d{2})(?::\d{2})?\s*$")

def is_missing(x) -> bool:
    if x is None:
        return True
    try:
        if pd.isna(x):
            return True
    except (TypeError, ValueError):
        pass
    return str(x).strip().lower() in MISSING_TOKENS

def clean_str(x) -> str | None:
    return None if is_missing(x) else str(x).strip()

def parse_int(x) -> int | None:
    if is_missing(x):
        return None
    try:
        f = float(str(x).strip())
    except ValueError:
        return None
    return int(f) if f.is_integer() else None

def parse_date(x) -> date | None:
    if is_missing(x):
        return None
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    s = str(x).strip()
    # ISO timestamps: keep the calendar part as written, no timezone shift
    if re.match(r"^\d{4}-\d{2}-\d{2}[T ]", s):
        s = s[:10]
    for fmt in ("%Y-%m-%d", "%d.%m.%Y", "%d/%m/%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    return None

def parse_datetime(x) -> datetime | None:
    if is_missing(x):
        return None
    if isinstance(x, pd.Timestamp):
        ts = x
    elif isinstance(x, datetime):
        return x
    else:
        ts = pd.to_datetime(str(x).strip(), errors="coerce")
    if pd.isna(ts):
        return None
    # naive local time, matching how dates are compared elsewhere
    return ts.tz_localize(None).to_pydatetime() if ts.tzinfo else ts.to_pydatetime()

def normalize_time(x) -> str | None:
    """'9:00', '09.00' and '09:00:00' all become '09:00'."""
    if is_missing(x):
        return None
    m = TIME_RX.match(str(x))
    if not m:
        return None
    hh, mm = int(m.group(1)), int(m.group(2))
    if hh > 23 or mm > 59:
        return None
    return f"{hh:02d}:{mm:02d}"

def add_flag(df: pd.DataFrame, mask: pd.Series, flag: str) -> None:
    if "qa_flags" not in df.columns:
        df["qa_flags"] = ""
    has = df["qa_flags"].ne("")
    df.loc[mask & ~has, "qa_flags"] = flag
    df.loc[mask &  has, "qa_flags"] = df.loc[mask & has, "qa_flags"] + "|" + flag

def write_drop_log(dropped: pd.DataFrame, path: str | Path) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    dropped.to_csv(path, index=False)
