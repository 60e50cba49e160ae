"""
Extract companies, screenings and documents from the application database, raw DataFrames.
"""

from __future__ import annotations
import logging
import pandas as pd
from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from osgb_analytics.core.db import get_engine
from osgb_analytics.models.tables import CompanyRow, DocumentRow, ScreeningRow

log = logging.getLogger(__name__)

TABLES = {
    "companies": CompanyRow,
    "screenings": ScreeningRow,
    "documents": DocumentRow,
}

def read_table(name: str, engine: Engine | None = None) -> pd.DataFrame:
    model = TABLES[name]
    engine = engine or get_engine()
    try:
        with engine.connect() as conn:
            df = pd.read_sql(select(model.__table__).order_by(model.id), conn)
    except SQLAlchemyError as e:
        log.error("Failed to read %s: %s", name, e)
        raise
    df["source_file"] = f"db:{name}"
    log.info("Extracted %s from database (%d rows)", name, len(df))
    return df

def read_all(engine: Engine | None = None) -> dict[str, pd.DataFrame]:
    """Read every table on one engine; callers run analytics only after all three resolve."""
    engine = engine or get_engine()
    return {name: read_table(name, engine) for name in TABLES}
