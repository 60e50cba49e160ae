import logging
from pathlib import Path
from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from osgb_analytics.core.config import DATABASE_URL, DATA_DIR
from osgb_analytics.models.tables import Base

log = logging.getLogger(__name__)

def get_engine(url: str | None = None) -> Engine:
    url = url or DATABASE_URL
    if url.startswith("sqlite:///") and ":memory:" not in url:
        Path(DATA_DIR).mkdir(parents=True, exist_ok=True)
    try:
        return create_engine(url, echo=False, future=True)
    except SQLAlchemyError as e:
        log.error("Failed to create engine: %s", e)
        raise

def create_tables(engine: Engine | None = None) -> Engine:
    """Create missing tables (idempotent)."""
    engine = engine or get_engine()
    insp = inspect(engine)
    existing = set(insp.get_table_names())
    expected = set(Base.metadata.tables.keys())

    if expected.issubset(existing):
        log.info("All tables exist. Skipping creation.")
        return engine

    missing = sorted(expected - existing)
    log.info("Creating tables: %s", ", ".join(missing))
    Base.metadata.create_all(engine)
    log.info("Tables created.")
    return engine
