"""
Load a cleaned snapshot into the application database.
- Assumes records were already validated by the transform step.
- Dates are written back in the application's string formats (YYYY-MM-DD, ISO timestamps).
"""

from __future__ import annotations
import logging
from datetime import date, datetime
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from osgb_analytics.core.db import create_tables, get_engine
from osgb_analytics.core.logging_setup import setup_logging
from osgb_analytics.models.records import Company, Document, Screening
from osgb_analytics.models.tables import CompanyRow, DocumentRow, ScreeningRow
from osgb_analytics.services.snapshot import Snapshot, load_from_csv

log = logging.getLogger(__name__)

def _iso(val: date | datetime | None) -> str | None:
    return None if val is None else val.isoformat()

def _company_row(c: Company) -> CompanyRow:
    return CompanyRow(
        id=c.id, name=c.name, address=c.address or None,
        contact_person=c.contact_person or None, phone=c.phone or None, email=c.email or None,
    )

def _screening_row(s: Screening) -> ScreeningRow:
    return ScreeningRow(
        id=s.id,
        company_id=s.company_id,
        participant_name=s.participant_name,
        date=s.date.isoformat(),
        time_start=s.time_start,
        time_end=s.time_end,
        employee_count=s.employee_count,
        type=s.type.value,
        status=s.status.value,
        notes=s.notes,
        created_at=_iso(s.created_at),
    )

def _document_row(d: Document) -> DocumentRow:
    return DocumentRow(
        id=d.id,
        title=d.title,
        file_url=d.file_url or None,
        file_name=d.file_name,
        file_size=d.file_size,
        file_type=d.file_type or None,
        category=d.category.value,
        company_id=d.company_id,
        employee_id=d.employee_id,
        screening_id=d.screening_id,
        expiry_date=_iso(d.expiry_date),
        upload_date=_iso(d.upload_date),
        status=d.status.value,
    )

def load_companies(session: Session, records) -> int:
    objs = [_company_row(c) for c in records]
    session.bulk_save_objects(objs)
    log.info("Companies: inserted %d", len(objs))
    return len(objs)

def load_screenings(session: Session, records) -> int:
    objs = [_screening_row(s) for s in records]
    session.bulk_save_objects(objs)
    log.info("Screenings: inserted %d", len(objs))
    return len(objs)

def load_documents(session: Session, records, screening_ids: set[int]) -> int:
    objs = []
    for d in records:
        row = _document_row(d)
        # dangling screening links become NULL, as ON DELETE SET NULL would leave them
        if row.screening_id is not None and row.screening_id not in screening_ids:
            row.screening_id = None
        objs.append(row)
    session.bulk_save_objects(objs)
    log.info("Documents: inserted %d", len(objs))
    return len(objs)

def load_snapshot(snapshot: Snapshot, engine: Engine | None = None) -> dict:
    engine = create_tables(engine or get_engine())
    screening_ids = {s.id for s in snapshot.screenings}

    with Session(engine) as session:
        try:
            c_count = load_companies(session, snapshot.companies)
            s_count = load_screenings(session, snapshot.screenings)
            d_count = load_documents(session, snapshot.documents, screening_ids)
            session.commit()
            log.info("Load committed successfully")
        except Exception as e:
            session.rollback()
            log.error("Load failed; rolled back: %s", e, exc_info=True)
            raise

    log.info("Load summary: companies=%d, screenings=%d, documents=%d", c_count, s_count, d_count)
    return {"companies": c_count, "screenings": s_count, "documents": d_count}

def load_all() -> dict:
    setup_logging()
    log.info("Starting DB load from CSV exports")
    return load_snapshot(load_from_csv(write_logs=True))

if __name__ == "__main__":
    load_all()
