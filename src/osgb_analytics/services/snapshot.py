"""
Snapshot service - extracts and cleans companies, screenings and documents
together, so analytics always run over one consistent, fully-resolved set.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Mapping, Optional
from sqlalchemy.engine import Engine
from osgb_analytics.core.config import (
    COMPANIES_FILE, DOCUMENTS_FILE, DOCUMENTS_LOGS, SCREENINGS_FILE, SCREENINGS_LOGS,
)
from osgb_analytics.extract import extract_csv, extract_db
from osgb_analytics.models.records import Company, Document, Screening
from osgb_analytics.transforms import transform_companies, transform_documents, transform_screenings
from osgb_analytics.transforms.common import write_drop_log

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    companies: tuple[Company, ...] = ()
    screenings: tuple[Screening, ...] = ()
    documents: tuple[Document, ...] = ()

    @cached_property
    def company_map(self) -> Mapping[int, Company]:
        return {c.id: c for c in self.companies}

    def screening(self, screening_id: int) -> Optional[Screening]:
        return next((s for s in self.screenings if s.id == screening_id), None)


def build_snapshot(frames: Mapping, write_logs: bool = False) -> Snapshot:
    companies = transform_companies.to_records(transform_companies.transform(frames["companies"]))
    company_ids = {c.id for c in companies}

    s_clean, s_dropped = transform_screenings.transform(frames["screenings"], company_ids)
    d_clean, d_dropped = transform_documents.transform(frames["documents"])

    if write_logs:
        if not s_dropped.empty:
            write_drop_log(s_dropped, SCREENINGS_LOGS)
        if not d_dropped.empty:
            write_drop_log(d_dropped, DOCUMENTS_LOGS)

    snap = Snapshot(
        companies=tuple(companies),
        screenings=tuple(transform_screenings.to_records(s_clean)),
        documents=tuple(transform_documents.to_records(d_clean)),
    )
    log.info("Snapshot ready: companies=%d, screenings=%d, documents=%d",
             len(snap.companies), len(snap.screenings), len(snap.documents))
    return snap


def load_from_db(engine: Engine | None = None, write_logs: bool = False) -> Snapshot:
    try:
        log.info("Reading snapshot from database...")
        return build_snapshot(extract_db.read_all(engine), write_logs=write_logs)
    except Exception as e:
        log.error("Snapshot load from database failed: %s", e, exc_info=True)
        raise


def load_from_csv(companies: str | Path = COMPANIES_FILE,
                  screenings: str | Path = SCREENINGS_FILE,
                  documents: str | Path = DOCUMENTS_FILE,
                  write_logs: bool = False) -> Snapshot:
    try:
        log.info("Reading snapshot from CSV exports...")
        frames = {
            "companies": extract_csv.read_companies(companies),
            "screenings": extract_csv.read_screenings(screenings),
            "documents": extract_csv.read_documents(documents),
        }
        return build_snapshot(frames, write_logs=write_logs)
    except Exception as e:
        log.error("Snapshot load from CSV failed: %s", e, exc_info=True)
        raise
