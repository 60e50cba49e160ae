"""
Filter predicate for screening and document collections.

A criterion that is None, empty, or the sentinel "all" is not applied.
Date bounds are inclusive and compared as plain calendar dates.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Mapping, Optional, Union

from osgb_analytics.models.records import Company, Document, Screening

log = logging.getLogger(__name__)

ALL = "all"

CompanyLookup = Mapping[int, Company]


@dataclass(frozen=True)
class FilterCriteria:
    """Immutable view state shared by every page that filters records."""
    company_id: Union[int, str, None] = None
    status: Optional[str] = None
    type: Optional[str] = None
    category: Optional[str] = None
    date_start: Optional[date] = None
    date_end: Optional[date] = None
    search_text: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return any(
            _is_set(v) for v in (
                self.company_id, self.status, self.type, self.category,
                self.date_start, self.date_end, self.search_text,
            )
        )


def _is_set(value) -> bool:
    return value is not None and value != "" and value != ALL


def _as_date(value) -> date:
    return value.date() if isinstance(value, datetime) else value


def _in_range(day: Optional[date], start: Optional[date], end: Optional[date]) -> bool:
    if not (start or end):
        return True
    if day is None:
        return False
    day = _as_date(day)
    if start and day < _as_date(start):
        return False
    if end and day > _as_date(end):
        return False
    return True


def _matches_text(query: str, fields: Iterable[Optional[str]]) -> bool:
    q = query.lower()
    return any(f is not None and q in f.lower() for f in fields)


def _company_name(companies: Optional[CompanyLookup], company_id: Optional[int]) -> Optional[str]:
    if companies is None or company_id is None:
        return None
    company = companies.get(company_id)
    return company.name if company else None


def _company_matches(company_id: Optional[int], wanted) -> bool:
    try:
        return company_id is not None and company_id == int(str(wanted).strip())
    except ValueError:
        return False


def screening_matches(s: Screening, criteria: FilterCriteria,
                      companies: Optional[CompanyLookup] = None) -> bool:
    if _is_set(criteria.company_id) and not _company_matches(s.company_id, criteria.company_id):
        return False
    if _is_set(criteria.status) and s.status != criteria.status:
        return False
    if _is_set(criteria.type) and s.type != criteria.type:
        return False
    if not _in_range(s.date, criteria.date_start, criteria.date_end):
        return False
    if _is_set(criteria.search_text):
        fields = (_company_name(companies, s.company_id), s.participant_name, s.notes)
        if not _matches_text(criteria.search_text, fields):
            return False
    return True


def document_matches(d: Document, criteria: FilterCriteria,
                     companies: Optional[CompanyLookup] = None) -> bool:
    if _is_set(criteria.company_id) and not _company_matches(d.company_id, criteria.company_id):
        return False
    if _is_set(criteria.status) and d.status != criteria.status:
        return False
    if _is_set(criteria.category) and d.category != criteria.category:
        return False
    if not _in_range(d.upload_date, criteria.date_start, criteria.date_end):
        return False
    if _is_set(criteria.search_text):
        fields = (d.title, d.file_name, _company_name(companies, d.company_id), d.employee_name)
        if not _matches_text(criteria.search_text, fields):
            return False
    return True


def filter_screenings(records: Iterable[Screening], criteria: Optional[FilterCriteria] = None,
                      companies: Optional[CompanyLookup] = None) -> list[Screening]:
    records = list(records)
    if criteria is None or not criteria.is_active:
        return records
    out = [s for s in records if screening_matches(s, criteria, companies)]
    log.debug("filter_screenings: %d -> %d", len(records), len(out))
    return out


def filter_documents(records: Iterable[Document], criteria: Optional[FilterCriteria] = None,
                     companies: Optional[CompanyLookup] = None) -> list[Document]:
    records = list(records)
    if criteria is None or not criteria.is_active:
        return records
    out = [d for d in records if document_matches(d, criteria, companies)]
    log.debug("filter_documents: %d -> %d", len(records), len(out))
    return out
