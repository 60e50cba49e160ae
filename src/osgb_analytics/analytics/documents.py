"""
Document statistics and the expiring-documents list.

The persisted document status and the expiry classification are independent
signals: a document past its expiry date may still be marked active, and the
counts below report each signal as-is.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Iterable, Mapping, Optional

from osgb_analytics.analytics.aggregate import UNKNOWN_COMPANY
from osgb_analytics.analytics.expiry import (
    EXPIRY_WARNING_DAYS, DateLike, ExpiryInfo, classify_expiry,
)
from osgb_analytics.models.records import (
    Company, Document, DocumentCategory, DocumentStatus,
)

log = logging.getLogger(__name__)

RECENT_UPLOAD_DAYS = 7
TOP_DOCUMENT_COMPANIES = 10
MAX_EXPIRY_HORIZON_DAYS = 365


@dataclass(frozen=True)
class CompanyDocumentCount:
    company_id: int
    name: str
    document_count: int


@dataclass(frozen=True)
class DocumentSummary:
    total: int
    by_status: dict[DocumentStatus, int]
    by_category: dict[DocumentCategory, int]
    expiring_within_30_days: int
    expired_count: int
    top_companies: list[CompanyDocumentCount] = field(default_factory=list)
    recent_uploads: int = 0


def _today(now: DateLike) -> date:
    return now.date() if isinstance(now, datetime) else now


def aggregate_documents(documents: Iterable[Document], now: DateLike,
                        companies: Optional[Mapping[int, Company]] = None,
                        warning_days: int = EXPIRY_WARNING_DAYS,
                        recent_days: int = RECENT_UPLOAD_DAYS) -> DocumentSummary:
    today = _today(now)
    horizon = today + timedelta(days=warning_days)
    ref = now if isinstance(now, datetime) else datetime.combine(today, time.min)
    recent_since = ref - timedelta(days=recent_days)

    by_status = {s: 0 for s in DocumentStatus}
    by_category = {c: 0 for c in DocumentCategory}
    per_company: dict[int, int] = {}
    expiring = expired = recent = total = 0

    for d in documents:
        total += 1
        by_status[DocumentStatus(d.status)] += 1
        by_category[DocumentCategory(d.category)] += 1
        if d.company_id is not None:
            per_company[d.company_id] = per_company.get(d.company_id, 0) + 1
        if d.expiry_date is not None:
            if d.status == DocumentStatus.ACTIVE and today <= d.expiry_date <= horizon:
                expiring += 1
            if d.expiry_date < today:
                expired += 1
        if d.upload_date is not None and d.upload_date >= recent_since:
            recent += 1

    companies = companies or {}
    ranked = sorted(per_company.items(), key=lambda kv: kv[1], reverse=True)
    top = [
        CompanyDocumentCount(cid, companies[cid].name if cid in companies else UNKNOWN_COMPANY, n)
        for cid, n in ranked[:TOP_DOCUMENT_COMPANIES]
    ]

    log.debug("aggregate_documents: total=%d expiring=%d expired=%d", total, expiring, expired)
    return DocumentSummary(
        total=total,
        by_status=by_status,
        by_category=by_category,
        expiring_within_30_days=expiring,
        expired_count=expired,
        top_companies=top,
        recent_uploads=recent,
    )


def expiring_documents(documents: Iterable[Document], now: DateLike,
                       days: int = EXPIRY_WARNING_DAYS,
                       status: Optional[DocumentStatus] = DocumentStatus.ACTIVE,
                       ) -> list[tuple[Document, ExpiryInfo]]:
    """
    Documents whose expiry date is on or before `now + days`, soonest first.
    Already expired documents are included. `status=None` disables the status check.
    """
    if not 1 <= days <= MAX_EXPIRY_HORIZON_DAYS:
        raise ValueError(f"days must be between 1 and {MAX_EXPIRY_HORIZON_DAYS}, got {days}")

    horizon = _today(now) + timedelta(days=days)
    hits = [
        d for d in documents
        if d.expiry_date is not None
        and d.expiry_date <= horizon
        and (status is None or d.status == status)
    ]
    hits.sort(key=lambda d: d.expiry_date)
    return [(d, classify_expiry(d.expiry_date, now)) for d in hits]
