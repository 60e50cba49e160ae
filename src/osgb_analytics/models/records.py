"""
Domain records for screenings, documents and companies.

Records are immutable and hashable so that a collection of them can be used
as a cache key (see services.cache). They carry no behavior.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class ScreeningStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


class ScreeningType(str, Enum):
    PERIODIC = "periodic"
    INITIAL = "initial"
    SPECIAL = "special"


class DocumentCategory(str, Enum):
    HEALTH_REPORT = "health_report"
    CERTIFICATE = "certificate"
    CONTRACT = "contract"
    IDENTIFICATION = "identification"
    OTHER = "other"


class DocumentStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"
    EXPIRED = "expired"


@dataclass(frozen=True)
class Company:
    id: int
    name: str
    address: str = ""
    contact_person: str = ""
    phone: str = ""
    email: str = ""


@dataclass(frozen=True)
class Screening:
    id: int
    company_id: int
    participant_name: str
    date: date
    time_start: str  # "HH:MM", zero padded
    time_end: str
    employee_count: int
    type: ScreeningType
    status: ScreeningStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Document:
    id: int
    title: str
    file_name: str
    category: DocumentCategory
    status: DocumentStatus = DocumentStatus.ACTIVE
    file_url: str = ""
    file_size: Optional[int] = None
    file_type: str = ""
    company_id: Optional[int] = None
    employee_id: Optional[int] = None
    screening_id: Optional[int] = None
    expiry_date: Optional[date] = None
    upload_date: Optional[datetime] = None
    employee_name: Optional[str] = None
