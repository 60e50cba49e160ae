"""
Shared fixtures: a small OSGB dataset centred on 2024-01-10.
"""
from datetime import date, datetime
import pytest
from osgb_analytics.models.records import (
    Company, Document, DocumentCategory, DocumentStatus,
    Screening, ScreeningStatus, ScreeningType,
)
from osgb_analytics.services.snapshot import Snapshot

NOW = datetime(2024, 1, 10, 12, 0)
TODAY = NOW.date()


def make_screening(id, date=TODAY, start="09:00", end="10:00",
                   status=ScreeningStatus.SCHEDULED, company_id=1,
                   type=ScreeningType.PERIODIC, employee_count=10, **kw):
    return Screening(
        id=id,
        company_id=company_id,
        participant_name=kw.pop("participant_name", f"Participant {id}"),
        date=date,
        time_start=start,
        time_end=end,
        employee_count=employee_count,
        type=type,
        status=status,
        **kw,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def companies():
    return [
        Company(1, "Acme Health", contact_person="Ayse Demir"),
        Company(2, "Beta Build"),
        Company(3, "Gamma Foods"),
    ]


@pytest.fixture
def company_map(companies):
    return {c.id: c for c in companies}


@pytest.fixture
def scenario_a():
    """Four screenings on 2024-01-10: scheduled, completed, completed, cancelled."""
    return [
        make_screening(1, start="09:00", end="10:00", employee_count=10,
                       created_at=datetime(2024, 1, 1, 8, 0)),
        make_screening(2, start="09:30", end="10:30", status=ScreeningStatus.COMPLETED,
                       employee_count=20, created_at=datetime(2024, 1, 2, 8, 0)),
        make_screening(3, start="11:00", end="12:00", status=ScreeningStatus.COMPLETED,
                       company_id=2, type=ScreeningType.INITIAL, employee_count=5,
                       created_at=datetime(2024, 1, 3, 8, 0)),
        make_screening(4, start="13:00", end="14:00", status=ScreeningStatus.CANCELLED,
                       company_id=2, type=ScreeningType.SPECIAL, employee_count=5,
                       notes="Rescheduled by phone"),
    ]


@pytest.fixture
def screenings(scenario_a):
    return scenario_a + [
        make_screening(5, date=date(2024, 1, 5), start="10:00", end="11:00", company_id=3,
                       employee_count=8, created_at=datetime(2024, 1, 4, 8, 0)),
        make_screening(6, date=date(2024, 1, 12), start="10:00", end="11:00",
                       type=ScreeningType.INITIAL, employee_count=12,
                       created_at=datetime(2024, 1, 5, 8, 0)),
        make_screening(7, date=date(2023, 12, 28), start="10:00", end="11:00",
                       status=ScreeningStatus.NO_SHOW, company_id=3, employee_count=3,
                       created_at=datetime(2023, 12, 20, 8, 0)),
    ]


@pytest.fixture
def documents():
    return [
        Document(1, "Annual health report", "report.pdf", DocumentCategory.HEALTH_REPORT,
                 company_id=1, expiry_date=date(2024, 1, 25),
                 upload_date=datetime(2024, 1, 8, 9, 0), employee_name="Mehmet Kaya"),
        Document(2, "First aid certificate", "cert.pdf", DocumentCategory.CERTIFICATE,
                 company_id=1, expiry_date=date(2024, 1, 5),
                 upload_date=datetime(2023, 12, 1, 9, 0)),
        Document(3, "Old contract", "contract.pdf", DocumentCategory.CONTRACT,
                 status=DocumentStatus.ARCHIVED, company_id=2, expiry_date=date(2024, 1, 20),
                 upload_date=datetime(2024, 1, 9, 9, 0)),
        Document(4, "ID copy", "id.png", DocumentCategory.IDENTIFICATION),
    ]


@pytest.fixture
def snapshot(companies, screenings, documents):
    return Snapshot(tuple(companies), tuple(screenings), tuple(documents))


@pytest.fixture
def make():
    return make_screening
