from osgb_analytics.models.records import (
    Company,
    Document,
    DocumentCategory,
    DocumentStatus,
    Screening,
    ScreeningStatus,
    ScreeningType,
)
from osgb_analytics.models.tables import Base, CompanyRow, DocumentRow, ScreeningRow

__all__ = [
    "Base",
    "Company",
    "CompanyRow",
    "Document",
    "DocumentCategory",
    "DocumentRow",
    "DocumentStatus",
    "Screening",
    "ScreeningRow",
    "ScreeningStatus",
    "ScreeningType",
]
