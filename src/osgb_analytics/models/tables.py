"""
ORM models for the OSGB application database (read side only).
Column names follow the application's snake_case schema.
"""

from sqlalchemy.orm import DeclarativeBase
from sqlalchemy import (
    Column, String, Integer, ForeignKey, Text
)

class Base(DeclarativeBase):
    pass

class CompanyRow(Base):
    __tablename__ = "companies"

    id             = Column(Integer, primary_key=True, autoincrement=True)
    name           = Column(String(255), nullable=False)
    address        = Column(Text)
    contact_person = Column(String(255))
    phone          = Column(String(50))
    email          = Column(String(255))
    created_at     = Column(String(40))

class ScreeningRow(Base):
    __tablename__ = "screenings"

    id               = Column(Integer, primary_key=True, autoincrement=True)
    company_id       = Column(Integer, ForeignKey("companies.id"), nullable=False)
    participant_name = Column(String(255), nullable=False)
    date             = Column(String(10), nullable=False)   # YYYY-MM-DD
    time_start       = Column(String(5), nullable=False)    # HH:MM
    time_end         = Column(String(5), nullable=False)
    employee_count   = Column(Integer, nullable=False)
    type             = Column(String(20), nullable=False)
    status           = Column(String(20), nullable=False, default="scheduled")
    notes            = Column(Text)
    created_at       = Column(String(40))

class DocumentRow(Base):
    __tablename__ = "documents"

    id           = Column(Integer, primary_key=True, autoincrement=True)
    title        = Column(String(255), nullable=False)
    description  = Column(Text)
    file_url     = Column(Text)
    file_name    = Column(String(255), nullable=False)
    file_size    = Column(Integer)
    file_type    = Column(String(100))
    category     = Column(String(30), nullable=False)
    company_id   = Column(Integer, ForeignKey("companies.id", ondelete="SET NULL"))
    employee_id  = Column(Integer)
    screening_id = Column(Integer, ForeignKey("screenings.id", ondelete="SET NULL"))
    expiry_date  = Column(String(10))
    upload_date  = Column(String(40))
    status       = Column(String(20), nullable=False, default="active")
