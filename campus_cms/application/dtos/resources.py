"""DTOs for the single-table CMS resources (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class AcademicCalendarResult:
    id: int
    academic_year: str
    semester: str
    pdf_url: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class AccreditationResult:
    id: int
    study_program: str
    faculty: str
    status: str
    certificate_url: str
    certificate_name: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class OrganizationMemberResult:
    id: int
    name: str
    position: str
    display_order: int | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class AdmissionWaveResult:
    id: int
    name: str
    starts_on: date
    ends_on: date
    registration_fee: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ScholarshipResult:
    id: int
    title: str
    description: str
    document_url: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class HeroSlideResult:
    id: int
    title: str
    image_url: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class StudentOrganizationResult:
    id: int
    name: str
    description: str
    image_url: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class HrDocumentResult:
    id: int
    title: str
    description: str
    document_url: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ComplaintResult:
    """Complaint read-model (admin only)."""

    id: int
    reporter_name: str | None
    reporter_email: str | None
    category: str
    body: str
    evidence_url: str | None
    status: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class VisitorResult:
    id: int
    ip_address: str
    user_agent: str
    visited_on: date
    created_at: datetime
