"""Schemas for the document-backed and simple CMS resources."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class AcademicCalendarResponse(BaseModel):
    id: int
    academic_year: str
    semester: str
    pdf_url: str
    created_at: datetime
    updated_at: datetime


class AccreditationResponse(BaseModel):
    id: int
    study_program: str
    faculty: str
    status: str
    certificate_url: str
    certificate_name: str
    created_at: datetime
    updated_at: datetime


class OrganizationMemberRequest(BaseModel):
    """Create/update body for an organization chart member."""

    name: str = Field(..., min_length=1, max_length=100)
    position: str = Field(..., min_length=1, max_length=100)
    display_order: int | None = Field(default=None, ge=1)


class OrganizationMemberResponse(BaseModel):
    id: int
    name: str
    position: str
    display_order: int | None = None
    created_at: datetime
    updated_at: datetime


class AdmissionWaveRequest(BaseModel):
    """Create/update body for an admission wave."""

    name: str = Field(..., min_length=1, max_length=255)
    starts_on: date
    ends_on: date
    registration_fee: int = Field(..., gt=0, description="Whole currency units")


class AdmissionWaveResponse(BaseModel):
    id: int
    name: str
    starts_on: date
    ends_on: date
    registration_fee: int
    created_at: datetime
    updated_at: datetime


class ScholarshipResponse(BaseModel):
    id: int
    title: str
    description: str
    document_url: str
    created_at: datetime
    updated_at: datetime


class SlideActiveRequest(BaseModel):
    """Show or hide a slide on the homepage."""

    is_active: bool


class HeroSlideResponse(BaseModel):
    id: int
    title: str
    image_url: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class StudentOrganizationResponse(BaseModel):
    id: int
    name: str
    description: str
    image_url: str
    created_at: datetime
    updated_at: datetime


class HrDocumentResponse(BaseModel):
    id: int
    title: str
    description: str
    document_url: str
    created_at: datetime
    updated_at: datetime


class DashboardResponse(BaseModel):
    news_total: int
    visitors_today: int
