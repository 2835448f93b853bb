"""Persistence models: ORM entities and mixins."""

from campus_cms.infrastructure.persistence.models.academic_calendar import (
    AcademicCalendar,
)
from campus_cms.infrastructure.persistence.models.accreditation import Accreditation
from campus_cms.infrastructure.persistence.models.admission_wave import AdmissionWave
from campus_cms.infrastructure.persistence.models.audit_log import AuditLog
from campus_cms.infrastructure.persistence.models.complaint import Complaint
from campus_cms.infrastructure.persistence.models.hero_slide import HeroSlide
from campus_cms.infrastructure.persistence.models.hr_document import HrDocument
from campus_cms.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    IntIdMixin,
    ResourceModel,
    TimestampMixin,
)
from campus_cms.infrastructure.persistence.models.news import News
from campus_cms.infrastructure.persistence.models.organization_member import (
    OrganizationMember,
)
from campus_cms.infrastructure.persistence.models.scholarship import Scholarship
from campus_cms.infrastructure.persistence.models.student_organization import (
    StudentOrganization,
)
from campus_cms.infrastructure.persistence.models.visitor import Visitor

__all__ = [
    "AcademicCalendar",
    "Accreditation",
    "AdmissionWave",
    "AuditLog",
    "Complaint",
    "CreatedAtMixin",
    "HeroSlide",
    "HrDocument",
    "IntIdMixin",
    "News",
    "OrganizationMember",
    "ResourceModel",
    "Scholarship",
    "StudentOrganization",
    "TimestampMixin",
    "Visitor",
]
