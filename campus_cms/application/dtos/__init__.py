"""Application DTOs: frozen dataclasses passed between repositories, use cases and API."""

from campus_cms.application.dtos.audit_log import (
    AuditLogEntryCreate,
    AuditLogFilters,
    AuditLogResult,
)
from campus_cms.application.dtos.news import (
    NewsDocument,
    NewsResult,
    NewsSummary,
    NewsWrite,
)
from campus_cms.application.dtos.resources import (
    AcademicCalendarResult,
    AccreditationResult,
    AdmissionWaveResult,
    ComplaintResult,
    OrganizationMemberResult,
    ScholarshipResult,
    VisitorResult,
)
from campus_cms.application.dtos.serialization import to_payload, to_payloads

__all__ = [
    "AcademicCalendarResult",
    "AccreditationResult",
    "AdmissionWaveResult",
    "AuditLogEntryCreate",
    "AuditLogFilters",
    "AuditLogResult",
    "ComplaintResult",
    "NewsDocument",
    "NewsResult",
    "NewsSummary",
    "NewsWrite",
    "OrganizationMemberResult",
    "ScholarshipResult",
    "VisitorResult",
    "to_payload",
    "to_payloads",
]
