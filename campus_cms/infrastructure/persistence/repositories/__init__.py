"""Persistence repositories. Re-exports for dependency injection."""

from campus_cms.infrastructure.persistence.repositories.audit_log_repo import (
    AuditLogRepository,
)
from campus_cms.infrastructure.persistence.repositories.base import BaseRepository
from campus_cms.infrastructure.persistence.repositories.news_repo import (
    NewsQuery,
    NewsRepository,
)
from campus_cms.infrastructure.persistence.repositories.resource_repos import (
    AcademicCalendarRepository,
    AccreditationRepository,
    AdmissionWaveRepository,
    ComplaintRepository,
    OrganizationMemberRepository,
    ScholarshipRepository,
    VisitorQuery,
    VisitorRepository,
)

__all__ = [
    "AcademicCalendarRepository",
    "AccreditationRepository",
    "AdmissionWaveRepository",
    "AuditLogRepository",
    "BaseRepository",
    "ComplaintRepository",
    "NewsQuery",
    "NewsRepository",
    "OrganizationMemberRepository",
    "ScholarshipRepository",
    "VisitorQuery",
    "VisitorRepository",
]
