"""Use cases: one service per resource, built from a ServiceContext."""

from campus_cms.application.use_cases.academic_calendars import AcademicCalendarService
from campus_cms.application.use_cases.accreditations import (
    AccreditationService,
    AccreditationWrite,
)
from campus_cms.application.use_cases.admission_waves import AdmissionWaveService, WaveWrite
from campus_cms.application.use_cases.audit_logs import AuditTrailService
from campus_cms.application.use_cases.common import ServiceContext
from campus_cms.application.use_cases.complaints import (
    ComplaintService,
    ComplaintSubmission,
)
from campus_cms.application.use_cases.dashboard import DashboardService
from campus_cms.application.use_cases.hr_documents import HrDocumentService
from campus_cms.application.use_cases.news import NewsService
from campus_cms.application.use_cases.organization import MemberWrite, OrganizationService
from campus_cms.application.use_cases.scholarships import ScholarshipService
from campus_cms.application.use_cases.slider import SliderService
from campus_cms.application.use_cases.student_organizations import (
    StudentOrganizationService,
)
from campus_cms.application.use_cases.visitors import VisitorService

__all__ = [
    "AcademicCalendarService",
    "AccreditationService",
    "AccreditationWrite",
    "AdmissionWaveService",
    "AuditTrailService",
    "ComplaintService",
    "ComplaintSubmission",
    "DashboardService",
    "HrDocumentService",
    "MemberWrite",
    "NewsService",
    "OrganizationService",
    "ScholarshipService",
    "ServiceContext",
    "SliderService",
    "StudentOrganizationService",
    "VisitorService",
    "WaveWrite",
]
