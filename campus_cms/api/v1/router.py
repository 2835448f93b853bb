"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from campus_cms.api.v1.dependencies (no manual service
construction).
"""

from fastapi import APIRouter

from campus_cms.api.v1.endpoints import (
    academic_calendars,
    accreditations,
    admission_waves,
    audit_logs,
    complaints,
    dashboard,
    health,
    hr_documents,
    news,
    organization,
    scholarships,
    slider,
    student_organizations,
    visitors,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(news.router, prefix="/news", tags=["news"])
api_router.include_router(
    academic_calendars.router, prefix="/academic-calendars", tags=["academic-calendars"]
)
api_router.include_router(
    accreditations.router, prefix="/accreditations", tags=["accreditations"]
)
api_router.include_router(organization.router, prefix="/organization", tags=["organization"])
api_router.include_router(
    admission_waves.router, prefix="/admission-waves", tags=["admission-waves"]
)
api_router.include_router(scholarships.router, prefix="/scholarships", tags=["scholarships"])
api_router.include_router(slider.router, prefix="/slider", tags=["slider"])
api_router.include_router(
    student_organizations.router,
    prefix="/student-organizations",
    tags=["student-organizations"],
)
api_router.include_router(hr_documents.router, prefix="/hr-documents", tags=["hr-documents"])
api_router.include_router(complaints.router, prefix="/complaints", tags=["complaints"])
api_router.include_router(visitors.router, prefix="/visitors", tags=["visitors"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(audit_logs.router, prefix="/audit-logs", tags=["audit-logs"])
