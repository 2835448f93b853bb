"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the per-resource use case services and the
request actor. Long-lived collaborators (cache, storage, session factory,
write pipeline, CAPTCHA verifier) are created once by the lifespan and
read from app.state here; routes never construct infrastructure.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from campus_cms.application.interfaces.services import ICaptchaVerifier
from campus_cms.application.services.write_pipeline import Actor
from campus_cms.application.use_cases import (
    AcademicCalendarService,
    AccreditationService,
    AdmissionWaveService,
    AuditTrailService,
    ComplaintService,
    DashboardService,
    HrDocumentService,
    NewsService,
    OrganizationService,
    ScholarshipService,
    ServiceContext,
    SliderService,
    StudentOrganizationService,
    VisitorService,
)
from campus_cms.core.config import get_settings
from campus_cms.core.constants import ADMIN_ROLE
from campus_cms.domain.exceptions import AuthenticationException, AuthorizationException
from campus_cms.infrastructure.security.jwt import verify_token
from campus_cms.shared.request_audit import get_client_provenance

security = HTTPBearer(auto_error=False)


def get_service_context(request: Request) -> ServiceContext:
    """Collaborators from app.state (set by the lifespan or by tests)."""
    state = request.app.state
    return ServiceContext(
        session_factory=state.session_factory,
        cache=state.cache,
        storage=state.storage,
        pipeline=state.pipeline,
        settings=get_settings(),
    )


Context = Annotated[ServiceContext, Depends(get_service_context)]


def get_captcha_verifier(request: Request) -> ICaptchaVerifier:
    return request.app.state.captcha


async def get_current_admin(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Actor:
    """Admin actor from a Bearer JWT (sub = admin id, name = display name).

    Raises:
        AuthenticationException: Missing, invalid or expired token.
        AuthorizationException: Token carries a role other than admin.
    """
    if credentials is None:
        raise AuthenticationException("Not authenticated")
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException("Could not validate credentials") from e
    role = payload.get("role")
    if role is not None and role != ADMIN_ROLE:
        raise AuthorizationException("Administrator access required")
    ip_address, user_agent = get_client_provenance(request)
    subject = str(payload["sub"])
    return Actor(
        id=subject,
        name=str(payload.get("name") or subject),
        ip=ip_address,
        user_agent=user_agent,
    )


def get_anonymous_actor(request: Request) -> Actor:
    """Provenance-only actor for public endpoints."""
    ip_address, user_agent = get_client_provenance(request)
    return Actor.anonymous(ip_address, user_agent)


AdminActor = Annotated[Actor, Depends(get_current_admin)]
AnonymousActor = Annotated[Actor, Depends(get_anonymous_actor)]


def get_news_service(ctx: Context) -> NewsService:
    return NewsService(ctx)


def get_academic_calendar_service(ctx: Context) -> AcademicCalendarService:
    return AcademicCalendarService(ctx)


def get_accreditation_service(ctx: Context) -> AccreditationService:
    return AccreditationService(ctx)


def get_organization_service(ctx: Context) -> OrganizationService:
    return OrganizationService(ctx)


def get_admission_wave_service(ctx: Context) -> AdmissionWaveService:
    return AdmissionWaveService(ctx)


def get_scholarship_service(ctx: Context) -> ScholarshipService:
    return ScholarshipService(ctx)


def get_slider_service(ctx: Context) -> SliderService:
    return SliderService(ctx)


def get_student_organization_service(ctx: Context) -> StudentOrganizationService:
    return StudentOrganizationService(ctx)


def get_hr_document_service(ctx: Context) -> HrDocumentService:
    return HrDocumentService(ctx)


def get_complaint_service(
    ctx: Context,
    captcha: Annotated[ICaptchaVerifier, Depends(get_captcha_verifier)],
) -> ComplaintService:
    return ComplaintService(ctx, captcha)


def get_visitor_service(ctx: Context) -> VisitorService:
    return VisitorService(ctx)


def get_dashboard_service(ctx: Context) -> DashboardService:
    return DashboardService(ctx)


def get_audit_trail_service(ctx: Context) -> AuditTrailService:
    return AuditTrailService(ctx)
