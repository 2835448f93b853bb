"""Complaint API: anonymous CAPTCHA-checked submission, admin list and triage."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile

from campus_cms.api.v1.dependencies import AdminActor, AnonymousActor, get_complaint_service
from campus_cms.api.v1.endpoints._uploads import read_upload
from campus_cms.application.use_cases.complaints import (
    ComplaintService,
    ComplaintSubmission,
)
from campus_cms.core.limiter import limit_public_submissions
from campus_cms.schemas.common import MessageResponse, Page
from campus_cms.schemas.complaint import (
    ComplaintCreatedResponse,
    ComplaintResponse,
    ComplaintStatusUpdate,
)

router = APIRouter()

Service = Annotated[ComplaintService, Depends(get_complaint_service)]


@router.post("", response_model=ComplaintCreatedResponse, status_code=201)
@limit_public_submissions
async def submit_complaint(
    request: Request,
    service: Service,
    actor: AnonymousActor,
    category: str = Form(..., max_length=50),
    body: str = Form(...),
    reporter_name: str | None = Form(None, max_length=100),
    reporter_email: str | None = Form(None, max_length=100),
    captcha_token: str | None = Form(None, alias="captchaToken"),
    evidence: UploadFile | None = File(None),
) -> ComplaintCreatedResponse:
    """Public submission; the stored body is tag-stripped and limited after cleaning."""
    created = await service.submit(
        ComplaintSubmission(
            category=category,
            body=body,
            reporter_name=reporter_name,
            reporter_email=reporter_email,
            captcha_token=captcha_token,
        ),
        actor,
        evidence=await read_upload(evidence),
    )
    return ComplaintCreatedResponse(id=created["id"])


@router.get("", response_model=Page[ComplaintResponse])
async def list_complaints(
    service: Service,
    _: AdminActor,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: str | None = Query(None, max_length=20),
) -> dict[str, Any]:
    return await service.list(page, limit, status)


@router.put("/{complaint_id}/status", response_model=ComplaintResponse)
async def update_complaint_status(
    complaint_id: int, body: ComplaintStatusUpdate, service: Service, actor: AdminActor
) -> dict[str, Any]:
    return await service.set_status(complaint_id, body.status, actor)


@router.delete("/{complaint_id}", response_model=MessageResponse)
async def delete_complaint(
    complaint_id: int, service: Service, actor: AdminActor
) -> MessageResponse:
    await service.delete(complaint_id, actor)
    return MessageResponse(message="Complaint deleted")
