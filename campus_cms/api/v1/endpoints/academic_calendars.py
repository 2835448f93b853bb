"""Academic calendar API: latest calendars (cached) and PDF-backed admin writes."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, UploadFile

from campus_cms.api.v1.dependencies import AdminActor, get_academic_calendar_service
from campus_cms.api.v1.endpoints._uploads import read_upload
from campus_cms.application.use_cases.academic_calendars import AcademicCalendarService
from campus_cms.domain.exceptions import ValidationException
from campus_cms.schemas.common import MessageResponse
from campus_cms.schemas.resources import AcademicCalendarResponse

router = APIRouter()

Service = Annotated[AcademicCalendarService, Depends(get_academic_calendar_service)]


@router.get("", response_model=list[AcademicCalendarResponse])
async def latest_calendars(service: Service) -> list[dict[str, Any]]:
    return await service.latest()


@router.post("", response_model=AcademicCalendarResponse, status_code=201)
async def create_calendar(
    service: Service,
    actor: AdminActor,
    academic_year: str = Form(..., max_length=9, description="YYYY/YYYY"),
    semester: str = Form(..., max_length=10),
    pdf: UploadFile = File(...),
) -> dict[str, Any]:
    incoming = await read_upload(pdf)
    if incoming is None:
        raise ValidationException("A PDF file is required", "pdf")
    return await service.create(academic_year, semester, incoming, actor)


@router.put("/{calendar_id}", response_model=AcademicCalendarResponse)
async def update_calendar(
    calendar_id: int,
    service: Service,
    actor: AdminActor,
    academic_year: str = Form(..., max_length=9),
    semester: str = Form(..., max_length=10),
    pdf: UploadFile | None = File(None),
) -> dict[str, Any]:
    return await service.update(
        calendar_id, academic_year, semester, actor, pdf=await read_upload(pdf)
    )


@router.delete("/{calendar_id}", response_model=MessageResponse)
async def delete_calendar(
    calendar_id: int, service: Service, actor: AdminActor
) -> MessageResponse:
    await service.delete(calendar_id, actor)
    return MessageResponse(message="Academic calendar deleted")
