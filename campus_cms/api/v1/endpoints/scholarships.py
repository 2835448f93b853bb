"""Scholarship API: document list (cached) and admin writes."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, UploadFile

from campus_cms.api.v1.dependencies import AdminActor, get_scholarship_service
from campus_cms.api.v1.endpoints._uploads import read_upload
from campus_cms.application.use_cases.scholarships import ScholarshipService
from campus_cms.domain.exceptions import ValidationException
from campus_cms.schemas.common import MessageResponse
from campus_cms.schemas.resources import ScholarshipResponse

router = APIRouter()

Service = Annotated[ScholarshipService, Depends(get_scholarship_service)]


@router.get("", response_model=list[ScholarshipResponse])
async def list_scholarships(service: Service) -> list[dict[str, Any]]:
    return await service.list()


@router.post("", response_model=ScholarshipResponse, status_code=201)
async def create_scholarship(
    service: Service,
    actor: AdminActor,
    title: str = Form(..., max_length=155),
    description: str = Form(..., max_length=1000),
    document: UploadFile = File(...),
) -> dict[str, Any]:
    incoming = await read_upload(document)
    if incoming is None:
        raise ValidationException("A document file is required", "document")
    return await service.create(title, description, incoming, actor)


@router.put("/{scholarship_id}", response_model=ScholarshipResponse)
async def update_scholarship(
    scholarship_id: int,
    service: Service,
    actor: AdminActor,
    title: str = Form(..., max_length=155),
    description: str = Form(..., max_length=1000),
    document: UploadFile | None = File(None),
) -> dict[str, Any]:
    return await service.update(
        scholarship_id, title, description, actor, document=await read_upload(document)
    )


@router.delete("/{scholarship_id}", response_model=MessageResponse)
async def delete_scholarship(
    scholarship_id: int, service: Service, actor: AdminActor
) -> MessageResponse:
    await service.delete(scholarship_id, actor)
    return MessageResponse(message="Scholarship deleted")
