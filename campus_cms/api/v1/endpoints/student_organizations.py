"""Student organization API: public list (cached) and admin writes."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, UploadFile

from campus_cms.api.v1.dependencies import AdminActor, get_student_organization_service
from campus_cms.api.v1.endpoints._uploads import read_upload
from campus_cms.application.use_cases.student_organizations import (
    StudentOrganizationService,
)
from campus_cms.domain.exceptions import ValidationException
from campus_cms.schemas.common import MessageResponse
from campus_cms.schemas.resources import StudentOrganizationResponse

router = APIRouter()

Service = Annotated[StudentOrganizationService, Depends(get_student_organization_service)]


@router.get("", response_model=list[StudentOrganizationResponse])
async def list_student_organizations(service: Service) -> list[dict[str, Any]]:
    return await service.list()


@router.post("", response_model=StudentOrganizationResponse, status_code=201)
async def create_student_organization(
    service: Service,
    actor: AdminActor,
    name: str = Form(..., max_length=100),
    description: str = Form(..., max_length=1000),
    image: UploadFile = File(...),
) -> dict[str, Any]:
    incoming = await read_upload(image)
    if incoming is None:
        raise ValidationException("An image is required", "image")
    return await service.create(name, description, incoming, actor)


@router.put("/{org_id}", response_model=StudentOrganizationResponse)
async def update_student_organization(
    org_id: int,
    service: Service,
    actor: AdminActor,
    name: str = Form(..., max_length=100),
    description: str = Form(..., max_length=1000),
    image: UploadFile | None = File(None),
) -> dict[str, Any]:
    return await service.update(
        org_id, name, description, actor, image=await read_upload(image)
    )


@router.delete("/{org_id}", response_model=MessageResponse)
async def delete_student_organization(
    org_id: int, service: Service, actor: AdminActor
) -> MessageResponse:
    await service.delete(org_id, actor)
    return MessageResponse(message="Student organization deleted")
