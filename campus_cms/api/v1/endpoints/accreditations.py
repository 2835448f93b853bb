"""Accreditation API: ordered list (cached) and certificate-backed admin writes."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, UploadFile

from campus_cms.api.v1.dependencies import AdminActor, get_accreditation_service
from campus_cms.api.v1.endpoints._uploads import read_upload
from campus_cms.application.use_cases.accreditations import (
    AccreditationService,
    AccreditationWrite,
)
from campus_cms.domain.exceptions import ValidationException
from campus_cms.schemas.common import MessageResponse
from campus_cms.schemas.resources import AccreditationResponse

router = APIRouter()

Service = Annotated[AccreditationService, Depends(get_accreditation_service)]


@router.get("", response_model=list[AccreditationResponse])
async def list_accreditations(service: Service) -> list[dict[str, Any]]:
    return await service.list()


@router.post("", response_model=AccreditationResponse, status_code=201)
async def create_accreditation(
    service: Service,
    actor: AdminActor,
    study_program: str = Form(..., max_length=50),
    faculty: str = Form(..., max_length=50),
    status: str = Form(..., max_length=15),
    certificate: UploadFile = File(...),
) -> dict[str, Any]:
    incoming = await read_upload(certificate)
    if incoming is None:
        raise ValidationException("A certificate file is required", "certificate")
    return await service.create(
        AccreditationWrite(study_program, faculty, status), incoming, actor
    )


@router.put("/{accreditation_id}", response_model=AccreditationResponse)
async def update_accreditation(
    accreditation_id: int,
    service: Service,
    actor: AdminActor,
    study_program: str = Form(..., max_length=50),
    faculty: str = Form(..., max_length=50),
    status: str = Form(..., max_length=15),
    certificate: UploadFile | None = File(None),
) -> dict[str, Any]:
    return await service.update(
        accreditation_id,
        AccreditationWrite(study_program, faculty, status),
        actor,
        certificate=await read_upload(certificate),
    )


@router.delete("/{accreditation_id}", response_model=MessageResponse)
async def delete_accreditation(
    accreditation_id: int, service: Service, actor: AdminActor
) -> MessageResponse:
    await service.delete(accreditation_id, actor)
    return MessageResponse(message="Accreditation deleted")
