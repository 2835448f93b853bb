"""HR document API: public list (cached) and admin writes."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, UploadFile

from campus_cms.api.v1.dependencies import AdminActor, get_hr_document_service
from campus_cms.api.v1.endpoints._uploads import read_upload
from campus_cms.application.use_cases.hr_documents import HrDocumentService
from campus_cms.domain.exceptions import ValidationException
from campus_cms.schemas.common import MessageResponse
from campus_cms.schemas.resources import HrDocumentResponse

router = APIRouter()

Service = Annotated[HrDocumentService, Depends(get_hr_document_service)]


@router.get("", response_model=list[HrDocumentResponse])
async def list_hr_documents(service: Service) -> list[dict[str, Any]]:
    return await service.list()


@router.post("", response_model=HrDocumentResponse, status_code=201)
async def create_hr_document(
    service: Service,
    actor: AdminActor,
    title: str = Form(..., max_length=100),
    description: str = Form(..., max_length=255),
    document: UploadFile = File(...),
) -> dict[str, Any]:
    incoming = await read_upload(document)
    if incoming is None:
        raise ValidationException("A document file is required", "document")
    return await service.create(title, description, incoming, actor)


@router.put("/{document_id}", response_model=HrDocumentResponse)
async def update_hr_document(
    document_id: int,
    service: Service,
    actor: AdminActor,
    title: str = Form(..., max_length=100),
    description: str = Form(..., max_length=255),
    document: UploadFile | None = File(None),
) -> dict[str, Any]:
    return await service.update(
        document_id, title, description, actor, document=await read_upload(document)
    )


@router.delete("/{document_id}", response_model=MessageResponse)
async def delete_hr_document(
    document_id: int, service: Service, actor: AdminActor
) -> MessageResponse:
    await service.delete(document_id, actor)
    return MessageResponse(message="HR document deleted")
