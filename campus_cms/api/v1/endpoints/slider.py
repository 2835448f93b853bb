"""Hero slider API: active slides (public, cached) and admin writes."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, UploadFile

from campus_cms.api.v1.dependencies import AdminActor, get_slider_service
from campus_cms.api.v1.endpoints._uploads import read_upload
from campus_cms.application.use_cases.slider import SliderService
from campus_cms.domain.exceptions import ValidationException
from campus_cms.schemas.common import MessageResponse
from campus_cms.schemas.resources import HeroSlideResponse, SlideActiveRequest

router = APIRouter()

Service = Annotated[SliderService, Depends(get_slider_service)]


@router.get("", response_model=list[HeroSlideResponse])
async def active_slides(service: Service) -> list[dict[str, Any]]:
    return await service.active()


@router.get("/all", response_model=list[HeroSlideResponse])
async def recent_slides(service: Service, actor: AdminActor) -> list[dict[str, Any]]:
    """Newest slides including inactive ones."""
    return await service.recent()


@router.post("", response_model=HeroSlideResponse, status_code=201)
async def create_slide(
    service: Service,
    actor: AdminActor,
    title: str = Form(..., max_length=100),
    image: UploadFile = File(...),
) -> dict[str, Any]:
    incoming = await read_upload(image)
    if incoming is None:
        raise ValidationException("An image is required", "image")
    return await service.create(title, incoming, actor)


@router.put("/{slide_id}", response_model=HeroSlideResponse)
async def update_slide(
    slide_id: int,
    service: Service,
    actor: AdminActor,
    title: str | None = Form(None, max_length=100),
    is_active: bool | None = Form(None),
    image: UploadFile | None = File(None),
) -> dict[str, Any]:
    return await service.update(
        slide_id, actor, title=title, is_active=is_active, image=await read_upload(image)
    )


@router.patch("/{slide_id}/active", response_model=HeroSlideResponse)
async def set_slide_active(
    slide_id: int, body: SlideActiveRequest, service: Service, actor: AdminActor
) -> dict[str, Any]:
    return await service.update(slide_id, actor, is_active=body.is_active)


@router.delete("/{slide_id}", response_model=MessageResponse)
async def delete_slide(slide_id: int, service: Service, actor: AdminActor) -> MessageResponse:
    await service.delete(slide_id, actor)
    return MessageResponse(message="Slide deleted")
