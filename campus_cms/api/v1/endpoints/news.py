"""News API: cached public reads, admin writes with image and document uploads."""

from datetime import date
from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from campus_cms.api.v1.dependencies import AdminActor, get_news_service
from campus_cms.api.v1.endpoints._uploads import read_upload, read_uploads
from campus_cms.application.dtos.news import NewsWrite
from campus_cms.application.use_cases.news import NewsService
from campus_cms.schemas.common import (
    DateRangeRequest,
    DeletedCountResponse,
    MessageResponse,
    Page,
)
from campus_cms.schemas.news import NewsResponse, NewsSummaryResponse

router = APIRouter()

Service = Annotated[NewsService, Depends(get_news_service)]


@router.get("", response_model=Page[NewsSummaryResponse])
async def list_news(
    service: Service,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = Query("", max_length=100, description="Title contains"),
    category: str = Query("", max_length=20),
) -> dict[str, Any]:
    """Public paginated list, newest first."""
    return await service.list_public(page, limit, search.strip(), category.strip())


@router.get("/latest", response_model=list[NewsSummaryResponse])
async def latest_news(service: Service) -> list[dict[str, Any]]:
    """Latest articles (announcements and agenda excluded)."""
    return await service.latest()


@router.get("/announcements", response_model=list[NewsSummaryResponse])
async def latest_announcements(service: Service) -> list[dict[str, Any]]:
    return await service.announcements()


@router.get("/agenda", response_model=list[NewsSummaryResponse])
async def latest_agenda(service: Service) -> list[dict[str, Any]]:
    return await service.agenda()


@router.get("/admin", response_model=Page[NewsSummaryResponse])
async def list_news_admin(
    service: Service,
    _: AdminActor,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = Query("", max_length=100),
    category: str = Query("", max_length=20),
    year: int | None = Query(None, ge=1900, le=9999, description="Creation year"),
) -> dict[str, Any]:
    """Admin list: public filters plus creation year."""
    return await service.list_admin(page, limit, search.strip(), category.strip(), year)


@router.get("/{slug}", response_model=NewsResponse)
async def get_news(slug: str, service: Service) -> dict[str, Any]:
    return await service.get_by_slug(slug)


@router.post("", response_model=NewsResponse, status_code=201)
async def create_news(
    service: Service,
    actor: AdminActor,
    title: str = Form(..., max_length=100),
    content: str = Form(...),
    category: str = Form(..., max_length=20),
    starts_on: date | None = Form(None),
    ends_on: date | None = Form(None),
    image: UploadFile | None = File(None),
    documents: list[UploadFile] | None = File(None),
) -> dict[str, Any]:
    """Create a news entry; slug is derived from the title."""
    return await service.create(
        NewsWrite(title, content, category, starts_on, ends_on),
        actor,
        image=await read_upload(image),
        documents=await read_uploads(documents),
    )


@router.delete("/delete-range", response_model=DeletedCountResponse)
async def delete_news_range(
    body: DateRangeRequest, service: Service, actor: AdminActor
) -> DeletedCountResponse:
    """Delete entries created between startDate and endDate (inclusive) and their files."""
    deleted = await service.delete_in_range(body.start_date, body.end_date, actor)
    return DeletedCountResponse(message=f"Deleted {deleted} news entries", deleted=deleted)


@router.put("/{news_id}", response_model=NewsResponse)
async def update_news(
    news_id: int,
    service: Service,
    actor: AdminActor,
    title: str = Form(..., max_length=100),
    content: str = Form(...),
    category: str = Form(..., max_length=20),
    starts_on: date | None = Form(None),
    ends_on: date | None = Form(None),
    image: UploadFile | None = File(None),
    documents: list[UploadFile] | None = File(None),
) -> dict[str, Any]:
    """Update a news entry; a new image or document set replaces (and discards) the old one."""
    return await service.update(
        news_id,
        NewsWrite(title, content, category, starts_on, ends_on),
        actor,
        image=await read_upload(image),
        documents=await read_uploads(documents),
    )


@router.delete("/{news_id}", response_model=MessageResponse)
async def delete_news(news_id: int, service: Service, actor: AdminActor) -> MessageResponse:
    await service.delete(news_id, actor)
    return MessageResponse(message="News deleted")
