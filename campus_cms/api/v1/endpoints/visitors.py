"""Visitor API: public visit logging, admin list, CSV export, range delete."""

from datetime import date
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse

from campus_cms.api.v1.dependencies import AdminActor, AnonymousActor, get_visitor_service
from campus_cms.application.use_cases.visitors import VisitorService
from campus_cms.core.limiter import limit_visit_logging
from campus_cms.infrastructure.persistence.repositories.resource_repos import VisitorQuery
from campus_cms.schemas.common import DateRangeRequest, DeletedCountResponse, Page
from campus_cms.schemas.visitor import VisitLoggedResponse, VisitorResponse

router = APIRouter()

Service = Annotated[VisitorService, Depends(get_visitor_service)]


@router.post("", response_model=VisitLoggedResponse)
@limit_visit_logging
async def log_visit(
    request: Request, service: Service, actor: AnonymousActor
) -> VisitLoggedResponse:
    """Count this client once per day (ip + user agent)."""
    counted = await service.log_visit(actor.ip, actor.user_agent)
    return VisitLoggedResponse(counted=counted)


@router.get("", response_model=Page[VisitorResponse])
async def list_visitors(
    service: Service,
    _: AdminActor,
    page: int = Query(1, ge=1),
    limit: int = Query(15, ge=1, le=100),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    ip_address: str | None = Query(None, max_length=64),
    user_agent: str | None = Query(None, max_length=255),
) -> dict[str, Any]:
    query = VisitorQuery(
        start_date=start_date,
        end_date=end_date,
        ip_address=ip_address or None,
        user_agent=user_agent or None,
    )
    return await service.list(query, page, limit)


@router.get("/export")
async def export_visitors(service: Service, _: AdminActor) -> StreamingResponse:
    return StreamingResponse(
        service.export_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="visitors.csv"'},
    )


@router.delete("/delete-range", response_model=DeletedCountResponse)
async def delete_visitor_range(
    body: DateRangeRequest, service: Service, actor: AdminActor
) -> DeletedCountResponse:
    deleted = await service.delete_in_range(body.start_date, body.end_date, actor)
    return DeletedCountResponse(message=f"Deleted {deleted} visitor records", deleted=deleted)
