"""Audit log API: list, CSV export and range delete of administrative actions."""

from datetime import date
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from campus_cms.api.v1.dependencies import AdminActor, get_audit_trail_service
from campus_cms.application.dtos.audit_log import AuditLogFilters
from campus_cms.application.use_cases.audit_logs import AuditTrailService
from campus_cms.schemas.audit_log import AuditLogEntryResponse
from campus_cms.schemas.common import DateRangeRequest, DeletedCountResponse, Page

router = APIRouter()

Service = Annotated[AuditTrailService, Depends(get_audit_trail_service)]


@router.get("", response_model=Page[AuditLogEntryResponse])
async def list_audit_logs(
    service: Service,
    _: AdminActor,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    actor_name: str | None = Query(None, max_length=100, description="Name contains"),
    action: str | None = Query(None, max_length=20),
    target_table: str | None = Query(None, max_length=50),
    start_date: date | None = Query(None, description="From day (inclusive)"),
    end_date: date | None = Query(None, description="To day (inclusive)"),
) -> dict[str, Any]:
    """Entries newest first; the total uses the same filters as the page."""
    filters = AuditLogFilters(
        actor_name=actor_name or None,
        action=action.lower() if action else None,
        target_table=target_table or None,
        start_date=start_date,
        end_date=end_date,
    )
    return await service.query(filters, page, limit)


@router.get("/export")
async def export_audit_logs(service: Service, _: AdminActor) -> StreamingResponse:
    """Whole trail as CSV, times in the display timezone."""
    return StreamingResponse(
        service.export_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="audit-logs.csv"'},
    )


@router.delete("/delete-range", response_model=DeletedCountResponse)
async def delete_audit_range(
    body: DateRangeRequest, service: Service, actor: AdminActor
) -> DeletedCountResponse:
    deleted = await service.delete_in_range(body.start_date, body.end_date, actor)
    return DeletedCountResponse(
        message=f"Deleted {deleted} audit log entries", deleted=deleted
    )
