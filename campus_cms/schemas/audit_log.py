"""Request/response schemas for the audit log API."""

from datetime import datetime

from pydantic import BaseModel


class AuditLogEntryResponse(BaseModel):
    """Single audit log entry (read). actor_* are null for anonymous submissions."""

    id: int
    actor_id: str | None = None
    actor_name: str | None = None
    action: str
    target_table: str
    target_id: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    message: str
    created_at: datetime
