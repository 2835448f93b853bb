"""Complaint API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class ComplaintCreatedResponse(BaseModel):
    """Public submission acknowledgement (no complaint content echoed back)."""

    id: int
    message: str = "Complaint submitted"


class ComplaintStatusUpdate(BaseModel):
    status: str = Field(..., min_length=1, max_length=20)


class ComplaintResponse(BaseModel):
    id: int
    reporter_name: str | None = None
    reporter_email: str | None = None
    category: str
    body: str
    evidence_url: str | None = None
    status: str
    created_at: datetime
    updated_at: datetime
