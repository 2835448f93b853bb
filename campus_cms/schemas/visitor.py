"""Visitor API schemas."""

from datetime import date, datetime

from pydantic import BaseModel


class VisitLoggedResponse(BaseModel):
    counted: bool


class VisitorResponse(BaseModel):
    id: int
    ip_address: str
    user_agent: str
    visited_on: date
    created_at: datetime
