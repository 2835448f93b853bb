"""Shared API schemas: pagination envelope, range deletes, acknowledgements."""

from datetime import date
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

ItemT = TypeVar("ItemT")


class Page(BaseModel, Generic[ItemT]):
    """Paginated list response."""

    data: list[ItemT]
    page: int
    limit: int
    total: int


class DateRangeRequest(BaseModel):
    """Body for delete-range endpoints; both days inclusive."""

    model_config = ConfigDict(populate_by_name=True)

    start_date: date = Field(..., alias="startDate")
    end_date: date = Field(..., alias="endDate")


class DeletedCountResponse(BaseModel):
    message: str
    deleted: int


class MessageResponse(BaseModel):
    message: str
