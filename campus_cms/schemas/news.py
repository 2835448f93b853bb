"""News API schemas."""

from datetime import date, datetime

from pydantic import BaseModel


class NewsDocumentItem(BaseModel):
    url: str
    name: str


class NewsResponse(BaseModel):
    """Full news entry (detail, create, update)."""

    id: int
    title: str
    slug: str
    content: str
    category: str
    author: str | None = None
    image_url: str | None = None
    documents: list[NewsDocumentItem] = []
    starts_on: date | None = None
    ends_on: date | None = None
    created_at: datetime
    updated_at: datetime


class NewsSummaryResponse(BaseModel):
    """News row for lists and strips (no body)."""

    id: int
    title: str
    slug: str
    category: str
    image_url: str | None = None
    starts_on: date | None = None
    ends_on: date | None = None
    created_at: datetime
