"""DTOs for news (articles, announcements, agenda)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class NewsDocument:
    """Attachment stored in object storage."""

    url: str
    name: str


@dataclass(frozen=True)
class NewsResult:
    """News entry read-model."""

    id: int
    title: str
    slug: str
    content: str
    category: str
    author: str | None
    image_url: str | None
    documents: list[dict[str, str]]
    starts_on: date | None
    ends_on: date | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class NewsSummary:
    """Compact news row for lists and strips (no content body)."""

    id: int
    title: str
    slug: str
    category: str
    image_url: str | None
    starts_on: date | None
    ends_on: date | None
    created_at: datetime


@dataclass(frozen=True)
class NewsWrite:
    """Validated create/update input. Author and upload URLs are filled in by the use case."""

    title: str
    content: str
    category: str
    starts_on: date | None = None
    ends_on: date | None = None
