"""Cache key builders. Single place for key format (DRY).

Fixed key components (slugs, ids) must not contain CACHE_KEY_SEP to avoid
ambiguous or colliding keys. Variable filter sets (search terms, page,
status) are hashed with hashed_key() so arbitrary user input never leaks
into the key structure.
"""

import hashlib
import json
from typing import Any

from campus_cms.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_ACADEMIC_CALENDAR,
    CACHE_PREFIX_ACCREDITATION,
    CACHE_PREFIX_ADMISSION,
    CACHE_PREFIX_COMPLAINTS,
    CACHE_PREFIX_DASHBOARD,
    CACHE_PREFIX_NEWS,
    CACHE_PREFIX_ORGANIZATION,
    CACHE_PREFIX_HR_DOCUMENTS,
    CACHE_PREFIX_SCHOLARSHIP,
    CACHE_PREFIX_SLIDER,
    CACHE_PREFIX_STUDENT_ORGS,
    CACHE_PREFIX_VISITORS,
    NEWS_ADMIN_LIST_SEGMENT,
    NEWS_AGENDA_SEGMENT,
    NEWS_ANNOUNCEMENTS_SEGMENT,
    NEWS_LATEST_SEGMENT,
    NEWS_LIST_SEGMENT,
    NEWS_SLUG_SEGMENT,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value contains CACHE_KEY_SEP.
    """
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def prefix(*parts: str) -> str:
    """Join parts into a family prefix ending with the separator (e.g. 'news:list:')."""
    return CACHE_KEY_SEP.join(parts) + CACHE_KEY_SEP


def hashed_key(family_prefix: str, params: dict[str, Any]) -> str:
    """Deterministic key for a parameter set: prefix + md5 of canonical JSON.

    Equal parameter dicts (regardless of insertion order) produce equal keys.
    """
    raw = json.dumps(params, sort_keys=True, default=str, separators=(",", ":"))
    digest = hashlib.md5(raw.encode("utf-8")).hexdigest()
    return f"{family_prefix}{digest}"


# News: one table backing many query-variant caches
NEWS_LIST_PREFIX = prefix(CACHE_PREFIX_NEWS, NEWS_LIST_SEGMENT)
NEWS_ADMIN_LIST_PREFIX = prefix(CACHE_PREFIX_NEWS, NEWS_ADMIN_LIST_SEGMENT)
NEWS_LATEST_PREFIX = prefix(CACHE_PREFIX_NEWS, NEWS_LATEST_SEGMENT)
NEWS_ANNOUNCEMENTS_PREFIX = prefix(CACHE_PREFIX_NEWS, NEWS_ANNOUNCEMENTS_SEGMENT)
NEWS_AGENDA_PREFIX = prefix(CACHE_PREFIX_NEWS, NEWS_AGENDA_SEGMENT)
NEWS_SLUG_PREFIX = prefix(CACHE_PREFIX_NEWS, NEWS_SLUG_SEGMENT)

NEWS_QUERY_PREFIXES: tuple[str, ...] = (
    NEWS_LIST_PREFIX,
    NEWS_ADMIN_LIST_PREFIX,
    NEWS_LATEST_PREFIX,
    NEWS_ANNOUNCEMENTS_PREFIX,
    NEWS_AGENDA_PREFIX,
)

COMPLAINTS_LIST_PREFIX = prefix(CACHE_PREFIX_COMPLAINTS, "list")
VISITORS_LIST_PREFIX = prefix(CACHE_PREFIX_VISITORS, "list")


def news_slug_key(slug: str) -> str:
    """Cache key for a single news article by slug."""
    _validate_key_component(slug, "slug")
    return f"{NEWS_SLUG_PREFIX}{slug}"


def news_latest_key(limit: int) -> str:
    """Cache key for the latest-news strip."""
    return f"{NEWS_LATEST_PREFIX}{limit}"


def news_list_key(page: int, limit: int, search: str, category: str) -> str:
    """Cache key for the public paginated news list."""
    return hashed_key(
        NEWS_LIST_PREFIX,
        {"page": page, "limit": limit, "search": search, "category": category},
    )


def news_admin_list_key(
    page: int, limit: int, search: str, category: str, year: int | None
) -> str:
    """Cache key for the admin paginated news list."""
    return hashed_key(
        NEWS_ADMIN_LIST_PREFIX,
        {"page": page, "limit": limit, "search": search, "category": category, "year": year},
    )


def news_announcements_key(category: str) -> str:
    """Cache key for latest announcements in a category."""
    return hashed_key(NEWS_ANNOUNCEMENTS_PREFIX, {"category": category})


def news_agenda_key(category: str) -> str:
    """Cache key for latest agenda items in a category."""
    return hashed_key(NEWS_AGENDA_PREFIX, {"category": category})


def academic_calendar_key() -> str:
    """Cache key for the latest academic calendars."""
    return f"{CACHE_PREFIX_ACADEMIC_CALENDAR}{CACHE_KEY_SEP}latest"


def accreditation_list_key() -> str:
    """Cache key for the accreditation list."""
    return f"{CACHE_PREFIX_ACCREDITATION}{CACHE_KEY_SEP}list"


def organization_chart_key() -> str:
    """Cache key for the ordered organization chart."""
    return f"{CACHE_PREFIX_ORGANIZATION}{CACHE_KEY_SEP}chart"


def admission_waves_key() -> str:
    """Cache key for the admission wave list."""
    return f"{CACHE_PREFIX_ADMISSION}{CACHE_KEY_SEP}list"


def scholarships_key() -> str:
    """Cache key for the scholarship document list."""
    return f"{CACHE_PREFIX_SCHOLARSHIP}{CACHE_KEY_SEP}list"


def slider_active_key() -> str:
    """Cache key for the active hero slides."""
    return f"{CACHE_PREFIX_SLIDER}{CACHE_KEY_SEP}active"


def slider_all_key() -> str:
    """Cache key for the newest hero slides, active or not."""
    return f"{CACHE_PREFIX_SLIDER}{CACHE_KEY_SEP}all"


def student_organizations_key() -> str:
    """Cache key for the student organization list."""
    return f"{CACHE_PREFIX_STUDENT_ORGS}{CACHE_KEY_SEP}list"


def hr_documents_key() -> str:
    """Cache key for the HR document list."""
    return f"{CACHE_PREFIX_HR_DOCUMENTS}{CACHE_KEY_SEP}list"


def complaints_list_key(page: int, limit: int, status: str | None) -> str:
    """Cache key for one page of the admin complaint list."""
    return hashed_key(
        COMPLAINTS_LIST_PREFIX, {"page": page, "limit": limit, "status": status}
    )


def visitors_list_key(params: dict[str, Any]) -> str:
    """Cache key for one page of the filtered visitor list."""
    return hashed_key(VISITORS_LIST_PREFIX, params)


def dashboard_news_total_key() -> str:
    """Cache key for the dashboard news counter."""
    return f"{CACHE_PREFIX_DASHBOARD}{CACHE_KEY_SEP}news-total"


def dashboard_visitors_today_key() -> str:
    """Cache key for the dashboard visitors-today counter."""
    return f"{CACHE_PREFIX_DASHBOARD}{CACHE_KEY_SEP}visitors-today"
