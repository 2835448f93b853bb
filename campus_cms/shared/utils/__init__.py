"""Shared utilities: datetime, sanitization."""

from campus_cms.shared.utils.datetime import (
    day_range,
    day_start,
    ensure_utc,
    format_local,
    local_today,
    utc_now,
)
from campus_cms.shared.utils.sanitization import (
    InputSanitizer,
    sanitize_input,
    slugify,
)

__all__ = [
    "utc_now",
    "local_today",
    "ensure_utc",
    "day_start",
    "day_range",
    "format_local",
    "InputSanitizer",
    "sanitize_input",
    "slugify",
]
