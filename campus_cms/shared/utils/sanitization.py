"""Input sanitization utilities for XSS prevention and URL-safe slugs."""

import re
import unicodedata
from typing import ClassVar

import nh3


class InputSanitizer:
    """
    Sanitize user inputs to prevent XSS.

    Use parameterized queries as the primary defense; these helpers
    add a second layer for display. Plain-text fields are stripped of
    every tag; rich news content keeps a small formatting allowlist.
    """

    ALLOWED_TAGS: ClassVar[list[str]] = []
    ALLOWED_ATTRIBUTES: ClassVar[dict[str, list[str]]] = {}
    RICH_TEXT_TAGS: ClassVar[list[str]] = [
        "a",
        "b",
        "br",
        "em",
        "h1",
        "h2",
        "h3",
        "i",
        "li",
        "ol",
        "p",
        "strong",
        "ul",
    ]
    RICH_TEXT_ATTRIBUTES: ClassVar[dict[str, list[str]]] = {"a": ["href", "title"]}

    @classmethod
    def sanitize_html(cls, value: str) -> str:
        """Remove all HTML tags and sanitize with nh3 (strict by default).

        Args:
            value: Raw string that may contain HTML.

        Returns:
            Sanitized string safe for HTML display.
        """
        if not value:
            return value
        # nh3: tags = set of allowed tag names; attributes = dict[tag, set[attr]]
        attrs = {k: set(v) for k, v in cls.ALLOWED_ATTRIBUTES.items()}
        return nh3.clean(
            value,
            tags=set(cls.ALLOWED_TAGS),
            attributes=attrs,
        )

    @classmethod
    def sanitize_rich_text(cls, value: str) -> str:
        """Keep basic formatting tags (paragraphs, lists, emphasis, links); drop the rest.

        Args:
            value: Editor HTML.

        Returns:
            Sanitized HTML; script/style content is removed entirely.
        """
        if not value:
            return value
        attrs = {k: set(v) for k, v in cls.RICH_TEXT_ATTRIBUTES.items()}
        return nh3.clean(
            value,
            tags=set(cls.RICH_TEXT_TAGS),
            attributes=attrs,
            link_rel="noopener noreferrer",
        )


_SLUG_STRIP = re.compile(r"[^a-z0-9\s-]")
_SLUG_DASHES = re.compile(r"[\s-]+")


def slugify(value: str) -> str:
    """Build a URL slug: ASCII lowercase, words joined by single hyphens.

    The result only contains [a-z0-9-], so it is safe as a cache key
    component.

    Args:
        value: Title or free text.

    Returns:
        Slug, possibly empty when value has no ASCII letters or digits.
    """
    normalized = (
        unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    )
    cleaned = _SLUG_STRIP.sub("", normalized.lower())
    return _SLUG_DASHES.sub("-", cleaned).strip("-")


def sanitize_input(value: str | None) -> str | None:
    """Convenience: strip all markup from a plain-text field (None passes through)."""
    if value is None:
        return None
    return InputSanitizer.sanitize_html(value).strip()
