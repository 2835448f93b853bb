"""Domain enumerations for the campus CMS."""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class AuditAction(_ValuesMixin, str, Enum):
    """Closed set of audit actions (who did what)."""

    CREATE = "create"
    UPLOAD = "upload"
    UPDATE = "update"
    DELETE = "delete"
    LOGIN = "login"
    LOGOUT = "logout"


class Semester(_ValuesMixin, str, Enum):
    """Academic calendar semester."""

    ODD = "odd"
    EVEN = "even"
    SHORT = "short"


class ComplaintStatus(_ValuesMixin, str, Enum):
    """Complaint handling status."""

    OPEN = "open"
    RESOLVED = "resolved"
