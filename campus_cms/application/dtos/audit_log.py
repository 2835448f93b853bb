"""DTOs for the audit log (administrative action log)."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class AuditLogEntryCreate:
    """Input for appending one audit log record. Append-only; no update."""

    actor_id: str | None
    actor_name: str | None
    action: str
    target_table: str
    target_id: str | None
    ip_address: str | None
    user_agent: str | None
    message: str


@dataclass(frozen=True)
class AuditLogResult:
    """Single audit log entry (read-model for list/export)."""

    id: int
    actor_id: str | None
    actor_name: str | None
    action: str
    target_table: str
    target_id: str | None
    ip_address: str | None
    user_agent: str | None
    message: str
    created_at: datetime


@dataclass(frozen=True)
class AuditLogFilters:
    """Optional filters shared by the audit list and count queries.

    actor_name matches as case-insensitive substring; action and
    target_table match exactly; start_date/end_date are inclusive days.
    """

    actor_name: str | None = None
    action: str | None = None
    target_table: str | None = None
    start_date: date | None = None
    end_date: date | None = None
