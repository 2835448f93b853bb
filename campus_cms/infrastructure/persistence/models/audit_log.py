"""Audit log ORM model. Append-only record of administrative actions."""

from datetime import datetime
from typing import Any

from sqlalchemy import Connection, DateTime, Integer, String, Text, event
from sqlalchemy.orm import Mapped, Mapper, mapped_column
from sqlalchemy.sql import func

from campus_cms.infrastructure.persistence.database import Base
from campus_cms.shared.utils.datetime import utc_now


class AuditLog(Base):
    """Audit log entry. Who did what, when, to which row. No update.

    actor_id/actor_name are NULL for anonymous public submissions.
    Rows are removed only by the bulk date-range delete.
    """

    __tablename__ = "audit_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    actor_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    actor_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    action: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    target_table: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    target_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
        index=True,
    )


@event.listens_for(AuditLog, "before_update")
def _prevent_audit_log_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: AuditLog
) -> None:
    """Audit log entries are append-only; updates are forbidden."""
    raise ValueError(
        "Audit log entries are immutable and cannot be updated."
    )


@event.listens_for(AuditLog, "before_delete")
def _prevent_audit_log_row_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: AuditLog
) -> None:
    """Single entries cannot be deleted; use the date-range delete."""
    raise ValueError(
        "Audit log entries cannot be deleted individually."
    )
