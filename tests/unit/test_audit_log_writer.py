"""AuditLogWriter: best-effort append and the append-only guard."""

import pytest
from sqlalchemy import select

from campus_cms.application.dtos.audit_log import AuditLogEntryCreate
from campus_cms.infrastructure.persistence.models import AuditLog
from campus_cms.infrastructure.services.audit_log_writer import AuditLogWriter


def _entry(**overrides) -> AuditLogEntryCreate:
    values = {
        "actor_id": "7",
        "actor_name": "Dewi Admin",
        "action": "delete",
        "target_table": "news",
        "target_id": "3",
        "ip_address": "10.0.0.5",
        "user_agent": "pytest",
        "message": "Deleted news titled \"Open house\"",
    }
    values.update(overrides)
    return AuditLogEntryCreate(**values)


async def test_record_returns_stored_entry(audit_writer: AuditLogWriter) -> None:
    stored = await audit_writer.record(_entry())
    assert stored is not None
    assert stored.id > 0
    assert stored.message == 'Deleted news titled "Open house"'
    assert stored.created_at is not None


async def test_record_accepts_anonymous_actor(audit_writer: AuditLogWriter) -> None:
    stored = await audit_writer.record(_entry(actor_id=None, actor_name=None))
    assert stored is not None
    assert stored.actor_id is None
    assert stored.actor_name is None


async def test_record_swallows_store_failures() -> None:
    def broken_factory():
        raise RuntimeError("database is down")

    writer = AuditLogWriter(broken_factory)  # type: ignore[arg-type]
    assert await writer.record(_entry()) is None


async def test_entries_cannot_be_modified(audit_writer: AuditLogWriter, session_factory) -> None:
    await audit_writer.record(_entry())
    async with session_factory() as session:
        row = (await session.execute(select(AuditLog))).scalar_one()
        row.message = "rewritten"
        with pytest.raises(ValueError):
            await session.flush()
