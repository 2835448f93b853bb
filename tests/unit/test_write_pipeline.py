"""WritePipeline: commit -> audit -> invalidate ordering and failure semantics."""

from typing import Any

import pytest
from sqlalchemy import func, select

from campus_cms.application.services.write_pipeline import (
    Actor,
    AuditDraft,
    Invalidation,
    WritePipeline,
)
from campus_cms.domain.enums import AuditAction
from campus_cms.domain.exceptions import ResourceNotFoundException
from campus_cms.infrastructure.persistence.models import AuditLog, OrganizationMember
from campus_cms.infrastructure.services.audit_log_writer import AuditLogWriter

ADMIN = Actor(id="7", name="Dewi Admin", ip="10.0.0.5", user_agent="pytest")


async def _count(session_factory, model) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar_one()


async def _add_member(session, files) -> int:
    member = OrganizationMember(name="Rina", position="Rector", display_order=1)
    session.add(member)
    await session.flush()
    return member.id


def _audit(member_id: int) -> AuditDraft:
    return AuditDraft(AuditAction.CREATE, "organization_members", member_id, "Added Rina")


async def test_successful_write_commits_audits_and_invalidates(
    pipeline: WritePipeline, cache, session_factory
) -> None:
    await cache.set("organization:chart", [{"id": 0}], ttl=600)
    await cache.set("news:list:abc", [], ttl=600)

    member_id = await pipeline.execute(
        _add_member,
        actor=ADMIN,
        audit=_audit,
        invalidate=lambda _: Invalidation(keys=("organization:chart",)),
    )

    assert await _count(session_factory, OrganizationMember) == 1
    assert await cache.get("organization:chart") is None
    assert await cache.get("news:list:abc") == []
    async with session_factory() as session:
        entry = (await session.execute(select(AuditLog))).scalar_one()
    assert entry.action == "create"
    assert entry.target_id == str(member_id)
    assert entry.actor_id == "7"
    assert entry.actor_name == "Dewi Admin"
    assert entry.ip_address == "10.0.0.5"


async def test_audit_failure_never_fails_the_write(
    session_factory, cache, storage
) -> None:
    """A broken audit store is logged and swallowed; the mutation stays committed."""

    def broken_factory() -> Any:
        raise RuntimeError("audit store unreachable")

    pipeline = WritePipeline(
        session_factory, cache, AuditLogWriter(broken_factory), storage  # type: ignore[arg-type]
    )
    await cache.set("organization:chart", [], ttl=600)

    member_id = await pipeline.execute(
        _add_member,
        actor=ADMIN,
        audit=_audit,
        invalidate=lambda _: Invalidation(keys=("organization:chart",)),
    )

    assert member_id > 0
    assert await _count(session_factory, OrganizationMember) == 1
    assert await _count(session_factory, AuditLog) == 0
    assert await cache.get("organization:chart") is None


async def test_missing_target_discards_uploads_and_skips_side_effects(
    pipeline: WritePipeline, cache, storage, session_factory
) -> None:
    await cache.set("scholarships:list", [], ttl=600)

    async def missing(session, files) -> None:
        return None

    with pytest.raises(ResourceNotFoundException):
        await pipeline.execute(
            missing,
            actor=ADMIN,
            audit=_audit,
            invalidate=lambda _: Invalidation(keys=("scholarships:list",)),
            uploaded=["https://files.test/scholarships/new.pdf"],
            resource="scholarship",
            resource_id=99,
        )

    assert storage.delete_requests == ["https://files.test/scholarships/new.pdf"]
    assert await _count(session_factory, AuditLog) == 0
    assert await cache.get("scholarships:list") == []


async def test_persistence_failure_propagates_after_removing_uploads(
    pipeline: WritePipeline, storage, session_factory
) -> None:
    async def failing(session, files) -> int:
        session.add(OrganizationMember(name="Rina", position="Rector"))
        await session.flush()
        raise RuntimeError("constraint violated")

    with pytest.raises(RuntimeError):
        await pipeline.execute(
            failing,
            actor=ADMIN,
            audit=_audit,
            invalidate=lambda _: Invalidation(),
            uploaded=["https://files.test/a.png"],
        )

    assert storage.delete_requests == ["https://files.test/a.png"]
    assert await _count(session_factory, OrganizationMember) == 0
    assert await _count(session_factory, AuditLog) == 0


async def test_invalidation_failure_is_swallowed(session_factory, audit_writer, storage) -> None:
    class FlakyCache:
        async def delete(self, key: str) -> bool:
            raise ConnectionError("cache down")

        async def delete_prefix(self, prefix: str) -> int:
            raise ConnectionError("cache down")

    pipeline = WritePipeline(session_factory, FlakyCache(), audit_writer, storage)  # type: ignore[arg-type]

    member_id = await pipeline.execute(
        _add_member,
        actor=ADMIN,
        audit=_audit,
        invalidate=lambda _: Invalidation(keys=("a",), prefixes=("b:",)),
    )

    assert member_id > 0
    assert await _count(session_factory, AuditLog) == 1


async def test_unaudited_write_appends_nothing(pipeline: WritePipeline, session_factory) -> None:
    await pipeline.execute(
        _add_member,
        actor=Actor.anonymous("10.0.0.9", "browser"),
        audit=None,
        invalidate=lambda _: Invalidation(),
    )
    assert await _count(session_factory, AuditLog) == 0


async def test_file_discard_failure_is_logged_not_raised(pipeline: WritePipeline, storage) -> None:
    storage.fail_deletes = True
    assert await pipeline.files.discard("https://files.test/old.pdf") is False
    assert await pipeline.files.discard(None) is False
    assert storage.delete_requests == ["https://files.test/old.pdf"]
