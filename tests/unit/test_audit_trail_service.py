"""AuditTrailService: shared filters, range-delete invariants, CSV export."""

import csv
import io
from datetime import UTC, date, datetime

import pytest
from sqlalchemy import func, select

from campus_cms.application.dtos.audit_log import AuditLogFilters
from campus_cms.application.services.write_pipeline import Actor
from campus_cms.application.use_cases.audit_logs import AUDIT_CSV_HEADER, AuditTrailService
from campus_cms.domain.exceptions import ResourceNotFoundException, ValidationException
from campus_cms.infrastructure.persistence.models import AuditLog

ADMIN = Actor(id="7", name="Dewi Admin", ip="10.0.0.5", user_agent="pytest")


async def _seed(session_factory) -> None:
    rows = [
        ("Dewi Admin", "create", "news", datetime(2024, 3, 1, 8, 0, tzinfo=UTC)),
        ("Dewi Admin", "delete", "news", datetime(2024, 3, 1, 17, 30, tzinfo=UTC)),
        ("Budi Editor", "update", "scholarships", datetime(2024, 3, 2, 9, 0, tzinfo=UTC)),
        (None, "create", "complaints", datetime(2024, 3, 3, 23, 59, tzinfo=UTC)),
    ]
    async with session_factory() as session:
        for name, action, table, created in rows:
            session.add(
                AuditLog(
                    actor_id="7" if name else None,
                    actor_name=name,
                    action=action,
                    target_table=table,
                    target_id="1",
                    ip_address="10.0.0.5",
                    user_agent="pytest",
                    message=f"{action} on {table}",
                    created_at=created,
                )
            )
        await session.commit()


async def _count(session_factory) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(AuditLog))).scalar_one()


async def test_page_and_total_use_the_same_filters(ctx, session_factory) -> None:
    await _seed(session_factory)
    service = AuditTrailService(ctx)

    result = await service.query(AuditLogFilters(actor_name="dewi"), page=1, limit=1)

    assert result["total"] == 2
    assert len(result["data"]) == 1
    assert result["data"][0]["action"] == "delete"


async def test_date_filters_are_inclusive_local_days(ctx, session_factory) -> None:
    """Days are cut at midnight Asia/Jakarta (UTC+7), the zone the export shows."""
    await _seed(session_factory)
    service = AuditTrailService(ctx)

    result = await service.query(
        AuditLogFilters(start_date=date(2024, 3, 2), end_date=date(2024, 3, 2)), page=1, limit=10
    )

    assert result["total"] == 2
    assert {r["action"] for r in result["data"]} == {"delete", "update"}


async def test_unknown_action_filter_is_rejected(ctx) -> None:
    with pytest.raises(ValidationException):
        await AuditTrailService(ctx).query(AuditLogFilters(action="drop"), page=1, limit=10)


async def test_delete_range_with_start_after_end_removes_nothing(ctx, session_factory) -> None:
    await _seed(session_factory)

    with pytest.raises(ValidationException):
        await AuditTrailService(ctx).delete_in_range(date(2024, 3, 3), date(2024, 3, 1), ADMIN)

    assert await _count(session_factory) == 4


async def test_delete_single_day_removes_that_day_and_appends_one_entry(
    ctx, session_factory
) -> None:
    await _seed(session_factory)

    deleted = await AuditTrailService(ctx).delete_in_range(
        date(2024, 3, 2), date(2024, 3, 2), ADMIN
    )

    assert deleted == 2
    async with session_factory() as session:
        rows = (await session.execute(select(AuditLog).order_by(AuditLog.id))).scalars().all()
    assert len(rows) == 3
    assert [(r.action, r.target_table) for r in rows[:2]] == [
        ("create", "news"),
        ("create", "complaints"),
    ]
    summary = rows[-1]
    assert summary.target_table == "audit_logs"
    assert summary.action == "delete"
    assert summary.actor_name == "Dewi Admin"
    assert "Deleted 2 audit log entries" in summary.message


async def test_delete_range_with_no_matches_is_not_found(ctx, session_factory) -> None:
    await _seed(session_factory)

    with pytest.raises(ResourceNotFoundException):
        await AuditTrailService(ctx).delete_in_range(date(2023, 1, 1), date(2023, 1, 31), ADMIN)

    assert await _count(session_factory) == 4


async def test_csv_export_has_fixed_header_and_local_times(ctx, session_factory) -> None:
    await _seed(session_factory)
    service = AuditTrailService(ctx)

    text = "".join([chunk async for chunk in service.export_csv()])
    rows = list(csv.reader(io.StringIO(text)))

    assert tuple(rows[0]) == AUDIT_CSV_HEADER
    assert len(rows) == 5
    # newest first; anonymous actor exported as empty name
    assert rows[1][0] == ""
    assert rows[1][2] == "complaints"
    # 2024-03-01 17:30 UTC is 2024-03-02 00:30 in Asia/Jakarta (UTC+7)
    delete_row = next(r for r in rows[1:] if r[1] == "delete")
    assert delete_row[7] == "2024-03-02 00:30:00"


async def test_csv_export_of_empty_trail_is_header_only(ctx) -> None:
    text = "".join([chunk async for chunk in AuditTrailService(ctx).export_csv()])
    assert text.strip() == ",".join(AUDIT_CSV_HEADER)


async def test_delete_matches_the_date_shown_in_the_export(ctx, session_factory) -> None:
    """An entry exported as 2024-03-02 03:00 is removed by a 2024-03-02 purge."""
    async with session_factory() as session:
        session.add(
            AuditLog(
                actor_id="7",
                actor_name="Dewi Admin",
                action="update",
                target_table="news",
                target_id="3",
                message="late edit",
                created_at=datetime(2024, 3, 1, 20, 0, tzinfo=UTC),
            )
        )
        await session.commit()
    service = AuditTrailService(ctx)

    text = "".join([chunk async for chunk in service.export_csv()])
    assert list(csv.reader(io.StringIO(text)))[1][7] == "2024-03-02 03:00:00"

    assert await service.delete_in_range(date(2024, 3, 2), date(2024, 3, 2), ADMIN) == 1
    async with session_factory() as session:
        remaining = (await session.execute(select(AuditLog))).scalars().all()
    assert all(r.message != "late edit" for r in remaining)
