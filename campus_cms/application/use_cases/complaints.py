"""Complaint use cases: anonymous CAPTCHA-checked submission, admin triage.

Submissions are audited without an actor (actor_id/actor_name NULL);
the request provenance (ip, user agent) is still recorded.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from campus_cms.application.dtos.resources import ComplaintResult
from campus_cms.application.dtos.serialization import to_payload, to_payloads
from campus_cms.application.interfaces.services import ICaptchaVerifier
from campus_cms.application.services.write_pipeline import (
    Actor,
    AuditDraft,
    FileJanitor,
    Invalidation,
)
from campus_cms.application.use_cases.common import (
    ServiceContext,
    page_offset,
    paginated,
    store_uploads,
)
from campus_cms.core.constants import STORAGE_FOLDER_COMPLAINTS, TABLE_COMPLAINTS
from campus_cms.domain.enums import AuditAction, ComplaintStatus
from campus_cms.domain.exceptions import ValidationException
from campus_cms.infrastructure.cache import keys
from campus_cms.infrastructure.cache.read_through import cache_aside
from campus_cms.infrastructure.external.storage.uploads import FileKind, IncomingFile
from campus_cms.infrastructure.persistence.models.complaint import Complaint
from campus_cms.infrastructure.persistence.repositories.resource_repos import (
    ComplaintRepository,
    to_complaint_result,
)
from campus_cms.shared.utils.sanitization import sanitize_input

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
BODY_MAX_LENGTH = 1000

_INVALIDATE = Invalidation(prefixes=(keys.COMPLAINTS_LIST_PREFIX,))


@dataclass(frozen=True)
class ComplaintSubmission:
    category: str
    body: str
    reporter_name: str | None = None
    reporter_email: str | None = None
    captcha_token: str | None = None


def _clean(data: ComplaintSubmission) -> ComplaintSubmission:
    category = sanitize_input(data.category) or ""
    body = sanitize_input(data.body) or ""
    if not category:
        raise ValidationException("Category is required", "category")
    if not body:
        raise ValidationException("Complaint body is required", "body")
    if len(body) > BODY_MAX_LENGTH:
        raise ValidationException(
            f"Complaint body must be at most {BODY_MAX_LENGTH} characters", "body"
        )
    email = sanitize_input(data.reporter_email) or None
    if email is not None and not _EMAIL.match(email):
        raise ValidationException("Invalid email address", "reporter_email")
    return ComplaintSubmission(
        category=category,
        body=body,
        reporter_name=sanitize_input(data.reporter_name) or None,
        reporter_email=email,
    )


def _validate_status(status: str) -> str:
    status = status.strip().lower()
    if status not in ComplaintStatus.values():
        raise ValidationException(
            f"Status must be one of: {', '.join(ComplaintStatus.values())}", "status"
        )
    return status


class ComplaintService:
    """Complaint submission and admin handling."""

    def __init__(self, ctx: ServiceContext, captcha: ICaptchaVerifier) -> None:
        self.ctx = ctx
        self.captcha = captcha

    async def submit(
        self,
        data: ComplaintSubmission,
        actor: Actor,
        evidence: IncomingFile | None = None,
    ) -> dict[str, Any]:
        """Verify CAPTCHA, store optional evidence image, persist and audit anonymously."""
        await self.captcha.verify(data.captcha_token, actor.ip)
        cleaned = _clean(data)
        evidence_url = None
        if evidence is not None:
            stored = await store_uploads(
                self.ctx,
                [(evidence, FileKind.IMAGE, STORAGE_FOLDER_COMPLAINTS, "evidence")],
            )
            evidence_url = stored[0].url

        async def mutation(session: AsyncSession, files: FileJanitor) -> ComplaintResult:
            row = await ComplaintRepository(session).add(
                Complaint(
                    reporter_name=cleaned.reporter_name,
                    reporter_email=cleaned.reporter_email,
                    category=cleaned.category,
                    body=cleaned.body,
                    evidence_url=evidence_url,
                    status=ComplaintStatus.OPEN.value,
                )
            )
            return to_complaint_result(row)

        result = await self.ctx.pipeline.execute(
            mutation,
            actor=Actor.anonymous(actor.ip, actor.user_agent),
            audit=lambda r: AuditDraft(
                AuditAction.CREATE,
                TABLE_COMPLAINTS,
                r.id,
                f'Anonymous complaint submitted in category "{r.category}"',
            ),
            invalidate=lambda r: _INVALIDATE,
            uploaded=[evidence_url] if evidence_url else [],
        )
        return {"id": result.id}

    async def list(self, page: int, limit: int, status: str | None = None) -> dict[str, Any]:
        status = _validate_status(status) if status else None

        async def load() -> dict[str, Any]:
            async with self.ctx.session_factory() as session:
                repo = ComplaintRepository(session)
                rows = await repo.list_page(
                    status, skip=page_offset(page, limit), limit=limit
                )
                total = await repo.count(status)
            return paginated(to_payloads(rows), page, limit, total)

        return await cache_aside(
            self.ctx.cache,
            keys.complaints_list_key(page, limit, status),
            load,
            self.ctx.settings.cache_ttl_complaints,
        )

    async def set_status(self, complaint_id: int, status: str, actor: Actor) -> dict[str, Any]:
        status = _validate_status(status)

        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> tuple[str, ComplaintResult] | None:
            repo = ComplaintRepository(session)
            row = await repo.get_by_id(complaint_id)
            if row is None:
                return None
            previous = row.status
            row.status = status
            row = await repo.save(row)
            return previous, to_complaint_result(row)

        _, result = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda c: AuditDraft(
                AuditAction.UPDATE,
                TABLE_COMPLAINTS,
                c[1].id,
                f'Changed complaint status from "{c[0]}" to "{c[1].status}"',
            ),
            invalidate=lambda c: _INVALIDATE,
            resource="complaint",
            resource_id=complaint_id,
        )
        return to_payload(result)

    async def delete(self, complaint_id: int, actor: Actor) -> None:
        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> ComplaintResult | None:
            repo = ComplaintRepository(session)
            row = await repo.get_by_id(complaint_id)
            if row is None:
                return None
            result = to_complaint_result(row)
            await files.discard(row.evidence_url)
            await repo.delete(row)
            return result

        await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.DELETE,
                TABLE_COMPLAINTS,
                r.id,
                f'Deleted complaint in category "{r.category}"',
            ),
            invalidate=lambda r: _INVALIDATE,
            resource="complaint",
            resource_id=complaint_id,
        )
