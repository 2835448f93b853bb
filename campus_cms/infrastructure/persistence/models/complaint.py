"""Complaint ORM model: anonymous public complaints with optional evidence."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_cms.domain.enums import ComplaintStatus
from campus_cms.infrastructure.persistence.database import Base
from campus_cms.infrastructure.persistence.models.mixins import ResourceModel


class Complaint(ResourceModel, Base):
    """Public complaint. Reporter name/email are optional."""

    __tablename__ = "complaints"

    reporter_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    reporter_email: Mapped[str | None] = mapped_column(String(100), nullable=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    evidence_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ComplaintStatus.OPEN.value, index=True
    )
