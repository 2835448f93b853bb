"""Visitor ORM model: one row per client (ip + user agent) per day."""

from datetime import date

from sqlalchemy import Date, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from campus_cms.infrastructure.persistence.database import Base
from campus_cms.infrastructure.persistence.models.mixins import CreatedAtMixin, IntIdMixin


class Visitor(IntIdMixin, CreatedAtMixin, Base):
    """Daily unique visit."""

    __tablename__ = "visitors"
    __table_args__ = (
        UniqueConstraint(
            "ip_address", "user_agent", "visited_on", name="uq_visitors_client_day"
        ),
    )

    ip_address: Mapped[str] = mapped_column(String(64), nullable=False)
    user_agent: Mapped[str] = mapped_column(Text, nullable=False, default="")
    visited_on: Mapped[date] = mapped_column(Date, nullable=False, index=True)
