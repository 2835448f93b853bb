"""Scholarship ORM model: scholarship announcements with a document."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_cms.infrastructure.persistence.database import Base
from campus_cms.infrastructure.persistence.models.mixins import ResourceModel


class Scholarship(ResourceModel, Base):
    """Scholarship with description and downloadable document."""

    __tablename__ = "scholarships"

    title: Mapped[str] = mapped_column(String(155), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    document_url: Mapped[str] = mapped_column(String(500), nullable=False)
