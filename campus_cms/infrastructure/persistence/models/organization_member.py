"""Organization member ORM model: entries of the organization chart."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from campus_cms.infrastructure.persistence.database import Base
from campus_cms.infrastructure.persistence.models.mixins import ResourceModel


class OrganizationMember(ResourceModel, Base):
    """One position on the organization chart (ordered by display_order, unset last)."""

    __tablename__ = "organization_members"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    position: Mapped[str] = mapped_column(String(100), nullable=False)
    display_order: Mapped[int | None] = mapped_column(Integer, nullable=True)
