"""Accreditation ORM model: study-program accreditation certificates."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from campus_cms.infrastructure.persistence.database import Base
from campus_cms.infrastructure.persistence.models.mixins import ResourceModel


class Accreditation(ResourceModel, Base):
    """Accreditation status and certificate for one study program."""

    __tablename__ = "accreditations"

    study_program: Mapped[str] = mapped_column(String(100), nullable=False)
    faculty: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(30), nullable=False)
    certificate_url: Mapped[str] = mapped_column(String(500), nullable=False)
    certificate_name: Mapped[str] = mapped_column(String(255), nullable=False)
