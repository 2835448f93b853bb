"""Academic calendar ORM model: one PDF per academic year and semester."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from campus_cms.infrastructure.persistence.database import Base
from campus_cms.infrastructure.persistence.models.mixins import ResourceModel


class AcademicCalendar(ResourceModel, Base):
    """Academic calendar document (e.g. 2024/2025, odd semester)."""

    __tablename__ = "academic_calendars"

    academic_year: Mapped[str] = mapped_column(String(9), nullable=False)
    semester: Mapped[str] = mapped_column(String(10), nullable=False)
    pdf_url: Mapped[str] = mapped_column(String(500), nullable=False)
