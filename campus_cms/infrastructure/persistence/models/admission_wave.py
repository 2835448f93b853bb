"""Admission wave ORM model: student intake periods and fees."""

from datetime import date

from sqlalchemy import BigInteger, Date, String
from sqlalchemy.orm import Mapped, mapped_column

from campus_cms.infrastructure.persistence.database import Base
from campus_cms.infrastructure.persistence.models.mixins import ResourceModel


class AdmissionWave(ResourceModel, Base):
    """Admission wave: registration window and fee (whole currency units)."""

    __tablename__ = "admission_waves"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    starts_on: Mapped[date] = mapped_column(Date, nullable=False)
    ends_on: Mapped[date] = mapped_column(Date, nullable=False)
    registration_fee: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
