"""HR document ORM model: staff regulations and forms published as PDFs."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from campus_cms.infrastructure.persistence.database import Base
from campus_cms.infrastructure.persistence.models.mixins import ResourceModel


class HrDocument(ResourceModel, Base):
    __tablename__ = "hr_documents"

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    document_url: Mapped[str] = mapped_column(String(500), nullable=False)
