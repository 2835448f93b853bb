"""Hero slide ORM model: homepage banner images."""

from sqlalchemy import Boolean, String, true
from sqlalchemy.orm import Mapped, mapped_column

from campus_cms.infrastructure.persistence.database import Base
from campus_cms.infrastructure.persistence.models.mixins import ResourceModel


class HeroSlide(ResourceModel, Base):
    """Banner image with a caption; only active slides show on the homepage."""

    __tablename__ = "hero_slides"

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    image_url: Mapped[str] = mapped_column(String(500), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true(), index=True
    )
