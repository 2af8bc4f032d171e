"""Service model - an entry in the salon's catalog of offered services."""

from enum import Enum

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from salonbook.models.base import Base, IdMixin


class ServiceStatus(str, Enum):
    """Service status enum."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class Service(Base, IdMixin):
    """What the salon offers (e.g., 'Haircut')."""

    __tablename__ = "services"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    icon: Mapped[str] = mapped_column(String(50), nullable=False, default="Star")
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ServiceStatus.ACTIVE.value
    )
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        """String representation."""
        return f"<Service(id={self.id}, name='{self.name}', status='{self.status}')>"
