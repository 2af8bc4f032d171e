"""BusinessProfile model - who runs the salon."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from salonbook.models.base import Base

# There is exactly one profile row per database.
PROFILE_ROW_ID = 1


class BusinessProfile(Base):
    """Owner and business name, used when composing reminder messages."""

    __tablename__ = "business_profile"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=PROFILE_ROW_ID)
    owner_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    business_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    def __repr__(self) -> str:
        """String representation."""
        return f"<BusinessProfile(business_name='{self.business_name}')>"
