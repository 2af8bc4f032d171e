"""SQLAlchemy models for SalonBook."""

from salonbook.models.base import Base, IdMixin, generate_id
from salonbook.models.business_profile import PROFILE_ROW_ID, BusinessProfile
from salonbook.models.customer import CustomerRecord
from salonbook.models.service import Service, ServiceStatus

__all__ = [
    # Base
    "Base",
    "IdMixin",
    "generate_id",
    # Models
    "CustomerRecord",
    "Service",
    "BusinessProfile",
    "PROFILE_ROW_ID",
    # Enums
    "ServiceStatus",
]
