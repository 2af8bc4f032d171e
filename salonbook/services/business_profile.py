"""Business profile service."""

from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.models import PROFILE_ROW_ID, BusinessProfile
from salonbook.schemas.business_profile import BusinessProfileUpdate


async def get_profile(db: AsyncSession) -> BusinessProfile:
    """Get the business profile, creating an empty one on first use."""
    profile = await db.get(BusinessProfile, PROFILE_ROW_ID)
    if profile is None:
        profile = BusinessProfile(id=PROFILE_ROW_ID, owner_name="", business_name="")
        db.add(profile)
        await db.flush()
    return profile


async def update_profile(db: AsyncSession, profile_data: BusinessProfileUpdate) -> BusinessProfile:
    """Update the business profile."""
    profile = await get_profile(db)
    update_dict = profile_data.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in update_dict.items():
        setattr(profile, key, value.strip())
    await db.flush()
    await db.refresh(profile)
    return profile
