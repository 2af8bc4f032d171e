"""Business profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.api.deps import get_db
from salonbook.models import BusinessProfile
from salonbook.schemas.business_profile import BusinessProfileResponse, BusinessProfileUpdate
from salonbook.services import business_profile as profile_service

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "",
    response_model=BusinessProfileResponse,
    summary="Get business profile",
)
async def get_profile(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BusinessProfile:
    """Owner and business name."""
    profile = await profile_service.get_profile(db)
    await db.commit()
    return profile


@router.patch(
    "",
    response_model=BusinessProfileResponse,
    summary="Update business profile",
)
async def update_profile(
    profile_data: BusinessProfileUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BusinessProfile:
    """Update owner or business name."""
    profile = await profile_service.update_profile(db, profile_data)
    await db.commit()
    return profile
