"""Main API router for v1 endpoints."""

from fastapi import APIRouter

from salonbook.api.v1 import customers, profile, reminders, services

router = APIRouter()

# Include all sub-routers
router.include_router(customers.router)
router.include_router(reminders.router)
router.include_router(services.router)
router.include_router(profile.router)


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "message": "SalonBook API is running"}
