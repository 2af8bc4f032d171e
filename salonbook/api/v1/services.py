"""Service catalog API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.api.deps import get_db
from salonbook.models import Service
from salonbook.schemas.service import ServiceCreate, ServiceResponse, ServiceUpdate
from salonbook.services import service_catalog as catalog_service

router = APIRouter(prefix="/services", tags=["services"])


async def _get_service_or_404(db: AsyncSession, service_id: str) -> Service:
    service = await catalog_service.get_service(db, service_id)
    if not service:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Service {service_id} not found",
        )
    return service


@router.get(
    "",
    response_model=list[ServiceResponse],
    summary="List services",
)
async def list_services(
    db: Annotated[AsyncSession, Depends(get_db)],
    active_only: Annotated[bool, Query(description="Only return active services")] = False,
) -> list[Service]:
    """List the catalog in display order."""
    return await catalog_service.list_services(db, active_only=active_only)


@router.get(
    "/names",
    response_model=list[str],
    summary="Active service names",
)
async def list_service_names(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[str]:
    """Names of active services, offered as customer interests."""
    return await catalog_service.get_active_service_names(db)


@router.post(
    "",
    response_model=ServiceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a service",
)
async def create_service(
    service_data: ServiceCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Service:
    """Add a service to the end of the catalog."""
    service = await catalog_service.add_service(db, service_data)
    await db.commit()
    return service


@router.post(
    "/reset",
    response_model=list[ServiceResponse],
    summary="Restore default services",
)
async def reset_services(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[Service]:
    """Replace the catalog with the defaults."""
    services = await catalog_service.reset_to_defaults(db)
    await db.commit()
    return services


@router.patch(
    "/{service_id}",
    response_model=ServiceResponse,
    summary="Update service",
)
async def update_service(
    service_id: str,
    service_data: ServiceUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Service:
    """Update a service."""
    service = await _get_service_or_404(db, service_id)
    service = await catalog_service.update_service(db, service, service_data)
    await db.commit()
    return service


@router.post(
    "/{service_id}/toggle",
    response_model=ServiceResponse,
    summary="Toggle service status",
)
async def toggle_service(
    service_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Service:
    """Flip a service between active and inactive."""
    service = await _get_service_or_404(db, service_id)
    service = await catalog_service.toggle_service_status(db, service)
    await db.commit()
    return service


@router.delete(
    "/{service_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete service",
)
async def delete_service(
    service_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """Remove a service from the catalog."""
    service = await _get_service_or_404(db, service_id)
    await catalog_service.delete_service(db, service)
    await db.commit()
