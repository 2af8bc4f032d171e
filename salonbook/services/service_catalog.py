"""Service catalog - business logic for the services the salon offers."""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.models import Service, ServiceStatus
from salonbook.schemas.service import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)

# (name, description, icon, status)
DEFAULT_SERVICES: tuple[tuple[str, str, str, ServiceStatus], ...] = (
    ("Haircut", "Professional haircut and styling", "Scissors", ServiceStatus.ACTIVE),
    ("Shave", "Classic shave with hot towel", "Sparkles", ServiceStatus.ACTIVE),
    ("Beard Styling", "Precision beard trimming and shaping", "Star", ServiceStatus.ACTIVE),
    ("Hair Color", "Hair coloring and highlights", "Palette", ServiceStatus.ACTIVE),
    ("Massage", "Relaxing head and body massage", "Hand", ServiceStatus.ACTIVE),
    ("Facial", "Deep cleansing facial treatment", "Smile", ServiceStatus.ACTIVE),
    ("Spa", "Premium spa experience", "Droplets", ServiceStatus.ACTIVE),
    ("Makeup", "Professional makeup services", "Heart", ServiceStatus.INACTIVE),
    ("Hair Treatment", "Hair treatment and conditioning", "Zap", ServiceStatus.ACTIVE),
    ("Waxing", "Waxing and hair removal", "Star", ServiceStatus.INACTIVE),
    ("Threading", "Eyebrow and facial threading", "Eye", ServiceStatus.ACTIVE),
)


async def get_service(db: AsyncSession, service_id: str) -> Service | None:
    """Get service by ID."""
    return await db.get(Service, service_id)


async def list_services(db: AsyncSession, active_only: bool = False) -> list[Service]:
    """List services in catalog order."""
    query = select(Service)
    if active_only:
        query = query.where(Service.status == ServiceStatus.ACTIVE.value)
    result = await db.execute(query.order_by(Service.sort_order, Service.name))
    return list(result.scalars().all())


async def get_active_service_names(db: AsyncSession) -> list[str]:
    """Names offered as customer interests."""
    return [service.name for service in await list_services(db, active_only=True)]


async def add_service(db: AsyncSession, service_data: ServiceCreate) -> Service:
    """Add a service at the end of the catalog."""
    result = await db.execute(select(func.max(Service.sort_order)))
    last_position = result.scalar_one_or_none()
    service = Service(
        name=service_data.name.strip(),
        description=service_data.description,
        icon=service_data.icon,
        status=ServiceStatus.ACTIVE.value,
        sort_order=0 if last_position is None else last_position + 1,
    )
    db.add(service)
    await db.flush()
    await db.refresh(service)
    return service


async def update_service(
    db: AsyncSession, service: Service, service_data: ServiceUpdate
) -> Service:
    """Update a service."""
    update_dict = service_data.model_dump(exclude_unset=True)
    for key, value in update_dict.items():
        if isinstance(value, ServiceStatus):
            value = value.value
        setattr(service, key, value)
    await db.flush()
    await db.refresh(service)
    return service


async def toggle_service_status(db: AsyncSession, service: Service) -> Service:
    """Flip a service between active and inactive."""
    if service.status == ServiceStatus.ACTIVE.value:
        service.status = ServiceStatus.INACTIVE.value
    else:
        service.status = ServiceStatus.ACTIVE.value
    await db.flush()
    await db.refresh(service)
    return service


async def delete_service(db: AsyncSession, service: Service) -> None:
    """Remove a service from the catalog."""
    await db.delete(service)
    await db.flush()


async def reset_to_defaults(db: AsyncSession) -> list[Service]:
    """Replace the catalog with the default services."""
    await db.execute(delete(Service))
    for position, (name, description, icon, status) in enumerate(DEFAULT_SERVICES):
        db.add(
            Service(
                name=name,
                description=description,
                icon=icon,
                status=status.value,
                sort_order=position,
            )
        )
    await db.flush()
    logger.info(f"Service catalog reset to {len(DEFAULT_SERVICES)} default services")
    return await list_services(db)


async def ensure_default_services(db: AsyncSession) -> None:
    """Seed the default catalog into an empty database."""
    result = await db.execute(select(func.count()).select_from(Service))
    if result.scalar_one() == 0:
        await reset_to_defaults(db)
