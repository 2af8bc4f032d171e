"""Customer API endpoints."""

import logging
from datetime import datetime
from typing import Annotated

import httpx
from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from salonbook.api.deps import AsyncSession, get_customer_book, get_db, get_now, get_whatsapp_client
from salonbook.config import get_settings
from salonbook.schemas.commands import CustomerUpdate
from salonbook.schemas.customer import (
    Customer,
    CustomerCreate,
    CustomerGroup,
    CustomerListingResponse,
)
from salonbook.schemas.reminder import (
    CATEGORY_ALL,
    ReminderCategory,
    ReminderDispatchRequest,
    ReminderDispatchResponse,
    ReminderInfoResponse,
)
from salonbook.services import business_profile as profile_service
from salonbook.services.customer_book import CustomerBook, CustomerNotFoundError
from salonbook.services.customer_commands import CommandRejectedError
from salonbook.services.customer_listing import CustomerSortKey, build_customer_listing
from salonbook.services.reminder_category import (
    classify_reminder_category,
    count_by_category,
    last_sent_at,
)
from salonbook.services.reminder_dispatch import ReminderNotAllowedError, send_reminder
from salonbook.services.reminder_schedule import (
    can_send_reminder_today,
    compute_schedule_status,
    reminder_status_label,
)
from salonbook.services.whatsapp import WhatsAppClient, WhatsAppNotConfiguredError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["customers"])

_CATEGORY_SELECTORS = {CATEGORY_ALL, *(c.value for c in ReminderCategory)}


def _not_found(customer_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Customer {customer_id} not found",
    )


@router.get(
    "",
    response_model=CustomerListingResponse,
    summary="List customers",
)
async def list_customers(
    book: Annotated[CustomerBook, Depends(get_customer_book)],
    now: Annotated[datetime, Depends(get_now)],
    q: Annotated[str, Query(description="Search by name or phone")] = "",
    category: Annotated[str, Query(description="Reminder category or 'all'")] = CATEGORY_ALL,
    sort_by: Annotated[CustomerSortKey, Query()] = CustomerSortKey.CUSTOMER_ID,
) -> CustomerListingResponse:
    """Search, filter by reminder category, sort and group by visit date."""
    if category not in _CATEGORY_SELECTORS:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown category '{category}'",
        )

    customers = await book.list_customers()
    groups = build_customer_listing(customers, now, query=q, category=category, sort_by=sort_by)
    return CustomerListingResponse(
        total=len(customers),
        matched=sum(len(members) for _, members in groups),
        groups=[CustomerGroup(label=label, customers=members) for label, members in groups],
    )


@router.get(
    "/counts",
    response_model=dict[str, int],
    summary="Count customers per reminder category",
)
async def get_category_counts(
    book: Annotated[CustomerBook, Depends(get_customer_book)],
    now: Annotated[datetime, Depends(get_now)],
) -> dict[str, int]:
    """Customers per category; customers outside every category aren't counted."""
    counts = count_by_category(await book.list_customers(), now)
    return {category.value: count for category, count in counts.items()}


@router.post(
    "",
    response_model=Customer,
    status_code=status.HTTP_201_CREATED,
    summary="Add a customer",
)
async def create_customer(
    customer_data: CustomerCreate,
    book: Annotated[CustomerBook, Depends(get_customer_book)],
    db: Annotated[AsyncSession, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
) -> Customer:
    """Add a new customer to the book."""
    customer = await book.add_customer(customer_data, now)
    await db.commit()
    return customer


@router.get(
    "/{customer_id}",
    response_model=Customer,
    summary="Get customer by ID",
)
async def get_customer(
    customer_id: str,
    book: Annotated[CustomerBook, Depends(get_customer_book)],
) -> Customer:
    """Get customer details."""
    customer = await book.get_customer(customer_id)
    if not customer:
        raise _not_found(customer_id)
    return customer


@router.patch(
    "/{customer_id}",
    response_model=Customer,
    summary="Update customer",
)
async def update_customer(
    customer_id: str,
    customer_data: CustomerUpdate,
    book: Annotated[CustomerBook, Depends(get_customer_book)],
    db: Annotated[AsyncSession, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
) -> Customer:
    """Apply update commands in order."""
    try:
        customer = await book.update_customer(customer_id, customer_data.commands, now)
    except CustomerNotFoundError:
        raise _not_found(customer_id)
    except CommandRejectedError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    await db.commit()
    return customer


@router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete customer",
)
async def delete_customer(
    customer_id: str,
    book: Annotated[CustomerBook, Depends(get_customer_book)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """Remove a customer from the book."""
    if not await book.delete_customer(customer_id):
        raise _not_found(customer_id)
    await db.commit()


@router.get(
    "/{customer_id}/reminder",
    response_model=ReminderInfoResponse,
    summary="Get reminder state",
)
async def get_reminder_info(
    customer_id: str,
    book: Annotated[CustomerBook, Depends(get_customer_book)],
    now: Annotated[datetime, Depends(get_now)],
) -> ReminderInfoResponse:
    """Category, schedule status and whether a reminder can go out today."""
    customer = await book.get_customer(customer_id)
    if not customer:
        raise _not_found(customer_id)

    last = last_sent_at(customer, now)
    return ReminderInfoResponse(
        customer_id=customer.id,
        category=classify_reminder_category(customer, now),
        schedule_status=compute_schedule_status(customer, now),
        status_label=reminder_status_label(customer, now),
        can_send_today=can_send_reminder_today(customer, now),
        sent_count=len(customer.reminder_history),
        last_sent_at=last.isoformat() if last else None,
    )


@router.post(
    "/{customer_id}/reminder",
    response_model=ReminderDispatchResponse,
    summary="Send a WhatsApp reminder",
)
async def send_customer_reminder(
    customer_id: str,
    book: Annotated[CustomerBook, Depends(get_customer_book)],
    db: Annotated[AsyncSession, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
    whatsapp: Annotated[WhatsAppClient | None, Depends(get_whatsapp_client)],
    request: Annotated[ReminderDispatchRequest | None, Body()] = None,
) -> ReminderDispatchResponse:
    """Send a reminder and log it in the customer's history."""
    profile = await profile_service.get_profile(db)
    offer_text = (request.offer_text if request else None) or get_settings().reminder_offer_text

    try:
        result = await send_reminder(
            book,
            customer_id,
            business_name=profile.business_name,
            now=now,
            whatsapp=whatsapp,
            offer_text=offer_text or None,
        )
    except CustomerNotFoundError:
        raise _not_found(customer_id)
    except ReminderNotAllowedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except WhatsAppNotConfiguredError as e:
        logger.error(f"WhatsApp delivery not configured: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="WhatsApp delivery is not configured",
        )
    except httpx.HTTPError as e:
        logger.error(f"WhatsApp delivery failed for customer {customer_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="WhatsApp delivery failed",
        )

    await db.commit()
    return result
