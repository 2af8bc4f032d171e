"""Reminder history API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from salonbook.api.deps import get_customer_book
from salonbook.schemas.reminder import ReminderHistoryItem
from salonbook.services.customer_book import CustomerBook, CustomerNotFoundError

router = APIRouter(prefix="/reminders", tags=["reminders"])


@router.get(
    "/history",
    response_model=list[ReminderHistoryItem],
    summary="Reminder history",
)
async def get_reminder_history(
    book: Annotated[CustomerBook, Depends(get_customer_book)],
    customer_id: Annotated[str | None, Query(description="Only this customer's reminders")] = None,
    limit: Annotated[int | None, Query(ge=1, le=500)] = None,
) -> list[ReminderHistoryItem]:
    """Sent reminders, newest first."""
    try:
        return await book.reminder_history(customer_id=customer_id, limit=limit)
    except CustomerNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Customer {customer_id} not found",
        )
