"""Reminder classification enums and reminder-related API schemas."""

from enum import Enum

from pydantic import BaseModel, Field


class ReminderCategory(str, Enum):
    """How long ago (or whether) a customer's last reminder went out.

    Declared in priority order: classification takes the first match.
    """

    YET_TO_SEND = "yet-to-send"
    SENT_TODAY = "sent-today"
    THREE_DAYS = "3-days"
    SEVEN_DAYS = "7-days"
    TWO_WEEKS = "2-weeks"
    FOUR_WEEKS = "4-weeks"


# Selector accepted by the category filter in addition to the six categories.
CATEGORY_ALL = "all"


class ScheduleStatus(str, Enum):
    """Whether a customer's next reminder is due, sent, overdue or upcoming."""

    NONE = "none"
    PENDING = "pending"
    SENT_TODAY = "sent-today"
    OVERDUE = "overdue"
    UPCOMING = "upcoming"


class ReminderInfoResponse(BaseModel):
    """Both reminder views for a single customer."""

    customer_id: str
    category: ReminderCategory | None = Field(
        None, description="History-based category (None for day 1 or older than 35 days)"
    )
    schedule_status: ScheduleStatus
    status_label: str
    can_send_today: bool
    sent_count: int
    last_sent_at: str | None = None


class ReminderDispatchRequest(BaseModel):
    """Optional overrides when sending a reminder."""

    offer_text: str | None = Field(None, max_length=500, description="Offer line appended to the message")


class ReminderDispatchResponse(BaseModel):
    """Result of sending a reminder."""

    customer_id: str
    message: str
    whatsapp_link: str
    delivered_via: str = Field(..., description="'twilio', 'mock' or 'link'")
    provider_message_id: str | None = None
    sent_at: str
    recorded: bool = Field(True, description="Logged in the customer's reminder history")


class ReminderHistoryItem(BaseModel):
    """One entry of the reminder history feed."""

    customer_id: str
    full_name: str
    mobile_number: str
    sent_at: str
    message: str
