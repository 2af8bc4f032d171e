"""Customer schemas - the in-memory customer record and API payloads."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from salonbook.services.calendar import parse_timestamp


class ReminderInterval(str, Enum):
    """Offset from the visit date used to schedule the next reminder."""

    TODAY = "today"
    ONE_WEEK = "1week"
    TWO_WEEKS = "2weeks"
    THREE_WEEKS = "3weeks"
    FOUR_WEEKS = "4weeks"
    NONE = "none"

    @property
    def days(self) -> int | None:
        """Days after the visit, or None when no reminder is scheduled."""
        return REMINDER_INTERVAL_DAYS.get(self)


REMINDER_INTERVAL_DAYS: dict[ReminderInterval, int] = {
    ReminderInterval.TODAY: 0,
    ReminderInterval.ONE_WEEK: 7,
    ReminderInterval.TWO_WEEKS: 14,
    ReminderInterval.THREE_WEEKS: 21,
    ReminderInterval.FOUR_WEEKS: 28,
}


def _unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


class ReminderHistoryEntry(BaseModel):
    """A reminder that was dispatched to the customer."""

    model_config = ConfigDict(from_attributes=True)

    sent_at: str
    message: str = ""


class Customer(BaseModel):
    """A customer as the reminder and listing logic sees it.

    Date fields are plain strings: records written by older clients may
    carry malformed values, and every consumer degrades instead of failing.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    customer_id: int = 0
    full_name: str = ""
    mobile_number: str = ""
    interest: list[str] = Field(default_factory=list)
    preferences: str = ""
    visiting_date: str = ""
    created_at: str = ""
    updated_at: str = ""
    reminder_interval: ReminderInterval = ReminderInterval.NONE
    reminder_date: str | None = None
    reminder_sent_dates: list[str] = Field(default_factory=list)
    reminder_history: list[ReminderHistoryEntry] = Field(default_factory=list)

    @field_validator("interest", "reminder_sent_dates")
    @classmethod
    def collapse_duplicates(cls, value: list[str]) -> list[str]:
        return _unique(value)

    @field_validator("reminder_interval", mode="before")
    @classmethod
    def default_interval(cls, value: object) -> object:
        # Rows saved before intervals existed have NULL or empty values
        return value or ReminderInterval.NONE

    @property
    def last_reminder(self) -> ReminderHistoryEntry | None:
        """Most recent history entry."""
        return self.reminder_history[-1] if self.reminder_history else None


class CustomerCreate(BaseModel):
    """Schema for adding a customer to the book."""

    full_name: str = Field(..., min_length=1, max_length=255)
    mobile_number: str = Field(..., min_length=1, max_length=50)
    interest: list[str] = Field(default_factory=list, description="Selected service names")
    preferences: str = Field("", description="Free-text note")
    visiting_date: str = Field("", description="ISO date of the visit")
    reminder_interval: ReminderInterval = ReminderInterval.NONE

    @field_validator("full_name", "mobile_number")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("visiting_date")
    @classmethod
    def valid_visit_date(cls, value: str) -> str:
        value = value.strip()
        if value and parse_timestamp(value) is None:
            raise ValueError(f"invalid visiting_date: {value!r}")
        return value

    @field_validator("interest")
    @classmethod
    def collapse_duplicates(cls, value: list[str]) -> list[str]:
        return _unique(value)


class CustomerGroup(BaseModel):
    """A display group of the customer listing."""

    label: str
    customers: list[Customer]


class CustomerListingResponse(BaseModel):
    """Filtered, sorted and grouped customer listing."""

    total: int = Field(..., description="Customers in the book")
    matched: int = Field(..., description="Customers left after search and category filter")
    groups: list[CustomerGroup]
