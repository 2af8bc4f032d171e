"""Pydantic schemas for SalonBook."""

from salonbook.schemas.business_profile import BusinessProfileResponse, BusinessProfileUpdate
from salonbook.schemas.commands import (
    ChangeMobileNumber,
    CustomerCommand,
    CustomerUpdate,
    RecordReminderSent,
    RenameCustomer,
    RescheduleVisit,
    SetInterest,
    SetPreferences,
    SetReminderInterval,
)
from salonbook.schemas.customer import (
    Customer,
    CustomerCreate,
    CustomerGroup,
    CustomerListingResponse,
    ReminderHistoryEntry,
    ReminderInterval,
)
from salonbook.schemas.reminder import (
    CATEGORY_ALL,
    ReminderCategory,
    ReminderDispatchRequest,
    ReminderDispatchResponse,
    ReminderHistoryItem,
    ReminderInfoResponse,
    ScheduleStatus,
)
from salonbook.schemas.service import ServiceCreate, ServiceResponse, ServiceUpdate

__all__ = [
    # Customer
    "Customer",
    "CustomerCreate",
    "CustomerUpdate",
    "CustomerGroup",
    "CustomerListingResponse",
    "ReminderHistoryEntry",
    "ReminderInterval",
    # Commands
    "CustomerCommand",
    "RenameCustomer",
    "ChangeMobileNumber",
    "SetInterest",
    "SetPreferences",
    "RescheduleVisit",
    "SetReminderInterval",
    "RecordReminderSent",
    # Reminders
    "CATEGORY_ALL",
    "ReminderCategory",
    "ScheduleStatus",
    "ReminderInfoResponse",
    "ReminderDispatchRequest",
    "ReminderDispatchResponse",
    "ReminderHistoryItem",
    # Service
    "ServiceCreate",
    "ServiceUpdate",
    "ServiceResponse",
    # Profile
    "BusinessProfileUpdate",
    "BusinessProfileResponse",
]
