"""Reminder dispatch - compose, deliver and log a customer's visit reminder."""

import logging
from collections.abc import Sequence
from datetime import datetime

from salonbook.schemas.customer import Customer
from salonbook.schemas.reminder import ReminderDispatchResponse
from salonbook.services.customer_book import CustomerBook
from salonbook.services.reminder_schedule import (
    can_send_reminder_today,
    is_valid_phone_number,
    sort_by_reminder_priority,
    was_reminder_sent_today,
)
from salonbook.services.whatsapp import (
    WhatsAppClient,
    build_whatsapp_link,
    format_phone_for_whatsapp,
    generate_reminder_message,
)

logger = logging.getLogger(__name__)


class ReminderNotAllowedError(ValueError):
    """The customer can't receive a reminder right now."""


def check_reminder_allowed(customer: Customer, now: datetime) -> None:
    """Raise ReminderNotAllowedError unless a reminder may go out now."""
    if not is_valid_phone_number(customer.mobile_number):
        raise ReminderNotAllowedError(
            f"Customer {customer.id} has no valid 10-digit mobile number"
        )
    if was_reminder_sent_today(customer, now):
        raise ReminderNotAllowedError(f"Reminder already sent today to customer {customer.id}")


async def send_reminder(
    book: CustomerBook,
    customer_id: str,
    business_name: str,
    now: datetime,
    whatsapp: WhatsAppClient | None = None,
    offer_text: str | None = None,
) -> ReminderDispatchResponse:
    """Send a visit reminder and record it in the customer's history.

    Without a WhatsApp client the reminder is handed back as a wa.me link
    for the salon to open, and is recorded as sent. A mock client is a dry
    run: nothing is delivered, so nothing is recorded. A failed Twilio call
    propagates and nothing is recorded.

    Raises:
        CustomerNotFoundError: if the customer doesn't exist
        ReminderNotAllowedError: invalid number, or already sent today
        WhatsAppNotConfiguredError: if the client lacks Twilio settings
        httpx.HTTPError: if Twilio rejects the message
    """
    customer = await book.require_customer(customer_id)
    check_reminder_allowed(customer, now)

    message = generate_reminder_message(customer, business_name, now, offer_text=offer_text)
    link = build_whatsapp_link(customer.mobile_number, message)

    delivered_via = "link"
    provider_message_id = None
    if whatsapp is not None:
        result = await whatsapp.send_text_message(
            to=format_phone_for_whatsapp(customer.mobile_number),
            message=message,
        )
        delivered_via = "mock" if whatsapp.mock_mode else "twilio"
        provider_message_id = result.get("sid")

    recorded = delivered_via != "mock"
    if recorded:
        await book.record_reminder_sent(customer.id, message, now)
        logger.info(f"Reminder for customer {customer.id} delivered via {delivered_via}")
    else:
        logger.info(f"Dry run reminder for customer {customer.id}; not recorded")

    return ReminderDispatchResponse(
        customer_id=customer.id,
        message=message,
        whatsapp_link=link,
        delivered_via=delivered_via,
        provider_message_id=provider_message_id,
        sent_at=now.isoformat(),
        recorded=recorded,
    )


def select_due_customers(customers: Sequence[Customer], now: datetime) -> list[Customer]:
    """Customers a reminder can go out to today, most urgent first."""
    return [
        customer
        for customer in sort_by_reminder_priority(customers, now)
        if can_send_reminder_today(customer, now)
    ]
