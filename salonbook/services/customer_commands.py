"""Apply typed update commands to customers."""

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from salonbook.schemas.commands import (
    ChangeMobileNumber,
    CustomerCommand,
    RecordReminderSent,
    RenameCustomer,
    RescheduleVisit,
    SetInterest,
    SetPreferences,
    SetReminderInterval,
)
from salonbook.schemas.customer import Customer, ReminderHistoryEntry
from salonbook.services.calendar import local_day, parse_timestamp
from salonbook.services.reminder_schedule import compute_reminder_date

logger = logging.getLogger(__name__)


class CommandRejectedError(ValueError):
    """An update command failed validation against the customer it targets."""


def apply_command(customer: Customer, command: CustomerCommand, now: datetime) -> Customer:
    """Return a copy of ``customer`` with ``command`` applied.

    Every command bumps ``updated_at``. Changing the visit date or the
    reminder interval re-derives ``reminder_date``.

    Raises:
        CommandRejectedError: if the command can't apply to this customer
    """
    changes: dict[str, Any] = {}

    if isinstance(command, RenameCustomer):
        changes["full_name"] = command.full_name
    elif isinstance(command, ChangeMobileNumber):
        mobile_number = command.mobile_number.strip()
        if not mobile_number:
            raise CommandRejectedError("mobile_number must not be blank")
        changes["mobile_number"] = mobile_number
    elif isinstance(command, SetInterest):
        changes["interest"] = list(command.interest)
    elif isinstance(command, SetPreferences):
        changes["preferences"] = command.preferences
    elif isinstance(command, RescheduleVisit):
        if command.visiting_date and parse_timestamp(command.visiting_date) is None:
            raise CommandRejectedError(f"Invalid visiting_date: {command.visiting_date!r}")
        changes["visiting_date"] = command.visiting_date
        changes["reminder_date"] = compute_reminder_date(
            command.visiting_date, customer.reminder_interval
        )
    elif isinstance(command, SetReminderInterval):
        changes["reminder_interval"] = command.reminder_interval
        changes["reminder_date"] = compute_reminder_date(
            customer.visiting_date, command.reminder_interval
        )
    elif isinstance(command, RecordReminderSent):
        changes.update(_record_reminder(customer, command, now))
    else:
        raise CommandRejectedError(f"Unsupported command: {type(command).__name__}")

    changes["updated_at"] = now.isoformat()
    return customer.model_copy(update=changes)


def apply_commands(
    customer: Customer, commands: Iterable[CustomerCommand], now: datetime
) -> Customer:
    """Apply commands in order; nothing is applied if any one is rejected."""
    for command in commands:
        customer = apply_command(customer, command, now)
    return customer


def _record_reminder(customer: Customer, command: RecordReminderSent, now: datetime) -> dict[str, Any]:
    sent_at = command.sent_at or now.isoformat()
    sent_day = local_day(sent_at, now)
    if sent_day is None:
        raise CommandRejectedError(f"Invalid sent_at: {command.sent_at!r}")

    history = [*customer.reminder_history, ReminderHistoryEntry(sent_at=sent_at, message=command.message)]
    sent_dates = list(customer.reminder_sent_dates)
    if sent_day.isoformat() not in sent_dates:
        sent_dates.append(sent_day.isoformat())

    logger.info(f"Recorded reminder for customer {customer.id} on {sent_day.isoformat()}")
    return {"reminder_history": history, "reminder_sent_dates": sent_dates}
