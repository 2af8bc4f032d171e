"""Reminder scheduling - when the next reminder is due and whether it can go out."""

import re
from collections.abc import Sequence
from datetime import date, datetime, timedelta

from salonbook.schemas.customer import Customer, ReminderInterval
from salonbook.schemas.reminder import ScheduleStatus
from salonbook.services.calendar import (
    day_string,
    format_display_date,
    local_day,
    local_moment,
    parse_timestamp,
)

# Customers added within this window are highlighted as new
RECENTLY_ADDED_WINDOW = timedelta(hours=1)

PHONE_DIGITS = 10

_NON_DIGITS = re.compile(r"\D")

_STATUS_PRIORITY: dict[ScheduleStatus, int] = {
    ScheduleStatus.OVERDUE: 0,
    ScheduleStatus.PENDING: 1,
    ScheduleStatus.SENT_TODAY: 2,
    ScheduleStatus.UPCOMING: 3,
    ScheduleStatus.NONE: 4,
}


def compute_reminder_date(visit_date: str, interval: ReminderInterval | str) -> str | None:
    """Derive the reminder date (``yyyy-MM-dd``) from a visit date and interval.

    Returns None for the ``none`` interval, an unknown interval or an
    unparseable visit date.
    """
    try:
        days = ReminderInterval(interval).days
    except ValueError:
        return None
    if days is None:
        return None

    visit = parse_timestamp(visit_date)
    if visit is None:
        return None
    return (visit.date() + timedelta(days=days)).isoformat()


def compute_schedule_status(customer: Customer, now: datetime) -> ScheduleStatus:
    """Schedule status of a customer's next reminder."""
    reminder_day = local_day(customer.reminder_date, now)
    if reminder_day is None:
        return ScheduleStatus.NONE

    today = now.date()
    if reminder_day == today:
        if was_reminder_sent_today(customer, now):
            return ScheduleStatus.SENT_TODAY
        return ScheduleStatus.PENDING
    if reminder_day < today:
        return ScheduleStatus.OVERDUE
    return ScheduleStatus.UPCOMING


def is_valid_phone_number(phone: str) -> bool:
    """A reminder needs a mobile number of exactly 10 digits."""
    return len(normalize_phone_number(phone)) == PHONE_DIGITS


def normalize_phone_number(phone: str) -> str:
    """Strip everything but digits."""
    return _NON_DIGITS.sub("", phone or "")


def was_reminder_sent_today(customer: Customer, now: datetime) -> bool:
    return day_string(now) in customer.reminder_sent_dates


def is_reminder_due_today(customer: Customer, now: datetime) -> bool:
    return local_day(customer.reminder_date, now) == now.date()


def is_reminder_overdue(customer: Customer, now: datetime) -> bool:
    reminder_day = local_day(customer.reminder_date, now)
    return reminder_day is not None and reminder_day < now.date()


def can_send_reminder_today(customer: Customer, now: datetime) -> bool:
    """Due today or overdue, not yet sent today, and the number is usable."""
    if not (is_reminder_due_today(customer, now) or is_reminder_overdue(customer, now)):
        return False
    if was_reminder_sent_today(customer, now):
        return False
    return is_valid_phone_number(customer.mobile_number)


def reminder_status_label(customer: Customer, now: datetime) -> str:
    """Short human-readable reminder status."""
    reminder_day = local_day(customer.reminder_date, now)
    if reminder_day is None:
        return "No reminder set"
    if was_reminder_sent_today(customer, now):
        return "Reminder sent today"
    if reminder_day == now.date():
        return "Reminder due today"
    return f"Reminder: {format_display_date(reminder_day)}"


def sort_by_reminder_priority(customers: Sequence[Customer], now: datetime) -> list[Customer]:
    """Overdue first, then pending, sent today, upcoming, and no reminder.

    Within a status, earlier reminder dates come first.
    """

    def priority(customer: Customer) -> tuple[int, date]:
        status = compute_schedule_status(customer, now)
        reminder_day = local_day(customer.reminder_date, now) or date.max
        return _STATUS_PRIORITY[status], reminder_day

    return sorted(customers, key=priority)


def is_recently_added(customer: Customer, now: datetime) -> bool:
    """Customer was created less than an hour before ``now``."""
    created = local_moment(customer.created_at, now)
    if created is None:
        return False
    return now - created < RECENTLY_ADDED_WINDOW
