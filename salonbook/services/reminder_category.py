"""History-based reminder categories.

A customer's category says how long ago their last reminder went out:

    yet-to-send   no reminder ever sent
    sent-today    last reminder sent on today's calendar day
    3-days        2-4 whole days ago
    7-days        5-9 whole days ago
    2-weeks       10-18 whole days ago
    4-weeks       19-35 whole days ago

Day 1, anything older than 35 days and unparseable timestamps fall into
no category. Those customers are not counted by ``count_by_category``, so
the counts can add up to less than the number of customers.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime

from salonbook.schemas.customer import Customer
from salonbook.schemas.reminder import CATEGORY_ALL, ReminderCategory
from salonbook.services.calendar import local_moment

# (category, first day, last day), both ends inclusive
CATEGORY_WINDOWS: tuple[tuple[ReminderCategory, int, int], ...] = (
    (ReminderCategory.THREE_DAYS, 2, 4),
    (ReminderCategory.SEVEN_DAYS, 5, 9),
    (ReminderCategory.TWO_WEEKS, 10, 18),
    (ReminderCategory.FOUR_WEEKS, 19, 35),
)


def last_sent_at(customer: Customer, now: datetime) -> datetime | None:
    """When the most recent reminder went out, on now's clock."""
    last = customer.last_reminder
    if last is None:
        return None
    return local_moment(last.sent_at, now)


def classify_reminder_category(customer: Customer, now: datetime) -> ReminderCategory | None:
    """Categorize a customer by their most recent reminder.

    Args:
        customer: Customer to classify
        now: Current time; its zone defines "today"

    Returns:
        The first matching category, or None when no window applies
    """
    if not customer.reminder_history:
        return ReminderCategory.YET_TO_SEND

    sent_at = last_sent_at(customer, now)
    if sent_at is None:
        return None

    if sent_at.date() == now.date():
        return ReminderCategory.SENT_TODAY

    elapsed_days = (now - sent_at).days
    for category, first_day, last_day in CATEGORY_WINDOWS:
        if first_day <= elapsed_days <= last_day:
            return category
    return None


def filter_by_category(
    customers: Sequence[Customer], category: ReminderCategory | str, now: datetime
) -> list[Customer]:
    """Keep the customers in ``category``, preserving their order.

    ``"all"`` returns every customer unfiltered.
    """
    if category == CATEGORY_ALL:
        return list(customers)
    selected = ReminderCategory(category)
    return [c for c in customers if classify_reminder_category(c, now) == selected]


def count_by_category(customers: Iterable[Customer], now: datetime) -> dict[ReminderCategory, int]:
    """Count customers per category in a single pass."""
    counts = {category: 0 for category in ReminderCategory}
    for customer in customers:
        category = classify_reminder_category(customer, now)
        if category is not None:
            counts[category] += 1
    return counts
