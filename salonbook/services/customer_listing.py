"""Customer listing - search, sort and date-group the customer book.

The listing pipeline is:

    customers -> search -> category filter -> sort -> group by display date

Every step returns a new list and leaves its input untouched.
"""

import unicodedata
from collections.abc import Sequence
from datetime import datetime, timedelta
from enum import Enum

from salonbook.schemas.customer import Customer
from salonbook.schemas.reminder import CATEGORY_ALL, ReminderCategory
from salonbook.services.calendar import format_display_date, local_day, parse_display_date
from salonbook.services.reminder_category import filter_by_category

TODAY_LABEL = "Today"
YESTERDAY_LABEL = "Yesterday"
UNKNOWN_DATE_LABEL = "Unknown Date"


class CustomerSortKey(str, Enum):
    """Orders offered by the customer list."""

    CUSTOMER_ID = "customer_id"
    NAME = "name"


def display_date_label(customer: Customer, now: datetime) -> str:
    """Group label for a customer: visit date, falling back to creation date."""
    raw = customer.visiting_date or customer.created_at
    day = local_day(raw, now)
    if day is None:
        return UNKNOWN_DATE_LABEL

    today = now.date()
    if day == today:
        return TODAY_LABEL
    if day == today - timedelta(days=1):
        return YESTERDAY_LABEL
    return format_display_date(day)


def group_by_display_date(customers: Sequence[Customer], now: datetime) -> dict[str, list[Customer]]:
    """Bucket customers by display label, keeping input order within a bucket.

    The mapping's own order is first appearance; use ``order_group_labels``
    for display order.
    """
    groups: dict[str, list[Customer]] = {}
    for customer in customers:
        groups.setdefault(display_date_label(customer, now), []).append(customer)
    return groups


def _label_rank(label: str) -> tuple[int, int]:
    if label == TODAY_LABEL:
        return 0, 0
    if label == YESTERDAY_LABEL:
        return 1, 0
    if label == UNKNOWN_DATE_LABEL:
        return 4, 0
    day = parse_display_date(label)
    if day is None:
        return 3, 0
    # Most recent first
    return 2, -day.toordinal()


def order_group_labels(labels: Sequence[str]) -> list[str]:
    """Today, Yesterday, then dates newest first, then Unknown Date.

    A label that is not a formatted date sorts after every real date.
    """
    return sorted(labels, key=_label_rank)


def sort_by_customer_id(customers: Sequence[Customer]) -> list[Customer]:
    """Ascending customer number; missing numbers count as 0."""
    return sorted(customers, key=lambda c: c.customer_id or 0)


def _collation_key(name: str) -> str:
    # Case- and accent-insensitive, so "ana" < "Bob" and "Émile" sits with "Emile"
    decomposed = unicodedata.normalize("NFKD", name or "")
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def sort_by_name(customers: Sequence[Customer]) -> list[Customer]:
    """Alphabetical by full name; customers with equal names keep their order."""
    return sorted(customers, key=lambda c: _collation_key(c.full_name))


def search_customers(customers: Sequence[Customer], query: str) -> list[Customer]:
    """Case-insensitive match on name, or substring match on mobile number."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(customers)
    return [
        c for c in customers
        if needle in c.full_name.lower() or needle in c.mobile_number
    ]


def build_customer_listing(
    customers: Sequence[Customer],
    now: datetime,
    query: str = "",
    category: ReminderCategory | str = CATEGORY_ALL,
    sort_by: CustomerSortKey = CustomerSortKey.CUSTOMER_ID,
) -> list[tuple[str, list[Customer]]]:
    """Run the full listing pipeline and return groups in display order."""
    matched = search_customers(customers, query)
    matched = filter_by_category(matched, category, now)
    if sort_by == CustomerSortKey.NAME:
        matched = sort_by_name(matched)
    else:
        matched = sort_by_customer_id(matched)

    groups = group_by_display_date(matched, now)
    return [(label, groups[label]) for label in order_group_labels(list(groups))]
