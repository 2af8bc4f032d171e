"""Customer book - business logic for managing the salon's customers.

The book works against a ``CustomerRepository`` and an explicit ``now``;
it holds no state of its own between calls.
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from salonbook.models import generate_id
from salonbook.schemas.commands import CustomerCommand, RecordReminderSent
from salonbook.schemas.customer import Customer, CustomerCreate
from salonbook.schemas.reminder import ReminderHistoryItem
from salonbook.services.calendar import parse_timestamp
from salonbook.services.customer_commands import apply_commands
from salonbook.services.customer_listing import search_customers
from salonbook.services.customer_repository import CustomerRepository
from salonbook.services.reminder_schedule import compute_reminder_date

logger = logging.getLogger(__name__)


class CustomerNotFoundError(LookupError):
    """No customer with the requested id."""

    def __init__(self, customer_id: str):
        super().__init__(f"Customer {customer_id} not found")
        self.customer_id = customer_id


class CustomerBook:
    """Add, change, remove and look up customers."""

    def __init__(self, repository: CustomerRepository):
        self.repository = repository

    async def list_customers(self) -> list[Customer]:
        """All customers, newest first."""
        return await self.repository.load_all()

    async def get_customer(self, customer_id: str) -> Customer | None:
        return await self.repository.get(customer_id)

    async def require_customer(self, customer_id: str) -> Customer:
        """Get a customer or raise CustomerNotFoundError."""
        customer = await self.repository.get(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return customer

    async def search_customers(self, query: str) -> list[Customer]:
        """Customers whose name or mobile number matches ``query``."""
        return search_customers(await self.repository.load_all(), query)

    async def add_customer(self, data: CustomerCreate, now: datetime) -> Customer:
        """Add a customer, assigning id, display number and timestamps."""
        timestamp = now.isoformat()
        customer = Customer(
            id=generate_id(),
            customer_id=await self.repository.next_customer_id(),
            full_name=data.full_name,
            mobile_number=data.mobile_number,
            interest=data.interest,
            preferences=data.preferences,
            visiting_date=data.visiting_date,
            created_at=timestamp,
            updated_at=timestamp,
            reminder_interval=data.reminder_interval,
            reminder_date=compute_reminder_date(data.visiting_date, data.reminder_interval),
        )
        customer = await self.repository.save(customer)
        logger.info(f"Added customer #{customer.customer_id} ({customer.id})")
        return customer

    async def update_customer(
        self, customer_id: str, commands: Sequence[CustomerCommand], now: datetime
    ) -> Customer:
        """Apply update commands to a customer and save the result.

        Raises:
            CustomerNotFoundError: if the customer doesn't exist
            CommandRejectedError: if a command doesn't apply; nothing is saved
        """
        customer = await self.require_customer(customer_id)
        updated = apply_commands(customer, commands, now)
        return await self.repository.save(updated)

    async def record_reminder_sent(
        self, customer_id: str, message: str, now: datetime
    ) -> Customer:
        """Log a reminder dispatched at ``now``."""
        return await self.update_customer(
            customer_id,
            [RecordReminderSent(message=message, sent_at=now.isoformat())],
            now,
        )

    async def delete_customer(self, customer_id: str) -> bool:
        deleted = await self.repository.delete(customer_id)
        if deleted:
            logger.info(f"Deleted customer {customer_id}")
        return deleted

    async def reminder_history(
        self, customer_id: str | None = None, limit: int | None = None
    ) -> list[ReminderHistoryItem]:
        """Reminder history across the book, or for one customer."""
        if customer_id is not None:
            customers = [await self.require_customer(customer_id)]
        else:
            customers = await self.repository.load_all()
        return build_reminder_history(customers, limit=limit)


def _sent_sort_key(item: ReminderHistoryItem) -> tuple[int, float]:
    sent = parse_timestamp(item.sent_at)
    if sent is None:
        return 1, 0.0
    return 0, -sent.timestamp()


def build_reminder_history(
    customers: Sequence[Customer], limit: int | None = None
) -> list[ReminderHistoryItem]:
    """Flatten reminder history entries, newest first.

    Entries with unreadable timestamps go last.
    """
    items = [
        ReminderHistoryItem(
            customer_id=customer.id,
            full_name=customer.full_name,
            mobile_number=customer.mobile_number,
            sent_at=entry.sent_at,
            message=entry.message,
        )
        for customer in customers
        for entry in customer.reminder_history
    ]
    items.sort(key=_sent_sort_key)
    return items[:limit] if limit else items
