"""Customer persistence - the port the customer book talks to, and its SQL adapter."""

from typing import Protocol, runtime_checkable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.models import CustomerRecord
from salonbook.schemas.customer import Customer


@runtime_checkable
class CustomerRepository(Protocol):
    """Storage for customer records.

    The customer book only ever loads and saves whole records through this
    interface; it never reaches into a session or a global store.
    """

    async def load_all(self) -> list[Customer]:
        """All customers, newest first."""
        ...

    async def get(self, customer_id: str) -> Customer | None:
        ...

    async def next_customer_id(self) -> int:
        """Display number for the next customer added."""
        ...

    async def save(self, customer: Customer) -> Customer:
        """Insert or replace a customer."""
        ...

    async def delete(self, customer_id: str) -> bool:
        """Remove a customer; False if there was none."""
        ...


def _to_schema(record: CustomerRecord) -> Customer:
    return Customer.model_validate(record)


def _copy_onto(record: CustomerRecord, customer: Customer) -> None:
    record.customer_id = customer.customer_id
    record.full_name = customer.full_name
    record.mobile_number = customer.mobile_number
    record.interest = list(customer.interest)
    record.preferences = customer.preferences
    record.visiting_date = customer.visiting_date
    record.created_at = customer.created_at
    record.updated_at = customer.updated_at
    record.reminder_interval = customer.reminder_interval.value
    record.reminder_date = customer.reminder_date
    record.reminder_sent_dates = list(customer.reminder_sent_dates)
    record.reminder_history = [entry.model_dump() for entry in customer.reminder_history]


class SqlCustomerRepository:
    """CustomerRepository backed by a SQLAlchemy async session.

    Writes are flushed, not committed: the caller owns the transaction.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def load_all(self) -> list[Customer]:
        result = await self.db.execute(
            select(CustomerRecord).order_by(
                CustomerRecord.created_at.desc(), CustomerRecord.customer_id.desc()
            )
        )
        return [_to_schema(record) for record in result.scalars().all()]

    async def get(self, customer_id: str) -> Customer | None:
        record = await self.db.get(CustomerRecord, customer_id)
        return _to_schema(record) if record else None

    async def next_customer_id(self) -> int:
        result = await self.db.execute(select(func.max(CustomerRecord.customer_id)))
        return (result.scalar_one_or_none() or 0) + 1

    async def save(self, customer: Customer) -> Customer:
        record = await self.db.get(CustomerRecord, customer.id)
        if record is None:
            record = CustomerRecord(id=customer.id)
            self.db.add(record)
        _copy_onto(record, customer)
        await self.db.flush()
        await self.db.refresh(record)
        return _to_schema(record)

    async def delete(self, customer_id: str) -> bool:
        record = await self.db.get(CustomerRecord, customer_id)
        if record is None:
            return False
        await self.db.delete(record)
        await self.db.flush()
        return True
