"""Tests for the customer book and its SQL repository."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from salonbook.schemas.commands import RescheduleVisit, SetReminderInterval
from salonbook.schemas.customer import CustomerCreate, ReminderHistoryEntry, ReminderInterval
from salonbook.services.customer_book import CustomerNotFoundError, build_reminder_history
from salonbook.services.customer_commands import CommandRejectedError
from salonbook.services.customer_repository import CustomerRepository, SqlCustomerRepository

pytestmark = pytest.mark.asyncio


def _new_customer(**overrides) -> CustomerCreate:
    data = {
        "full_name": "Meera Nair",
        "mobile_number": "9876543210",
        "interest": ["Haircut", "Facial"],
        "visiting_date": "2026-10-18",
        "reminder_interval": ReminderInterval.ONE_WEEK,
    }
    data.update(overrides)
    return CustomerCreate(**data)


class TestAddCustomer:
    """Tests for adding customers."""

    async def test_add_assigns_identity_and_reminder_date(self, book, now):
        customer = await book.add_customer(_new_customer(), now)

        assert customer.id
        assert customer.customer_id == 1
        assert customer.created_at == now.isoformat()
        assert customer.updated_at == now.isoformat()
        assert customer.reminder_date == "2026-10-25"
        assert customer.reminder_history == []

    async def test_customer_ids_increase(self, book, now):
        first = await book.add_customer(_new_customer(), now)
        second = await book.add_customer(_new_customer(full_name="Ravi"), now)

        assert second.customer_id == first.customer_id + 1

    async def test_round_trips_through_database(self, book, now):
        added = await book.add_customer(_new_customer(preferences="Short layers"), now)
        loaded = await book.get_customer(added.id)

        assert loaded == added


class TestLookup:
    """Tests for reading the book."""

    async def test_list_newest_first(self, book, now):
        older = await book.add_customer(_new_customer(full_name="Older"), now - timedelta(days=1))
        newer = await book.add_customer(_new_customer(full_name="Newer"), now)

        customers = await book.list_customers()

        assert [c.id for c in customers] == [newer.id, older.id]

    async def test_get_missing_returns_none(self, book):
        assert await book.get_customer("missing") is None

    async def test_require_missing_raises(self, book):
        with pytest.raises(CustomerNotFoundError):
            await book.require_customer("missing")

    async def test_search(self, book, now):
        await book.add_customer(_new_customer(full_name="Meera"), now)
        await book.add_customer(_new_customer(full_name="Ravi", mobile_number="9123456780"), now)

        assert [c.full_name for c in await book.search_customers("meer")] == ["Meera"]
        assert [c.full_name for c in await book.search_customers("91234")] == ["Ravi"]

    async def test_repository_satisfies_protocol(self, db):
        assert isinstance(SqlCustomerRepository(db), CustomerRepository)

    async def test_duplicate_customer_number_rejected(self, db, make_customer):
        """Two customers can't share a display number."""
        repository = SqlCustomerRepository(db)
        await repository.save(make_customer(id="first", customer_id=7))

        with pytest.raises(IntegrityError):
            await repository.save(make_customer(id="second", customer_id=7))


class TestUpdateCustomer:
    """Tests for updating customers with commands."""

    async def test_update_persists(self, book, now):
        customer = await book.add_customer(_new_customer(), now)
        later = now + timedelta(hours=1)

        updated = await book.update_customer(
            customer.id,
            [
                SetReminderInterval(reminder_interval=ReminderInterval.TWO_WEEKS),
                RescheduleVisit(visiting_date="2026-10-20"),
            ],
            later,
        )

        assert updated.reminder_date == "2026-11-03"
        assert updated.updated_at == later.isoformat()
        assert (await book.get_customer(customer.id)).reminder_date == "2026-11-03"

    async def test_rejected_command_saves_nothing(self, book, now):
        customer = await book.add_customer(_new_customer(), now)

        with pytest.raises(CommandRejectedError):
            await book.update_customer(
                customer.id,
                [
                    SetReminderInterval(reminder_interval=ReminderInterval.FOUR_WEEKS),
                    RescheduleVisit(visiting_date="whenever"),
                ],
                now,
            )

        stored = await book.get_customer(customer.id)
        assert stored.reminder_interval == ReminderInterval.ONE_WEEK

    async def test_update_missing_raises(self, book, now):
        with pytest.raises(CustomerNotFoundError):
            await book.update_customer("missing", [RescheduleVisit(visiting_date="")], now)

    async def test_record_reminder_sent(self, book, now):
        customer = await book.add_customer(_new_customer(), now)

        await book.record_reminder_sent(customer.id, "Hello!", now)
        updated = await book.record_reminder_sent(customer.id, "Hello again!", now + timedelta(minutes=5))

        assert [e.message for e in updated.reminder_history] == ["Hello!", "Hello again!"]
        assert updated.reminder_sent_dates == ["2026-10-18"]


class TestDeleteCustomer:
    """Tests for deleting customers."""

    async def test_delete(self, book, now):
        customer = await book.add_customer(_new_customer(), now)

        assert await book.delete_customer(customer.id) is True
        assert await book.get_customer(customer.id) is None
        assert await book.delete_customer(customer.id) is False


class TestReminderHistory:
    """Tests for the reminder history feed."""

    async def test_history_across_book(self, book, now):
        a = await book.add_customer(_new_customer(full_name="A"), now)
        b = await book.add_customer(_new_customer(full_name="B"), now)
        await book.record_reminder_sent(a.id, "first", now - timedelta(days=3))
        await book.record_reminder_sent(b.id, "second", now - timedelta(days=1))
        await book.record_reminder_sent(a.id, "third", now)

        history = await book.reminder_history()

        assert [item.message for item in history] == ["third", "second", "first"]
        assert history[0].full_name == "A"

        limited = await book.reminder_history(limit=1)
        assert [item.message for item in limited] == ["third"]

    async def test_history_for_one_customer(self, book, now):
        a = await book.add_customer(_new_customer(full_name="A"), now)
        b = await book.add_customer(_new_customer(full_name="B"), now)
        await book.record_reminder_sent(a.id, "for a", now)
        await book.record_reminder_sent(b.id, "for b", now)

        history = await book.reminder_history(customer_id=b.id)

        assert [item.message for item in history] == ["for b"]

    async def test_history_for_missing_customer_raises(self, book):
        with pytest.raises(CustomerNotFoundError):
            await book.reminder_history(customer_id="missing")


class TestBuildReminderHistory:
    """Tests for build_reminder_history."""

    async def test_unreadable_timestamps_last(self, make_customer):
        customer = make_customer(
            reminder_history=[
                ReminderHistoryEntry(sent_at="garbage", message="bad"),
                ReminderHistoryEntry(sent_at="2026-10-01T10:00:00+05:30", message="old"),
                ReminderHistoryEntry(sent_at="2026-10-10T10:00:00+05:30", message="new"),
            ]
        )
        history = build_reminder_history([customer])

        assert [item.message for item in history] == ["new", "old", "bad"]
