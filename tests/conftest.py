"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Callable
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from salonbook.models import Base
from salonbook.schemas.customer import Customer, ReminderHistoryEntry
from salonbook.services.customer_book import CustomerBook
from salonbook.services.customer_repository import SqlCustomerRepository

BUSINESS_TZ = ZoneInfo("Asia/Kolkata")

# In-memory SQLite shared across connections of one engine
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def now() -> datetime:
    """A fixed Sunday morning in the salon's timezone."""
    return datetime(2026, 10, 18, 10, 30, tzinfo=BUSINESS_TZ)


@pytest.fixture
def make_customer() -> Callable[..., Customer]:
    """Build an in-memory customer; keyword arguments override fields.

    ``sent`` is a shortcut for a list of reminder ``sent_at`` strings.
    """
    counter = {"n": 0}

    def _make(sent: list[str] | None = None, **fields: Any) -> Customer:
        counter["n"] += 1
        data: dict[str, Any] = {
            "id": f"cust{counter['n']}",
            "customer_id": counter["n"],
            "full_name": f"Customer {counter['n']}",
            "mobile_number": "9876543210",
            "created_at": "2026-09-01T12:00:00+05:30",
            "updated_at": "2026-09-01T12:00:00+05:30",
        }
        if sent is not None:
            data["reminder_history"] = [ReminderHistoryEntry(sent_at=s, message="sent") for s in sent]
        data.update(fields)
        return Customer(**data)

    return _make


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def book(db: AsyncSession) -> CustomerBook:
    """Customer book over the test database."""
    return CustomerBook(SqlCustomerRepository(db))


@pytest_asyncio.fixture
async def client(db: AsyncSession, now: datetime) -> AsyncGenerator[AsyncClient, None]:
    """API client wired to the test session, a fixed clock and link-only reminders."""
    from salonbook.api.deps import get_db, get_now, get_whatsapp_client
    from salonbook.main import app

    async def _get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    async def _no_whatsapp() -> AsyncGenerator[None, None]:
        yield None

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_now] = lambda: now
    app.dependency_overrides[get_whatsapp_client] = _no_whatsapp

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
