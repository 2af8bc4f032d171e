"""Dependency injection for API endpoints."""

from collections.abc import AsyncGenerator
from datetime import datetime
from typing import Annotated
from zoneinfo import ZoneInfo

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.config import get_settings
from salonbook.database import get_db
from salonbook.services.customer_book import CustomerBook
from salonbook.services.customer_repository import SqlCustomerRepository
from salonbook.services.whatsapp import WhatsAppClient

__all__ = [
    "get_db",
    "AsyncSession",
    "get_now",
    "get_customer_book",
    "get_whatsapp_client",
]


def get_now() -> datetime:
    """Current time in the business's timezone."""
    return datetime.now(ZoneInfo(get_settings().business_timezone))


async def get_customer_book(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CustomerBook:
    """Customer book bound to the request's session."""
    return CustomerBook(SqlCustomerRepository(db))


async def get_whatsapp_client() -> AsyncGenerator[WhatsAppClient | None, None]:
    """Twilio client when credentials are configured, otherwise None (link-only)."""
    if not get_settings().whatsapp_enabled:
        yield None
        return

    client = WhatsAppClient()
    try:
        yield client
    finally:
        await client.close()
