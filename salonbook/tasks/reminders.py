"""Visit reminder tasks."""

import logging

from salonbook.tasks.celery_app import celery_app

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "WhatsApp not configured"


@celery_app.task(name="salonbook.tasks.reminders.send_due_reminders")
def send_due_reminders() -> dict:
    """
    Periodic task to find customers whose reminder is due.

    Runs on the beat schedule (every 15 minutes by default).
    Queues one send task per customer due today or overdue that hasn't
    been reminded today and has a usable mobile number. Without Twilio
    settings nothing can be delivered, so nothing is queued.
    """
    # Import here to avoid circular imports and to get fresh db session
    import asyncio

    async def _check_reminders():
        from datetime import datetime
        from zoneinfo import ZoneInfo

        from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

        from salonbook.config import get_settings
        from salonbook.services.customer_book import CustomerBook
        from salonbook.services.customer_repository import SqlCustomerRepository
        from salonbook.services.reminder_dispatch import select_due_customers

        settings = get_settings()
        if not settings.whatsapp_enabled:
            logger.warning("Twilio WhatsApp settings missing - skipping due reminders")
            return {"queued": 0, "error": NOT_CONFIGURED}

        engine = create_async_engine(settings.async_database_url)
        session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

        now = datetime.now(ZoneInfo(settings.business_timezone))

        try:
            async with session_factory() as db:
                book = CustomerBook(SqlCustomerRepository(db))
                due = select_due_customers(await book.list_customers(), now)

            for customer in due:
                send_customer_reminder.delay(customer.id)

            logger.info(f"Queued {len(due)} due reminders")
            return {"queued": len(due)}
        finally:
            await engine.dispose()

    return asyncio.run(_check_reminders())


@celery_app.task(name="salonbook.tasks.reminders.send_customer_reminder")
def send_customer_reminder(customer_id: str) -> dict:
    """
    Send the visit reminder for a specific customer over Twilio.

    Args:
        customer_id: ID of the customer to remind
    """
    import asyncio

    async def _send_reminder():
        from datetime import datetime
        from zoneinfo import ZoneInfo

        import httpx
        from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

        from salonbook.config import get_settings
        from salonbook.services import business_profile as profile_service
        from salonbook.services.customer_book import CustomerBook, CustomerNotFoundError
        from salonbook.services.customer_repository import SqlCustomerRepository
        from salonbook.services.reminder_dispatch import ReminderNotAllowedError, send_reminder
        from salonbook.services.whatsapp import WhatsAppClient, WhatsAppNotConfiguredError

        settings = get_settings()
        if not settings.whatsapp_enabled:
            logger.warning(f"Not sending reminder to {customer_id}: {NOT_CONFIGURED}")
            return {"success": False, "error": NOT_CONFIGURED}

        engine = create_async_engine(settings.async_database_url)
        session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

        now = datetime.now(ZoneInfo(settings.business_timezone))
        whatsapp = WhatsAppClient()

        try:
            async with session_factory() as db:
                profile = await profile_service.get_profile(db)
                book = CustomerBook(SqlCustomerRepository(db))
                try:
                    result = await send_reminder(
                        book,
                        customer_id,
                        business_name=profile.business_name,
                        now=now,
                        whatsapp=whatsapp,
                        offer_text=settings.reminder_offer_text or None,
                    )
                except CustomerNotFoundError:
                    logger.error(f"Customer {customer_id} not found")
                    return {"success": False, "error": "Customer not found"}
                except ReminderNotAllowedError as e:
                    logger.info(f"Skipping reminder for {customer_id}: {e}")
                    return {"success": False, "error": str(e)}
                except WhatsAppNotConfiguredError as e:
                    logger.error(f"Cannot send reminder to {customer_id}: {e}")
                    return {"success": False, "error": str(e)}
                except httpx.HTTPError as e:
                    logger.error(f"Failed to send reminder via WhatsApp: {e}")
                    return {"success": False, "error": str(e)}

                await db.commit()
                return {"success": True, "delivered_via": result.delivered_via}
        finally:
            await whatsapp.close()
            await engine.dispose()

    return asyncio.run(_send_reminder())
