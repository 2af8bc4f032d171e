"""WhatsApp messaging - reminder text, click-to-chat links and the Twilio client."""

import logging
import uuid
from datetime import datetime, timedelta
from typing import Any
from urllib.parse import quote

import httpx

from salonbook.config import get_settings
from salonbook.schemas.customer import Customer
from salonbook.services.calendar import local_day
from salonbook.services.reminder_schedule import normalize_phone_number

logger = logging.getLogger(__name__)

WHATSAPP_LINK_BASE = "https://wa.me"

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def format_phone_for_whatsapp(phone: str, country_code: str | None = None) -> str:
    """Digits-only number prefixed with the country code, e.g. ``919876543210``."""
    code = country_code if country_code is not None else get_settings().whatsapp_country_code
    return f"{code}{normalize_phone_number(phone)}"


def build_whatsapp_link(phone: str, message: str, country_code: str | None = None) -> str:
    """wa.me click-to-chat URL with the message pre-filled."""
    number = format_phone_for_whatsapp(phone, country_code)
    return f"{WHATSAPP_LINK_BASE}/{number}?text={quote(message, safe='')}"


def _visit_text(visiting_date: str, now: datetime) -> str:
    visit_day = local_day(visiting_date, now)
    if visit_day is None:
        return "soon"
    today = now.date()
    if visit_day == today:
        return "today"
    if visit_day == today + timedelta(days=1):
        return "tomorrow"
    return f"on {visit_day.day} {MONTH_NAMES[visit_day.month - 1]}"


def generate_reminder_message(
    customer: Customer,
    business_name: str,
    now: datetime,
    offer_text: str | None = None,
) -> str:
    """Compose the visit reminder sent to a customer."""
    services = ", ".join(customer.interest) if customer.interest else "our services"
    offer_line = f"🎁 Offer: {offer_text}\n" if offer_text else ""
    return (
        f"Hello {customer.full_name}!\n\n"
        f"Would you like to book your appointment {_visit_text(customer.visiting_date, now)} "
        f"at *{business_name or 'our salon'}*? 💈\n\n"
        f"Services: {services}\n"
        f"{offer_line}"
        f"Please reply or give us a call.\n\n"
        f"Thank you! 🙏"
    )


class WhatsAppNotConfiguredError(RuntimeError):
    """Twilio delivery was requested without a complete Twilio configuration."""


class WhatsAppClient:
    """Sends reminder messages through Twilio's WhatsApp channel.

    In mock mode nothing leaves the process: the message is logged and a
    fake SID handed back, so reminders can be exercised without credentials.
    """

    api_base = "https://api.twilio.com/2010-04-01"

    def __init__(self, mock_mode: bool = False, timeout: float = 30.0):
        settings = get_settings()
        self.mock_mode = mock_mode
        self.account_sid = settings.twilio_account_sid
        self.auth_token = settings.twilio_auth_token
        self.sender = settings.twilio_whatsapp_number
        self.client = httpx.AsyncClient(timeout=timeout)

    @property
    def messages_url(self) -> str:
        return f"{self.api_base}/Accounts/{self.account_sid}/Messages.json"

    @staticmethod
    def _channel_address(number: str) -> str:
        # Twilio addresses WhatsApp recipients as "whatsapp:+<E.164>"
        if number.startswith("whatsapp:"):
            return number
        return f"whatsapp:{number if number.startswith('+') else '+' + number}"

    async def send_text_message(self, to: str, message: str) -> dict[str, Any]:
        """Send ``message`` to ``to`` (country code + digits).

        Returns Twilio's message resource, or a stand-in in mock mode.

        Raises:
            WhatsAppNotConfiguredError: if the sender or credentials are missing
            httpx.HTTPError: if Twilio can't be reached or rejects the message
        """
        if self.mock_mode:
            logger.info(f"📱 [MOCK] WhatsApp reminder to {to}:\n{message}")
            return {"sid": f"mock_msg_{uuid.uuid4().hex}", "status": "queued", "to": to}

        if not self.sender:
            raise WhatsAppNotConfiguredError("TWILIO_WHATSAPP_NUMBER is not configured")
        if not (self.account_sid and self.auth_token):
            raise WhatsAppNotConfiguredError("Twilio account SID and auth token are not configured")

        payload = {
            "From": self._channel_address(self.sender),
            "To": self._channel_address(to),
            "Body": message,
        }
        try:
            response = await self.client.post(
                self.messages_url, data=payload, auth=(self.account_sid, self.auth_token)
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"❌ Twilio rejected reminder to {to}: {e.response.status_code} {e.response.text}")
            raise
        except httpx.HTTPError as e:
            logger.error(f"❌ Could not reach Twilio for reminder to {to}: {e}")
            raise

        sent = response.json()
        logger.info(f"✅ WhatsApp reminder queued for {to} (SID: {sent.get('sid')})")
        return sent

    async def close(self) -> None:
        await self.client.aclose()
