"""Tests for settings and the reminder beat schedule."""

from salonbook.config import Settings


class TestSettings:
    """Tests for derived settings."""

    def test_postgres_urls_get_async_driver(self):
        settings = Settings(database_url="postgres://u:p@host/db")
        assert settings.async_database_url == "postgresql+asyncpg://u:p@host/db"

        settings = Settings(database_url="postgresql://u:p@host/db")
        assert settings.async_database_url == "postgresql+asyncpg://u:p@host/db"

    def test_sqlite_url_unchanged(self):
        settings = Settings(database_url="sqlite+aiosqlite:///./salonbook.db")
        assert settings.async_database_url == "sqlite+aiosqlite:///./salonbook.db"

    def test_whatsapp_needs_credentials_and_sender(self):
        assert not Settings(
            twilio_account_sid="AC123", twilio_auth_token="", twilio_whatsapp_number="+14155238886"
        ).whatsapp_enabled
        assert not Settings(
            twilio_account_sid="AC123", twilio_auth_token="secret", twilio_whatsapp_number=""
        ).whatsapp_enabled
        assert Settings(
            twilio_account_sid="AC123", twilio_auth_token="secret", twilio_whatsapp_number="+14155238886"
        ).whatsapp_enabled


def test_beat_schedule_runs_due_reminder_check():
    from salonbook.tasks.celery_app import celery_app

    entry = celery_app.conf.beat_schedule["send-due-reminders"]
    assert entry["task"] == "salonbook.tasks.reminders.send_due_reminders"
