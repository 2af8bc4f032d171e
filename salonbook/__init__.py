"""SalonBook - client book and WhatsApp visit reminders for small salons."""

__version__ = "0.1.0"
