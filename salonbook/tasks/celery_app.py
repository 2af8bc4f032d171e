"""Celery application for reminder work."""

from celery import Celery

from salonbook.config import get_settings

settings = get_settings()

celery_app = Celery(
    "salonbook",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["salonbook.tasks.reminders"],
)

celery_app.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    # Beat runs on the salon's calendar so "due today" matches the API
    timezone=settings.business_timezone,
    enable_utc=True,
    # A reminder task lost with its worker is redelivered; sending is
    # guarded by the same-day check
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,
    result_expires=3600,
    beat_schedule={
        "send-due-reminders": {
            "task": "salonbook.tasks.reminders.send_due_reminders",
            "schedule": settings.reminder_check_interval_seconds,
        },
    },
)
