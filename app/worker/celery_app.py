"""Celery app for the reminder delivery worker."""

from __future__ import annotations

from celery import Celery
from celery.schedules import crontab

from app.core.config import Settings, get_settings


REMINDER_QUEUE = "reminders"
DELIVER_TASK = "app.worker.tasks.deliver_due_reminders"


def make_celery(settings: Settings) -> Celery:
    """Worker plus beat: beat sweeps due reminders once a minute."""
    app = Celery(
        "plantly",
        broker=settings.CELERY_BROKER_URL.strip() or None,
        include=["app.worker.tasks"],
    )
    app.conf.update(
        task_default_queue=REMINDER_QUEUE,
        task_serializer="json",
        accept_content=["json"],
        # Delivery stats are logged, never read back
        task_ignore_result=True,
        timezone=settings.REMINDER_TIMEZONE,
        enable_utc=True,
        task_acks_late=True,
        worker_prefetch_multiplier=1,
    )
    app.conf.beat_schedule = {
        "deliver-due-reminders": {
            "task": DELIVER_TASK,
            "schedule": crontab(minute="*"),
            # A sweep that sits in the queue past the next one is redundant
            "options": {"queue": REMINDER_QUEUE, "expires": 55},
        },
    }
    return app


celery_app = make_celery(get_settings())
