"""Celery tasks (sync) - reminder delivery."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.core.config import get_settings
from app.notifications.push_service import MongoNotificationPlatform, SnsPushSender
from app.worker.celery_app import DELIVER_TASK, celery_app
from app.worker.mongo_clients import get_pymongo_db

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _reminders_collection():
    return get_pymongo_db()[MongoNotificationPlatform.COLLECTION]


def deliver_due(
    collection,
    sender: SnsPushSender,
    now: Optional[datetime] = None,
    limit: int = 100,
) -> Dict[str, Any]:
    """
    Claim and push reminders whose fire time has passed.

    Each reminder is claimed with find_one_and_delete, so a redelivered task
    or a second worker never pushes the same reminder twice. A failed
    publish is logged and the reminder is dropped (reminders are advisory).
    """
    now = now or _now()
    stats = {"delivered": 0, "failed": 0}

    for _ in range(limit):
        doc = collection.find_one_and_delete(
            {"fire_at": {"$lte": now}},
            sort=[("fire_at", 1)],
        )
        if doc is None:
            break

        reminder = MongoNotificationPlatform.doc_to_reminder(doc)
        if sender.send(reminder):
            stats["delivered"] += 1
        else:
            stats["failed"] += 1
            logger.warning(f"Reminder {reminder.identifier} for plant {reminder.plant_id} was not delivered")

    return stats


@celery_app.task(name=DELIVER_TASK, acks_late=True)
def deliver_due_reminders() -> Dict[str, Any]:
    """
    Push every reminder that is due.

    Runs every minute via Celery Beat.

    Returns:
        Dict with delivered / failed counts.
    """
    settings = get_settings()

    try:
        stats = deliver_due(
            _reminders_collection(),
            SnsPushSender(),
            limit=settings.CELERY_DELIVERY_BATCH_SIZE,
        )
    except Exception as e:
        logger.error(f"Failed to deliver due reminders: {e}")
        raise

    if stats["delivered"] or stats["failed"]:
        logger.info(f"Reminder delivery complete: {stats}")
    return stats
