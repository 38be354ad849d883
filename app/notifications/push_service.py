"""
Notification Platforms

Backends that hold scheduled reminders until they are due:
- InMemoryNotificationPlatform: process-local, used in tests and local dev
- MongoNotificationPlatform: pending reminders in the `scheduled_reminders`
  collection, delivered by the Celery worker
- SnsPushSender: publishes a due reminder to AWS SNS (worker side)

Every platform must hand back the payload exactly as it was stored, since
reminders are cancelled by filtering on payload["plantId"].
"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo.errors import DuplicateKeyError

from app.core.config import get_settings
from app.core.database import Database
from app.core.exceptions import DuplicateReminderError
from app.notifications.models import ScheduledReminder

logger = logging.getLogger(__name__)


class NotificationPlatform(ABC):
    """Scheduled-notification primitive the gateway talks to."""

    # Whether pending reminders outlive the process
    durable = True

    @abstractmethod
    async def schedule_at(
        self,
        identifier: str,
        fire_at: datetime,
        title: str,
        body: str,
        payload: Dict[str, Any],
    ) -> str:
        """Store a reminder; returns the identifier used."""

    @abstractmethod
    async def cancel(self, identifier: str) -> None:
        """Drop a pending reminder (unknown ids are ignored)."""

    @abstractmethod
    async def list_pending(self) -> List[ScheduledReminder]:
        """All reminders not yet delivered."""

    @abstractmethod
    async def cancel_all(self) -> None:
        """Drop every pending reminder."""


class InMemoryNotificationPlatform(NotificationPlatform):
    """Dict-backed platform; pending reminders vanish with the process."""

    durable = False

    def __init__(self) -> None:
        self._pending: Dict[str, ScheduledReminder] = {}

    async def schedule_at(self, identifier, fire_at, title, body, payload) -> str:
        if identifier in self._pending:
            raise DuplicateReminderError(identifier)
        self._pending[identifier] = ScheduledReminder(
            identifier=identifier,
            fire_at=fire_at,
            title=title,
            body=body,
            payload=dict(payload),
        )
        return identifier

    async def cancel(self, identifier: str) -> None:
        self._pending.pop(identifier, None)

    async def list_pending(self) -> List[ScheduledReminder]:
        return sorted(self._pending.values(), key=lambda r: r.fire_at)

    async def cancel_all(self) -> None:
        self._pending.clear()


class MongoNotificationPlatform(NotificationPlatform):
    """
    Pending reminders stored in MongoDB.

    Documents: {identifier, fire_at, title, body, payload, created_at}.
    The worker's deliver_due_reminders task removes them once sent.
    """

    COLLECTION = "scheduled_reminders"

    @classmethod
    def _get_collection(cls):
        return Database.get_collection(cls.COLLECTION)

    async def schedule_at(self, identifier, fire_at, title, body, payload) -> str:
        doc = {
            "identifier": identifier,
            "fire_at": fire_at.astimezone(timezone.utc),
            "title": title,
            "body": body,
            "payload": dict(payload),
            "created_at": datetime.now(timezone.utc),
        }
        try:
            await self._get_collection().insert_one(doc)
        except DuplicateKeyError:
            raise DuplicateReminderError(identifier)
        return identifier

    async def cancel(self, identifier: str) -> None:
        await self._get_collection().delete_one({"identifier": identifier})

    async def list_pending(self) -> List[ScheduledReminder]:
        cursor = self._get_collection().find({}).sort("fire_at", 1)
        docs = await cursor.to_list(length=None)
        return [self.doc_to_reminder(d) for d in docs]

    async def cancel_all(self) -> None:
        result = await self._get_collection().delete_many({})
        logger.debug(f"Removed {result.deleted_count} pending reminder documents")

    @staticmethod
    def doc_to_reminder(doc: Dict[str, Any]) -> ScheduledReminder:
        fire_at = doc["fire_at"]
        if fire_at.tzinfo is None:
            # PyMongo returns naive UTC datetimes by default
            fire_at = fire_at.replace(tzinfo=timezone.utc)
        return ScheduledReminder(
            identifier=doc["identifier"],
            fire_at=fire_at,
            title=doc["title"],
            body=doc["body"],
            payload=doc.get("payload") or {},
        )


def build_notification_platform(kind: Optional[str] = None) -> NotificationPlatform:
    """Platform named by NOTIFICATION_PLATFORM ("memory" | "mongo")."""
    kind = (kind or get_settings().NOTIFICATION_PLATFORM or "mongo").strip().lower()
    if kind == "memory":
        logger.warning("Using the in-memory notification platform; reminders are not delivered")
        return InMemoryNotificationPlatform()
    if kind != "mongo":
        logger.warning(f"Unknown notification platform '{kind}', using mongo")
    return MongoNotificationPlatform()


class SnsPushSender:
    """
    Publishes due reminders to an AWS SNS topic.

    Synchronous: called from the Celery worker.
    """

    def __init__(self, sns_client=None, topic_arn: Optional[str] = None):
        settings = get_settings()
        self._client = sns_client
        self._topic_arn = topic_arn if topic_arn is not None else settings.AWS_SNS_TOPIC_ARN

    def _get_sns_client(self):
        """
        Get AWS SNS client.

        Returns:
            boto3 SNS client or None if not configured.
        """
        if self._client is not None:
            return self._client
        try:
            import boto3
            settings = get_settings()

            self._client = boto3.client(
                "sns",
                region_name=settings.AWS_REGION or None,
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
            )
            return self._client
        except Exception as e:
            logger.error(f"Failed to create SNS client: {e}")
            return None

    @staticmethod
    def build_message(reminder: ScheduledReminder) -> Dict[str, str]:
        """SNS message with per-platform JSON payloads (MessageStructure=json)."""
        apns = {
            "aps": {
                "alert": {"title": reminder.title, "body": reminder.body},
                "sound": "default",
            },
            "data": reminder.payload,
        }
        gcm = {
            "notification": {
                "title": reminder.title,
                "body": reminder.body,
                "android_channel_id": "plant-care",
                "sound": "default",
            },
            "data": {k: str(v) for k, v in reminder.payload.items()},
        }
        return {
            "default": reminder.body,
            "APNS": json.dumps(apns),
            "APNS_SANDBOX": json.dumps(apns),
            "GCM": json.dumps(gcm),
        }

    def send(self, reminder: ScheduledReminder) -> bool:
        """Publish one reminder. Returns True if SNS accepted it."""
        if not self._topic_arn:
            logger.warning("AWS_SNS_TOPIC_ARN not configured - push not sent")
            return False

        sns_client = self._get_sns_client()
        if not sns_client:
            logger.warning("SNS client not available - push not sent")
            return False

        try:
            sns_client.publish(
                TopicArn=self._topic_arn,
                Message=json.dumps(self.build_message(reminder)),
                MessageStructure="json",
            )
            return True
        except Exception as e:
            logger.error(f"Failed to publish reminder {reminder.identifier} to SNS: {e}")
            return False
