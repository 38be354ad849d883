"""Notification gateway - the only caller of the notification platform."""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from app.notifications.models import ReminderContent, ScheduledReminder
from app.notifications.push_service import NotificationPlatform

logger = logging.getLogger(__name__)


class NotificationGateway:
    """
    Idempotent wrapper around a NotificationPlatform.

    Platform failures are logged and turned into "nothing happened"; nothing
    raised by the platform reaches the caller. Pending reminders on the
    platform are the source of truth for which reminders belong to a plant
    (matched through payload["plantId"]).
    """

    def __init__(
        self,
        platform: NotificationPlatform,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.platform = platform
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def schedule(
        self,
        identifier: str,
        fire_at: datetime,
        content: ReminderContent,
    ) -> Optional[str]:
        """
        Schedule one reminder. Returns its id, or None if nothing was scheduled.

        A naive fire_at is read as UTC.
        """
        if fire_at.tzinfo is None:
            fire_at = fire_at.replace(tzinfo=timezone.utc)

        try:
            if fire_at <= self._clock():
                logger.debug(f"Skipping past reminder {identifier} ({fire_at.isoformat()})")
                return None

            return await self.platform.schedule_at(
                identifier,
                fire_at,
                content.title,
                content.body,
                content.data,
            )
        except Exception as e:
            logger.error(f"Error scheduling reminder {identifier}: {e}")
            return None

    async def cancel_for_plant(self, plant_id: str) -> int:
        """Cancel every pending reminder whose payload names this plant."""
        cancelled = 0
        try:
            pending = await self.platform.list_pending()
            for reminder in pending:
                if reminder.plant_id != plant_id:
                    continue
                await self.platform.cancel(reminder.identifier)
                cancelled += 1
        except Exception as e:
            logger.error(f"Error cancelling reminders for plant {plant_id}: {e}")

        logger.info(f"Cancelled {cancelled} reminders for plant {plant_id}")
        return cancelled

    async def cancel_by_id(self, identifier: str) -> None:
        try:
            await self.platform.cancel(identifier)
            logger.info(f"Cancelled reminder: {identifier}")
        except Exception as e:
            logger.error(f"Error cancelling reminder {identifier}: {e}")

    async def list_scheduled(self) -> List[ScheduledReminder]:
        try:
            return await self.platform.list_pending()
        except Exception as e:
            logger.error(f"Error listing scheduled reminders: {e}")
            return []

    async def list_for_plant(self, plant_id: str) -> List[ScheduledReminder]:
        return [r for r in await self.list_scheduled() if r.plant_id == plant_id]

    async def clear_all(self) -> None:
        try:
            await self.platform.cancel_all()
            logger.info("Cleared all scheduled reminders")
        except Exception as e:
            logger.error(f"Error clearing scheduled reminders: {e}")
