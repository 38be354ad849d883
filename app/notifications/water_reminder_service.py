"""
Water Reminder Planner

Decides which watering reminders a plant should have and submits them to
the notification gateway.

Up to three reminders per watering date:
- Day before, at the user's day-before time (own switch)
- Day of, at the user's reminder time (on whenever notifications are on)
- Overdue, the day after, at the user's overdue time (own switch)

Fire times are always rebuilt from the watering *date* plus a preference
time of day, so changing a preference and rescheduling moves reminders that
were already pending. Reminders that would fire in the past are dropped.
"""

import logging
import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

import pytz

from app.core.config import get_settings
from app.notifications.content import WateringReminderContent
from app.notifications.models import (
    NotificationPreferences,
    ReminderKind,
    ReminderRequest,
    TimeOfDay,
)
from app.notifications.service import NotificationGateway

logger = logging.getLogger(__name__)


class WaterReminderPlanner:
    """
    Plans day-before / day-of / overdue reminders for one plant at a time.

    Args:
        gateway: Where planned reminders are submitted.
        clock: Returns the current aware datetime; "now" for the past-time check.
        tz: Time zone the preference times of day are expressed in.
    """

    # Day offset from the watering date for each kind
    OFFSETS = {
        ReminderKind.DAY_BEFORE: -1,
        ReminderKind.DAY_OF: 0,
        ReminderKind.OVERDUE: 1,
    }

    # Test reminders fire on the next delivery sweep
    TEST_DELAY = timedelta(seconds=5)

    def __init__(
        self,
        gateway: NotificationGateway,
        clock: Optional[Callable[[], datetime]] = None,
        tz: Optional[pytz.BaseTzInfo] = None,
    ):
        self.gateway = gateway
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self.tz = tz or pytz.timezone(get_settings().REMINDER_TIMEZONE)

    # -------------------------------------------------------------------------
    # Planning
    # -------------------------------------------------------------------------

    def _watering_day(self, next_watering_date: datetime) -> date:
        if next_watering_date.tzinfo is None:
            next_watering_date = next_watering_date.replace(tzinfo=timezone.utc)
        return next_watering_date.astimezone(self.tz).date()

    def fire_time(self, watering_day: date, offset_days: int, time_of_day: TimeOfDay) -> datetime:
        """Wall-clock time on (watering_day + offset) in the planner's zone, as UTC."""
        day = watering_day + timedelta(days=offset_days)
        local = self.tz.localize(datetime.combine(day, time_of_day.as_time()))
        return local.astimezone(timezone.utc)

    @staticmethod
    def _enabled_kinds(preferences: NotificationPreferences) -> Dict[ReminderKind, TimeOfDay]:
        if not preferences.enable_notifications:
            return {}

        kinds = {}
        if preferences.enable_day_before_reminders:
            kinds[ReminderKind.DAY_BEFORE] = preferences.day_before_time
        kinds[ReminderKind.DAY_OF] = preferences.reminder_time
        if preferences.enable_overdue_reminders:
            kinds[ReminderKind.OVERDUE] = preferences.overdue_time
        return kinds

    @staticmethod
    def new_identifier(kind: ReminderKind, plant_id: str) -> str:
        return f"watering-{kind.value}-{plant_id}-{uuid.uuid4().hex}"

    def plan_reminders(
        self,
        plant_id: str,
        plant_name: str,
        next_watering_date: datetime,
        preferences: NotificationPreferences,
        now: Optional[datetime] = None,
    ) -> Dict[ReminderKind, ReminderRequest]:
        """
        Reminders that should exist for this watering date, keyed by kind.

        Kinds that are switched off, or whose fire time is not strictly
        after `now`, are left out.
        """
        now = now or self._clock()
        watering_day = self._watering_day(next_watering_date)
        planned: Dict[ReminderKind, ReminderRequest] = {}

        for kind, time_of_day in self._enabled_kinds(preferences).items():
            fire_at = self.fire_time(watering_day, self.OFFSETS[kind], time_of_day)
            if fire_at <= now:
                logger.debug(f"Skipping past {kind.value} reminder for {plant_name} ({fire_at.isoformat()})")
                continue

            planned[kind] = ReminderRequest(
                identifier=self.new_identifier(kind, plant_id),
                kind=kind,
                fire_at=fire_at,
                content=WateringReminderContent.build(kind, plant_id, plant_name, next_watering_date),
            )

        return planned

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    async def schedule_for_plant(
        self,
        plant_id: str,
        plant_name: str,
        next_watering_date: datetime,
        preferences: NotificationPreferences,
    ) -> List[str]:
        """
        Plan and submit reminders for one plant.

        Returns the identifiers the gateway accepted. The list is for logging
        only; a failed submission just leaves that reminder out.
        """
        planned = self.plan_reminders(plant_id, plant_name, next_watering_date, preferences)

        scheduled_ids = []
        for request in planned.values():
            scheduled_id = await self.gateway.schedule(request.identifier, request.fire_at, request.content)
            if scheduled_id:
                scheduled_ids.append(scheduled_id)

        logger.info(f"Scheduled {len(scheduled_ids)} reminders for {plant_name} ({plant_id})")
        return scheduled_ids

    async def send_test(self, plant_id: str, plant_name: str) -> Optional[str]:
        """
        Schedule a test reminder TEST_DELAY from now.

        It is picked up by the next delivery sweep. Returns its identifier, or
        None if the gateway refused it.
        """
        identifier = f"test-{plant_id}-{uuid.uuid4().hex}"
        fire_at = self._clock() + self.TEST_DELAY
        scheduled_id = await self.gateway.schedule(
            identifier,
            fire_at,
            WateringReminderContent.build_test(plant_id, plant_name),
        )
        logger.info(f"Test reminder for {plant_name} ({plant_id}): {scheduled_id or 'not scheduled'}")
        return scheduled_id
