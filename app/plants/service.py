"""Plant collection store - the user's plants, preferences and their reminders."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from app.core.executor import BackgroundExecutor
from app.notifications.models import NotificationPreferences, NotificationPreferencesUpdate
from app.notifications.service import NotificationGateway
from app.notifications.water_reminder_service import WaterReminderPlanner
from app.plants.care_utils import frequency_label_for_days, parse_frequency_to_days
from app.plants.models import (
    Plant,
    PlantCareDetails,
    PlantCollectionSnapshot,
    PlantCreate,
    PlantResponse,
    PlantUpdate,
)
from app.plants.repository import CollectionRepository
from app.plants.watering_engine import calculate_next_watering_date, compute_watering_status

logger = logging.getLogger(__name__)


class PlantCollectionStore:
    """
    Authoritative state of the plant collection.

    Mutators update the in-memory collection and return right away. Saving
    and reminder work (cancel, then schedule) are handed to the executor and
    run afterwards. Reminder failures never fail the mutation.

    Unknown plant ids are a silent no-op here (None / False); callers that
    need a "not found" answer check the return value.
    """

    def __init__(
        self,
        planner: WaterReminderPlanner,
        gateway: NotificationGateway,
        repository: CollectionRepository,
        executor=None,
        clock: Optional[Callable[[], datetime]] = None,
        preferences: Optional[NotificationPreferences] = None,
    ):
        self.planner = planner
        self.gateway = gateway
        self.repository = repository
        self.executor = executor or BackgroundExecutor()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._plants: Dict[str, Plant] = {}
        self._default_preferences = preferences or NotificationPreferences()
        self._preferences = self._default_preferences

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    async def load(self) -> None:
        """
        Restore plants and preferences saved by a previous run.

        Reminders held by a platform that does not survive restarts are
        planned again for every plant with a watering date.
        """
        snapshot = await self.repository.load()
        if snapshot is None:
            logger.info("No saved plant collection, starting empty")
            return

        self._plants = {plant.id: plant for plant in snapshot.my_plants}
        self._preferences = snapshot.notification_preferences
        logger.info(f"Loaded {len(self._plants)} plants")

        if not self.gateway.platform.durable:
            self._reschedule_all()

    def snapshot(self) -> PlantCollectionSnapshot:
        return PlantCollectionSnapshot(
            my_plants=list(self._plants.values()),
            notification_preferences=self._preferences,
        )

    @property
    def notification_preferences(self) -> NotificationPreferences:
        return self._preferences

    def list_plants(self) -> List[Plant]:
        return list(self._plants.values())

    def get_plant(self, plant_id: str) -> Optional[Plant]:
        return self._plants.get(plant_id)

    # -------------------------------------------------------------------------
    # Mutators
    # -------------------------------------------------------------------------

    def add_plant(self, data: PlantCreate) -> Plant:
        """Add a plant; its first watering is one interval from now."""
        now = self._clock()
        plant = Plant(
            id=self._new_plant_id(now),
            name=data.name,
            image_uri=data.image_uri,
            identification=data.identification,
            care_details=data.care_details,
            date_added=now,
            last_watered=None,
            next_watering_date=calculate_next_watering_date(data.care_details.watering_frequency, now),
            notes=data.notes,
            location=data.location,
        )
        self._plants[plant.id] = plant
        logger.info(f"Added plant {plant.name} ({plant.id}), next watering {plant.next_watering_date.isoformat()}")

        self._persist()
        self.executor.submit(self._schedule_reminders(plant.id), label=f"schedule:{plant.id}")
        return plant

    def water_plant(self, plant_id: str) -> Optional[Plant]:
        """Record a watering now and move the schedule forward."""
        plant = self._plants.get(plant_id)
        if plant is None:
            logger.debug(f"water_plant: unknown plant {plant_id}")
            return None

        now = self._clock()
        plant = plant.model_copy(update={
            "last_watered": now,
            "next_watering_date": calculate_next_watering_date(plant.care_details.watering_frequency, now),
        })
        self._plants[plant_id] = plant
        logger.info(f"Watered {plant.name} ({plant_id}), next watering {plant.next_watering_date.isoformat()}")

        self._persist()
        self._submit_reschedule(plant_id)
        return plant

    def update_plant(self, plant_id: str, updates: PlantUpdate) -> Optional[Plant]:
        """
        Apply edits. Only a changed watering frequency touches the schedule:
        the next date is recomputed from last_watered (or now, if the plant
        was never watered) and reminders are rescheduled.
        """
        plant = self._plants.get(plant_id)
        if plant is None:
            logger.debug(f"update_plant: unknown plant {plant_id}")
            return None

        changes = updates.model_dump(exclude_unset=True, exclude={"care_details"})
        changes = {k: v for k, v in changes.items() if v is not None}

        frequency_changed = False
        if updates.care_details is not None:
            merged = {
                **plant.care_details.model_dump(),
                **updates.care_details.model_dump(exclude_unset=True),
            }
            care_details = PlantCareDetails.model_validate(merged)
            frequency_changed = care_details.watering_frequency != plant.care_details.watering_frequency
            changes["care_details"] = care_details

        if frequency_changed:
            baseline = plant.last_watered or self._clock()
            changes["next_watering_date"] = calculate_next_watering_date(
                changes["care_details"].watering_frequency,
                baseline,
            )

        plant = plant.model_copy(update=changes)
        self._plants[plant_id] = plant
        self._persist()

        if frequency_changed:
            logger.info(
                f"Watering frequency of {plant.name} ({plant_id}) changed to "
                f"'{plant.care_details.watering_frequency}', rescheduling reminders"
            )
            self._submit_reschedule(plant_id)

        return plant

    def delete_plant(self, plant_id: str) -> bool:
        """Cancel the plant's reminders, then drop it from the collection."""
        if plant_id not in self._plants:
            logger.debug(f"delete_plant: unknown plant {plant_id}")
            return False

        self.executor.submit(self.gateway.cancel_for_plant(plant_id), label=f"cancel:{plant_id}")

        plant = self._plants.pop(plant_id)
        logger.info(f"Deleted plant {plant.name} ({plant_id})")
        self._persist()
        return True

    def update_notification_preferences(
        self,
        updates: NotificationPreferencesUpdate,
    ) -> NotificationPreferences:
        """Merge preference changes and reschedule every plant that has a watering date."""
        merged = {
            **self._preferences.model_dump(),
            **updates.model_dump(exclude_unset=True, exclude_none=True),
        }
        self._preferences = NotificationPreferences.model_validate(merged)
        self._persist()

        rescheduled = self._reschedule_all()
        logger.info(f"Notification preferences updated, rescheduling {rescheduled} plants")
        return self._preferences

    def clear_all_data(self) -> None:
        """Forget every plant, reset preferences to defaults and drop all reminders."""
        removed = len(self._plants)
        self.executor.submit(self.gateway.clear_all(), label="clear-reminders")

        self._plants = {}
        self._preferences = self._default_preferences.model_copy()
        self._persist()
        logger.info(f"Cleared plant collection ({removed} plants) and notification preferences")

    # -------------------------------------------------------------------------
    # Reminders
    # -------------------------------------------------------------------------

    async def list_plant_reminders(self, plant_id: str):
        return await self.gateway.list_for_plant(plant_id)

    async def send_test_reminder(self, plant_id: str) -> Optional[str]:
        """Queue a one-off test reminder for this plant; None for unknown ids."""
        plant = self._plants.get(plant_id)
        if plant is None:
            return None
        return await self.planner.send_test(plant.id, plant.name)

    def _submit_reschedule(self, plant_id: str) -> None:
        self.executor.submit(self._reschedule(plant_id), label=f"reschedule:{plant_id}")

    def _reschedule_all(self) -> int:
        """Submit a reschedule for every plant that has a watering date."""
        rescheduled = 0
        for plant in self._plants.values():
            if plant.next_watering_date is None:
                continue
            self._submit_reschedule(plant.id)
            rescheduled += 1
        return rescheduled

    async def _reschedule(self, plant_id: str) -> List[str]:
        await self.gateway.cancel_for_plant(plant_id)
        return await self._schedule_reminders(plant_id)

    async def _schedule_reminders(self, plant_id: str) -> List[str]:
        # Read the plant when the task runs, not when it was submitted, so the
        # latest watering date and preferences win.
        plant = self._plants.get(plant_id)
        if plant is None or plant.next_watering_date is None:
            return []

        return await self.planner.schedule_for_plant(
            plant.id,
            plant.name,
            plant.next_watering_date,
            self._preferences,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _persist(self) -> None:
        self.executor.submit(self._save(), label="persist")

    async def _save(self) -> None:
        await self.repository.save(self.snapshot())

    @staticmethod
    def _new_plant_id(now: datetime) -> str:
        return f"plant_{int(now.timestamp() * 1000)}_{uuid.uuid4().hex[:9]}"

    def to_response(self, plant: Plant) -> PlantResponse:
        """Plant plus derived watering fields for the API."""
        interval = parse_frequency_to_days(plant.care_details.watering_frequency)
        status = compute_watering_status(plant.next_watering_date, now=self._clock())
        return PlantResponse(
            **plant.model_dump(),
            watering_interval_days=interval,
            watering_frequency_label=frequency_label_for_days(interval),
            days_until_watering=status.days_until_due,
            watering_urgency=status.urgency,
            needs_water=status.needs_water,
        )
