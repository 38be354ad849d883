"""
Notification Content Templates

Watering reminder copy, one template per reminder kind. Centralizing content
here allows easy modification of notification copy without changing
scheduling logic.
"""

from datetime import datetime

from app.notifications.models import ReminderContent, ReminderKind


class WateringReminderContent:
    """
    Watering reminder notification content templates.

    - Day before: heads-up for tomorrow
    - Day of: time to water
    - Overdue: the watering day has passed
    """

    @staticmethod
    def day_before_title(plant_name: str) -> str:
        return f"🌿 {plant_name} reminder"

    @staticmethod
    def day_before_body(plant_name: str) -> str:
        return f"Tomorrow is watering day for your {plant_name}. Get ready! 🗓️"

    @staticmethod
    def day_of_title(plant_name: str) -> str:
        return f"🌱 Time to water {plant_name}!"

    @staticmethod
    def day_of_body(plant_name: str) -> str:
        return f"Your {plant_name} is ready for its next watering. Don't let it get thirsty! 💧"

    @staticmethod
    def overdue_title(plant_name: str) -> str:
        return f"🚨 {plant_name} needs water!"

    @staticmethod
    def overdue_body(plant_name: str) -> str:
        return f"Your {plant_name} is overdue for watering. Please check on it soon! 🆘"

    @classmethod
    def build(
        cls,
        kind: ReminderKind,
        plant_id: str,
        plant_name: str,
        next_watering_date: datetime,
    ) -> ReminderContent:
        """
        Build title, body and payload for one reminder.

        The payload carries the plant id (used to cancel by plant) and the
        watering date the reminder was computed from.
        """
        templates = {
            ReminderKind.DAY_BEFORE: (cls.day_before_title, cls.day_before_body),
            ReminderKind.DAY_OF: (cls.day_of_title, cls.day_of_body),
            ReminderKind.OVERDUE: (cls.overdue_title, cls.overdue_body),
        }
        title_fn, body_fn = templates[kind]

        return ReminderContent(
            title=title_fn(plant_name),
            body=body_fn(plant_name),
            data={
                "plantId": plant_id,
                "plantName": plant_name,
                "kind": kind.value,
                "type": "watering",
                "scheduledFor": next_watering_date.isoformat(),
            },
        )

    @staticmethod
    def build_test(plant_id: str, plant_name: str) -> ReminderContent:
        """One-off reminder used to check that notifications reach the device."""
        return ReminderContent(
            title="🧪 Test notification",
            body=f"This is a test notification for {plant_name}!",
            data={"plantId": plant_id, "plantName": plant_name, "type": "test"},
        )
