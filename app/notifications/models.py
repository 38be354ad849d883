"""Notification models and schemas."""

from datetime import datetime, time
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from enum import Enum


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys (the persisted shape)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReminderKind(str, Enum):
    """When a watering reminder fires relative to the watering date."""
    DAY_BEFORE = "day_before"
    DAY_OF = "day_of"
    OVERDUE = "overdue"


class TimeOfDay(CamelModel):
    """Wall-clock time a reminder kind fires at."""
    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(default=0, ge=0, le=59)

    def as_time(self) -> time:
        return time(self.hour, self.minute)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


class NotificationPreferences(CamelModel):
    """User-wide reminder switches and times (persisted singleton)."""
    enable_notifications: bool = True
    enable_day_before_reminders: bool = True
    enable_overdue_reminders: bool = True
    reminder_time: TimeOfDay = Field(default_factory=lambda: TimeOfDay(hour=9, minute=0))
    day_before_time: TimeOfDay = Field(default_factory=lambda: TimeOfDay(hour=20, minute=0))
    overdue_time: TimeOfDay = Field(default_factory=lambda: TimeOfDay(hour=18, minute=0))

    @classmethod
    def from_settings(cls, settings) -> "NotificationPreferences":
        """Defaults for a fresh install, taken from configuration."""
        return cls(
            reminder_time=TimeOfDay(
                hour=settings.DEFAULT_REMINDER_HOUR,
                minute=settings.DEFAULT_REMINDER_MINUTE,
            ),
            day_before_time=TimeOfDay(
                hour=settings.DEFAULT_DAY_BEFORE_HOUR,
                minute=settings.DEFAULT_DAY_BEFORE_MINUTE,
            ),
            overdue_time=TimeOfDay(
                hour=settings.DEFAULT_OVERDUE_HOUR,
                minute=settings.DEFAULT_OVERDUE_MINUTE,
            ),
        )


class NotificationPreferencesUpdate(CamelModel):
    """Partial update of notification preferences; unset fields are kept."""
    enable_notifications: Optional[bool] = None
    enable_day_before_reminders: Optional[bool] = None
    enable_overdue_reminders: Optional[bool] = None
    reminder_time: Optional[TimeOfDay] = None
    day_before_time: Optional[TimeOfDay] = None
    overdue_time: Optional[TimeOfDay] = None


class ReminderContent(BaseModel):
    """What the user sees, plus the payload read back when filtering by plant."""
    title: str
    body: str
    data: Dict[str, Any] = Field(default_factory=dict)


class ReminderRequest(BaseModel):
    """A reminder the planner wants scheduled."""
    identifier: str
    kind: ReminderKind
    fire_at: datetime
    content: ReminderContent


class ScheduledReminder(BaseModel):
    """A reminder pending on the notification platform."""
    identifier: str
    fire_at: datetime
    title: str
    body: str
    payload: Dict[str, Any] = Field(default_factory=dict)

    @property
    def plant_id(self) -> Optional[str]:
        return self.payload.get("plantId")


class SentTestReminder(BaseModel):
    """Result of a test reminder request."""
    identifier: Optional[str] = None
    scheduled: bool


class ScheduledReminderListResponse(BaseModel):
    """Pending reminders and their count."""
    reminders: List[ScheduledReminder]
    total_count: int
