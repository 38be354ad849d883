"""Core module - config, database, exceptions, background execution."""

from app.core.config import get_settings, Settings
from app.core.database import Database
from app.core.exceptions import (
    AppException,
    PlantNotFoundException,
    NotificationPlatformError,
    DuplicateReminderError,
)

__all__ = [
    "get_settings",
    "Settings",
    "Database",
    "AppException",
    "PlantNotFoundException",
    "NotificationPlatformError",
    "DuplicateReminderError",
]
