"""
Common dependencies for FastAPI routes.
"""

from typing import Optional

import pytz
from fastapi import Request

from app.core.config import Settings, get_settings
from app.core.executor import BackgroundExecutor
from app.notifications.models import NotificationPreferences
from app.notifications.push_service import NotificationPlatform, build_notification_platform
from app.notifications.service import NotificationGateway
from app.notifications.water_reminder_service import WaterReminderPlanner
from app.plants.repository import CollectionRepository, MongoCollectionRepository
from app.plants.service import PlantCollectionStore


def build_collection_store(
    settings: Optional[Settings] = None,
    platform: Optional[NotificationPlatform] = None,
    repository: Optional[CollectionRepository] = None,
    executor=None,
    clock=None,
) -> PlantCollectionStore:
    """
    Wire the store with its collaborators.

    Called once at startup; tests pass in-memory collaborators and a
    deferred executor.
    """
    settings = settings or get_settings()

    gateway = NotificationGateway(platform or build_notification_platform(settings.NOTIFICATION_PLATFORM), clock=clock)
    planner = WaterReminderPlanner(gateway, clock=clock, tz=pytz.timezone(settings.REMINDER_TIMEZONE))

    return PlantCollectionStore(
        planner=planner,
        gateway=gateway,
        repository=repository or MongoCollectionRepository(settings.COLLECTION_OWNER_ID),
        executor=executor or BackgroundExecutor(),
        clock=clock,
        preferences=NotificationPreferences.from_settings(settings),
    )


def get_store(request: Request) -> PlantCollectionStore:
    """The process-wide store created in the app lifespan."""
    return request.app.state.store
