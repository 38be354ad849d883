"""Notifications API routes."""

from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_store
from app.notifications.models import (
    NotificationPreferences,
    NotificationPreferencesUpdate,
    ScheduledReminderListResponse,
)
from app.plants.service import PlantCollectionStore

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("/preferences", response_model=NotificationPreferences)
async def get_preferences(store: PlantCollectionStore = Depends(get_store)):
    return store.notification_preferences


@router.patch("/preferences", response_model=NotificationPreferences)
async def update_preferences(
    updates: NotificationPreferencesUpdate,
    store: PlantCollectionStore = Depends(get_store),
):
    """
    Update reminder switches / times.

    Every plant with a watering date gets its reminders cancelled and
    rescheduled with the new settings.
    """
    return store.update_notification_preferences(updates)


@router.get("/scheduled", response_model=ScheduledReminderListResponse)
async def list_scheduled(store: PlantCollectionStore = Depends(get_store)):
    """All pending reminders (debugging aid)."""
    reminders = await store.gateway.list_scheduled()
    return ScheduledReminderListResponse(reminders=reminders, total_count=len(reminders))


@router.delete("/scheduled", status_code=status.HTTP_204_NO_CONTENT)
async def clear_scheduled(store: PlantCollectionStore = Depends(get_store)):
    await store.gateway.clear_all()


@router.delete("/scheduled/{identifier}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_scheduled(identifier: str, store: PlantCollectionStore = Depends(get_store)):
    await store.gateway.cancel_by_id(identifier)
