"""Plants API routes."""

from typing import List
from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_store
from app.core.exceptions import PlantNotFoundException
from app.notifications.models import ScheduledReminderListResponse, SentTestReminder
from app.plants.models import PlantCreate, PlantResponse, PlantUpdate
from app.plants.service import PlantCollectionStore


router = APIRouter(prefix="/plants", tags=["Plants"])


def _require_plant(store: PlantCollectionStore, plant_id: str):
    plant = store.get_plant(plant_id)
    if plant is None:
        raise PlantNotFoundException(plant_id)
    return plant


@router.get("", response_model=List[PlantResponse])
async def list_plants(store: PlantCollectionStore = Depends(get_store)):
    """All plants in the collection with their watering status."""
    return [store.to_response(p) for p in store.list_plants()]


@router.post("", response_model=PlantResponse, status_code=status.HTTP_201_CREATED)
async def add_plant(
    plant_data: PlantCreate,
    store: PlantCollectionStore = Depends(get_store),
):
    """
    Add a plant to the collection.

    The first watering date is one interval from now; reminders are
    scheduled in the background.
    """
    plant = store.add_plant(plant_data)
    return store.to_response(plant)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_collection(store: PlantCollectionStore = Depends(get_store)):
    """Delete every plant, reset notification preferences and drop all reminders."""
    store.clear_all_data()


@router.get("/{plant_id}", response_model=PlantResponse)
async def get_plant(plant_id: str, store: PlantCollectionStore = Depends(get_store)):
    return store.to_response(_require_plant(store, plant_id))


@router.patch("/{plant_id}", response_model=PlantResponse)
async def update_plant(
    plant_id: str,
    updates: PlantUpdate,
    store: PlantCollectionStore = Depends(get_store),
):
    """
    Edit a plant.

    Changing careDetails.wateringFrequency recomputes the next watering date
    and reschedules reminders; other edits leave reminders alone.
    """
    plant = store.update_plant(plant_id, updates)
    if plant is None:
        raise PlantNotFoundException(plant_id)
    return store.to_response(plant)


@router.delete("/{plant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plant(plant_id: str, store: PlantCollectionStore = Depends(get_store)):
    """Remove a plant and cancel its reminders."""
    if not store.delete_plant(plant_id):
        raise PlantNotFoundException(plant_id)


@router.post("/{plant_id}/water", response_model=PlantResponse)
async def water_plant(plant_id: str, store: PlantCollectionStore = Depends(get_store)):
    """Mark a plant as watered now and reschedule its reminders."""
    plant = store.water_plant(plant_id)
    if plant is None:
        raise PlantNotFoundException(plant_id)
    return store.to_response(plant)


@router.get("/{plant_id}/reminders", response_model=ScheduledReminderListResponse)
async def get_plant_reminders(plant_id: str, store: PlantCollectionStore = Depends(get_store)):
    """Reminders currently pending for this plant."""
    _require_plant(store, plant_id)
    reminders = await store.list_plant_reminders(plant_id)
    return ScheduledReminderListResponse(reminders=reminders, total_count=len(reminders))


@router.post("/{plant_id}/test-reminder", response_model=SentTestReminder)
async def send_test_reminder(plant_id: str, store: PlantCollectionStore = Depends(get_store)):
    """Schedule a one-off test reminder for this plant on the next delivery sweep."""
    _require_plant(store, plant_id)
    identifier = await store.send_test_reminder(plant_id)
    return SentTestReminder(identifier=identifier, scheduled=identifier is not None)
