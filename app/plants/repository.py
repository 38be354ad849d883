"""Persistence of the plant collection and notification preferences."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

from app.core.database import Database
from app.plants.models import PlantCollectionSnapshot

logger = logging.getLogger(__name__)


class CollectionRepository(ABC):
    """Loads and saves the {myPlants, notificationPreferences} document."""

    @abstractmethod
    async def load(self) -> Optional[PlantCollectionSnapshot]:
        """Stored snapshot, or None on first run."""

    @abstractmethod
    async def save(self, snapshot: PlantCollectionSnapshot) -> None:
        """Replace the stored snapshot."""


class InMemoryCollectionRepository(CollectionRepository):
    """Keeps the last saved snapshot as serialized data."""

    def __init__(self, initial: Optional[PlantCollectionSnapshot] = None):
        self._data = initial.model_dump(mode="json", by_alias=True) if initial else None
        self.save_count = 0

    async def load(self) -> Optional[PlantCollectionSnapshot]:
        if self._data is None:
            return None
        return PlantCollectionSnapshot.model_validate(self._data)

    async def save(self, snapshot: PlantCollectionSnapshot) -> None:
        self._data = snapshot.model_dump(mode="json", by_alias=True)
        self.save_count += 1

    @property
    def data(self) -> Optional[dict]:
        return self._data


class MongoCollectionRepository(CollectionRepository):
    """One document per owner in `plant_collections`."""

    COLLECTION = "plant_collections"

    def __init__(self, owner_id: str):
        self.owner_id = owner_id

    @classmethod
    def _get_collection(cls):
        return Database.get_collection(cls.COLLECTION)

    async def load(self) -> Optional[PlantCollectionSnapshot]:
        doc = await self._get_collection().find_one({"owner_id": self.owner_id})
        if not doc:
            return None
        return PlantCollectionSnapshot.model_validate({
            "myPlants": doc.get("myPlants", []),
            "notificationPreferences": doc.get("notificationPreferences") or {},
        })

    async def save(self, snapshot: PlantCollectionSnapshot) -> None:
        data = snapshot.model_dump(mode="json", by_alias=True)
        await self._get_collection().update_one(
            {"owner_id": self.owner_id},
            {"$set": {**data, "updated_at": datetime.now(timezone.utc)}},
            upsert=True,
        )
        logger.debug(f"Saved collection for {self.owner_id}: {len(snapshot.my_plants)} plants")
