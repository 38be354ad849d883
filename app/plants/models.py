"""Plant-related models and schemas."""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.notifications.models import CamelModel, NotificationPreferences


class PlantCareDetails(CamelModel):
    """
    Care instructions for a plant.

    Only watering_frequency drives scheduling; the rest is descriptive text
    shown to the user. Unknown keys from identification results are kept.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    watering_frequency: str = "Weekly"
    watering_amount: Optional[str] = None
    sunlight_requirement: Optional[str] = None
    temperature: Optional[str] = None
    humidity: Optional[str] = None
    placement: List[str] = Field(default_factory=list)
    growth_characteristics: Optional[str] = None
    common_issues: List[str] = Field(default_factory=list)
    soil_type: Optional[str] = None
    fertilizing: Optional[str] = None
    pruning: Optional[str] = None


class Plant(CamelModel):
    """A plant in the user's collection (persisted)."""
    id: str
    name: str
    image_uri: Optional[str] = None
    identification: Optional[Dict[str, Any]] = None
    care_details: PlantCareDetails
    date_added: datetime
    last_watered: Optional[datetime] = None
    next_watering_date: Optional[datetime] = None
    notes: Optional[str] = None
    location: Optional[str] = None


class PlantCreate(CamelModel):
    """Schema to add a plant to the collection."""
    name: str = Field(..., min_length=1)
    image_uri: Optional[str] = None
    identification: Optional[Dict[str, Any]] = None
    care_details: PlantCareDetails = Field(default_factory=PlantCareDetails)
    notes: Optional[str] = None
    location: Optional[str] = None


class PlantUpdate(CamelModel):
    """Schema to edit a plant; unset fields are left alone."""
    name: Optional[str] = Field(None, min_length=1)
    image_uri: Optional[str] = None
    care_details: Optional[PlantCareDetails] = None
    notes: Optional[str] = None
    location: Optional[str] = None


class PlantResponse(Plant):
    """A plant plus its derived watering status."""
    watering_interval_days: int
    watering_frequency_label: str
    days_until_watering: Optional[int] = None
    watering_urgency: str
    needs_water: bool = False


class PlantCollectionSnapshot(CamelModel):
    """Exactly what survives a restart: the plants and the preferences."""
    my_plants: List[Plant] = Field(default_factory=list)
    notification_preferences: NotificationPreferences = Field(default_factory=NotificationPreferences)
