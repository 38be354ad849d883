"""Watering schedule engine.

Deterministic rules (no I/O) used for:
- next watering date after adding / watering / editing a plant
- UI guidance ("Water today", "Overdue by 2 day(s)")
- Reminder planning (WaterReminderPlanner)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone, timedelta
from typing import Optional

from app.plants.care_utils import parse_frequency_to_days


@dataclass(frozen=True)
class WateringStatus:
    urgency: str  # "upcoming" | "due_today" | "overdue" | "unscheduled"
    days_until_due: Optional[int]
    needs_water: bool
    recommended_action: str


def _utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def calculate_next_watering_date(frequency_str: Optional[str], from_dt: datetime) -> datetime:
    """
    Next watering instant: from_dt plus the parsed interval in whole days.

    The time of day of from_dt is kept; naive datetimes are read as UTC.
    """
    return _utc(from_dt) + timedelta(days=parse_frequency_to_days(frequency_str))


def compute_watering_status(
    next_watering_date: Optional[datetime],
    *,
    now: Optional[datetime] = None,
) -> WateringStatus:
    """Date-based status of a plant relative to its next watering date."""
    if next_watering_date is None:
        return WateringStatus(
            urgency="unscheduled",
            days_until_due=None,
            needs_water=False,
            recommended_action="No watering scheduled",
        )

    now_utc = _utc(now) if now else utc_now()

    # Date-based computation keeps UX stable (no hour-level jitter).
    days_until_due = (_utc(next_watering_date).date() - now_utc.date()).days

    if days_until_due < 0:
        return WateringStatus(
            urgency="overdue",
            days_until_due=days_until_due,
            needs_water=True,
            recommended_action=f"Overdue by {abs(days_until_due)} day(s)",
        )
    if days_until_due == 0:
        return WateringStatus(
            urgency="due_today",
            days_until_due=0,
            needs_water=True,
            recommended_action="Water today",
        )
    return WateringStatus(
        urgency="upcoming",
        days_until_due=days_until_due,
        needs_water=False,
        recommended_action=f"Next watering in {days_until_due} day(s)",
    )
