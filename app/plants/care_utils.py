"""Care schedule utilities for parsing watering frequencies."""

import re
from typing import List, Optional, Tuple

DEFAULT_INTERVAL_DAYS = 7

# Larger counts in free text are treated as unparseable.
MAX_INTERVAL_DAYS = 365

# Bump the version whenever a phrase or its day count changes; stored
# next_watering_date values were computed against a specific table.
WATERING_PHRASES_VERSION = 3

# Ordered: first substring hit wins. The 14-day phrases sit just ahead of
# "weekly", which is a substring of "biweekly" / "bi-weekly".
WATERING_PHRASES: List[Tuple[Tuple[str, ...], int]] = [
    (("daily", "every day"), 1),
    (("every 2 days",), 2),
    (("every 3 days",), 3),
    (("every 5 days",), 5),
    (("every 2 weeks", "biweekly", "bi-weekly"), 14),
    (("every 7 days", "weekly"), 7),
    (("every 10 days",), 10),
    (("every 3 weeks",), 21),
    (("monthly", "every month"), 30),
]

# Picker options offered when editing a plant's care details.
WATERING_OPTIONS: List[Tuple[str, int]] = [
    ("Daily", 1),
    ("Every 2 days", 2),
    ("Every 3 days", 3),
    ("Every 5 days", 5),
    ("Weekly", 7),
    ("Every 10 days", 10),
    ("Every 2 weeks", 14),
    ("Every 3 weeks", 21),
    ("Monthly", 30),
]

_DAYS_PATTERN = re.compile(r"(\d+).*day")


def parse_frequency_to_days(frequency_str: Optional[str]) -> int:
    """
    Parse a free-text watering frequency into a whole number of days (>= 1).

    Examples:
        "Weekly" -> 7
        "Every 2 weeks" -> 14
        "Water every 4 days" -> 4
        "Every 7-10 days" -> 7 (first number before "day")
        "Every 2-3 weeks" -> 7 (no phrase, no "day": default)
        "Every 3000000 days" -> 7 (over MAX_INTERVAL_DAYS)
        "" -> 7

    Never raises; unknown text falls back to DEFAULT_INTERVAL_DAYS.
    """
    if not isinstance(frequency_str, str) or not frequency_str:
        return DEFAULT_INTERVAL_DAYS

    freq = frequency_str.lower()

    for phrases, days in WATERING_PHRASES:
        if any(phrase in freq for phrase in phrases):
            return days

    match = _DAYS_PATTERN.search(freq)
    if match:
        try:
            days = int(match.group(1))
        except ValueError:
            # Digit runs past the int conversion limit
            return DEFAULT_INTERVAL_DAYS
        if 1 <= days <= MAX_INTERVAL_DAYS:
            return days

    return DEFAULT_INTERVAL_DAYS


def frequency_label_for_days(days: int) -> str:
    """Closest picker label for a day count (ties go to the shorter interval)."""
    label, _ = min(WATERING_OPTIONS, key=lambda option: abs(option[1] - days))
    return label
