import pytest

from app.plants.care_utils import (
    DEFAULT_INTERVAL_DAYS,
    MAX_INTERVAL_DAYS,
    WATERING_OPTIONS,
    frequency_label_for_days,
    parse_frequency_to_days,
)


@pytest.mark.parametrize(
    "text, days",
    [
        ("Daily", 1),
        ("Water every day", 1),
        ("Every 2 days", 2),
        ("Every 3 days", 3),
        ("Every 5 days", 5),
        ("Every 7 days", 7),
        ("Weekly", 7),
        ("Every 10 days", 10),
        ("Every 2 weeks", 14),
        ("Biweekly", 14),
        ("Bi-weekly", 14),
        ("Every 3 weeks", 21),
        ("Monthly", 30),
        ("Every month in winter", 30),
        ("WEEKLY", 7),
    ],
)
def test_known_phrases(text, days):
    assert parse_frequency_to_days(text) == days


@pytest.mark.parametrize(
    "text, days",
    [
        ("Water every 4 days", 4),
        ("Every 7-10 days", 7),
        ("12 days between waterings", 12),
        ("about 6 days", 6),
    ],
)
def test_number_before_day(text, days):
    assert parse_frequency_to_days(text) == days


@pytest.mark.parametrize(
    "text",
    ["", "   ", "Keep soil moist", "Every 2-3 weeks", "0 days", None, 42],
)
def test_unrecognised_text_falls_back_to_default(text):
    assert parse_frequency_to_days(text) == DEFAULT_INTERVAL_DAYS == 7


@pytest.mark.parametrize(
    "text",
    [
        "Every 3000000 days",
        "Every 366 days",
        "9" * 5000 + " days",
    ],
)
def test_out_of_range_counts_fall_back_to_default(text):
    assert parse_frequency_to_days(text) == DEFAULT_INTERVAL_DAYS


def test_count_at_the_upper_bound_is_kept():
    assert parse_frequency_to_days(f"Every {MAX_INTERVAL_DAYS} days") == MAX_INTERVAL_DAYS


@pytest.mark.parametrize(
    "text, days",
    [
        ("Weekly, or every 10 days in summer", 7),
        ("Every 3 weeks, weekly when flowering", 7),
        ("Biweekly, weekly in summer", 14),
        ("Every 5 days, or every 2 weeks in winter", 5),
    ],
)
def test_first_phrase_in_table_order_wins(text, days):
    assert parse_frequency_to_days(text) == days


def test_parse_is_deterministic():
    text = "Every 10 days during summer"
    assert parse_frequency_to_days(text) == parse_frequency_to_days(text) == 10


def test_every_picker_option_parses_to_its_days():
    for label, days in WATERING_OPTIONS:
        assert parse_frequency_to_days(label) == days


@pytest.mark.parametrize(
    "days, label",
    [(1, "Daily"), (4, "Every 3 days"), (7, "Weekly"), (12, "Every 10 days"), (45, "Monthly")],
)
def test_frequency_label_for_days(days, label):
    assert frequency_label_for_days(days) == label
