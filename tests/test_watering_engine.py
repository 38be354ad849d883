from datetime import datetime, timezone

from app.plants.watering_engine import calculate_next_watering_date, compute_watering_status


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


def test_weekly_from_start_of_march():
    assert calculate_next_watering_date("Weekly", utc(2025, 3, 1)) == utc(2025, 3, 8)


def test_monthly_crosses_short_february():
    # 30 days after Jan 31 is Mar 2, never an invalid "Feb 31"
    assert calculate_next_watering_date("Monthly", utc(2025, 1, 31)) == utc(2025, 3, 2)


def test_leap_year_february():
    assert calculate_next_watering_date("Daily", utc(2024, 2, 28)) == utc(2024, 2, 29)


def test_year_rollover():
    assert calculate_next_watering_date("Every 5 days", utc(2025, 12, 29)) == utc(2026, 1, 3)


def test_time_of_day_is_preserved():
    result = calculate_next_watering_date("Every 3 days", utc(2025, 3, 1, 17, 45, 12))
    assert result == utc(2025, 3, 4, 17, 45, 12)


def test_naive_datetime_is_read_as_utc():
    result = calculate_next_watering_date("Weekly", datetime(2025, 3, 1, 8, 0))
    assert result == utc(2025, 3, 8, 8, 0)
    assert result.tzinfo is not None


def test_unparseable_frequency_uses_seven_days():
    assert calculate_next_watering_date("whenever", utc(2025, 3, 1)) == utc(2025, 3, 8)


def test_same_inputs_same_output():
    start = utc(2025, 6, 15, 10)
    assert calculate_next_watering_date("Every 2 weeks", start) == calculate_next_watering_date("Every 2 weeks", start)


def test_status_upcoming_due_overdue():
    now = utc(2025, 3, 5, 22)

    upcoming = compute_watering_status(utc(2025, 3, 8), now=now)
    assert upcoming.urgency == "upcoming"
    assert upcoming.days_until_due == 3
    assert not upcoming.needs_water

    due = compute_watering_status(utc(2025, 3, 5, 1), now=now)
    assert due.urgency == "due_today"
    assert due.needs_water

    overdue = compute_watering_status(utc(2025, 3, 3), now=now)
    assert overdue.urgency == "overdue"
    assert overdue.days_until_due == -2
    assert overdue.recommended_action == "Overdue by 2 day(s)"


def test_status_without_watering_date():
    status = compute_watering_status(None, now=utc(2025, 3, 5))
    assert status.urgency == "unscheduled"
    assert status.days_until_due is None
