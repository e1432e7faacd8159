from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from synapse_srs.application.scheduler.intervals import (
    calculate_due_date,
    calculate_due_date_days,
    clamp_ease,
    ensure_minimum_progress,
    is_interday,
    round_half_up,
)

NOW = datetime(2024, 3, 10, 15, 30, 12, 345000, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "minutes, expected",
    [(1, False), (1439, False), (1439.9, False), (1440, True), (4320, True)],
)
def test_is_interday(minutes, expected):
    assert is_interday(minutes) is expected


def test_intraday_due_date_is_exact():
    assert calculate_due_date(10, NOW) == NOW + timedelta(minutes=10)
    assert calculate_due_date(5.5, NOW) == NOW + timedelta(minutes=5, seconds=30)


def test_interday_due_date_snaps_to_rollover_hour():
    due = calculate_due_date(1440, NOW)
    assert due == datetime(2024, 3, 11, 4, 0, tzinfo=timezone.utc)


def test_interday_due_date_floors_partial_days():
    # 1.9 days -> 1 calendar day
    due = calculate_due_date(1440 * 1.9, NOW)
    assert due == datetime(2024, 3, 11, 4, 0, tzinfo=timezone.utc)


def test_interday_ignores_clock_time_of_now():
    early = NOW.replace(hour=1)
    late = NOW.replace(hour=23)
    assert calculate_due_date(2880, early) == calculate_due_date(2880, late)


def test_due_date_days_rounds_and_pins():
    assert calculate_due_date_days(3, NOW) == datetime(2024, 3, 13, 4, 0, tzinfo=timezone.utc)
    assert calculate_due_date_days(2.5, NOW) == datetime(2024, 3, 13, 4, 0, tzinfo=timezone.utc)
    assert calculate_due_date_days(2.4, NOW) == datetime(2024, 3, 12, 4, 0, tzinfo=timezone.utc)


def test_due_date_days_crosses_month_boundary():
    due = calculate_due_date_days(25, NOW)
    assert due == datetime(2024, 4, 4, 4, 0, tzinfo=timezone.utc)


def test_due_date_keeps_naive_datetimes_naive():
    naive = datetime(2024, 1, 31, 22, 0)
    due = calculate_due_date_days(1, naive)
    assert due == datetime(2024, 2, 1, 4, 0)
    assert due.tzinfo is None


def test_due_date_keeps_timezone():
    tz = timezone(timedelta(hours=2))
    local = datetime(2024, 6, 1, 23, 59, tzinfo=tz)
    due = calculate_due_date_days(1, local)
    assert due == datetime(2024, 6, 2, 4, 0, tzinfo=tz)
    assert due.utcoffset() == timedelta(hours=2)


def test_intraday_due_date_is_absolute_across_dst():
    # 2024-03-10 02:00 local is skipped in New York
    ny = ZoneInfo("America/New_York")
    evening = datetime(2024, 3, 9, 20, 0, tzinfo=ny)

    due = calculate_due_date(720, evening)

    assert due.astimezone(timezone.utc) - evening.astimezone(timezone.utc) == timedelta(hours=12)
    assert due.replace(tzinfo=None) == datetime(2024, 3, 10, 9, 0)
    assert due.utcoffset() == timedelta(hours=-4)


@pytest.mark.parametrize(
    "value, expected",
    [(0.4, 0), (0.5, 1), (2.5, 3), (32.5, 33), (12.0, 12), (33.49, 33)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_clamp_ease():
    assert clamp_ease(1.0) == 1.3
    assert clamp_ease(2.5) == 2.5
    assert clamp_ease(3.2) == 3.0
    assert clamp_ease(1.0, minimum=1.1, maximum=2.0) == 1.1


def test_minimum_progress_forces_growth():
    assert ensure_minimum_progress(100, 100, 1) == 101
    assert ensure_minimum_progress(80, 100, 1) == 101


def test_minimum_progress_keeps_real_growth():
    assert ensure_minimum_progress(25, 10, 1) == 25


def test_minimum_progress_floors_at_minimum_without_history():
    assert ensure_minimum_progress(0.5, 0, 1) == 1
    assert ensure_minimum_progress(3, 0, 1) == 3
