"""
Date and interval math shared by the state transition rules.

Intraday delays produce exact timestamps; interday delays snap to the
daily rollover hour so reviews line up on calendar days.
"""

import math
from datetime import datetime, time, timedelta, timezone

from synapse_srs.domain.constants import (
    DAY_ROLLOVER_HOUR,
    MAX_EASE,
    MIN_EASE,
    MINUTES_PER_DAY,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return math.floor(value + 0.5)


def is_interday(minutes: float) -> bool:
    return minutes >= MINUTES_PER_DAY


def add_minutes(moment: datetime, minutes: float) -> datetime:
    """Absolute-time addition; aware datetimes keep their zone but not their wall clock."""
    if moment.tzinfo is None:
        return moment + timedelta(minutes=minutes)
    shifted = moment.astimezone(timezone.utc) + timedelta(minutes=minutes)
    return shifted.astimezone(moment.tzinfo)


def minutes_between(start: datetime, end: datetime) -> float:
    if start.tzinfo is not None and end.tzinfo is not None:
        start = start.astimezone(timezone.utc)
        end = end.astimezone(timezone.utc)
    return (end - start).total_seconds() / 60


def _rollover(now: datetime, days: int) -> datetime:
    """`now` advanced by whole calendar days, clock pinned to the rollover hour."""
    return datetime.combine(
        now.date() + timedelta(days=days),
        time(hour=DAY_ROLLOVER_HOUR),
        tzinfo=now.tzinfo,
    )


def calculate_due_date(delay_minutes: float, now: datetime) -> datetime:
    """
    Due date for a learning/relearning step.

    Interday steps advance floor(delay / 1 day) calendar days and land at
    04:00; intraday steps are due exactly `delay_minutes` after `now`.
    """
    if is_interday(delay_minutes):
        return _rollover(now, math.floor(delay_minutes / MINUTES_PER_DAY))
    return add_minutes(now, delay_minutes)


def calculate_due_date_days(days: float, now: datetime) -> datetime:
    """Due date for a review interval: round(days) calendar days ahead at 04:00."""
    return _rollover(now, round_half_up(days))


def clamp_ease(ease: float, minimum: float = MIN_EASE, maximum: float = MAX_EASE) -> float:
    return max(minimum, min(maximum, ease))


def ensure_minimum_progress(
    new_interval: float, old_interval: float, minimum_interval: float
) -> float:
    """
    Anti-stagnation: a successful review must grow the interval by at least a day.
    """
    if old_interval > 0 and new_interval <= old_interval:
        return old_interval + 1
    return max(new_interval, minimum_interval)
