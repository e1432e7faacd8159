"""Short human-readable labels for intervals, shown on the answer buttons."""

from synapse_srs.domain.constants import MINUTES_PER_DAY, MINUTES_PER_HOUR

from .intervals import round_half_up


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _format_long(days: float) -> str:
    # Month and year labels shared by both formatters
    if days < 365:
        return _plural(round_half_up(days / 30), "month")
    return _plural(round_half_up(days / 365), "year")


def format_interval(minutes: float) -> str:
    """
    Label for a minute-granularity delay.

    <1m, 5m, 3h, 1 day, 12 days, 2 months, 1 year ...
    """
    if minutes < 1:
        return "<1m"
    if minutes < MINUTES_PER_HOUR:
        return f"{round_half_up(minutes)}m"
    if minutes < MINUTES_PER_DAY:
        return f"{round_half_up(minutes / MINUTES_PER_HOUR)}h"

    days = round_half_up(minutes / MINUTES_PER_DAY)
    if days == 1:
        return "1 day"
    if days < 30:
        return f"{days} days"
    return _format_long(days)


def format_interval_days(days: float) -> str:
    """Label for a day-granularity interval."""
    if days < 1:
        return "<1 day"
    if days == 1:
        return "1 day"
    if days < 30:
        return f"{round_half_up(days)} days"
    return _format_long(days)
