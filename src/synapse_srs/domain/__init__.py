# Domain Package
from .errors import InvalidRatingError, SchedulerError, UnknownCardStateError
from .models import (
    Card,
    CardState,
    DueCounts,
    IntervalPreview,
    Rating,
    ReviewRecord,
    SchedulerSettings,
    SchedulingResult,
)

__all__ = [
    "Card",
    "CardState",
    "DueCounts",
    "IntervalPreview",
    "Rating",
    "ReviewRecord",
    "SchedulerSettings",
    "SchedulingResult",
    "SchedulerError",
    "UnknownCardStateError",
    "InvalidRatingError",
]
