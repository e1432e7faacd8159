# Application Scheduler Package
from .formatting import format_interval, format_interval_days
from .intervals import (
    calculate_due_date,
    calculate_due_date_days,
    clamp_ease,
    ensure_minimum_progress,
    is_interday,
)
from .preview import preview_intervals
from .steps import format_steps, parse_steps, steps_for_mode
from .transitions import (
    grade_card,
    schedule_learning,
    schedule_new,
    schedule_relearning,
    schedule_review,
)

__all__ = [
    "parse_steps",
    "format_steps",
    "steps_for_mode",
    "is_interday",
    "calculate_due_date",
    "calculate_due_date_days",
    "clamp_ease",
    "ensure_minimum_progress",
    "format_interval",
    "format_interval_days",
    "schedule_new",
    "schedule_learning",
    "schedule_review",
    "schedule_relearning",
    "grade_card",
    "preview_intervals",
]
