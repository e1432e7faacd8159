"""
Interval preview for the answer buttons.

Runs every rating through the transition rules against one snapshot of
`now` without persisting anything.
"""

from datetime import datetime, timezone

from synapse_srs.domain.models import (
    Card,
    CardState,
    IntervalPreview,
    Rating,
    SchedulerSettings,
    SchedulingResult,
)

from .formatting import format_interval, format_interval_days
from .intervals import minutes_between, round_half_up
from .transitions import grade_card

STEP_STATES = (CardState.LEARNING, CardState.RELEARNING)


def _label(result: SchedulingResult, now: datetime) -> str:
    if result.state in STEP_STATES:
        minutes = round_half_up(minutes_between(now, result.due_at))
        return format_interval(minutes)
    return format_interval_days(result.interval_days)


def preview_intervals(
    card: Card, settings: SchedulerSettings, now: datetime | None = None
) -> IntervalPreview:
    """
    Label what each button would do to `card`.

    Hard is left out for new cards, where it is not a distinct choice.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    labels = {
        rating: _label(grade_card(card, rating, settings, now), now)
        for rating in (Rating.AGAIN, Rating.GOOD, Rating.EASY)
    }

    hard = None
    if CardState.coerce(card.state) is not CardState.NEW:
        hard = _label(grade_card(card, Rating.HARD, settings, now), now)

    return IntervalPreview(
        again=labels[Rating.AGAIN],
        hard=hard,
        good=labels[Rating.GOOD],
        easy=labels[Rating.EASY],
    )
