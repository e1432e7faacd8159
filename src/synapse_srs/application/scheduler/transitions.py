"""
SM-2 state transition rules (legacy Anki scheduler).

One scheduling function per card state; `grade_card` dispatches on the
card's current state. Every function is pure: it reads the card snapshot
and returns a new SchedulingResult.

States:
    new -> learning | review
    learning -> learning | review
    review -> review | relearning
    relearning -> relearning | review
"""

import logging
from datetime import datetime, timezone

from synapse_srs.domain.constants import (
    EASY_EASE_DELTA,
    HARD_EASE_DELTA,
    LAPSE_EASE_DELTA,
    MINUTES_PER_DAY,
    SINGLE_STEP_HARD_FACTOR,
)
from synapse_srs.domain.models import (
    Card,
    CardState,
    Rating,
    SchedulerSettings,
    SchedulingResult,
)

from .intervals import (
    calculate_due_date,
    calculate_due_date_days,
    clamp_ease,
    ensure_minimum_progress,
    round_half_up,
)
from .steps import parse_steps

logger = logging.getLogger(__name__)


def _graduate(
    interval_days: float,
    ease: float,
    reps: int,
    lapses: int,
    now: datetime,
) -> SchedulingResult:
    return SchedulingResult(
        state=CardState.REVIEW,
        due_at=calculate_due_date_days(interval_days, now),
        interval_days=interval_days,
        ease=ease,
        learning_step_index=0,
        reps=reps,
        lapses=lapses,
    )


def _current_step(card: Card, steps: list[float]) -> int:
    # Settings may have shrunk since the card entered its phase
    return min(max(card.learning_step_index or 0, 0), len(steps) - 1)


# ---------- New ----------


def schedule_new(rating: Rating, settings: SchedulerSettings, now: datetime) -> SchedulingResult:
    """
    Schedule a card graded for the first time.

    Again/Hard/Good enter learning at step 0 (Hard behaves like Good), Easy
    skips learning. Again does not count as a repetition.
    """
    steps = parse_steps(settings.learning_steps)

    if not steps or rating is Rating.EASY:
        interval = (
            settings.easy_interval_days
            if rating is Rating.EASY
            else settings.graduating_interval_days
        )
        return _graduate(interval, settings.starting_ease, 1, 0, now)

    return SchedulingResult(
        state=CardState.LEARNING,
        due_at=calculate_due_date(steps[0], now),
        interval_days=0,
        ease=settings.starting_ease,
        learning_step_index=0,
        reps=0 if rating is Rating.AGAIN else 1,
        lapses=0,
    )


# ---------- Learning ----------


def _learning(
    card: Card, delay_minutes: float, step_index: int, reps: int, now: datetime
) -> SchedulingResult:
    return SchedulingResult(
        state=CardState.LEARNING,
        due_at=calculate_due_date(delay_minutes, now),
        interval_days=0,
        ease=card.ease,
        learning_step_index=step_index,
        reps=reps,
        lapses=card.lapses,
    )


def schedule_learning(
    card: Card, rating: Rating, settings: SchedulerSettings, now: datetime
) -> SchedulingResult:
    """Schedule a card that is working through its learning steps."""
    steps = parse_steps(settings.learning_steps)

    if not steps:
        return _graduate(
            settings.graduating_interval_days, card.ease, card.reps + 1, card.lapses, now
        )

    if rating is Rating.EASY:
        return _graduate(
            settings.easy_interval_days, card.ease, card.reps + 1, card.lapses, now
        )

    if rating is Rating.AGAIN:
        return _learning(card, steps[0], 0, card.reps, now)

    current = _current_step(card, steps)

    if rating is Rating.GOOD:
        next_index = current + 1
        if next_index >= len(steps):
            return _graduate(
                settings.graduating_interval_days,
                card.ease,
                card.reps + 1,
                card.lapses,
                now,
            )
        return _learning(card, steps[next_index], next_index, card.reps + 1, now)

    # Hard
    if current == 0:
        if len(steps) == 1:
            delay = min(steps[0] * SINGLE_STEP_HARD_FACTOR, steps[0] + MINUTES_PER_DAY)
        else:
            delay = (steps[0] + steps[1]) / 2
        return _learning(card, delay, 0, card.reps + 1, now)

    return _learning(card, steps[current], current, card.reps + 1, now)


# ---------- Review ----------


def schedule_review(
    card: Card, rating: Rating, settings: SchedulerSettings, now: datetime
) -> SchedulingResult:
    """
    Schedule a graduated card with the SM-2 ease/interval rules.

    Again is a lapse: ease drops, lapses grows and the card enters
    relearning (or snaps back to the minimum interval when no relearning
    steps are configured).
    """
    old_interval = card.interval_days
    ease = card.ease

    if rating is Rating.AGAIN:
        ease = clamp_ease(ease + LAPSE_EASE_DELTA)
        lapses = card.lapses + 1
        interval = max(1, round_half_up(old_interval * settings.new_interval_multiplier))

        relearn_steps = parse_steps(settings.relearning_steps)
        if relearn_steps:
            return SchedulingResult(
                state=CardState.RELEARNING,
                due_at=calculate_due_date(relearn_steps[0], now),
                interval_days=interval,
                ease=ease,
                learning_step_index=0,
                reps=card.reps + 1,
                lapses=lapses,
            )
        return _graduate(settings.minimum_interval_days, ease, card.reps + 1, lapses, now)

    if rating is Rating.HARD:
        ease = clamp_ease(ease + HARD_EASE_DELTA)
        interval = old_interval * settings.hard_interval
    elif rating is Rating.GOOD:
        interval = old_interval * ease
    else:
        # Easy grows from the ease the card had before this answer
        interval = old_interval * ease * settings.easy_bonus
        ease = clamp_ease(ease + EASY_EASE_DELTA)

    interval *= settings.interval_modifier
    interval = max(settings.minimum_interval_days, interval)
    interval = min(settings.maximum_interval_days, interval)
    interval = ensure_minimum_progress(interval, old_interval, settings.minimum_interval_days)
    interval = round_half_up(interval)

    return _graduate(interval, ease, card.reps + 1, card.lapses, now)


# ---------- Relearning ----------


def _relearning(
    card: Card, steps: list[float], step_index: int, reps: int, now: datetime
) -> SchedulingResult:
    return SchedulingResult(
        state=CardState.RELEARNING,
        due_at=calculate_due_date(steps[step_index], now),
        interval_days=card.interval_days,
        ease=card.ease,
        learning_step_index=step_index,
        reps=reps,
        lapses=card.lapses,
    )


def schedule_relearning(
    card: Card, rating: Rating, settings: SchedulerSettings, now: datetime
) -> SchedulingResult:
    """
    Schedule a lapsed card working through its relearning steps.

    Unlike learning, Hard always repeats the current step.
    """
    steps = parse_steps(settings.relearning_steps)

    if not steps or rating is Rating.EASY:
        return _graduate(
            settings.minimum_interval_days, card.ease, card.reps + 1, card.lapses, now
        )

    if rating is Rating.AGAIN:
        return _relearning(card, steps, 0, card.reps, now)

    current = _current_step(card, steps)

    if rating is Rating.GOOD:
        next_index = current + 1
        if next_index >= len(steps):
            return _graduate(
                settings.minimum_interval_days,
                card.ease,
                card.reps + 1,
                card.lapses,
                now,
            )
        return _relearning(card, steps, next_index, card.reps + 1, now)

    # Hard
    return _relearning(card, steps, current, card.reps + 1, now)


# ---------- Dispatch ----------


def grade_card(
    card: Card,
    rating: Rating | str,
    settings: SchedulerSettings,
    now: datetime | None = None,
) -> SchedulingResult:
    """
    Grade a card and compute its next scheduling state.

    Args:
        card: Current card snapshot (not modified).
        rating: again, hard, good or easy.
        settings: Scheduler settings for the card's deck.
        now: Reference time; defaults to the current UTC time.

    Returns:
        The replacement scheduling fields. Never in state New.

    Raises:
        UnknownCardStateError: If the card's state is not a known phase.
        InvalidRatingError: If the rating is not a known button.
    """
    state = CardState.coerce(card.state)
    rating = Rating.coerce(rating)
    if now is None:
        now = datetime.now(timezone.utc)

    if state is CardState.NEW:
        result = schedule_new(rating, settings, now)
    elif state is CardState.LEARNING:
        result = schedule_learning(card, rating, settings, now)
    elif state is CardState.REVIEW:
        result = schedule_review(card, rating, settings, now)
    else:
        result = schedule_relearning(card, rating, settings, now)

    logger.debug(
        f"Graded {state.value} card {rating.value}: -> {result.state.value}, "
        f"interval={result.interval_days}, due={result.due_at.isoformat()}"
    )
    return result
