"""
Helpers for the caller side of a grading call.

The engine only computes a SchedulingResult; persisting it and writing the
audit trail is the caller's job. These functions build both payloads from
the pre-grade snapshot so callers do not have to reassemble them by hand.
"""

import dataclasses
from datetime import datetime

from synapse_srs.domain.models import (
    Card,
    CardState,
    Rating,
    ReviewRecord,
    SchedulingResult,
)


def apply_result(card: Card, result: SchedulingResult, reviewed_at: datetime) -> Card:
    """Return a copy of `card` with the scheduling result merged in."""
    return dataclasses.replace(
        card,
        state=result.state,
        due_at=result.due_at,
        interval_days=result.interval_days,
        ease=result.ease,
        learning_step_index=result.learning_step_index,
        reps=result.reps,
        lapses=result.lapses,
        last_reviewed_at=reviewed_at,
    )


def build_review_record(
    card: Card,
    result: SchedulingResult,
    rating: Rating | str,
    reviewed_at: datetime,
    elapsed_ms: int | None = None,
    card_id: str | None = None,
    deck_id: str | None = None,
) -> ReviewRecord:
    """
    Build the immutable audit entry for one grading.

    Args:
        card: Snapshot taken *before* grading.
        result: What grade_card returned for that snapshot.
        rating: Button pressed.
        reviewed_at: The `now` passed to grade_card.
        elapsed_ms: Answer time; zero or missing is stored as None.
    """
    return ReviewRecord(
        rating=Rating.coerce(rating),
        reviewed_at=reviewed_at,
        previous_state=CardState.coerce(card.state),
        previous_interval=card.interval_days,
        new_state=result.state,
        new_interval=result.interval_days,
        new_due_at=result.due_at,
        elapsed_ms=elapsed_ms or None,
        card_id=card_id,
        deck_id=deck_id,
    )
