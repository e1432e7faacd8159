"""
Domain models for SM-2 scheduling.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from . import constants as C
from .errors import InvalidRatingError, UnknownCardStateError


class CardState(str, Enum):
    """Memory phase of a card. New is only ever an input, never a grading output."""

    NEW = "new"
    LEARNING = "learning"
    REVIEW = "review"
    RELEARNING = "relearning"

    @classmethod
    def coerce(cls, value: "CardState | str") -> "CardState":
        try:
            return cls(value)
        except ValueError:
            raise UnknownCardStateError(value) from None


class Rating(str, Enum):
    """Answer button pressed by the user."""

    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"

    @classmethod
    def coerce(cls, value: "Rating | str") -> "Rating":
        try:
            return cls(value)
        except ValueError:
            raise InvalidRatingError(value) from None


@dataclass(frozen=True)
class SchedulerSettings:
    """
    User-configurable scheduler options, immutable for the duration of a call.

    Attributes:
        learning_steps: Step spec for new cards, e.g. "1m 10m 1d".
        relearning_steps: Step spec for lapsed cards.
        graduating_interval_days: Interval given when a card leaves Learning via Good.
        easy_interval_days: Interval given when a card leaves Learning via Easy.
        starting_ease: Ease assigned on the first-ever grading.
        easy_bonus: Extra multiplier for Easy on review cards.
        hard_interval: Multiplier for Hard on review cards.
        interval_modifier: Global multiplier for all non-Again review intervals.
        new_interval_multiplier: Fraction of the interval kept after a lapse.
        minimum_interval_days: Lower bound for review intervals.
        maximum_interval_days: Upper bound for review intervals.
        again_delay_minutes: Carried for compatibility; not used by the grading math.
    """

    learning_steps: str = C.DEFAULT_LEARNING_STEPS
    relearning_steps: str = C.DEFAULT_RELEARNING_STEPS
    graduating_interval_days: float = C.DEFAULT_GRADUATING_INTERVAL
    easy_interval_days: float = C.DEFAULT_EASY_INTERVAL
    starting_ease: float = C.DEFAULT_STARTING_EASE
    easy_bonus: float = C.DEFAULT_EASY_BONUS
    hard_interval: float = C.DEFAULT_HARD_INTERVAL
    interval_modifier: float = C.DEFAULT_INTERVAL_MODIFIER
    new_interval_multiplier: float = C.DEFAULT_NEW_INTERVAL_MULTIPLIER
    minimum_interval_days: float = C.DEFAULT_MINIMUM_INTERVAL
    maximum_interval_days: float = C.DEFAULT_MAXIMUM_INTERVAL
    again_delay_minutes: float = C.DEFAULT_AGAIN_DELAY_MINUTES


@dataclass(frozen=True)
class Card:
    """
    Snapshot of a flashcard's scheduling fields.

    The engine reads this and never mutates it; storage-only columns
    (front, back, timestamps) stay with the caller.
    """

    state: CardState | str
    due_at: datetime
    interval_days: float = 0
    ease: float = C.DEFAULT_STARTING_EASE
    learning_step_index: int = 0
    reps: int = 0
    lapses: int = 0

    # Queue bookkeeping (not used by grading)
    suspended: bool = False
    last_reviewed_at: datetime | None = None

    @classmethod
    def new(cls, due_at: datetime, settings: SchedulerSettings | None = None) -> "Card":
        """Create a fresh card in state New."""
        ease = settings.starting_ease if settings else C.DEFAULT_STARTING_EASE
        return cls(state=CardState.NEW, due_at=due_at, ease=ease)


@dataclass(frozen=True)
class SchedulingResult:
    """Full replacement field set for a graded card."""

    state: CardState
    due_at: datetime
    interval_days: float
    ease: float
    learning_step_index: int
    reps: int
    lapses: int


@dataclass(frozen=True)
class IntervalPreview:
    """Human-readable labels for each answer button. `hard` is None for new cards."""

    again: str
    good: str
    easy: str
    hard: str | None = None


@dataclass(frozen=True)
class ReviewRecord:
    """
    Immutable audit entry written by the caller after each grading.

    Attributes:
        rating: Button pressed.
        reviewed_at: Reference time used for grading.
        previous_state: Card state before grading.
        previous_interval: Card interval before grading (days).
        new_state: Card state after grading.
        new_interval: Interval after grading (days).
        new_due_at: Due time after grading.
        elapsed_ms: Time the user spent answering, if known.
        card_id: Identifier of the graded card, when the caller tracks one.
        deck_id: Identifier of the card's deck, when the caller tracks one.
    """

    rating: Rating
    reviewed_at: datetime
    previous_state: CardState
    previous_interval: float
    new_state: CardState
    new_interval: float
    new_due_at: datetime
    elapsed_ms: int | None = None
    card_id: str | None = None
    deck_id: str | None = None


@dataclass(frozen=True)
class DueCounts:
    """Number of due cards per queue."""

    new: int = 0
    learning: int = 0
    review: int = 0

    @property
    def total(self) -> int:
        return self.new + self.learning + self.review
