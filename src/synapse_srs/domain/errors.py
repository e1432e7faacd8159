"""Exceptions raised by the scheduling engine."""


class SchedulerError(Exception):
    """Base class for all scheduler errors."""


class UnknownCardStateError(SchedulerError, ValueError):
    """
    Raised when a card carries a state the engine does not know.

    This is an invariant violation by the caller; the engine never guesses
    a default transition.
    """

    def __init__(self, state: object):
        self.state = state
        super().__init__(f"Unknown card state: {state!r}")


class InvalidRatingError(SchedulerError, ValueError):
    """Raised when a rating is not one of again/hard/good/easy."""

    def __init__(self, rating: object):
        self.rating = rating
        super().__init__(f"Invalid rating: {rating!r}")
