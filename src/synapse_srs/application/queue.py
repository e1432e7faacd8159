"""
Due-card selection over in-memory card snapshots.

Mirrors the storage queries a study session runs: only unsuspended cards
whose due time has passed are eligible.
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from synapse_srs.domain.constants import DEFAULT_DUE_LIMIT
from synapse_srs.domain.models import Card, CardState, DueCounts

logger = logging.getLogger(__name__)


def is_due(card: Card, now: datetime) -> bool:
    return not card.suspended and card.due_at <= now


def due_cards(cards: Iterable[Card], now: datetime, limit: int = DEFAULT_DUE_LIMIT) -> list[Card]:
    """
    Cards ready for study, oldest due first.

    Args:
        cards: Candidate cards (any state).
        now: Reference time.
        limit: Maximum number of cards returned.
    """
    ready = sorted((c for c in cards if is_due(c, now)), key=lambda c: c.due_at)
    if len(ready) > limit:
        logger.debug(f"Due queue truncated from {len(ready)} to {limit} cards")
    return ready[:limit]


def due_counts(cards: Iterable[Card], now: datetime) -> DueCounts:
    """
    Count due cards per queue. Relearning cards count as learning.
    """
    new = learning = review = 0
    for card in cards:
        if not is_due(card, now):
            continue
        state = CardState.coerce(card.state)
        if state is CardState.NEW:
            new += 1
        elif state is CardState.REVIEW:
            review += 1
        else:
            learning += 1
    return DueCounts(new=new, learning=learning, review=review)
