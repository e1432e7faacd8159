"""
Step parsing for learning and relearning phases.

Turns a human-written step spec such as "1m 10m 1d" into delays in minutes.
"""

import logging
import re
from decimal import Decimal

from synapse_srs.domain.constants import (
    LEARNING_MODE_STEPS,
    MINUTES_PER_DAY,
    MINUTES_PER_HOUR,
)

logger = logging.getLogger(__name__)

STEP_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)([mhd])?$", re.ASCII)

UNIT_MINUTES = {
    "m": 1,
    "h": MINUTES_PER_HOUR,
    "d": MINUTES_PER_DAY,
}


def parse_steps(spec: str | None) -> list[float]:
    """
    Parse a step spec into an ordered list of positive delays in minutes.

    Examples:
        "1m 10m"     -> [1, 10]
        "1m 10m 1d"  -> [1, 10, 1440]
        "1.5h"       -> [90]

    Malformed tokens are skipped with a warning. An empty result means the
    phase is not configured.
    """
    if not spec or not spec.strip():
        return []

    steps: list[float] = []
    for token in spec.split():
        token = token.lower()
        match = STEP_PATTERN.match(token)
        if not match:
            logger.warning(f"Invalid step format: {token!r}, skipping")
            continue

        minutes = float(match.group(1)) * UNIT_MINUTES[match.group(2) or "m"]
        if minutes > 0:
            steps.append(minutes)

    return steps


def _plain_number(value: float) -> str:
    # Fixed-point only; "1e+07m" would not parse back
    return format(Decimal(repr(float(value))).normalize(), "f")


def format_steps(steps: list[float]) -> str:
    """
    Render delays in minutes back into a step spec, using the largest whole unit.

    [10, 1440, 4320] -> "10m 1d 3d"
    """
    tokens = []
    for minutes in steps:
        if minutes >= MINUTES_PER_DAY and minutes % MINUTES_PER_DAY == 0:
            tokens.append(f"{int(minutes // MINUTES_PER_DAY)}d")
        elif minutes >= MINUTES_PER_HOUR and minutes % MINUTES_PER_HOUR == 0:
            tokens.append(f"{int(minutes // MINUTES_PER_HOUR)}h")
        else:
            tokens.append(f"{_plain_number(minutes)}m")
    return " ".join(tokens)


def steps_for_mode(mode: str) -> list[float]:
    """Preset learning steps (minutes) for the fast/normal/deep learning modes."""
    try:
        return list(LEARNING_MODE_STEPS[mode])
    except KeyError:
        raise ValueError(
            f"Unknown learning mode {mode!r}; expected one of {sorted(LEARNING_MODE_STEPS)}"
        ) from None
