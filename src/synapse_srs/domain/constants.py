"""Centralized constants for the Synapse scheduler.

All magic numbers and scheduling defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Time ----------
MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 1440
DAY_ROLLOVER_HOUR = 4  # interday reviews land at 04:00

# ---------- Ease ----------
MIN_EASE = 1.3
MAX_EASE = 3.0
HARD_EASE_DELTA = -0.15
EASY_EASE_DELTA = 0.15
LAPSE_EASE_DELTA = -0.2

# ---------- Learning ----------
SINGLE_STEP_HARD_FACTOR = 1.5  # Hard on a lone step delays 1.5x, capped at +1 day

# ---------- Default settings (legacy Anki defaults) ----------
DEFAULT_LEARNING_STEPS = "1m 10m"
DEFAULT_RELEARNING_STEPS = "10m"
DEFAULT_GRADUATING_INTERVAL = 1
DEFAULT_EASY_INTERVAL = 4
DEFAULT_STARTING_EASE = 2.5
DEFAULT_EASY_BONUS = 1.3
DEFAULT_HARD_INTERVAL = 1.2
DEFAULT_INTERVAL_MODIFIER = 1.0
DEFAULT_NEW_INTERVAL_MULTIPLIER = 0.0
DEFAULT_MINIMUM_INTERVAL = 1
DEFAULT_MAXIMUM_INTERVAL = 36500
DEFAULT_AGAIN_DELAY_MINUTES = 10

# ---------- Study preferences ----------
DEFAULT_NEW_CARDS_PER_DAY = 20
DEFAULT_MAX_REVIEWS_PER_DAY = 9999
DEFAULT_DUE_LIMIT = 50

# ---------- Learning mode presets (minutes) ----------
LEARNING_MODE_STEPS = {
    "fast": [10, 1440],
    "normal": [10, 1440, 4320],
    "deep": [10, 1440, 4320, 10080],
}
