from datetime import datetime, timezone

import pytest

from synapse_srs.domain.models import Card, CardState, SchedulerSettings

# Legacy Anki defaults
DEFAULT_SETTINGS = SchedulerSettings(
    learning_steps="1m 10m",
    relearning_steps="10m",
    graduating_interval_days=1,
    easy_interval_days=4,
    starting_ease=2.5,
    easy_bonus=1.3,
    hard_interval=1.2,
    interval_modifier=1.0,
    new_interval_multiplier=0.0,
    minimum_interval_days=1,
    maximum_interval_days=36500,
    again_delay_minutes=10,
)

NOW = datetime(2024, 3, 10, 15, 30, tzinfo=timezone.utc)


@pytest.fixture
def settings():
    return DEFAULT_SETTINGS


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_card():
    """Factory for card snapshots; defaults to a brand-new card due now."""

    def _make(**overrides):
        fields = {
            "state": CardState.NEW,
            "due_at": NOW,
            "interval_days": 0,
            "ease": 2.5,
            "learning_step_index": 0,
            "reps": 0,
            "lapses": 0,
        }
        fields.update(overrides)
        return Card(**fields)

    return _make


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    return home
