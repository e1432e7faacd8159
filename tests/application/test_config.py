import pytest
from pydantic import ValidationError

from synapse_srs.application.config import (
    SchedulerConfig,
    resolve_config,
    settings_from_record,
)
from synapse_srs.domain.models import SchedulerSettings


@pytest.fixture(autouse=True)
def isolated_env(mock_home, monkeypatch):
    """Keep the developer's real config and env out of these tests."""
    import os

    for key in list(os.environ):
        if key.startswith("SYNAPSE_"):
            monkeypatch.delenv(key)
    return mock_home


def test_defaults_match_scheduler_settings():
    assert resolve_config().to_scheduler_settings() == SchedulerSettings()


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("SYNAPSE_LEARNING_STEPS", "5m 30m")
    monkeypatch.setenv("SYNAPSE_STARTING_EASE", "2.2")

    config = resolve_config()

    assert config.learning_steps == "5m 30m"
    assert config.starting_ease == 2.2


def test_toml_file_is_loaded(mock_home):
    cfg = mock_home / ".config/synapse/config.toml"
    cfg.parent.mkdir(parents=True)
    cfg.write_text('relearning_steps = "20m"\neasy_bonus = 1.5\n')

    config = resolve_config()

    assert config.relearning_steps == "20m"
    assert config.easy_bonus == 1.5


def test_precedence_cli_over_env_over_toml(mock_home, monkeypatch):
    cfg = mock_home / ".synapse.toml"
    cfg.write_text("hard_interval = 1.1\ninterval_modifier = 0.9\n")
    monkeypatch.setenv("SYNAPSE_HARD_INTERVAL", "1.3")

    config = resolve_config({"interval_modifier": 1.05, "easy_bonus": None})

    assert config.hard_interval == 1.3
    assert config.interval_modifier == 1.05
    assert config.easy_bonus == 1.3


def test_learning_mode_preset_fills_steps():
    config = SchedulerConfig(learning_mode="normal")
    assert config.learning_steps == "10m 1d 3d"


def test_explicit_steps_beat_learning_mode():
    config = SchedulerConfig(learning_mode="deep", learning_steps="1m")
    assert config.learning_steps == "1m"


def test_empty_steps_allowed():
    assert SchedulerConfig(learning_steps="").to_scheduler_settings().learning_steps == ""


def test_rejects_min_above_max():
    with pytest.raises(ValidationError, match="minimum_interval_days"):
        SchedulerConfig(minimum_interval_days=10, maximum_interval_days=5)


@pytest.mark.parametrize(
    "field, value",
    [
        ("starting_ease", 1.0),
        ("starting_ease", 3.5),
        ("easy_bonus", 0),
        ("interval_modifier", -1),
        ("new_interval_multiplier", -0.1),
        ("review_order", "random"),
        ("learning_mode", "turbo"),
    ],
)
def test_rejects_invalid_values(field, value):
    with pytest.raises(ValidationError):
        SchedulerConfig(**{field: value})


def test_settings_from_record_falls_back_on_missing_and_falsy():
    settings = settings_from_record(
        {
            "learning_steps": "",
            "relearning_steps": None,
            "starting_ease": 2.1,
            "interval_modifier": 0,
            "maximum_interval_days": 365,
            "user_id": "ignored",
        }
    )

    assert settings.learning_steps == "1m 10m"
    assert settings.relearning_steps == "10m"
    assert settings.starting_ease == 2.1
    assert settings.interval_modifier == 1.0
    assert settings.maximum_interval_days == 365
    assert settings.graduating_interval_days == 1


def test_settings_from_empty_record():
    assert settings_from_record({}) == SchedulerSettings()
