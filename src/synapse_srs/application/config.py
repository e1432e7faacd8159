import dataclasses
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from synapse_srs.application.scheduler.steps import format_steps, steps_for_mode
from synapse_srs.domain import constants as C
from synapse_srs.domain.models import SchedulerSettings


def config_files() -> list[Path]:
    return [
        Path.home() / ".config/synapse/config.toml",
        Path.home() / ".synapse.toml",
    ]


class SchedulerConfig(BaseSettings):
    """
    Configuration model for the Synapse scheduler.
    Supports loading from:
    1. Config file (~/.config/synapse/config.toml)
    2. Environment variables (SYNAPSE_*)
    3. Manual overrides (CLI)
    Later sources win.
    """

    model_config = SettingsConfigDict(
        env_prefix="SYNAPSE_",
        extra="ignore",
    )

    # Steps
    learning_mode: Literal["fast", "normal", "deep"] | None = None
    learning_steps: str = C.DEFAULT_LEARNING_STEPS
    relearning_steps: str = C.DEFAULT_RELEARNING_STEPS

    # Intervals (days)
    graduating_interval_days: float = Field(default=C.DEFAULT_GRADUATING_INTERVAL, gt=0)
    easy_interval_days: float = Field(default=C.DEFAULT_EASY_INTERVAL, gt=0)
    minimum_interval_days: float = Field(default=C.DEFAULT_MINIMUM_INTERVAL, gt=0)
    maximum_interval_days: float = Field(default=C.DEFAULT_MAXIMUM_INTERVAL, gt=0)

    # Ease & multipliers
    starting_ease: float = Field(default=C.DEFAULT_STARTING_EASE, ge=C.MIN_EASE, le=C.MAX_EASE)
    easy_bonus: float = Field(default=C.DEFAULT_EASY_BONUS, gt=0)
    hard_interval: float = Field(default=C.DEFAULT_HARD_INTERVAL, gt=0)
    interval_modifier: float = Field(default=C.DEFAULT_INTERVAL_MODIFIER, gt=0)
    new_interval_multiplier: float = Field(default=C.DEFAULT_NEW_INTERVAL_MULTIPLIER, ge=0)

    # Not used by the grading math; kept so stored settings round-trip
    again_delay_minutes: float = Field(default=C.DEFAULT_AGAIN_DELAY_MINUTES, ge=0)

    # Study session preferences
    new_cards_per_day: int = Field(default=C.DEFAULT_NEW_CARDS_PER_DAY, ge=0)
    max_reviews_per_day: int = Field(default=C.DEFAULT_MAX_REVIEWS_PER_DAY, ge=0)
    review_order: Literal["mixed", "oldFirst", "newFirst"] = "mixed"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing file wins; earlier sources take priority
        toml_file = next((f for f in config_files() if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @model_validator(mode="after")
    def check_bounds(self) -> "SchedulerConfig":
        if self.minimum_interval_days > self.maximum_interval_days:
            raise ValueError(
                f"minimum_interval_days ({self.minimum_interval_days}) exceeds "
                f"maximum_interval_days ({self.maximum_interval_days})"
            )
        return self

    @model_validator(mode="after")
    def apply_learning_mode(self) -> "SchedulerConfig":
        # An explicit learning_steps always beats the preset
        if self.learning_mode and "learning_steps" not in self.model_fields_set:
            self.learning_steps = format_steps(steps_for_mode(self.learning_mode))
        return self

    def to_scheduler_settings(self) -> SchedulerSettings:
        return SchedulerSettings(
            learning_steps=self.learning_steps,
            relearning_steps=self.relearning_steps,
            graduating_interval_days=self.graduating_interval_days,
            easy_interval_days=self.easy_interval_days,
            starting_ease=self.starting_ease,
            easy_bonus=self.easy_bonus,
            hard_interval=self.hard_interval,
            interval_modifier=self.interval_modifier,
            new_interval_multiplier=self.new_interval_multiplier,
            minimum_interval_days=self.minimum_interval_days,
            maximum_interval_days=self.maximum_interval_days,
            again_delay_minutes=self.again_delay_minutes,
        )


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> SchedulerConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in SchedulerConfig
    2. ~/.config/synapse/config.toml (if exists)
    3. Environment variables (SYNAPSE_*)
    4. cli_overrides (passed from Typer)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return SchedulerConfig(**overrides)


def settings_from_record(record: Mapping[str, Any]) -> SchedulerSettings:
    """
    Build SchedulerSettings from a stored settings row.

    Missing, null, empty or zero values fall back to the defaults, the way
    rows created before a column existed are read. Note this means a stored
    0 cannot override a non-zero default.
    """
    defaults = SchedulerSettings()
    values = {
        field.name: record.get(field.name) or getattr(defaults, field.name)
        for field in dataclasses.fields(SchedulerSettings)
    }
    return SchedulerSettings(**values)
