from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from kioku.domain import constants as c


def config_files() -> list[Path]:
    return [
        Path.home() / ".config/kioku/config.toml",
        Path.home() / ".kioku.toml",
    ]


class SchedulerSettings(BaseModel):
    """
    Tuning constants for the scheduler, XP and confidence rules.

    Defaults reproduce the reference tuning; every scheduler function
    accepts an instance and falls back to DEFAULT_SETTINGS.
    """

    model_config = ConfigDict(frozen=True)

    # Ease
    min_ease_factor: float = Field(default=c.MIN_EASE_FACTOR, gt=0)
    starting_ease_factor: float = c.STARTING_EASE_FACTOR
    ease_penalty: float = Field(default=c.EASE_PENALTY, ge=0)

    # Intervals
    learning_steps: tuple[int, ...] = c.LEARNING_STEPS
    easy_learning_multiplier: int = Field(default=c.EASY_LEARNING_MULTIPLIER, ge=1)
    graduation_interval: int = Field(default=c.GRADUATION_INTERVAL, ge=1)
    hard_interval_factor: float = Field(default=c.HARD_INTERVAL_FACTOR, gt=0)
    easy_interval_bonus: float = Field(default=c.EASY_INTERVAL_BONUS, ge=1)

    # Confidence
    known_min_interval: int = c.KNOWN_MIN_INTERVAL
    known_min_accuracy: float = Field(default=c.KNOWN_MIN_ACCURACY, ge=0, le=1)
    reviewing_min_correct: int = c.REVIEWING_MIN_CORRECT
    young_item_max_reviews: int = c.YOUNG_ITEM_MAX_REVIEWS

    # XP / Levels
    xp_rewards: dict[str, int] = Field(default_factory=lambda: dict(c.XP_REWARDS))
    streak_bonus_multiplier: int = c.STREAK_BONUS_MULTIPLIER
    xp_per_level: int = Field(default=c.XP_PER_LEVEL, gt=0)
    session_completion_xp: int = Field(default=c.SESSION_COMPLETION_XP, ge=0)

    @field_validator("learning_steps")
    @classmethod
    def check_learning_steps(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        if not v or any(step < 1 for step in v):
            raise ValueError("learning_steps must be a non-empty list of positive day counts")
        return v

    @field_validator("xp_rewards")
    @classmethod
    def check_xp_rewards(cls, v: dict[str, int]) -> dict[str, int]:
        missing = set(c.XP_REWARDS) - set(v)
        if missing:
            raise ValueError(f"xp_rewards is missing grades: {sorted(missing)}")
        return v

    @model_validator(mode="after")
    def check_starting_ease(self) -> "SchedulerSettings":
        if self.starting_ease_factor < self.min_ease_factor:
            raise ValueError("starting_ease_factor must not be below min_ease_factor")
        return self


DEFAULT_SETTINGS = SchedulerSettings()


class AppConfig(BaseSettings):
    """
    Configuration model for kioku.
    Supports loading from:
    1. Environment variables (KIOKU_*, nested with __)
    2. Config file (~/.config/kioku/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="KIOKU_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    scheduler: SchedulerSettings = Field(default_factory=SchedulerSettings)

    daily_goal: int = Field(default=c.DEFAULT_DAILY_GOAL, ge=1)
    queue_limit: int = Field(default=c.DEFAULT_QUEUE_LIMIT, ge=1, le=c.MAX_QUEUE_LIMIT)
    verbose: int = Field(default=0, ge=0)

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

        # First existing file wins
        toml_file = next((f for f in config_files() if f.exists()), None)

        # Earlier sources take priority: CLI overrides, then env, then file
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


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/kioku/config.toml (if exists)
    3. Environment variables (KIOKU_*)
    4. cli_overrides (passed from Typer, None values dropped)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
