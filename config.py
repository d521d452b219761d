"""Application configuration module.

Reads the randomizer's tunable constants from environment variables with
the defaults of the interactive reveal (80 ms ticks, roughly one second
of preview, undo depth of 10, up to 1000 participants per add).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from core.constants import AnimationDefaults, ParticipantLimits, UndoDefaults
from core.exceptions import ConfigurationError


def _get_bool(name: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _get_int(name: str, default: int) -> int:
    """Get integer from environment variable with fallback."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    """Get float from environment variable with fallback."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_str(name: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.getenv(name, default)


@dataclass(frozen=True)
class Config:
    min_participants: int = ParticipantLimits.MIN_COUNT
    max_participants: int = ParticipantLimits.MAX_COUNT
    name_template: str = ParticipantLimits.NAME_TEMPLATE
    tick_interval_ms: int = AnimationDefaults.TICK_INTERVAL_MS
    min_ticks: int = AnimationDefaults.MIN_TICKS
    max_ticks: int = AnimationDefaults.MAX_TICKS
    duration_scale: float = AnimationDefaults.DURATION_SCALE
    emphasis_frequency: int = AnimationDefaults.EMPHASIS_FREQUENCY
    emphasis_duration_ms: int = AnimationDefaults.EMPHASIS_DURATION_MS
    undo_limit: int = UndoDefaults.LIMIT
    log_level: str = "INFO"
    log_file: Optional[str] = None
    colored_logs: bool = True
    metrics_port: int = 0

    def validate(self) -> "Config":
        """Check that the numbers describe a usable session.

        Raises:
            ConfigurationError: On the first inconsistent value
        """
        if self.min_participants < 1:
            raise ConfigurationError("min_participants must be at least 1")
        if self.min_participants > self.max_participants:
            raise ConfigurationError("min_participants must not exceed max_participants")
        if self.tick_interval_ms <= 0:
            raise ConfigurationError("tick_interval_ms must be positive")
        if self.min_ticks < 1 or self.max_ticks < self.min_ticks:
            raise ConfigurationError("tick range must satisfy 1 <= min_ticks <= max_ticks")
        if self.duration_scale <= 0:
            raise ConfigurationError("duration_scale must be positive")
        if self.emphasis_frequency < 1:
            raise ConfigurationError("emphasis_frequency must be at least 1")
        if self.emphasis_duration_ms < 0:
            raise ConfigurationError("emphasis_duration_ms must not be negative")
        if self.undo_limit < 1:
            raise ConfigurationError("undo_limit must be at least 1")
        if self.metrics_port < 0:
            raise ConfigurationError("metrics_port must not be negative")
        if "{id}" not in self.name_template:
            raise ConfigurationError("name_template must contain '{id}'")
        return self


def load_config(env_file: Optional[str] = None) -> Config:
    """Load application configuration from environment variables.

    Args:
        env_file: Optional explicit ``.env`` path; by default the nearest
            ``.env`` is used when present

    Returns:
        Config: Application configuration with validated values
    """
    load_dotenv(env_file)

    log_file = _get_str("LOG_FILE", "") or None
    config = Config(
        min_participants=_get_int("MIN_PARTICIPANTS", ParticipantLimits.MIN_COUNT),
        max_participants=_get_int("MAX_PARTICIPANTS", ParticipantLimits.MAX_COUNT),
        name_template=_get_str("PARTICIPANT_NAME_TEMPLATE", ParticipantLimits.NAME_TEMPLATE),
        tick_interval_ms=_get_int("TICK_INTERVAL_MS", AnimationDefaults.TICK_INTERVAL_MS),
        min_ticks=_get_int("MIN_TICKS", AnimationDefaults.MIN_TICKS),
        max_ticks=_get_int("MAX_TICKS", AnimationDefaults.MAX_TICKS),
        duration_scale=_get_float("DURATION_SCALE", AnimationDefaults.DURATION_SCALE),
        emphasis_frequency=_get_int("EMPHASIS_FREQUENCY", AnimationDefaults.EMPHASIS_FREQUENCY),
        emphasis_duration_ms=_get_int("EMPHASIS_DURATION_MS", AnimationDefaults.EMPHASIS_DURATION_MS),
        undo_limit=_get_int("UNDO_LIMIT", UndoDefaults.LIMIT),
        log_level=_get_str("LOG_LEVEL", "INFO"),
        log_file=log_file,
        colored_logs=_get_bool("COLORED_LOGS", True),
        metrics_port=_get_int("METRICS_PORT", 0),
    )

    return config.validate()
