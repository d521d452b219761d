"""Application-wide constants and configuration values."""

from __future__ import annotations

from enum import Enum


# Participant bounds
class ParticipantLimits:
    """Bounds for a single add operation."""
    MIN_COUNT = 1
    MAX_COUNT = 1000
    NAME_TEMPLATE = "Demo {id}"


# Animated reveal
class AnimationDefaults:
    """Timing of the cosmetic preview loop."""
    TICK_INTERVAL_MS = 80
    MIN_TICKS = 20
    MAX_TICKS = 35  # exclusive
    DURATION_SCALE = 0.5  # 1 second perceived duration, base is 2
    EMPHASIS_FREQUENCY = 5  # every 5th tick
    EMPHASIS_DURATION_MS = 200


# Undo
class UndoDefaults:
    """Undo stack configuration."""
    LIMIT = 10


# Status enums
class DrawState(str, Enum):
    """State of the animation controller."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETING = "completing"
    CANCELLED = "cancelled"


class FailureKind(str, Enum):
    """Recoverable, operator-facing failure kinds."""
    INVALID_COUNT = "invalid_count"
    POOL_EXHAUSTED = "pool_exhausted"
    DRAW_IN_PROGRESS = "draw_in_progress"
    ALREADY_RUNNING = "already_running"
    NOTHING_TO_UNDO = "nothing_to_undo"
    ALREADY_AVAILABLE = "already_available"
    NOT_FOUND = "not_found"


class StatusLevel(str, Enum):
    """Severity of a status line shown to the operator."""
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
