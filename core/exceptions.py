"""Application-wide exception classes."""

from __future__ import annotations

from core.constants import FailureKind


class ApplicationError(Exception):
    """Base exception for all application errors."""
    pass


class ConfigurationError(ApplicationError):
    """Raised when configuration is invalid."""
    pass


class ValidationError(ApplicationError):
    """Raised when data validation fails."""
    pass


class ServiceError(ApplicationError):
    """Base exception for service-level errors."""
    pass


class DrawError(ServiceError):
    """Base exception for refused draw operations.

    Every subclass maps to exactly one :class:`FailureKind` so the session
    controller can report it without inspecting the message.
    """

    kind: FailureKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidCountError(DrawError, ValidationError):
    """Raised when a participant count is not an integer in bounds."""
    kind = FailureKind.INVALID_COUNT


class PoolExhaustedError(DrawError):
    """Raised when there is nobody left to draw."""
    kind = FailureKind.POOL_EXHAUSTED


class DrawInProgressError(DrawError):
    """Raised when an operation is not allowed while the reveal runs."""
    kind = FailureKind.DRAW_IN_PROGRESS


class AlreadyRunningError(DrawError):
    """Raised when the animation is started twice."""
    kind = FailureKind.ALREADY_RUNNING


class NothingToUndoError(DrawError):
    """Raised when the undo stack is empty."""
    kind = FailureKind.NOTHING_TO_UNDO


class AlreadyAvailableError(DrawError):
    """Raised when returning a participant that is already in the pool."""
    kind = FailureKind.ALREADY_AVAILABLE


class ParticipantNotFoundError(DrawError):
    """Raised when a participant id is neither remaining nor drawn."""
    kind = FailureKind.NOT_FOUND
