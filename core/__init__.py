"""Core application components."""

# Import in correct order to avoid circular dependencies
from core.logger import setup_logger, get_logger
from core.constants import (
    ParticipantLimits,
    AnimationDefaults,
    UndoDefaults,
    DrawState,
    FailureKind,
    StatusLevel,
)
from core.exceptions import (
    ApplicationError,
    ConfigurationError,
    ValidationError,
    ServiceError,
    DrawError,
    InvalidCountError,
    PoolExhaustedError,
    DrawInProgressError,
    AlreadyRunningError,
    NothingToUndoError,
    AlreadyAvailableError,
    ParticipantNotFoundError,
)

__all__ = [
    # Logging
    'setup_logger',
    'get_logger',
    # Constants
    'ParticipantLimits',
    'AnimationDefaults',
    'UndoDefaults',
    'DrawState',
    'FailureKind',
    'StatusLevel',
    # Exceptions
    'ApplicationError',
    'ConfigurationError',
    'ValidationError',
    'ServiceError',
    'DrawError',
    'InvalidCountError',
    'PoolExhaustedError',
    'DrawInProgressError',
    'AlreadyRunningError',
    'NothingToUndoError',
    'AlreadyAvailableError',
    'ParticipantNotFoundError',
]
