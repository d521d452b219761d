"""Services package."""

from .randomness import RandomSource, default_source, pick_index
from .pool import Participant, Pool
from .undo_stack import Snapshot, UndoStack
from .selector import Selector
from .scheduler import Scheduler, TimerHandle, AsyncioScheduler
from .notifications import SessionListener, NotificationHub
from .animation import AnimationController
from .session import SessionController, OperationResult

__all__ = [
    "RandomSource",
    "default_source",
    "pick_index",
    "Participant",
    "Pool",
    "Snapshot",
    "UndoStack",
    "Selector",
    "Scheduler",
    "TimerHandle",
    "AsyncioScheduler",
    "SessionListener",
    "NotificationHub",
    "AnimationController",
    "SessionController",
    "OperationResult",
]
