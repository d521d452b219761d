"""Session controller: the only entry point renderers and runners call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from config import Config
from core import get_logger, DrawState, FailureKind, StatusLevel
from core.exceptions import (
    DrawError,
    DrawInProgressError,
    PoolExhaustedError,
)
from services.animation import AnimationController
from services.notifications import NotificationHub, SessionListener
from services.pool import Participant, Pool
from services.randomness import RandomSource, default_source
from services.scheduler import AsyncioScheduler, Scheduler
from services.selector import Selector
from services.undo_stack import UndoStack

logger = get_logger(__name__)


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one controller call; failures carry exactly one kind."""

    ok: bool
    message: str = ""
    error: Optional[FailureKind] = None
    participant: Optional[Participant] = None


class SessionController:
    """Owns the pool, undo stack and reveal, and sequences every operation.

    Every refused operation leaves state untouched, is logged, and is
    reported through ``operation_failed``.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        scheduler: Optional[Scheduler] = None,
        source: Optional[RandomSource] = None,
        listeners: Optional[Sequence[SessionListener]] = None,
    ) -> None:
        self.config = config or Config()
        source = source if source is not None else default_source()

        self.notifier = NotificationHub(listeners)
        self.pool = Pool(
            min_count=self.config.min_participants,
            max_count=self.config.max_participants,
            name_template=self.config.name_template,
        )
        self.undo_stack = UndoStack(limit=self.config.undo_limit)
        self.selector = Selector(source)
        self.animation = AnimationController(
            self.pool,
            self.selector,
            self.undo_stack,
            scheduler if scheduler is not None else AsyncioScheduler(),
            self.notifier,
            source=source,
            tick_interval_ms=self.config.tick_interval_ms,
            min_ticks=self.config.min_ticks,
            max_ticks=self.config.max_ticks,
            duration_scale=self.config.duration_scale,
            emphasis_frequency=self.config.emphasis_frequency,
            emphasis_duration_ms=self.config.emphasis_duration_ms,
            on_commit=self._on_draw_committed,
        )

    # ------------- Views -------------
    @property
    def participants(self) -> Tuple[Participant, ...]:
        return self.pool.all

    @property
    def remaining(self) -> Tuple[Participant, ...]:
        return self.pool.remaining

    @property
    def history(self) -> Tuple[Participant, ...]:
        return self.pool.history

    @property
    def current_participant(self) -> Optional[Participant]:
        """The "current" display slot: the last drawn participant, if any."""
        return self.pool.last_drawn

    @property
    def state(self) -> DrawState:
        return self.animation.state

    @property
    def is_drawing(self) -> bool:
        return self.animation.is_running

    @property
    def has_participants(self) -> bool:
        return not self.pool.is_empty()

    @property
    def can_undo(self) -> bool:
        return len(self.undo_stack) > 0

    @property
    def undo_depth(self) -> int:
        return len(self.undo_stack)

    def subscribe(self, listener: SessionListener) -> None:
        self.notifier.subscribe(listener)

    # ------------- Operations -------------
    def add_participants(self, count: int) -> OperationResult:
        """Start over with participants ``1..count``."""
        try:
            self._ensure_not_drawing()
            self.pool.reset(count)
        except DrawError as e:
            return self._fail(e)

        self.undo_stack.clear()
        self._publish_pool()
        self.notifier.selection_changed(None)
        message = f"Added {count} participants. Press start to begin!"
        self.notifier.status_updated(message, StatusLevel.SUCCESS)
        return OperationResult(ok=True, message=message)

    def add_more(self, count: int) -> OperationResult:
        """Append participants without touching history or undo."""
        try:
            self._ensure_not_drawing()
            self.pool.append_more(count)
        except DrawError as e:
            return self._fail(e)

        self._publish_pool()
        message = (
            f"Added {count} participants. Total: {len(self.pool.all)}, "
            f"remaining: {len(self.pool.remaining)}"
        )
        self.notifier.status_updated(message, StatusLevel.SUCCESS)
        return OperationResult(ok=True, message=message)

    def start_draw(self) -> OperationResult:
        """Arm the animated reveal; the winner arrives via ``winner_revealed``."""
        try:
            if not self.pool.has_remaining():
                raise PoolExhaustedError(
                    "Everyone has been drawn! Reset to start a new round."
                )
            if self.animation.state is not DrawState.IDLE:
                raise DrawInProgressError("A draw is already in progress")
            self.animation.start()
        except DrawError as e:
            return self._fail(e)

        message = "Drawing..."
        self.notifier.status_updated(message, StatusLevel.WARNING)
        return OperationResult(ok=True, message=message)

    def undo_last(self) -> OperationResult:
        """Roll the pool back to the state before the most recent draw."""
        try:
            snapshot = self.undo_stack.pop()
        except DrawError as e:
            return self._fail(e)

        self.undo_stack.restore(snapshot, self.pool)
        logger.info(f"Undo restored snapshot from {snapshot.created_at:.3f}")
        self._publish_pool()
        self.notifier.selection_changed(self.pool.last_drawn)
        message = "Last draw undone!"
        self.notifier.status_updated(message, StatusLevel.SUCCESS)
        return OperationResult(ok=True, message=message, participant=self.pool.last_drawn)

    def reset_all(self) -> OperationResult:
        """Cancel any reveal and clear everything. Never fails."""
        if self.animation.is_running:
            self.animation.cancel()
        self.pool.clear()
        self.undo_stack.clear()
        logger.info("Session reset")

        self._publish_pool()
        self.notifier.selection_changed(None)
        message = "Session reset. Enter the number of participants to begin."
        self.notifier.status_updated(message, StatusLevel.SUCCESS)
        return OperationResult(ok=True, message=message)

    def return_to_pool(self, participant_id: int) -> OperationResult:
        """Put a drawn participant back into the draw."""
        try:
            participant = self.pool.return_to_pool(participant_id)
        except DrawError as e:
            return self._fail(e)

        self._publish_pool()
        self.notifier.selection_changed(self.pool.last_drawn)
        message = (
            f"{participant.name} returned to the draw! "
            f"Available: {len(self.pool.remaining)}"
        )
        self.notifier.status_updated(message, StatusLevel.SUCCESS)
        return OperationResult(ok=True, message=message, participant=participant)

    # ------------- Internals -------------
    def _ensure_not_drawing(self) -> None:
        if self.animation.is_running:
            raise DrawInProgressError("Wait for the current draw to finish")

    def _fail(self, error: DrawError) -> OperationResult:
        logger.warning(f"Operation refused ({error.kind.value}): {error.message}")
        self.notifier.operation_failed(error.kind, error.message)
        return OperationResult(ok=False, message=error.message, error=error.kind)

    def _publish_pool(self) -> None:
        self.notifier.participants_changed(self.pool.all, self.pool.remaining, self.pool.history)

    def _on_draw_committed(self, winner: Participant) -> None:
        self._publish_pool()
        self.notifier.selection_changed(winner)
        remaining = len(self.pool.remaining)
        if remaining > 0:
            self.notifier.status_updated(
                f"Picked: {winner.name}. Remaining: {remaining}", StatusLevel.SUCCESS
            )
        else:
            self.notifier.status_updated(
                f"Last participant: {winner.name}. Everyone has been drawn!",
                StatusLevel.WARNING,
            )
