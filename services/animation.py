"""Animated reveal: cosmetic preview ticks followed by one committing draw.

The preview path (:meth:`AnimationController._preview`) only reads the
pool. The commit path (:meth:`AnimationController._complete`) is the only
place that hands control to the :class:`Selector`.
"""

from __future__ import annotations

from typing import Callable, Optional

from core import get_logger, AnimationDefaults, DrawState
from core.exceptions import AlreadyRunningError, PoolExhaustedError
from services.notifications import SessionListener
from services.pool import Participant, Pool
from services.randomness import RandomSource, default_source, pick_index, random_int
from services.scheduler import Scheduler, TimerHandle
from services.selector import Selector
from services.undo_stack import UndoStack

logger = get_logger(__name__)


class AnimationController:
    """Drives ``Idle -> Running -> (Completing | Cancelled) -> Idle``.

    At most one repeating timer is live per controller, and only while
    the state is ``RUNNING``.
    """

    def __init__(
        self,
        pool: Pool,
        selector: Selector,
        undo_stack: UndoStack,
        scheduler: Scheduler,
        notifier: SessionListener,
        *,
        source: Optional[RandomSource] = None,
        tick_interval_ms: int = AnimationDefaults.TICK_INTERVAL_MS,
        min_ticks: int = AnimationDefaults.MIN_TICKS,
        max_ticks: int = AnimationDefaults.MAX_TICKS,
        duration_scale: float = AnimationDefaults.DURATION_SCALE,
        emphasis_frequency: int = AnimationDefaults.EMPHASIS_FREQUENCY,
        emphasis_duration_ms: int = AnimationDefaults.EMPHASIS_DURATION_MS,
        on_commit: Optional[Callable[[Participant], None]] = None,
    ) -> None:
        self.pool = pool
        self.selector = selector
        self.undo_stack = undo_stack
        self.scheduler = scheduler
        self.notifier = notifier
        self.source = source if source is not None else default_source()
        self.tick_interval_ms = tick_interval_ms
        self.min_ticks = min_ticks
        self.max_ticks = max_ticks
        self.duration_scale = duration_scale
        self.emphasis_frequency = emphasis_frequency
        self.emphasis_duration_ms = emphasis_duration_ms
        self.on_commit = on_commit

        self.state = DrawState.IDLE
        self.total_ticks = 0
        self.ticks_fired = 0
        self._timer: Optional[TimerHandle] = None
        self._pulse_timer: Optional[TimerHandle] = None

    @property
    def is_running(self) -> bool:
        return self.state is DrawState.RUNNING

    def compute_total_ticks(self) -> int:
        """Base count in ``[min_ticks, max_ticks)`` scaled by ``duration_scale``."""
        base = self.min_ticks + random_int(self.source, 0, self.max_ticks - self.min_ticks)
        return max(1, int(base * self.duration_scale))

    def start(self) -> int:
        """Arm the tick timer and return how many ticks the reveal will take.

        Raises:
            AlreadyRunningError: If a reveal is already in progress
            PoolExhaustedError: If nobody is left to draw
        """
        if self.state is not DrawState.IDLE:
            raise AlreadyRunningError("A draw is already running")
        if not self.pool.has_remaining():
            raise PoolExhaustedError("All participants have already been drawn")

        self.total_ticks = self.compute_total_ticks()
        self.ticks_fired = 0
        self.state = DrawState.RUNNING
        self._timer = self.scheduler.call_repeating(self.tick_interval_ms, self._on_tick)
        logger.info(
            f"Reveal started: {self.total_ticks} ticks every {self.tick_interval_ms} ms "
            f"over {len(self.pool.remaining)} participants"
        )
        return self.total_ticks

    def cancel(self) -> bool:
        """Stop a running reveal without committing.

        Returns:
            True if a reveal was running and has been stopped
        """
        if self.state is not DrawState.RUNNING:
            return False
        self.state = DrawState.CANCELLED
        self._stop_timers()
        self.state = DrawState.IDLE
        logger.info(f"Reveal cancelled after {self.ticks_fired}/{self.total_ticks} ticks")
        return True

    # ------------- Preview path -------------
    def _on_tick(self) -> None:
        if self.state is not DrawState.RUNNING:
            return

        if not self.pool.has_remaining():
            self.state = DrawState.CANCELLED
            self._stop_timers()
            self.state = DrawState.IDLE
            logger.warning("Reveal cancelled: pool emptied while running")
            return

        self._preview(self.ticks_fired)
        self.ticks_fired += 1

        if self.ticks_fired >= self.total_ticks:
            self._complete()

    def _preview(self, tick_index: int) -> None:
        candidate = self.pool.peek(pick_index(self.source, len(self.pool.remaining)))
        self.notifier.preview_tick(candidate.name)

        if tick_index % self.emphasis_frequency == 0:
            self._pulse()

    def _pulse(self) -> None:
        if self._pulse_timer is not None:
            self._pulse_timer.cancel()
        self.notifier.emphasis_pulse()
        self._pulse_timer = self.scheduler.call_later(self.emphasis_duration_ms, self._clear_pulse)

    def _clear_pulse(self) -> None:
        self._pulse_timer = None
        self.notifier.emphasis_cleared()

    def _stop_timers(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._pulse_timer is not None:
            self._pulse_timer.cancel()
            self._pulse_timer = None
            self.notifier.emphasis_cleared()

    # ------------- Commit path -------------
    def _complete(self) -> None:
        self.state = DrawState.COMPLETING
        self._stop_timers()
        try:
            winner = self.selector.commit(self.pool, self.undo_stack)
        except PoolExhaustedError:
            self.state = DrawState.IDLE
            logger.warning("Reveal finished with nobody left to draw")
            return

        self.state = DrawState.IDLE
        self.notifier.winner_revealed(winner)
        if self.on_commit is not None:
            self.on_commit(winner)
