"""Timer capability used by the animated reveal.

All delays are in milliseconds. Callbacks run on the scheduler's single
thread of control; a repeating timer only re-arms after its callback has
returned, so two ticks of the same timer never overlap.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Protocol

from core import get_logger

logger = get_logger(__name__)


class TimerHandle(Protocol):
    @property
    def active(self) -> bool:
        ...

    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        ...

    def call_repeating(self, interval_ms: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class AsyncioTimer:
    """One-shot or repeating timer on an asyncio event loop."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        delay_ms: float,
        callback: Callable[[], None],
        repeat: bool = False,
    ) -> None:
        self._loop = loop
        self._delay = max(delay_ms, 0) / 1000.0
        self._callback = callback
        self._repeat = repeat
        self._active = True
        self._handle: Optional[asyncio.TimerHandle] = None
        self._arm()

    @property
    def active(self) -> bool:
        return self._active

    def _arm(self) -> None:
        self._handle = self._loop.call_later(self._delay, self._fire)

    def _fire(self) -> None:
        self._handle = None
        if not self._active:
            return
        if not self._repeat:
            self._active = False
        try:
            self._callback()
        except Exception:
            self._active = False
            raise
        if self._active:
            self._arm()

    def cancel(self) -> None:
        self._active = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AsyncioScheduler:
    """:class:`Scheduler` backed by the running (or a given) event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> AsyncioTimer:
        return AsyncioTimer(self.loop, delay_ms, callback)

    def call_repeating(self, interval_ms: float, callback: Callable[[], None]) -> AsyncioTimer:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        logger.debug(f"Arming repeating timer every {interval_ms} ms")
        return AsyncioTimer(self.loop, interval_ms, callback, repeat=True)
