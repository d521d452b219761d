"""Fire-and-forget notifications pushed from the core to renderers."""

from __future__ import annotations

from typing import List, Optional, Sequence

from core import get_logger, FailureKind, StatusLevel
from services.pool import Participant

logger = get_logger(__name__)


class SessionListener:
    """Base listener; override only the notifications you render.

    Return values are ignored.
    """

    def participants_changed(
        self,
        all_: Sequence[Participant],
        remaining: Sequence[Participant],
        history: Sequence[Participant],
    ) -> None:
        pass

    def preview_tick(self, name: str) -> None:
        pass

    def emphasis_pulse(self) -> None:
        pass

    def emphasis_cleared(self) -> None:
        pass

    def winner_revealed(self, participant: Participant) -> None:
        pass

    def selection_changed(self, participant: Optional[Participant]) -> None:
        """``None`` means nobody has been drawn yet."""
        pass

    def status_updated(self, message: str, level: StatusLevel) -> None:
        pass

    def operation_failed(self, kind: FailureKind, message: str) -> None:
        pass


class NotificationHub(SessionListener):
    """Fans every notification out to the registered listeners.

    A listener that raises is logged and skipped; the core never sees
    renderer errors.
    """

    def __init__(self, listeners: Optional[Sequence[SessionListener]] = None) -> None:
        self._listeners: List[SessionListener] = list(listeners or [])

    def subscribe(self, listener: SessionListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _dispatch(self, method: str, *args) -> None:
        for listener in list(self._listeners):
            try:
                getattr(listener, method)(*args)
            except Exception as e:
                logger.error(
                    f"Listener {type(listener).__name__}.{method} failed: {e}",
                    exc_info=True,
                )

    def participants_changed(self, all_, remaining, history) -> None:
        self._dispatch("participants_changed", tuple(all_), tuple(remaining), tuple(history))

    def preview_tick(self, name: str) -> None:
        self._dispatch("preview_tick", name)

    def emphasis_pulse(self) -> None:
        self._dispatch("emphasis_pulse")

    def emphasis_cleared(self) -> None:
        self._dispatch("emphasis_cleared")

    def winner_revealed(self, participant: Participant) -> None:
        self._dispatch("winner_revealed", participant)

    def selection_changed(self, participant: Optional[Participant]) -> None:
        self._dispatch("selection_changed", participant)

    def status_updated(self, message: str, level: StatusLevel) -> None:
        self._dispatch("status_updated", message, level)

    def operation_failed(self, kind: FailureKind, message: str) -> None:
        self._dispatch("operation_failed", kind, message)
