"""Short spoken-style announcements for assistive output."""

from __future__ import annotations

from collections import deque
from typing import Deque, List

from core import get_logger, FailureKind, StatusLevel
from services.notifications import SessionListener

logger = get_logger(__name__)


class Announcer(SessionListener):
    """Keeps the latest announcements and logs each one.

    Preview ticks are never announced.
    """

    def __init__(self, max_items: int = 20) -> None:
        self._items: Deque[str] = deque(maxlen=max_items)

    @property
    def announcements(self) -> List[str]:
        return list(self._items)

    def announce(self, message: str) -> None:
        self._items.append(message)
        logger.info(f"Announcement: {message}")

    def winner_revealed(self, participant) -> None:
        self.announce(f"Winner: {participant.name}")

    def status_updated(self, message: str, level: StatusLevel) -> None:
        self.announce(message)

    def operation_failed(self, kind: FailureKind, message: str) -> None:
        self.announce(message)
