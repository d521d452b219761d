"""Bounded snapshot stack for rolling back draws."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Tuple

from core import get_logger, UndoDefaults
from core.exceptions import NothingToUndoError
from services.pool import Participant, Pool

logger = get_logger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Immutable copy of the pool taken right before a draw."""

    all: Tuple[Participant, ...]
    remaining: Tuple[Participant, ...]
    history: Tuple[Participant, ...]
    created_at: float = field(default_factory=time.time)

    @classmethod
    def capture(cls, pool: Pool) -> "Snapshot":
        return cls(all=pool.all, remaining=pool.remaining, history=pool.history)


class UndoStack:
    """Keeps the newest ``limit`` snapshots, evicting the oldest first."""

    def __init__(self, limit: int = UndoDefaults.LIMIT) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self._snapshots: Deque[Snapshot] = deque()

    def __len__(self) -> int:
        return len(self._snapshots)

    def push(self, snapshot: Snapshot) -> None:
        self._snapshots.append(snapshot)
        if len(self._snapshots) > self.limit:
            self._snapshots.popleft()
            logger.debug(f"Undo stack full, evicted oldest snapshot (limit={self.limit})")

    def pop(self) -> Snapshot:
        """Remove and return the newest snapshot.

        Raises:
            NothingToUndoError: If the stack is empty
        """
        if not self._snapshots:
            raise NothingToUndoError("Nothing to undo")
        return self._snapshots.pop()

    @staticmethod
    def restore(snapshot: Snapshot, pool: Pool) -> None:
        """Overwrite ``pool`` with fresh copies of the snapshot's sequences."""
        pool.replace(snapshot.all, snapshot.remaining, snapshot.history)

    def clear(self) -> None:
        self._snapshots.clear()
