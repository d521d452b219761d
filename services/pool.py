"""Participant pool split into remaining and drawn participants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from core import get_logger, ParticipantLimits
from core.exceptions import (
    AlreadyAvailableError,
    InvalidCountError,
    ParticipantNotFoundError,
    PoolExhaustedError,
)
from services.randomness import RandomSource, pick_index

logger = get_logger(__name__)


@dataclass(frozen=True)
class Participant:
    """A drawable participant. Immutable once created."""

    id: int
    name: str


class Pool:
    """Owns the participant universe and its remaining/history partition.

    ``all`` keeps insertion order, ``remaining`` holds the eligible
    participants and ``history`` holds the drawn ones, most recent last.
    At rest ``remaining`` and ``history`` are disjoint and together cover
    ``all``.
    """

    def __init__(
        self,
        min_count: int = ParticipantLimits.MIN_COUNT,
        max_count: int = ParticipantLimits.MAX_COUNT,
        name_template: str = ParticipantLimits.NAME_TEMPLATE,
    ) -> None:
        self.min_count = min_count
        self.max_count = max_count
        self.name_template = name_template
        self._all: List[Participant] = []
        self._remaining: List[Participant] = []
        self._history: List[Participant] = []

    # ------------- Views -------------
    @property
    def all(self) -> Tuple[Participant, ...]:
        return tuple(self._all)

    @property
    def remaining(self) -> Tuple[Participant, ...]:
        return tuple(self._remaining)

    @property
    def history(self) -> Tuple[Participant, ...]:
        return tuple(self._history)

    @property
    def last_drawn(self) -> Optional[Participant]:
        return self._history[-1] if self._history else None

    def is_empty(self) -> bool:
        return not self._all

    def has_remaining(self) -> bool:
        return bool(self._remaining)

    def peek(self, index: int) -> Participant:
        """Read a remaining participant without removing it."""
        return self._remaining[index]

    # ------------- Mutations -------------
    def validate_count(self, count: object) -> int:
        """Return ``count`` when it is an integer within bounds.

        Raises:
            InvalidCountError: If the value is not an int or out of bounds
        """
        if isinstance(count, bool) or not isinstance(count, int):
            raise InvalidCountError("Enter a whole number")
        if count < self.min_count:
            raise InvalidCountError(f"Minimum {self.min_count} participant(s)")
        if count > self.max_count:
            raise InvalidCountError(f"Maximum {self.max_count} participants")
        return count

    def _make(self, participant_id: int) -> Participant:
        return Participant(id=participant_id, name=self.name_template.format(id=participant_id))

    def reset(self, count: int) -> None:
        """Replace the pool with participants ``1..count`` and clear history."""
        count = self.validate_count(count)
        fresh = [self._make(i) for i in range(1, count + 1)]
        self._all = fresh
        self._remaining = list(fresh)
        self._history = []
        logger.info(f"Pool reset with {count} participants")

    def append_more(self, count: int) -> List[Participant]:
        """Add ``count`` participants numbered after the current highest id."""
        count = self.validate_count(count)
        base = max((p.id for p in self._all), default=0)
        added = [self._make(base + i) for i in range(1, count + 1)]
        self._all.extend(added)
        self._remaining.extend(added)
        logger.info(f"Appended {count} participants (ids {base + 1}..{base + count})")
        return added

    def draw(self, source: RandomSource) -> Participant:
        """Move one uniformly chosen remaining participant into history.

        Raises:
            PoolExhaustedError: If nobody is left to draw
        """
        if not self._remaining:
            raise PoolExhaustedError("All participants have already been drawn")
        index = pick_index(source, len(self._remaining))
        winner = self._remaining.pop(index)
        self._history.append(winner)
        return winner

    def return_to_pool(self, participant_id: int) -> Participant:
        """Move a drawn participant back into ``remaining``.

        ``remaining`` is re-sorted by id afterwards so its order never
        depends on how history was edited.

        Raises:
            AlreadyAvailableError: If the participant is still remaining
            ParticipantNotFoundError: If the id is unknown
        """
        if any(p.id == participant_id for p in self._remaining):
            raise AlreadyAvailableError("This participant is already available for the draw")
        for index, participant in enumerate(self._history):
            if participant.id == participant_id:
                break
        else:
            raise ParticipantNotFoundError(f"Participant {participant_id} not found")

        del self._history[index]
        self._remaining.append(participant)
        self._remaining.sort(key=lambda p: p.id)
        logger.info(f"Participant {participant.name} returned to pool")
        return participant

    def replace(
        self,
        all_: Sequence[Participant],
        remaining: Sequence[Participant],
        history: Sequence[Participant],
    ) -> None:
        """Swap in all three sequences wholesale (used by undo)."""
        self._all = list(all_)
        self._remaining = list(remaining)
        self._history = list(history)

    def clear(self) -> None:
        self._all = []
        self._remaining = []
        self._history = []
