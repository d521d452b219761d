"""The single committing draw behind every completed reveal."""

from __future__ import annotations

from typing import Optional

from core import get_logger
from core.exceptions import PoolExhaustedError
from services.pool import Participant, Pool
from services.randomness import RandomSource, default_source
from services.undo_stack import Snapshot, UndoStack

logger = get_logger(__name__)


class Selector:
    """Uniform, without-replacement draw that snapshots before mutating."""

    def __init__(self, source: Optional[RandomSource] = None) -> None:
        self.source = source if source is not None else default_source()

    def commit(self, pool: Pool, undo_stack: UndoStack) -> Participant:
        """Draw one participant and record the pre-draw state for undo.

        Raises:
            PoolExhaustedError: If ``pool.remaining`` is empty; nothing is
                pushed onto the undo stack in that case
        """
        if not pool.has_remaining():
            raise PoolExhaustedError("All participants have already been drawn")

        undo_stack.push(Snapshot.capture(pool))
        winner = pool.draw(self.source)

        logger.info(
            f"Committed draw: {winner.name} (id={winner.id}), "
            f"{len(pool.remaining)} remaining"
        )
        return winner
