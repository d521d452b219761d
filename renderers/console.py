"""Text renderer: status line, counters, history and the reveal slot."""

from __future__ import annotations

import asyncio
import sys
from typing import Optional, TextIO

from core import get_logger, FailureKind, StatusLevel
from services.notifications import SessionListener
from services.pool import Participant

logger = get_logger(__name__)

NO_SELECTION = "?"

STATUS_MARKS = {
    StatusLevel.SUCCESS: "[ok]",
    StatusLevel.WARNING: "[..]",
    StatusLevel.ERROR: "[!!]",
}


class ConsoleRenderer(SessionListener):
    """Writes session notifications to a text stream.

    ``draw_finished`` is set whenever a reveal ends with a winner so
    runners can await the otherwise fire-and-forget draw.
    """

    def __init__(self, stream: Optional[TextIO] = None, show_previews: bool = True) -> None:
        self.stream = stream or sys.stdout
        self.show_previews = show_previews
        self.current = NO_SELECTION
        self.emphasized = False
        self.draw_finished = asyncio.Event()

    def _write(self, line: str) -> None:
        self.stream.write(line + "\n")
        self.stream.flush()

    def participants_changed(self, all_, remaining, history) -> None:
        recent_first = ", ".join(str(p.id) for p in reversed(history)) or "-"
        self._write(f"Total: {len(all_)} | Remaining: {len(remaining)} | Drawn: {recent_first}")

    def preview_tick(self, name: str) -> None:
        self.current = name
        if self.show_previews:
            mark = "*" if self.emphasized else " "
            self._write(f"  {mark} {name}")

    def emphasis_pulse(self) -> None:
        self.emphasized = True

    def emphasis_cleared(self) -> None:
        self.emphasized = False

    def winner_revealed(self, participant: Participant) -> None:
        self.current = participant.name
        self._write(f">>> {participant.name} <<<")
        self.draw_finished.set()

    def selection_changed(self, participant: Optional[Participant]) -> None:
        self.current = participant.name if participant is not None else NO_SELECTION

    def status_updated(self, message: str, level: StatusLevel) -> None:
        self._write(f"{STATUS_MARKS.get(level, '[??]')} {message}")

    def operation_failed(self, kind: FailureKind, message: str) -> None:
        level = StatusLevel.ERROR if kind is FailureKind.INVALID_COUNT else StatusLevel.WARNING
        self.status_updated(message, level)
