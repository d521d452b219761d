"""Notification consumers."""

from .console import ConsoleRenderer, NO_SELECTION
from .announcer import Announcer

__all__ = ["ConsoleRenderer", "NO_SELECTION", "Announcer"]
