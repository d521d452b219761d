"""Input validation helpers."""

import re

from core.constants import ParticipantLimits
from core.exceptions import InvalidCountError


UNSAFE_CHARS_RE = re.compile(r"[<>]")
INTEGER_RE = re.compile(r"^[+-]?\d+$")


def sanitize_input(value) -> str:
    """Trim the raw field value and drop markup characters."""
    if not isinstance(value, str):
        return ""
    return UNSAFE_CHARS_RE.sub("", value.strip())


def parse_count(
    value,
    min_count: int = ParticipantLimits.MIN_COUNT,
    max_count: int = ParticipantLimits.MAX_COUNT,
) -> int:
    """Turn the numeric input field into a participant count.

    Raises:
        InvalidCountError: With the message shown to the operator
    """
    cleaned = sanitize_input(value)
    if not INTEGER_RE.match(cleaned):
        raise InvalidCountError("Enter a whole number")

    count = int(cleaned)
    if count < min_count:
        raise InvalidCountError(f"Minimum {min_count} participant(s)")
    if count > max_count:
        raise InvalidCountError(f"Maximum {max_count} participants")
    return count
