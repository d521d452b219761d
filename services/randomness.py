"""Injectable source of uniform randomness."""

from __future__ import annotations

import random
from typing import Optional, Protocol


class RandomSource(Protocol):
    """Anything with ``random() -> float`` in ``[0, 1)``.

    :class:`random.Random` satisfies this protocol.
    """

    def random(self) -> float:
        ...


def default_source(seed: Optional[int] = None) -> random.Random:
    """Return a private generator, seeded when reproducibility is wanted."""
    return random.Random(seed)


def pick_index(source: RandomSource, size: int) -> int:
    """Scale one uniform real onto ``[0, size)`` and floor it."""
    if size <= 0:
        raise ValueError("size must be positive")
    index = int(source.random() * size)
    return min(index, size - 1)


def random_int(source: RandomSource, low: int, high: int) -> int:
    """Uniform integer in ``[low, high)``; ``low`` when the range is empty."""
    if high <= low:
        return low
    return low + pick_index(source, high - low)
