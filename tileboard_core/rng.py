from __future__ import annotations

import random
from typing import Optional


class RandomRange:
    """
    Seedable integer range generator used for spawns and merge outcomes.

    Not thread-safe; each board owns its own instance.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._random = random.Random(seed)

    def next_int(self, low: int, high: int) -> int:
        """Uniform integer in [low, high). Returns `low` when the range is empty."""
        if high <= low:
            return low
        return self._random.randrange(low, high)
