from dataclasses import asdict
from typing import List, MutableSequence, Optional

import numpy as np


class BaseDataclass:
    def __str__(self):
        return str(asdict(self))


class TickClock:
    """Monotonic logical clock; every tick is strictly greater than the last."""

    def __init__(self, start: int = 0):
        self._now = start

    @property
    def now(self) -> int:
        return self._now

    def tick(self) -> int:
        self._now += 1
        return self._now


class RandomSource:
    """Seedable random source shared by the RANDOM policy and the address patterns."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def shuffle(self, items: MutableSequence) -> None:
        self._rng.shuffle(items)

    def randrange(self, n: int) -> int:
        return int(self._rng.integers(0, n))

    def integers(self, low: int, high: int, size: int) -> List[int]:
        # inclusive on both ends
        return self._rng.integers(low, high, size=size, endpoint=True).tolist()
