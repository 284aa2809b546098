"""Seeded random sources.

A RandomSource is the only mutable state involved in random generation.
Generators never hold one; it is passed in on every call. A source must
not be shared between threads.
"""

import logging
import random
from typing import Sequence, TypeVar

from propgen.utils.helpers import derive_seed, generate_seed

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource:
    """A seeded pseudo-random stream.

    Two sources built from the same seed produce the same stream.
    """

    def __init__(self, seed: int | None = None):
        """Initialize the source.

        Args:
            seed: Seed for the stream; a fresh random seed when omitted
        """
        self._seed = seed if seed is not None else generate_seed()
        self._random = random.Random(self._seed)
        logger.debug("Created random source with seed %d", self._seed)

    @classmethod
    def seeded(cls, seed: int) -> "RandomSource":
        return cls(seed)

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def random(self) -> random.Random:
        """The underlying ``random.Random`` instance."""
        return self._random

    def child(self, label: str | int) -> "RandomSource":
        """Derive an independent source from this source's seed and a label.

        The child depends only on (seed, label), not on how far this
        source has advanced.
        """
        return RandomSource(derive_seed(self._seed, label))

    def restart(self) -> "RandomSource":
        """Return a fresh source that replays this one from the beginning."""
        return RandomSource(self._seed)

    def next_int(self, low: int, high: int) -> int:
        """Return a random integer in [low, high] inclusive."""
        return self._random.randint(low, high)

    def next_float(self) -> float:
        """Return a random float in [0.0, 1.0)."""
        return self._random.random()

    def next_bool(self, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self._random.random() < probability

    def choice(self, seq: Sequence[T]) -> T:
        return self._random.choice(seq)

    def weighted_index(self, weights: Sequence[float]) -> int:
        """Pick an index with probability proportional to its weight."""
        return self._random.choices(range(len(weights)), weights=weights)[0]

    def __repr__(self) -> str:
        return f"RandomSource(seed={self._seed})"


_default_source: RandomSource | None = None


def get_default_source() -> RandomSource:
    """Get the process-wide default source, creating it on first use."""
    global _default_source
    if _default_source is None:
        _default_source = RandomSource()
    return _default_source


def set_default_source(source: RandomSource | int) -> RandomSource:
    """Replace the process-wide default source.

    Args:
        source: A RandomSource, or a seed to build one from

    Returns:
        The new default source
    """
    global _default_source
    _default_source = source if isinstance(source, RandomSource) else RandomSource(source)
    return _default_source


def reset_default_source() -> None:
    """Discard the default source; the next use creates a fresh one."""
    global _default_source
    _default_source = None
