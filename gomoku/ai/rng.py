"""
Shared pseudo-random number source.

The trainer, the chromosomes and the network initialisation all draw
from one RandomSource that is passed around explicitly. Draws are
serialised with a lock so a background training session and an
interactive game can share the same source.
"""
import threading
from typing import Any, Optional, Sequence, Tuple, Union

import numpy as np


class RandomSource:
    """
    Thread-safe wrapper around ``numpy.random.Generator``.

    Example:
        rng = RandomSource(seed=42)
        if rng.random() < crossover_rate:
            ...
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._generator = np.random.default_rng(seed)
        self._lock = threading.Lock()

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        with self._lock:
            return float(self._generator.random())

    def integers(self, low: int, high: Optional[int] = None) -> int:
        """Uniform integer in [low, high), or [0, low) when high is None."""
        with self._lock:
            return int(self._generator.integers(low, high))

    def uniform(
        self,
        low: float = 0.0,
        high: float = 1.0,
        size: Union[None, int, Tuple[int, ...]] = None,
    ) -> Any:
        with self._lock:
            if size is None:
                return float(self._generator.uniform(low, high))
            return self._generator.uniform(low, high, size=size)

    def exponential(self, scale: float = 1.0) -> float:
        with self._lock:
            return float(self._generator.exponential(scale))

    def normal(self, mean: float = 0.0, std: float = 1.0) -> float:
        with self._lock:
            return float(self._generator.normal(mean, std))

    def choice(self, items: Sequence[Any]) -> Any:
        """Pick one element uniformly."""
        if not items:
            raise ValueError("Cannot choose from an empty sequence")
        return items[self.integers(len(items))]

    def shuffle(self, items: list) -> None:
        """Shuffle a list in place."""
        with self._lock:
            order = self._generator.permutation(len(items))
        items[:] = [items[i] for i in order]

