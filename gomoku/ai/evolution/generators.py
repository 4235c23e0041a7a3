"""
Random value generators for chromosome genes.

A chromosome uses three generators: one for initial gene values, one
for multiplicative mutation factors and one for additive mutation
offsets. All of them draw from a shared RandomSource.
"""
from typing import Optional

from ..rng import RandomSource


class RandomGenerator:
    """Base class: ``next()`` returns one float."""

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng or RandomSource()

    def next(self) -> float:
        raise NotImplementedError

    def __call__(self) -> float:
        return self.next()


class UniformGenerator(RandomGenerator):
    """Uniform values in [low, high)."""

    def __init__(self, low: float, high: float, rng: Optional[RandomSource] = None):
        super().__init__(rng)
        if high < low:
            raise ValueError(f"Empty range [{low}, {high})")
        self.low = low
        self.high = high

    def next(self) -> float:
        return self.rng.uniform(self.low, self.high)

    def __repr__(self) -> str:
        return f"UniformGenerator({self.low}, {self.high})"


class ExponentialGenerator(RandomGenerator):
    """Exponentially distributed values with the given rate (mean 1/rate)."""

    def __init__(self, rate: float, rng: Optional[RandomSource] = None):
        super().__init__(rng)
        if rate <= 0:
            raise ValueError("Rate value should be greater than zero.")
        self.rate = rate

    @property
    def mean(self) -> float:
        return 1.0 / self.rate

    def next(self) -> float:
        return self.rng.exponential(1.0 / self.rate)

    def __repr__(self) -> str:
        return f"ExponentialGenerator({self.rate})"


class GaussianGenerator(RandomGenerator):
    """Normally distributed values."""

    def __init__(self, mean: float = 0.0, std: float = 1.0, rng: Optional[RandomSource] = None):
        super().__init__(rng)
        if std < 0:
            raise ValueError("Standard deviation must not be negative.")
        self.mean = mean
        self.std = std

    def next(self) -> float:
        return self.rng.normal(self.mean, self.std)

    def __repr__(self) -> str:
        return f"GaussianGenerator({self.mean}, {self.std})"
