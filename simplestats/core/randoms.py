"""Uniform random sources.

A random source is anything with a ``next_double()`` method returning a
float in ``[0, 1)``. :class:`GeneratorRandom` adapts a numpy
``Generator``; :class:`DistributedRandom` pushes the draws of another source
through a distribution's quantile function.
"""

from typing import Optional, Protocol, runtime_checkable

import numpy as np

from ..custom_types import PRNG
from .exceptions import DomainError

__all__ = [
    "ContinuousRandom",
    "GeneratorRandom",
    "DistributedRandom",
    "default_random",
    "next_int",
    "next_int_between",
]


@runtime_checkable
class ContinuousRandom(Protocol):
    """Source of uniformly distributed doubles."""

    def next_double(self) -> float:
        """Returns the next draw in ``[0, 1)``."""
        ...


class GeneratorRandom:
    """Random source backed by a :class:`numpy.random.Generator`.

    Attributes:
        seed: Seed the generator was created from, ``None`` when it was
            supplied by the caller or seeded from OS entropy.
    """

    def __init__(self, rng: Optional[PRNG] = None, *, seed: Optional[int] = None):
        """Initializes the source.

        Args:
            rng: Generator to draw from. If ``None``, a new one is created
                from ``seed``.
            seed: Seed for the new generator; ``None`` seeds from OS entropy.

        Raises:
            DomainError: If both ``rng`` and ``seed`` are given.
        """
        if rng is not None and seed is not None:
            raise DomainError("seed", "cannot be combined with an explicit generator")
        self.seed = seed
        self._rng = rng or np.random.default_rng(seed)

    @property
    def rng(self) -> PRNG:
        """np.random.Generator: Underlying generator."""
        return self._rng

    def next_double(self) -> float:
        return float(self._rng.random())

    def __repr__(self) -> str:
        if self.seed is None:
            return "GeneratorRandom()"
        return f"GeneratorRandom(seed={self.seed})"


def default_random() -> GeneratorRandom:
    """Fresh random source seeded from OS entropy."""
    return GeneratorRandom()


class DistributedRandom:
    """Random source whose draws follow a given distribution.

    Each draw is ``distribution.qdf(u)`` for ``u`` taken from the wrapped
    uniform source, so the values are not restricted to ``[0, 1)``.
    """

    def __init__(self, distribution, random: Optional[ContinuousRandom] = None):
        """Initializes the source.

        Args:
            distribution: Any object with a ``qdf(p)`` method.
            random: Uniform source to transform; a default one if ``None``.

        Raises:
            DomainError: If ``distribution`` is ``None``.
        """
        if distribution is None:
            raise DomainError("distribution", "value must not be None")
        self.distribution = distribution
        self.random = random or default_random()

    def next_double(self) -> float:
        return self.distribution.qdf(self.random.next_double())

    def __repr__(self) -> str:
        return f"{self.distribution!r} over {self.random!r}"


def next_int(random: ContinuousRandom, max_value: int) -> int:
    """Uniform integer in ``[0, max_value)``; 0 when ``max_value`` is 0.

    Raises:
        DomainError: If ``max_value`` is negative.
    """
    max_value = int(max_value)
    if max_value < 0:
        raise DomainError("max_value", "value must not be negative")
    return int(random.next_double() * max_value)


def next_int_between(random: ContinuousRandom, low: int, high: int) -> int:
    """Uniform integer in ``[low, high)``; ``low`` when the bounds coincide.

    Raises:
        DomainError: If ``high < low``.
    """
    low = int(low)
    high = int(high)
    if high < low:
        raise DomainError("high", "value must not be less than low")
    return low + int(random.next_double() * (high - low))
