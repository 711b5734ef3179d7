"""Point generators for the unit hypercube.

Each sampler yields ``count`` vectors in ``[0, 1)^dimensions`` (the
orthogonal sampler yields a full grid, at least ``count`` vectors).
:func:`generate_samples` maps them coordinate-wise through quantile
functions to sample a product of distributions.
"""

import itertools
import logging
from typing import Iterator, Optional, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np

from ..custom_types import Array
from .distributions import SupportsContinuous
from .exceptions import DomainError
from .randoms import ContinuousRandom, default_random

log = logging.getLogger(__name__)

__all__ = [
    "Sampler",
    "MonteCarloSampler",
    "LatinHypercubeSampler",
    "OrthogonalSampler",
    "generate_samples",
]


@runtime_checkable
class Sampler(Protocol):
    """Generator of points in the unit hypercube."""

    def generate(self, dimensions: int, count: int) -> Iterator[Array]:
        ...


def _check_shape(dimensions: int, count: int) -> Tuple[int, int]:
    dimensions = int(dimensions)
    count = int(count)
    if dimensions <= 0:
        raise DomainError("dimensions", "value must be positive")
    if count < 0:
        raise DomainError("count", "value must not be negative")
    return dimensions, count


class MonteCarloSampler:
    """Independent uniform draws for every coordinate."""

    def __init__(self, random: Optional[ContinuousRandom] = None):
        self.random = random or default_random()

    def generate(self, dimensions: int, count: int) -> Iterator[Array]:
        """Yields ``count`` uniform vectors of length ``dimensions``.

        Raises:
            DomainError: If ``dimensions <= 0`` or ``count < 0``.
        """
        dimensions, count = _check_shape(dimensions, count)
        return self._points(dimensions, count)

    def _points(self, dimensions: int, count: int) -> Iterator[Array]:
        for _ in range(count):
            yield np.array([self.random.next_double() for _ in range(dimensions)])


class LatinHypercubeSampler:
    """Latin hypercube design.

    Every axis is split into ``count`` equal strata and each stratum is hit
    exactly once per axis; the stratum order is an independent random
    permutation for every axis, the position inside a stratum is uniform.
    """

    def __init__(self, random: Optional[ContinuousRandom] = None):
        self.random = random or default_random()

    def generate(self, dimensions: int, count: int) -> Iterator[Array]:
        """Yields ``count`` stratified vectors of length ``dimensions``.

        Raises:
            DomainError: If ``dimensions <= 0`` or ``count < 0``.
        """
        dimensions, count = _check_shape(dimensions, count)
        return self._points(dimensions, count)

    def _points(self, dimensions: int, count: int) -> Iterator[Array]:
        if count == 0:
            return

        h = 1.0 / count
        strata = [
            sorted(range(count), key=lambda _: self.random.next_double())
            for _ in range(dimensions)
        ]

        for i in range(count):
            yield np.array([
                h * strata[c][i] + self.random.next_double() * h
                for c in range(dimensions)
            ])


class OrthogonalSampler:
    """Jittered grid design.

    The cube is cut into ``parts^dimensions`` cells with
    ``parts = ceil(count^(1 / dimensions))`` and one uniform point is drawn
    in every cell, so more than ``count`` points may be produced.
    """

    def __init__(self, random: Optional[ContinuousRandom] = None):
        self.random = random or default_random()

    @staticmethod
    def parts(dimensions: int, count: int) -> int:
        """Smallest ``parts`` with ``parts ** dimensions >= count``."""
        parts = int(round(count ** (1.0 / dimensions)))
        while parts ** dimensions < count:
            parts += 1
        return parts

    def generate(self, dimensions: int, count: int) -> Iterator[Array]:
        """Yields one jittered point per grid cell.

        Raises:
            DomainError: If ``dimensions <= 0`` or ``count < 0``.
        """
        dimensions, count = _check_shape(dimensions, count)
        return self._points(dimensions, count)

    def _points(self, dimensions: int, count: int) -> Iterator[Array]:
        parts = self.parts(dimensions, count)
        if parts == 0:
            return

        if parts ** dimensions != count:
            log.debug(f"orthogonal grid {parts}^{dimensions} exceeds the {count} requested points")

        h = 1.0 / parts
        for cell in itertools.product(range(parts), repeat=dimensions):
            yield np.array([i * h + self.random.next_double() * h for i in cell])


def generate_samples(
    sampler: Sampler,
    count: int,
    distributions: Sequence[SupportsContinuous],
) -> Iterator[Array]:
    """Samples a product of distributions through a hypercube sampler.

    Args:
        sampler: Source of unit hypercube points.
        count: Number of points requested from ``sampler``.
        distributions: One distribution per coordinate.

    Returns:
        Iterator over vectors whose ``i``-th coordinate is
        ``distributions[i].qdf(u_i)``.

    Raises:
        DomainError: If ``sampler`` is ``None``, ``count`` is negative or
            ``distributions`` is empty or contains ``None``.
    """
    if sampler is None:
        raise DomainError("sampler", "value must not be None")
    dists = list(distributions)
    if not dists:
        raise DomainError("distributions", "at least one distribution is required")
    if any(d is None for d in dists):
        raise DomainError("distributions", "nulls are not allowed within distributions")

    points = sampler.generate(len(dists), count)
    return (
        np.array([d.qdf(float(u)) for d, u in zip(dists, point)])
        for point in points
    )
