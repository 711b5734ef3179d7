"""Continuous distribution contract.

A distribution exposes ``pdf``, ``cdf`` and ``qdf`` (quantile) queries on
Python floats. :class:`ContinuousDistribution` only requires ``pdf`` and
``cdf``; the quantile is found by bisection of the cdf and the moments by
Simpson quadrature unless a subclass supplies closed forms.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Callable, Optional, Protocol, Tuple, runtime_checkable

import numpy as np

from ..custom_types import Array
from ._utils import _require_probability
from .exceptions import DomainError
from .numeric import inverse_at, simpson_at
from .randoms import ContinuousRandom, default_random

log = logging.getLogger(__name__)

__all__ = [
    "MOMENT_TOLERANCE",
    "SupportsContinuous",
    "MomentCell",
    "default_qdf",
    "integrate_mean",
    "integrate_variance",
    "ContinuousDistribution",
    "rdf",
]

# Probability mass cut from each tail when integrating moments
MOMENT_TOLERANCE = 1e-7

_UNSET = object()


@runtime_checkable
class SupportsContinuous(Protocol):
    """Anything answering density, cumulative and quantile queries."""

    def pdf(self, x: float) -> float:
        ...

    def cdf(self, x: float) -> float:
        ...

    def qdf(self, p: float) -> float:
        ...


class MomentCell:
    """Write-once memo for a lazily computed scalar.

    ``get`` returns the stored value, computing and storing it on first use.
    There is no lock: two threads reading an empty cell at the same time may
    both run ``compute``, and since ``compute`` is a pure function of the
    distribution parameters both store the same value. NaN is a legitimate
    stored value.
    """

    __slots__ = ("_value",)

    def __init__(self, value=_UNSET):
        self._value = value

    @property
    def is_set(self) -> bool:
        """bool: Whether a value has been stored."""
        return self._value is not _UNSET

    def get(self, compute: Callable[[], float]) -> float:
        value = self._value
        if value is _UNSET:
            value = float(compute())
            self._value = value
        return value

    def __repr__(self) -> str:
        if self._value is _UNSET:
            return "MomentCell(<not computed>)"
        return f"MomentCell({self._value!r})"


def default_qdf(
    distribution: SupportsContinuous,
    p: float,
    left: float = -math.inf,
    right: float = math.inf,
) -> float:
    """Quantile by bisection of ``distribution.cdf`` over ``[left, right]``.

    Args:
        distribution: Distribution whose cdf is inverted.
        p: Probability in [0, 1].
        left: Lower end of the support.
        right: Upper end of the support.

    Returns:
        ``left`` for ``p == 0``, ``right`` for ``p == 1``, otherwise ``x``
        with ``cdf(x) == p``.

    Raises:
        DomainError: If ``p`` is NaN or outside [0, 1].
    """
    p = _require_probability("p", p)
    if p == 0.0:
        return float(left)
    if p == 1.0:
        return float(right)
    return inverse_at(distribution.cdf, p, left, right)


def integrate_mean(
    distribution: SupportsContinuous,
    tolerance: float = MOMENT_TOLERANCE,
) -> float:
    """Mean as the Simpson integral of ``x pdf(x)`` over ``[qdf(tol), qdf(1 - tol)]``."""
    left = distribution.qdf(tolerance)
    right = distribution.qdf(1.0 - tolerance)
    log.debug(f"integrating mean of {distribution!r} over [{left}, {right}]")
    return simpson_at(lambda x: x * distribution.pdf(x), left, right)


def integrate_variance(
    distribution: SupportsContinuous,
    mean: float,
    tolerance: float = MOMENT_TOLERANCE,
) -> float:
    """Variance as the Simpson integral of ``x^2 pdf(x)`` minus ``mean^2``."""
    left = distribution.qdf(tolerance)
    right = distribution.qdf(1.0 - tolerance)
    log.debug(f"integrating variance of {distribution!r} over [{left}, {right}]")
    return simpson_at(lambda x: x * x * distribution.pdf(x), left, right) - mean * mean


class ContinuousDistribution(ABC):
    """Abstract base class for continuous univariate distributions.

    Subclasses implement :meth:`pdf` and :meth:`cdf`. Everything else has a
    generic implementation built on them:

    - :meth:`qdf` bisects the cdf over :attr:`support`;
    - :attr:`mean` and :attr:`variance` integrate the pdf numerically,
      once, on first access.

    Subclasses with closed forms pass ``mean`` / ``variance`` to
    ``__init__`` and override :meth:`qdf`.

    Attributes:
        support: ``(lower, upper)`` bounds of the distribution. Class level
            default is the whole real line; subclasses may set it per
            instance.
        moment_tolerance: Tail mass ignored when integrating moments.
    """

    support: Tuple[float, float] = (-math.inf, math.inf)
    moment_tolerance: float = MOMENT_TOLERANCE

    def __init__(self, *, mean: Optional[float] = None, variance: Optional[float] = None):
        """Initializes the moment caches.

        Args:
            mean: Closed form mean, or ``None`` to integrate on demand.
            variance: Closed form variance, or ``None`` to integrate on demand.
        """
        self._mean = MomentCell() if mean is None else MomentCell(float(mean))
        self._variance = MomentCell() if variance is None else MomentCell(float(variance))

    @abstractmethod
    def pdf(self, x: float) -> float:
        """Probability density at ``x``; 0 outside the support."""
        raise NotImplementedError

    @abstractmethod
    def cdf(self, x: float) -> float:
        """Cumulative probability ``P[X <= x]``; 0 below and 1 above the support."""
        raise NotImplementedError

    def qdf(self, p: float) -> float:
        """Quantile: the ``x`` with ``cdf(x) == p``.

        Args:
            p: Probability in [0, 1].

        Returns:
            The quantile; the support bounds for ``p`` equal to 0 or 1.

        Raises:
            DomainError: If ``p`` is NaN or outside [0, 1].
        """
        left, right = self.support
        return default_qdf(self, p, left, right)

    @property
    def mean(self) -> float:
        """float: Expected value (NaN or inf when it does not exist)."""
        return self._mean.get(lambda: integrate_mean(self, self.moment_tolerance))

    @property
    def variance(self) -> float:
        """float: Variance (NaN or inf when it does not exist)."""
        return self._variance.get(
            lambda: integrate_variance(self, self.mean, self.moment_tolerance))

    @property
    def standard_error(self) -> float:
        """float: Square root of the variance."""
        return float(np.sqrt(np.maximum(self.variance, 0.0)))

    @property
    def median(self) -> float:
        """float: ``qdf(0.5)``."""
        return self.qdf(0.5)

    def sample(self, n_samples: int, *, random: Optional[ContinuousRandom] = None) -> Array:
        """Draws samples by inverse transform.

        Args:
            n_samples: Number of draws.
            random: Uniform source. If ``None``, a default one is created.

        Returns:
            Array of shape ``(n_samples,)``.

        Raises:
            DomainError: If ``n_samples`` is negative.
        """
        n_samples = int(n_samples)
        if n_samples < 0:
            raise DomainError("n_samples", "value must not be negative")
        random = random or default_random()
        return np.fromiter(
            (self.qdf(random.next_double()) for _ in range(n_samples)),
            dtype=float,
            count=n_samples,
        )


def rdf(distribution: SupportsContinuous, random: Optional[ContinuousRandom] = None) -> float:
    """Single random draw: ``distribution.qdf(random.next_double())``."""
    random = random or default_random()
    return distribution.qdf(random.next_double())
