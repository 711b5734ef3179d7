"""Distributions restricted to a finite window of another distribution.

Trimming an ``origin`` distribution to ``[left_border, right_border]``
leaves out the mass ``cdf_left + (1 - cdf_right)``. The two concrete
classes differ in how they put it back:

- :class:`ElevatedDistribution` spreads it uniformly over the window;
- :class:`ProportionalDistribution` rescales the origin density.
"""

import logging
import math
from abc import abstractmethod

from ._utils import _require_finite, _require_not_nan, _require_probability
from .distributions import ContinuousDistribution, SupportsContinuous
from .exceptions import DomainError
from .numeric import inverse_at

log = logging.getLogger(__name__)

__all__ = [
    "TrimmedDistribution",
    "ElevatedDistribution",
    "ProportionalDistribution",
]


class TrimmedDistribution(ContinuousDistribution):
    """Abstract base for distributions trimmed to ``[left_border, right_border]``.

    The origin is shared and never modified. Its cdf at both borders is
    evaluated once, here.

    Attributes:
        origin: Distribution being trimmed.
        left_border: Lower end of the window.
        right_border: Upper end of the window.
        cdf_left: ``origin.cdf(left_border)``.
        cdf_right: ``origin.cdf(right_border)``.
    """

    def __init__(self, origin: SupportsContinuous, left_border: float, right_border: float):
        """Initializes the window.

        Args:
            origin: Distribution to trim.
            left_border: Lower end of the window.
            right_border: Upper end of the window.

        Raises:
            DomainError: If ``origin`` is ``None``, a border is NaN,
                ``right_border < left_border`` or the origin has no mass
                inside the window.
        """
        if origin is None:
            raise DomainError("origin", "value must not be None")
        left = _require_not_nan("left_border", left_border)
        right = _require_not_nan("right_border", right_border)
        if right < left:
            raise DomainError("right_border", "value must not be less than left_border")

        cdf_left = origin.cdf(left)
        cdf_right = origin.cdf(right)

        if cdf_right <= 0.0 or (left != right and cdf_right - cdf_left <= 0.0):
            raise DomainError("origin", "zero density region")

        self.origin = origin
        self.left_border = left
        self.right_border = right
        self.cdf_left = cdf_left
        self.cdf_right = cdf_right
        self.support = (left, right)

        if left == right:
            super().__init__(mean=left, variance=0.0)
        else:
            super().__init__()

        log.debug(f"trimmed {origin!r} to [{left}, {right}] (cdf {cdf_left} .. {cdf_right})")

    @property
    def is_degenerate(self) -> bool:
        """bool: Whether the window is a single point."""
        return self.left_border == self.right_border

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if self.is_degenerate:
            return math.inf if x == self.left_border else 0.0
        if x < self.left_border or x > self.right_border:
            return 0.0
        return self._inner_pdf(x)

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x < self.left_border:
            return 0.0
        if x >= self.right_border:
            return 1.0
        return self._inner_cdf(x)

    def qdf(self, p: float) -> float:
        p = _require_probability("p", p)
        if p == 0.0 or self.is_degenerate:
            return self.left_border
        if p == 1.0:
            return self.right_border
        return inverse_at(self.cdf, p, self.left_border, self.right_border)

    @abstractmethod
    def _inner_pdf(self, x: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def _inner_cdf(self, x: float) -> float:
        raise NotImplementedError

    def _describe(self, kind: str) -> str:
        return f"{self.origin!r} within [{self.left_border}..{self.right_border}] range ({kind})"


class ElevatedDistribution(TrimmedDistribution):
    """Trimmed distribution with the lost mass added as a uniform floor.

    Inside the window ``pdf(x) = origin.pdf(x) + shift`` with
    ``shift = (1 - (cdf_right - cdf_left)) / (right_border - left_border)``.
    Both borders must be finite.

    Attributes:
        shift: Constant added to the origin density.
    """

    def __init__(self, origin: SupportsContinuous, left_border: float, right_border: float):
        _require_finite("left_border", left_border)
        _require_finite("right_border", right_border)
        super().__init__(origin, left_border, right_border)

        if self.is_degenerate:
            self.shift = math.inf
        else:
            self.shift = ((1.0 - (self.cdf_right - self.cdf_left))
                          / (self.right_border - self.left_border))

    def _inner_pdf(self, x: float) -> float:
        return self.origin.pdf(x) + self.shift

    def _inner_cdf(self, x: float) -> float:
        width = self.right_border - self.left_border
        return ((self.origin.cdf(x) - self.cdf_left)
                + (x - self.left_border) / width * (self.cdf_left + 1.0 - self.cdf_right))

    def __repr__(self) -> str:
        return self._describe("elevated")


class ProportionalDistribution(TrimmedDistribution):
    """Trimmed distribution with the origin density rescaled to unit mass.

    Inside the window ``pdf(x) = origin.pdf(x) * multiplier`` with
    ``multiplier = 1 / (cdf_right - cdf_left)``.

    Attributes:
        multiplier: Scale factor of the origin density; NaN for a
            single-point window.
    """

    def __init__(self, origin: SupportsContinuous, left_border: float, right_border: float):
        super().__init__(origin, left_border, right_border)

        if self.is_degenerate:
            self.multiplier = math.nan
        else:
            self.multiplier = 1.0 / (self.cdf_right - self.cdf_left)

    def _inner_pdf(self, x: float) -> float:
        return self.origin.pdf(x) * self.multiplier

    def _inner_cdf(self, x: float) -> float:
        return (self.origin.cdf(x) - self.cdf_left) * self.multiplier

    def __repr__(self) -> str:
        return self._describe("proportional")
