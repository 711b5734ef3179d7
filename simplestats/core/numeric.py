"""Generic numerical primitives.

- Bisection inversion of a monotonic real function (``inverse_at``,
  ``inverse``) and root finding (``solve``).
- Composite Simpson quadrature on a fixed subdivision (``simpson_at``).
"""

import logging
import math

import numpy as np
from scipy.integrate import simpson

from ..custom_types import RealFunction
from ._utils import _require_finite, _require_not_nan
from .exceptions import BracketError, DomainError

log = logging.getLogger(__name__)

__all__ = [
    "INFINITY_SENTINEL",
    "SIMPSON_INTERVALS",
    "inverse_at",
    "inverse",
    "solve",
    "simpson_at",
]

# Finite stand-in for +-inf: the bisection midpoint of two infinities is NaN
INFINITY_SENTINEL = 1e200
SIMPSON_INTERVALS = 1000


def _to_finite(name: str, value: float) -> float:
    v = _require_not_nan(name, value)
    if v == -math.inf:
        return -INFINITY_SENTINEL
    if v == math.inf:
        return INFINITY_SENTINEL
    return v


def inverse_at(
    function: RealFunction,
    to_find: float,
    left: float = -math.inf,
    right: float = math.inf,
) -> float:
    """Finds ``x`` in ``[left, right]`` with ``function(x) == to_find`` by bisection.

    ``function`` must be monotonic on the bracket (increasing or decreasing).
    Infinite bounds and target are replaced by ``+-INFINITY_SENTINEL``. The
    loop halves the bracket until the midpoint stops moving, which on doubles
    always happens after a bounded number of steps.

    Args:
        function: Monotonic real function.
        to_find: Target value.
        left: Left end of the bracket.
        right: Right end of the bracket (``>= left``).

    Returns:
        The converged midpoint.

    Raises:
        DomainError: If any argument is NaN or ``right < left``.
        BracketError: If ``function(left)`` and ``function(right)`` are both
            strictly above or both strictly below ``to_find``.
    """
    to_find = _to_finite("to_find", to_find)
    left = _to_finite("left", left)
    right = _to_finite("right", right)

    if right < left:
        raise DomainError("right", "empty interval")

    left_value = function(left)
    right_value = function(right)

    if ((left_value < to_find and right_value < to_find)
            or (left_value > to_find and right_value > to_find)):
        raise BracketError(left, right, to_find)

    middle = (left + right) / 2.0
    iterations = 0

    while True:
        iterations += 1
        middle_value = function(middle)

        if middle_value > to_find:
            if left_value > to_find:
                left_value = middle_value
                left = middle
            else:
                right = middle
        elif left_value >= to_find:
            right = middle
        else:
            left_value = middle_value
            left = middle

        new_middle = (left + right) / 2.0

        # no progress: fixed point reached
        if new_middle == middle:
            break

        middle = new_middle

    log.debug(f"bisection for {to_find!r} converged to {middle!r} after {iterations} iterations")
    return middle


def inverse(
    function: RealFunction,
    left: float = -math.inf,
    right: float = math.inf,
) -> RealFunction:
    """Returns the inverse of a monotonic function on ``[left, right]``.

    The bounds are validated now; each call of the returned function runs
    :func:`inverse_at`.
    """
    _require_not_nan("left", left)
    _require_not_nan("right", right)

    def inverted(to_find: float) -> float:
        return inverse_at(function, to_find, left, right)

    return inverted


def solve(
    function: RealFunction,
    left: float = -math.inf,
    right: float = math.inf,
) -> float:
    """Root of ``function`` on ``[left, right]``, i.e. ``inverse_at(function, 0)``."""
    return inverse_at(function, 0.0, left, right)


def simpson_at(
    function: RealFunction,
    left: float,
    right: float,
    n_intervals: int = SIMPSON_INTERVALS,
) -> float:
    """Integrates ``function`` over ``[left, right]`` with the composite Simpson rule.

    Args:
        function: Scalar integrand.
        left: Lower limit (finite).
        right: Upper limit (finite).
        n_intervals: Number of subintervals; must be even.

    Returns:
        Approximation of the integral; 0 for a degenerate interval.

    Raises:
        DomainError: If a limit is not finite or ``n_intervals`` is not a
            positive even number.
    """
    left = _require_finite("left", left)
    right = _require_finite("right", right)
    n_intervals = int(n_intervals)
    if n_intervals < 2 or n_intervals % 2 != 0:
        raise DomainError("n_intervals", "value must be a positive even number")

    if left == right:
        return 0.0

    xs = np.linspace(left, right, n_intervals + 1)
    ys = np.fromiter((function(float(x)) for x in xs), dtype=float, count=xs.size)
    return float(simpson(ys, x=xs))
