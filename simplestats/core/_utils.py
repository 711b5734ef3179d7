import math

from .exceptions import DomainError


def _require_not_nan(name: str, value: float) -> float:
    """Converts ``value`` to float and rejects NaN.

    Args:
        name (str): Parameter name reported in the error.
        value (float): Value to check.

    Returns:
        float: ``value`` as a Python float.

    Raises:
        DomainError: If ``value`` is NaN.
    """
    v = float(value)
    if math.isnan(v):
        raise DomainError(name, "value must not be NaN")
    return v


def _require_finite(name: str, value: float) -> float:
    """Converts ``value`` to float and rejects NaN and infinities.

    Args:
        name (str): Parameter name reported in the error.
        value (float): Value to check.

    Returns:
        float: ``value`` as a Python float.

    Raises:
        DomainError: If ``value`` is not finite.
    """
    v = float(value)
    if not math.isfinite(v):
        raise DomainError(name, "value must be finite")
    return v


def _require_positive(name: str, value: float) -> float:
    """Converts ``value`` to float and requires a finite, strictly positive number.

    Args:
        name (str): Parameter name reported in the error.
        value (float): Value to check.

    Returns:
        float: ``value`` as a Python float.

    Raises:
        DomainError: If ``value`` is not finite or not positive.
    """
    v = _require_finite(name, value)
    if v <= 0.0:
        raise DomainError(name, "value must be positive")
    return v


def _require_non_negative(name: str, value: float) -> float:
    v = _require_finite(name, value)
    if v < 0.0:
        raise DomainError(name, "value must not be negative")
    return v


def _require_probability(name: str, value: float) -> float:
    """Requires ``value`` to lie in the closed unit interval [0, 1].

    Args:
        name (str): Parameter name reported in the error.
        value (float): Value to check.

    Returns:
        float: ``value`` as a Python float.

    Raises:
        DomainError: If ``value`` is NaN or outside [0, 1].
    """
    v = _require_not_nan(name, value)
    if v < 0.0 or v > 1.0:
        raise DomainError(name, "value must be in [0..1] range")
    return v
