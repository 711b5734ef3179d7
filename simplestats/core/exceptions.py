"""Exception types raised by simplestats.

Both concrete errors derive from :class:`ValueError`, so code that guards a
call with ``except ValueError`` keeps working.
"""

from __future__ import annotations

__all__ = [
    "SimpleStatsError",
    "DomainError",
    "BracketError",
]


class SimpleStatsError(Exception):
    """Base class for all simplestats errors."""


class DomainError(SimpleStatsError, ValueError):
    """A parameter or argument lies outside its mathematically valid range.

    Attributes:
        parameter: Name of the offending parameter.
        constraint: Human readable description of the violated constraint.
    """

    def __init__(self, parameter: str, constraint: str):
        self.parameter = parameter
        self.constraint = constraint
        super().__init__(f"{parameter}: {constraint}")


class BracketError(SimpleStatsError, ValueError):
    """Bisection could not establish a bracket straddling the target value.

    Attributes:
        left: Left end of the bracket.
        right: Right end of the bracket.
        target: Value the function was supposed to reach.
    """

    def __init__(self, left: float, right: float, target: float):
        self.left = left
        self.right = right
        self.target = target
        super().__init__(
            f"insufficient or incorrect interval [{left!r}, {right!r}] for target {target!r}"
        )
