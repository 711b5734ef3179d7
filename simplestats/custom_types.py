# custom_types.py
"""
Type aliases shared across simplestats.

We generally follow the conventions:
- Annotate scalar function input and output with `float`
- Annotate array output (samples, unit-hypercube points) with `Array`
"""
from __future__ import annotations
from typing import Callable, TypeAlias
from numpy.random import Generator as NumpyRNG

from numpy.typing import (
    NDArray as NumpyArray
)

Array = NumpyArray
PRNG: TypeAlias = NumpyRNG
RealFunction: TypeAlias = Callable[[float], float]
