import logging
import math

import pytest

from simplestats import BracketError, DomainError
from simplestats.core.numeric import (
    INFINITY_SENTINEL,
    inverse,
    inverse_at,
    simpson_at,
    solve,
)


# Bisection
# --------------------------------------------------------------------

def test_inverse_at_increasing_function():
    assert inverse_at(lambda x: x ** 3, 8.0, 0.0, 10.0) == pytest.approx(2.0, abs=1e-12)


def test_inverse_at_decreasing_function():
    assert inverse_at(lambda x: -x, -3.0, 0.0, 10.0) == pytest.approx(3.0, abs=1e-12)


def test_inverse_at_over_the_whole_line():
    assert inverse_at(math.atan, 1.0) == pytest.approx(math.tan(1.0), abs=1e-12)


def test_inverse_at_degenerate_interval():
    assert inverse_at(lambda x: x, 2.0, 2.0, 2.0) == 2.0


def test_inverse_at_clamps_infinite_target():
    assert inverse_at(lambda x: x, math.inf) == pytest.approx(INFINITY_SENTINEL, rel=1e-12)


@pytest.mark.parametrize("target", [20.0, -5.0])
def test_inverse_at_without_bracket_raises(target):
    with pytest.raises(BracketError) as info:
        inverse_at(lambda x: x, target, 0.0, 10.0)
    assert info.value.target == target
    assert (info.value.left, info.value.right) == (0.0, 10.0)


def test_bracket_error_is_a_value_error():
    with pytest.raises(ValueError):
        inverse_at(lambda x: x * x, -1.0, -3.0, 3.0)


@pytest.mark.parametrize("args", [
    (math.nan, 0.0, 1.0),
    (0.5, math.nan, 1.0),
    (0.5, 0.0, math.nan),
])
def test_inverse_at_rejects_nan(args):
    with pytest.raises(DomainError):
        inverse_at(lambda x: x, *args)


def test_inverse_at_rejects_empty_interval():
    with pytest.raises(DomainError) as info:
        inverse_at(lambda x: x, 0.5, 1.0, 0.0)
    assert info.value.parameter == "right"


def test_inverse_at_logs_convergence(caplog):
    caplog.set_level(logging.DEBUG, logger="simplestats.core.numeric")
    inverse_at(lambda x: x, 0.25, 0.0, 1.0)
    assert "converged" in caplog.text


def test_inverse_returns_callable():
    log_of = inverse(math.exp, 0.0, 10.0)
    assert log_of(math.e) == pytest.approx(1.0, abs=1e-12)
    assert log_of(1.0) == pytest.approx(0.0, abs=1e-12)


def test_inverse_validates_bounds_eagerly():
    with pytest.raises(DomainError):
        inverse(math.exp, math.nan, 1.0)


def test_solve_finds_root():
    assert solve(lambda x: x * x - 2.0, 0.0, 2.0) == pytest.approx(math.sqrt(2.0), abs=1e-12)


# Simpson quadrature
# --------------------------------------------------------------------

def test_simpson_exact_on_cubics():
    assert simpson_at(lambda x: x ** 3 - x, 0.0, 2.0) == pytest.approx(2.0, rel=1e-12)
    assert simpson_at(lambda x: x * x, 0.0, 3.0) == pytest.approx(9.0, rel=1e-12)


def test_simpson_sine():
    assert simpson_at(math.sin, 0.0, math.pi) == pytest.approx(2.0, abs=1e-10)


def test_simpson_reversed_limits():
    assert simpson_at(lambda x: x * x, 3.0, 0.0) == pytest.approx(-9.0, rel=1e-12)


def test_simpson_degenerate_interval():
    assert simpson_at(lambda x: 1.0 / x, 1.0, 1.0) == 0.0


def test_simpson_custom_subdivision():
    assert simpson_at(math.exp, 0.0, 1.0, n_intervals=10) == pytest.approx(math.e - 1.0, rel=1e-5)


@pytest.mark.parametrize("n_intervals", [0, 3, -2])
def test_simpson_rejects_bad_subdivision(n_intervals):
    with pytest.raises(DomainError):
        simpson_at(math.exp, 0.0, 1.0, n_intervals=n_intervals)


def test_simpson_rejects_infinite_limits():
    with pytest.raises(DomainError):
        simpson_at(math.exp, 0.0, math.inf)
