import math

import numpy as np
import pytest
import scipy.special as sps
from scipy.stats import norm

from simplestats import DomainError
from simplestats.core.special import (
    bernoulli_coefficient,
    beta_func,
    beta_incomplete,
    beta_incomplete_regular,
    erf,
    erfc,
    factorial,
    fi,
    fi_stat,
    gamma,
    gamma_high,
    gamma_high_regular,
    gamma_low,
    gamma_low_regular,
    log_gamma,
    pochhammer,
    sign_gamma,
)


# Gamma
# --------------------------------------------------------------------

@pytest.mark.parametrize("n", range(0, 21))
def test_gamma_matches_factorial(n):
    assert gamma(n + 1.0) == pytest.approx(math.factorial(n), rel=1e-12)
    assert factorial(n) == pytest.approx(math.factorial(n), rel=1e-12)


@pytest.mark.parametrize("x", [0.1, 0.5, 1.5, 3.7, 10.2, 13.99, 14.0, 25.5, 100.3, 170.5])
def test_gamma_positive_against_scipy(x):
    assert gamma(x) == pytest.approx(sps.gamma(x), rel=1e-11)


@pytest.mark.parametrize("x", [-0.5, -1.5, -2.5, -7.3, -20.25])
def test_gamma_negative_against_scipy(x):
    assert gamma(x) == pytest.approx(sps.gamma(x), rel=1e-11)


@pytest.mark.parametrize("x", [0.0, -1.0, -2.0, -15.0])
def test_gamma_poles_are_infinite(x):
    assert gamma(x) == math.inf
    assert log_gamma(x) == math.inf


def test_gamma_overflow_is_infinite_not_an_error():
    assert gamma(200.0) == math.inf
    assert gamma(1e300) == math.inf


@pytest.mark.parametrize("x", [0.5, 3.0, 10.5, 49.9, 50.1, 200.0, 1e5, -0.5, -3.5, -60.5])
def test_log_gamma_against_scipy(x):
    assert log_gamma(x) == pytest.approx(sps.gammaln(x), rel=1e-10)


@pytest.mark.parametrize("x,expected", [
    (2.5, 1),
    (0.0, 1),
    (-0.5, -1),
    (-1.5, 1),
    (-2.5, -1),
    (-3.5, 1),
])
def test_sign_gamma(x, expected):
    assert sign_gamma(x) == expected
    if x != 0.0:
        assert np.sign(sps.gamma(x)) == expected


def test_pochhammer_rising_factorial():
    assert pochhammer(3.0, 4.0) == pytest.approx(3 * 4 * 5 * 6, rel=1e-12)
    assert pochhammer(0.5, 2.0) == pytest.approx(0.5 * 1.5, rel=1e-12)


# Bernoulli coefficients
# --------------------------------------------------------------------

def test_bernoulli_table_values():
    assert bernoulli_coefficient(0) == 1.0
    assert bernoulli_coefficient(1) == -0.5
    assert bernoulli_coefficient(2) == pytest.approx(1.0 / 6.0)
    assert bernoulli_coefficient(12) == pytest.approx(-691.0 / 2730.0)
    assert bernoulli_coefficient(-2) == 0.0


@pytest.mark.parametrize("k", range(1, 16))
def test_odd_bernoulli_coefficients_vanish(k):
    assert bernoulli_coefficient(2 * k + 1) == 0.0


@pytest.mark.parametrize("n,expected", [
    (24, -236364091.0 / 2730.0),
    (26, 8553103.0 / 6.0),
    (28, -23749461029.0 / 870.0),
])
def test_bernoulli_beyond_table(n, expected):
    assert bernoulli_coefficient(n) == pytest.approx(expected, rel=1e-10)


# Beta
# --------------------------------------------------------------------

@pytest.mark.parametrize("a,b", [(2.0, 3.0), (0.5, 0.5), (7.5, 1.25), (30.0, 40.0)])
def test_beta_func_against_scipy(a, b):
    assert beta_func(a, b) == pytest.approx(sps.beta(a, b), rel=1e-10)


@pytest.mark.parametrize("x,a,b", [
    (0.3, 2.0, 3.0),
    (0.7, 2.0, 3.0),
    (0.5, 0.5, 0.5),
    (0.2, 5.0, 1.5),
    (0.9, 1.5, 4.0),
    (0.05, 0.3, 2.7),
])
def test_beta_incomplete_regular_against_scipy(x, a, b):
    assert beta_incomplete_regular(x, a, b) == pytest.approx(sps.betainc(a, b, x), abs=1e-10)


@pytest.mark.parametrize("x,a,b", [
    (0.43, 60.0, 80.0),
    (0.6, 3000.0, 2001.0),
    (0.5, 200.0, 300.0),
    (0.99082, 500.0, 2.5),
    (0.01, 2.5, 500.0),
    (0.3, 1000.0, 2500.0),
])
def test_beta_incomplete_regular_large_shapes(x, a, b):
    assert beta_incomplete_regular(x, a, b) == pytest.approx(sps.betainc(a, b, x), rel=1e-8, abs=1e-12)


def test_beta_incomplete_regular_known_value():
    assert beta_incomplete_regular(0.99082, 500.0, 2.5) == pytest.approx(0.1000000030603, rel=1e-9)


@pytest.mark.parametrize("a,b", [(0.5, 0.5), (2.0, 3.0), (60.0, 80.0), (500.0, 2.5), (2.5, 500.0), (1000.0, 1000.0)])
def test_beta_incomplete_regular_stays_in_unit_interval(a, b):
    values = [beta_incomplete_regular(x, a, b) for x in np.linspace(0.0, 1.0, 201)]
    assert all(0.0 <= v <= 1.0 for v in values)
    assert np.all(np.diff(values) >= -1e-12)


@pytest.mark.parametrize("x,a,b", [(0.3, 2.0, 3.0), (0.25, 0.5, 0.5), (0.1, 1.5, 4.0)])
def test_beta_incomplete_against_scipy(x, a, b):
    expected = sps.betainc(a, b, x) * sps.beta(a, b)
    assert beta_incomplete(x, a, b) == pytest.approx(expected, rel=1e-10)


def test_beta_incomplete_regular_endpoints():
    assert beta_incomplete_regular(0.0, 2.0, 3.0) == 0.0
    assert beta_incomplete_regular(1.0, 2.0, 3.0) == 1.0
    assert beta_incomplete(0.0, 2.0, 3.0) == 0.0


@pytest.mark.parametrize("x,a,b", [(1.5, 1.0, 1.0), (-0.1, 1.0, 1.0), (0.5, 0.0, 1.0), (0.5, 1.0, -2.0)])
def test_beta_incomplete_rejects_bad_arguments(x, a, b):
    with pytest.raises(DomainError):
        beta_incomplete(x, a, b)
    with pytest.raises(DomainError):
        beta_incomplete_regular(x, a, b)


# Incomplete gamma
# --------------------------------------------------------------------

@pytest.mark.parametrize("s,x", [(0.5, 0.3), (2.0, 1.0), (5.0, 3.0), (5.0, 10.0), (30.0, 25.0), (100.0, 90.0)])
def test_gamma_low_regular_against_scipy(s, x):
    assert gamma_low_regular(s, x) == pytest.approx(sps.gammainc(s, x), abs=1e-10)
    assert gamma_high_regular(s, x) == pytest.approx(sps.gammaincc(s, x), abs=1e-10)


@pytest.mark.parametrize("s,x", [
    (3000.0, 2900.0),
    (3000.0, 3100.0),
    (3000.0, 7000.0),
    (50.0, 200.0),
    (1e4, 1e4),
    (1e4, 9800.0),
])
def test_gamma_regular_large_shapes(s, x):
    assert gamma_low_regular(s, x) == pytest.approx(sps.gammainc(s, x), abs=1e-9)
    assert gamma_high_regular(s, x) == pytest.approx(sps.gammaincc(s, x), rel=1e-8, abs=1e-300)


def test_gamma_high_regular_keeps_small_tails():
    # 1 - P would round to 0 here
    expected = sps.gammaincc(5.0, 80.0)
    assert expected < 1e-20
    assert gamma_high_regular(5.0, 80.0) == pytest.approx(expected, rel=1e-10)


@pytest.mark.parametrize("s", [0.5, 3.0, 60.0, 3000.0])
def test_gamma_regular_stays_in_unit_interval(s):
    xs = np.linspace(0.0, 3.0 * s + 20.0, 301)
    low = [gamma_low_regular(s, x) for x in xs]
    high = [gamma_high_regular(s, x) for x in xs]
    assert all(0.0 <= v <= 1.0 for v in low + high)
    assert np.all(np.diff(low) >= -1e-12)
    np.testing.assert_allclose(np.add(low, high), 1.0, atol=1e-12)


def test_gamma_high_regular_endpoints():
    assert gamma_high_regular(2.0, 0.0) == 1.0
    assert gamma_high_regular(2.0, math.inf) == 0.0


def test_gamma_low_regular_saturates():
    assert gamma_low_regular(2.0, 0.0) == 0.0
    assert gamma_low_regular(2.0, math.inf) == 1.0
    assert gamma_low_regular(2.0, 1e6) == 1.0


@pytest.mark.parametrize("s,x", [(0.5, 4.0), (2.0, 1.0), (3.5, 2.0)])
def test_gamma_low_against_scipy(s, x):
    expected = sps.gammainc(s, x) * sps.gamma(s)
    assert gamma_low(s, x) == pytest.approx(expected, rel=1e-11)


@pytest.mark.parametrize("s,x", [(2.0, 1.0), (3.5, 2.0)])
def test_gamma_high_against_scipy(s, x):
    expected = sps.gammaincc(s, x) * sps.gamma(s)
    assert gamma_high(s, x) == pytest.approx(expected, rel=1e-10)


def test_gamma_low_when_gamma_of_shape_overflows():
    # Gamma(s + 1) is inf, the series switches to direct terms
    expected = math.exp(math.log(sps.gammainc(180.0, 10.0)) + sps.gammaln(180.0))
    assert gamma_low(180.0, 10.0) == pytest.approx(expected, rel=1e-8)


@pytest.mark.parametrize("s,x", [(-1.0, 1.0), (0.0, 1.0), (1.0, -1.0), (1.0, math.nan)])
def test_incomplete_gamma_rejects_bad_arguments(s, x):
    with pytest.raises(DomainError):
        gamma_low(s, x)
    with pytest.raises(DomainError):
        gamma_low_regular(s, x)
    with pytest.raises(DomainError):
        gamma_high_regular(s, x)


# Error integral
# --------------------------------------------------------------------

def test_erf_at_zero():
    assert erf(0.0) == 0.0


@pytest.mark.parametrize("x", [1e-300, 1e-20, 5e-9])
def test_erf_near_zero_is_linear(x):
    assert erf(x) == pytest.approx(2.0 * x / math.sqrt(math.pi), rel=1e-15)
    assert erf(-x) == -erf(x)


@pytest.mark.parametrize("x", [0.1, 0.5, 1.0, 2.0, 3.3, 6.9])
def test_erf_is_odd(x):
    assert erf(-x) == -erf(x)


def test_erf_limits():
    assert erf(7.0) == pytest.approx(1.0, abs=1e-13)
    assert erf(8.0) == 1.0
    assert erf(-8.0) == -1.0
    assert erf(math.inf) == 1.0


@pytest.mark.parametrize("x", [-3.0, -1.2, -0.3, 0.25, 0.9, 1.7, 2.5, 4.0, 5.5])
def test_erf_against_scipy(x):
    assert erf(x) == pytest.approx(sps.erf(x), abs=1e-13)
    assert erfc(x) == pytest.approx(sps.erfc(x), abs=1e-13)


@pytest.mark.parametrize("x", [-3.0, -0.5, 0.0, 0.3, 1.0, 2.5, 4.0])
def test_fi_matches_erf(x):
    assert fi(x) == pytest.approx(sps.erf(x), abs=1e-12)


@pytest.mark.parametrize("x", [-2.0, 0.0, 1.0, 1.96])
def test_fi_stat_is_normal_cdf(x):
    assert fi_stat(x) == pytest.approx(norm.cdf(x), abs=1e-12)


def test_nan_arguments_raise():
    for func in (gamma, log_gamma, sign_gamma, erf, fi):
        with pytest.raises(DomainError):
            func(math.nan)
