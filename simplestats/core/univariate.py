"""Concrete continuous univariate distributions.

Every class validates its parameters in ``__init__`` (raising
:class:`~simplestats.core.exceptions.DomainError` naming the offending
parameter) and hands closed form moments to
:class:`~simplestats.core.distributions.ContinuousDistribution`. Quantiles
use closed forms where the cdf is algebraically invertible and bisection of
the cdf over the support otherwise.

``pdf`` and ``cdf`` accept any float: NaN propagates, the cdf is 0 below
and 1 above the support.

Poisson and Binomial are continuous interpolations of the discrete laws:
their cdfs agree with the discrete ones at integer arguments.
"""

import math

from scipy.special import erfinv, xlogy

from ._utils import (
    _require_finite,
    _require_non_negative,
    _require_positive,
    _require_probability,
)
from .distributions import ContinuousDistribution
from .exceptions import DomainError
from .special import (
    _exp,
    _log_beta,
    _pow,
    beta_incomplete_regular,
    erf,
    gamma,
    gamma_high_regular,
    gamma_low_regular,
    log_gamma,
)

__all__ = [
    "NormalDistribution",
    "LogNormalDistribution",
    "UniformDistribution",
    "ConstantDistribution",
    "ExponentialDistribution",
    "GammaDistribution",
    "ChiSquaredDistribution",
    "BetaDistribution",
    "PertDistribution",
    "StudentDistribution",
    "FisherDistribution",
    "CauchyDistribution",
    "LaplaceDistribution",
    "LogisticDistribution",
    "RayleighDistribution",
    "MaxwellDistribution",
    "WeibullDistribution",
    "ParetoDistribution",
    "TriangularDistribution",
    "LogTriangularDistribution",
    "PoissonDistribution",
    "BinomialDistribution",
]

_SQRT_2 = math.sqrt(2.0)
_SQRT_2PI = math.sqrt(2.0 * math.pi)


def _normal_cdf(z: float) -> float:
    # standard normal cdf via the error integral
    return 0.5 * (1.0 + erf(z / _SQRT_2))


def _normal_quantile(p: float) -> float:
    return _SQRT_2 * float(erfinv(2.0 * p - 1.0))


# --------------------------------------------------------------------
# Normal family
# --------------------------------------------------------------------

class NormalDistribution(ContinuousDistribution):
    """Normal (Gaussian) distribution N(mu, sigma^2).

    Attributes:
        mu: Mean.
        sigma: Standard deviation (> 0).
    """

    def __init__(self, mean: float = 0.0, sigma: float = 1.0):
        """Initializes a Normal distribution.

        Args:
            mean: Location of the distribution.
            sigma: Standard deviation (must be > 0).

        Raises:
            DomainError: If ``mean`` is not finite or ``sigma`` is not positive.
        """
        self.mu = _require_finite("mean", mean)
        self.sigma = _require_positive("sigma", sigma)
        super().__init__(mean=self.mu, variance=self.sigma * self.sigma)

    def pdf(self, x: float) -> float:
        z = (float(x) - self.mu) / self.sigma
        return math.exp(-0.5 * z * z) / (self.sigma * _SQRT_2PI)

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        return _normal_cdf((x - self.mu) / self.sigma)

    def qdf(self, p: float) -> float:
        p = _require_probability("p", p)
        if p == 0.0:
            return -math.inf
        if p == 1.0:
            return math.inf
        return self.mu + self.sigma * _normal_quantile(p)

    def __repr__(self) -> str:
        return f"NormalDistribution(mean={self.mu}, sigma={self.sigma})"


class LogNormalDistribution(ContinuousDistribution):
    """Log-normal distribution: ``log X ~ N(mu, sigma^2)``.

    Attributes:
        mu: Mean of ``log X``.
        sigma: Standard deviation of ``log X`` (> 0).
    """

    support = (0.0, math.inf)

    def __init__(self, mu: float = 0.0, sigma: float = 1.0):
        self.mu = _require_finite("mu", mu)
        self.sigma = _require_positive("sigma", sigma)
        s2 = self.sigma * self.sigma
        super().__init__(
            mean=_exp(self.mu + s2 / 2.0),
            variance=math.expm1(s2) * _exp(2.0 * self.mu + s2) if s2 < 700.0 else math.inf,
        )

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x <= 0.0 or math.isinf(x):
            return 0.0
        z = (math.log(x) - self.mu) / self.sigma
        return math.exp(-0.5 * z * z) / (x * self.sigma * _SQRT_2PI)

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x <= 0.0:
            return 0.0
        return _normal_cdf((math.log(x) - self.mu) / self.sigma)

    def qdf(self, p: float) -> float:
        p = _require_probability("p", p)
        if p == 0.0:
            return 0.0
        if p == 1.0:
            return math.inf
        return _exp(self.mu + self.sigma * _normal_quantile(p))

    def __repr__(self) -> str:
        return f"LogNormalDistribution(mu={self.mu}, sigma={self.sigma})"


# --------------------------------------------------------------------
# Bounded shapes
# --------------------------------------------------------------------

class UniformDistribution(ContinuousDistribution):
    """Continuous uniform distribution on ``[left, right]``.

    ``left == right`` is allowed and behaves as a constant.
    """

    def __init__(self, left: float = 0.0, right: float = 1.0):
        """Initializes a Uniform distribution.

        Args:
            left: Lower bound.
            right: Upper bound (``>= left``).

        Raises:
            DomainError: If a bound is not finite or ``right < left``.
        """
        self.left = _require_finite("left", left)
        self.right = _require_finite("right", right)
        if self.right < self.left:
            raise DomainError("right", "value must not be less than left")
        self.support = (self.left, self.right)
        width = self.right - self.left
        super().__init__(mean=(self.left + self.right) / 2.0, variance=width * width / 12.0)

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if self.left == self.right:
            return math.inf if x == self.left else 0.0
        if x < self.left or x > self.right:
            return 0.0
        return 1.0 / (self.right - self.left)

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x < self.left:
            return 0.0
        if x >= self.right:
            return 1.0
        return (x - self.left) / (self.right - self.left)

    def qdf(self, p: float) -> float:
        p = _require_probability("p", p)
        return self.left + p * (self.right - self.left)

    def __repr__(self) -> str:
        return f"UniformDistribution(left={self.left}, right={self.right})"


class ConstantDistribution(ContinuousDistribution):
    """Degenerate distribution concentrated at ``value``."""

    def __init__(self, value: float):
        self.value = _require_finite("value", value)
        self.support = (self.value, self.value)
        super().__init__(mean=self.value, variance=0.0)

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        return math.inf if x == self.value else 0.0

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        return 1.0 if x >= self.value else 0.0

    def qdf(self, p: float) -> float:
        _require_probability("p", p)
        return self.value

    def __repr__(self) -> str:
        return f"ConstantDistribution(value={self.value})"


class BetaDistribution(ContinuousDistribution):
    """Beta distribution on [0, 1].

    Attributes:
        alpha: First shape parameter (> 0).
        beta: Second shape parameter (> 0).
    """

    support = (0.0, 1.0)

    def __init__(self, alpha: float, beta: float):
        self.alpha = _require_positive("alpha", alpha)
        self.beta = _require_positive("beta", beta)
        total = self.alpha + self.beta
        self._log_norm = _log_beta(self.alpha, self.beta)
        super().__init__(
            mean=self.alpha / total,
            variance=self.alpha * self.beta / (total * total * (total + 1.0)),
        )

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x < 0.0 or x > 1.0:
            return 0.0
        if x == 0.0:
            return self._edge_density(self.alpha, self.beta)
        if x == 1.0:
            return self._edge_density(self.beta, self.alpha)
        return _exp((self.alpha - 1.0) * math.log(x)
                    + (self.beta - 1.0) * math.log1p(-x)
                    - self._log_norm)

    @staticmethod
    def _edge_density(near: float, far: float) -> float:
        # limit of the density at the border whose exponent is near - 1
        if near < 1.0:
            return math.inf
        if near == 1.0:
            return far
        return 0.0

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x <= 0.0:
            return 0.0
        if x >= 1.0:
            return 1.0
        return beta_incomplete_regular(x, self.alpha, self.beta)

    def __repr__(self) -> str:
        return f"BetaDistribution(alpha={self.alpha}, beta={self.beta})"


class PertDistribution(ContinuousDistribution):
    """PERT distribution: a Beta rescaled to ``[a, c]`` with mode ``b``.

    Shapes are ``alpha = 1 + 4 (b - a) / (c - a)`` and
    ``beta = 1 + 4 (c - b) / (c - a)``.

    Attributes:
        a: Minimum.
        b: Most likely value.
        c: Maximum.
    """

    def __init__(self, a: float, b: float, c: float):
        """Initializes a PERT distribution.

        Args:
            a: Minimum.
            b: Mode, strictly between ``a`` and ``c``.
            c: Maximum.

        Raises:
            DomainError: If a parameter is not finite or ``a < b < c`` fails.
        """
        self.a = _require_finite("a", a)
        self.b = _require_finite("b", b)
        self.c = _require_finite("c", c)
        if self.b <= self.a:
            raise DomainError("b", "value must be bigger than a")
        if self.c <= self.b:
            raise DomainError("c", "value must be bigger than b")

        width = self.c - self.a
        self._standard = BetaDistribution(1.0 + 4.0 * (self.b - self.a) / width,
                                          1.0 + 4.0 * (self.c - self.b) / width)
        self.support = (self.a, self.c)

        mean = (self.a + 4.0 * self.b + self.c) / 6.0
        super().__init__(mean=mean, variance=(mean - self.a) * (self.c - mean) / 7.0)

    def pdf(self, x: float) -> float:
        width = self.c - self.a
        return self._standard.pdf((float(x) - self.a) / width) / width

    def cdf(self, x: float) -> float:
        return self._standard.cdf((float(x) - self.a) / (self.c - self.a))

    def __repr__(self) -> str:
        return f"PertDistribution(a={self.a}, b={self.b}, c={self.c})"


class TriangularDistribution(ContinuousDistribution):
    """Triangular distribution on ``[left, right]`` peaking at ``mode``."""

    def __init__(self, left: float, right: float, mode: float):
        """Initializes a Triangular distribution.

        Args:
            left: Lower bound.
            right: Upper bound (``> left``).
            mode: Peak location in ``[left, right]``.

        Raises:
            DomainError: If a parameter is not finite, the interval is
                empty or the mode lies outside it.
        """
        self.left = _require_finite("left", left)
        self.right = _require_finite("right", right)
        self.mode = _require_finite("mode", mode)
        if self.right <= self.left:
            raise DomainError("right", "empty [left..right) interval")
        if self.mode < self.left:
            raise DomainError("mode", "wrong mode location (mode < left)")
        if self.mode > self.right:
            raise DomainError("mode", "wrong mode location (mode > right)")
        self.support = (self.left, self.right)

        a, b, c = self.left, self.right, self.mode
        super().__init__(
            mean=(a + b + c) / 3.0,
            variance=(a * a + b * b + c * c - a * b - a * c - b * c) / 18.0,
        )

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        a, b, c = self.left, self.right, self.mode
        if x < a or x > b:
            return 0.0
        if x < c:
            return 2.0 * (x - a) / ((b - a) * (c - a))
        if x == c:
            return 2.0 / (b - a)
        return 2.0 * (b - x) / ((b - a) * (b - c))

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        a, b, c = self.left, self.right, self.mode
        if x <= a:
            return 0.0
        if x >= b:
            return 1.0
        if x <= c:
            return (x - a) * (x - a) / ((b - a) * (c - a))
        return 1.0 - (b - x) * (b - x) / ((b - a) * (b - c))

    def qdf(self, p: float) -> float:
        p = _require_probability("p", p)
        a, b, c = self.left, self.right, self.mode
        if p == 0.0:
            return a
        if p == 1.0:
            return b
        if p <= (c - a) / (b - a):
            return a + math.sqrt(p * (b - a) * (c - a))
        return b - math.sqrt((1.0 - p) * (b - a) * (b - c))

    def __repr__(self) -> str:
        return f"TriangularDistribution(left={self.left}, right={self.right}, mode={self.mode})"


class LogTriangularDistribution(ContinuousDistribution):
    """Distribution of ``exp(Y)`` where ``Y`` is triangular.

    The parameters are given in log space: the support is
    ``[exp(left), exp(right)]`` and the log-density peaks at ``exp(mode)``.
    Moments are integrated numerically.
    """

    def __init__(self, left: float, right: float, mode: float):
        self._log = TriangularDistribution(left, right, mode)
        self.left = self._log.left
        self.right = self._log.right
        self.mode = self._log.mode
        self.support = (_exp(self.left), _exp(self.right))
        super().__init__()

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x <= 0.0 or math.isinf(x):
            return 0.0
        return self._log.pdf(math.log(x)) / x

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x <= 0.0:
            return 0.0
        return self._log.cdf(math.log(x))

    def qdf(self, p: float) -> float:
        return _exp(self._log.qdf(p))

    def __repr__(self) -> str:
        return f"LogTriangularDistribution(left={self.left}, right={self.right}, mode={self.mode})"


# --------------------------------------------------------------------
# Gamma family
# --------------------------------------------------------------------

class ExponentialDistribution(ContinuousDistribution):
    """Exponential distribution with rate ``rate`` (mean ``1 / rate``)."""

    support = (0.0, math.inf)

    def __init__(self, rate: float = 1.0):
        self.rate = _require_positive("rate", rate)
        super().__init__(mean=1.0 / self.rate, variance=1.0 / (self.rate * self.rate))

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x < 0.0:
            return 0.0
        return self.rate * math.exp(-self.rate * x)

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x <= 0.0:
            return 0.0
        return -math.expm1(-self.rate * x)

    def qdf(self, p: float) -> float:
        p = _require_probability("p", p)
        if p == 0.0:
            return 0.0
        if p == 1.0:
            return math.inf
        return -math.log1p(-p) / self.rate

    def __repr__(self) -> str:
        return f"ExponentialDistribution(rate={self.rate})"


class GammaDistribution(ContinuousDistribution):
    """Gamma distribution with shape ``k`` and scale ``theta``.

    Attributes:
        shape: Shape ``k`` (> 0).
        scale: Scale ``theta`` (> 0).
    """

    support = (0.0, math.inf)

    def __init__(self, shape: float, scale: float = 1.0):
        self.shape = _require_positive("shape", shape)
        self.scale = _require_positive("scale", scale)
        self._log_norm = log_gamma(self.shape) + self.shape * math.log(self.scale)
        super().__init__(mean=self.shape * self.scale,
                         variance=self.shape * self.scale * self.scale)

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x < 0.0 or math.isinf(x):
            return 0.0
        if x == 0.0:
            if self.shape < 1.0:
                return math.inf
            return 1.0 / self.scale if self.shape == 1.0 else 0.0
        return _exp((self.shape - 1.0) * math.log(x) - x / self.scale - self._log_norm)

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x <= 0.0:
            return 0.0
        return gamma_low_regular(self.shape, x / self.scale)

    def __repr__(self) -> str:
        return f"GammaDistribution(shape={self.shape}, scale={self.scale})"


class ChiSquaredDistribution(GammaDistribution):
    """Chi-squared distribution with ``df`` degrees of freedom, Gamma(df / 2, 2)."""

    def __init__(self, df: float):
        self.df = _require_positive("df", df)
        super().__init__(self.df / 2.0, 2.0)

    def __repr__(self) -> str:
        return f"ChiSquaredDistribution(df={self.df})"


class MaxwellDistribution(ContinuousDistribution):
    """Maxwell-Boltzmann distribution with scale ``a``."""

    support = (0.0, math.inf)

    def __init__(self, a: float):
        self.a = _require_positive("a", a)
        super().__init__(
            mean=2.0 * self.a * math.sqrt(2.0 / math.pi),
            variance=self.a * self.a * (3.0 * math.pi - 8.0) / math.pi,
        )

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x <= 0.0 or math.isinf(x):
            return 0.0
        z = x / self.a
        return math.sqrt(2.0 / math.pi) * _exp(2.0 * math.log(z) - 0.5 * z * z) / self.a

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x <= 0.0:
            return 0.0
        z = x / self.a
        return gamma_low_regular(1.5, 0.5 * z * z)

    def __repr__(self) -> str:
        return f"MaxwellDistribution(a={self.a})"


class RayleighDistribution(ContinuousDistribution):
    """Rayleigh distribution with scale ``sigma``."""

    support = (0.0, math.inf)

    def __init__(self, sigma: float):
        self.sigma = _require_positive("sigma", sigma)
        super().__init__(
            mean=self.sigma * math.sqrt(math.pi / 2.0),
            variance=(4.0 - math.pi) / 2.0 * self.sigma * self.sigma,
        )

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x <= 0.0 or math.isinf(x):
            return 0.0
        z = x / self.sigma
        return z * math.exp(-0.5 * z * z) / self.sigma

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x <= 0.0:
            return 0.0
        z = x / self.sigma
        return -math.expm1(-0.5 * z * z)

    def qdf(self, p: float) -> float:
        p = _require_probability("p", p)
        if p == 0.0:
            return 0.0
        if p == 1.0:
            return math.inf
        return self.sigma * math.sqrt(-2.0 * math.log1p(-p))

    def __repr__(self) -> str:
        return f"RayleighDistribution(sigma={self.sigma})"


class WeibullDistribution(ContinuousDistribution):
    """Weibull distribution with scale ``lambda`` and shape ``k``.

    Attributes:
        scale: Scale (> 0).
        shape: Shape (> 0).
    """

    support = (0.0, math.inf)

    def __init__(self, scale: float, shape: float):
        self.scale = _require_positive("scale", scale)
        self.shape = _require_positive("shape", shape)
        g1 = gamma(1.0 + 1.0 / self.shape)
        g2 = gamma(1.0 + 2.0 / self.shape)
        super().__init__(mean=self.scale * g1,
                         variance=self.scale * self.scale * (g2 - g1 * g1))

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x < 0.0 or math.isinf(x):
            return 0.0
        if x == 0.0:
            if self.shape < 1.0:
                return math.inf
            return 1.0 / self.scale if self.shape == 1.0 else 0.0
        z = x / self.scale
        return _exp(math.log(self.shape / self.scale)
                    + (self.shape - 1.0) * math.log(z) - _pow(z, self.shape))

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x <= 0.0:
            return 0.0
        return -math.expm1(-_pow(x / self.scale, self.shape))

    def qdf(self, p: float) -> float:
        p = _require_probability("p", p)
        if p == 1.0:
            return math.inf
        return self.scale * _pow(-math.log1p(-p), 1.0 / self.shape)

    def __repr__(self) -> str:
        return f"WeibullDistribution(scale={self.scale}, shape={self.shape})"


class PoissonDistribution(ContinuousDistribution):
    """Continuous interpolation of the Poisson law with rate ``rate``.

    ``cdf(x) = Q(x + 1, rate)`` for ``x >= 0`` (regularized upper incomplete
    Gamma), which equals the discrete cdf at integer ``x``. The density is
    the interpolated mass function ``rate^x e^-rate / Gamma(x + 1)``.
    """

    support = (0.0, math.inf)

    def __init__(self, rate: float):
        self.rate = _require_positive("rate", rate)
        super().__init__(mean=self.rate, variance=self.rate)

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x < 0.0 or math.isinf(x):
            return 0.0
        return _exp(float(xlogy(x, self.rate)) - self.rate - log_gamma(x + 1.0))

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x < 0.0:
            return 0.0
        if math.isinf(x):
            return 1.0
        return gamma_high_regular(x + 1.0, self.rate)

    def qdf(self, p: float) -> float:
        # the cdf jumps from 0 to P[X = 0] at the origin
        p = _require_probability("p", p)
        if p <= self.cdf(0.0):
            return 0.0
        return super().qdf(p)

    def __repr__(self) -> str:
        return f"PoissonDistribution(rate={self.rate})"


# --------------------------------------------------------------------
# Sampling distributions
# --------------------------------------------------------------------

class StudentDistribution(ContinuousDistribution):
    """Student's t distribution with ``df`` degrees of freedom.

    The mean is NaN for ``df <= 1``; the variance is inf for
    ``1 < df <= 2`` and NaN for ``df <= 1``.
    """

    def __init__(self, df: float):
        self.df = _require_positive("df", df)
        nu = self.df
        if nu > 2.0:
            variance = nu / (nu - 2.0)
        elif nu > 1.0:
            variance = math.inf
        else:
            variance = math.nan
        self._log_norm = (log_gamma((nu + 1.0) / 2.0) - log_gamma(nu / 2.0)
                          - 0.5 * math.log(nu * math.pi))
        super().__init__(mean=0.0 if nu > 1.0 else math.nan, variance=variance)

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        nu = self.df
        return _exp(self._log_norm - (nu + 1.0) / 2.0 * math.log1p(x * x / nu))

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        nu = self.df
        square = x * x
        if square < nu:
            # integrate from the center while nu / (nu + x^2) is close to 1
            half = 0.5 * beta_incomplete_regular(square / (nu + square), 0.5, nu / 2.0)
            return 0.5 - half if x < 0.0 else 0.5 + half
        tail = 0.5 * beta_incomplete_regular(nu / (nu + square), nu / 2.0, 0.5)
        return tail if x < 0.0 else 1.0 - tail

    def __repr__(self) -> str:
        return f"StudentDistribution(df={self.df})"


class FisherDistribution(ContinuousDistribution):
    """Fisher-Snedecor F distribution with ``d1`` and ``d2`` degrees of freedom."""

    support = (0.0, math.inf)

    def __init__(self, d1: float, d2: float):
        self.d1 = _require_positive("d1", d1)
        self.d2 = _require_positive("d2", d2)
        d1, d2 = self.d1, self.d2

        if d2 > 4.0:
            variance = 2.0 * d2 * d2 * (d1 + d2 - 2.0) / (d1 * (d2 - 2.0) ** 2 * (d2 - 4.0))
        elif d2 > 2.0:
            variance = math.inf
        else:
            variance = math.nan
        self._log_norm = _log_beta(d1 / 2.0, d2 / 2.0)
        super().__init__(mean=d2 / (d2 - 2.0) if d2 > 2.0 else math.nan, variance=variance)

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x < 0.0 or math.isinf(x):
            return 0.0
        d1, d2 = self.d1, self.d2
        if x == 0.0:
            if d1 < 2.0:
                return math.inf
            return 1.0 if d1 == 2.0 else 0.0
        log_x = math.log(x)
        return _exp(0.5 * (d1 * (math.log(d1) + log_x) + d2 * math.log(d2)
                           - (d1 + d2) * (log_x + math.log(d1 + d2 / x)))
                    - log_x - self._log_norm)

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x <= 0.0:
            return 0.0
        scaled = self.d1 * x
        if math.isinf(scaled):
            return 1.0
        return beta_incomplete_regular(scaled / (scaled + self.d2), self.d1 / 2.0, self.d2 / 2.0)

    def __repr__(self) -> str:
        return f"FisherDistribution(d1={self.d1}, d2={self.d2})"


class BinomialDistribution(ContinuousDistribution):
    """Continuous interpolation of the Binomial law with ``n`` trials.

    ``cdf(x) = I_q(n - x, x + 1)`` on ``[0, n)`` with ``q = 1 - p``, which
    equals the discrete cdf at integer ``x``. ``n`` may be any non-negative
    real.

    Attributes:
        n: Number of trials (>= 0).
        p: Success probability in [0, 1].
        q: Failure probability ``1 - p``.
    """

    def __init__(self, n: float, p: float = 0.5):
        self.n = _require_non_negative("n", n)
        self.p = _require_probability("p", p)
        self.q = 1.0 - self.p
        self.support = (0.0, self.n)
        super().__init__(mean=self.n * self.p, variance=self.n * self.p * self.q)

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x < 0.0 or x > self.n:
            return 0.0
        n = self.n
        return _exp(log_gamma(n + 1.0) - log_gamma(x + 1.0) - log_gamma(n - x + 1.0)
                    + float(xlogy(x, self.p)) + float(xlogy(n - x, self.q)))

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x < 0.0:
            return 0.0
        if x >= self.n:
            return 1.0
        return beta_incomplete_regular(self.q, self.n - x, x + 1.0)

    def qdf(self, p: float) -> float:
        # the cdf jumps from 0 to P[X = 0] at the origin
        p = _require_probability("p", p)
        if p <= self.cdf(0.0):
            return 0.0
        return super().qdf(p)

    def __repr__(self) -> str:
        return f"BinomialDistribution(n={self.n}, p={self.p})"


# --------------------------------------------------------------------
# Heavy and symmetric tails
# --------------------------------------------------------------------

class CauchyDistribution(ContinuousDistribution):
    """Cauchy distribution with location ``offset`` and scale ``gamma``.

    Mean and variance are undefined and reported as NaN.
    """

    def __init__(self, offset: float = 0.0, gamma: float = 1.0):
        self.offset = _require_finite("offset", offset)
        self.gamma = _require_positive("gamma", gamma)
        super().__init__(mean=math.nan, variance=math.nan)

    def pdf(self, x: float) -> float:
        z = (float(x) - self.offset) / self.gamma
        return 1.0 / (math.pi * self.gamma * (1.0 + z * z))

    def cdf(self, x: float) -> float:
        return 0.5 + math.atan((float(x) - self.offset) / self.gamma) / math.pi

    def qdf(self, p: float) -> float:
        p = _require_probability("p", p)
        if p == 0.0:
            return -math.inf
        if p == 1.0:
            return math.inf
        return self.offset + self.gamma * math.tan(math.pi * (p - 0.5))

    def __repr__(self) -> str:
        return f"CauchyDistribution(offset={self.offset}, gamma={self.gamma})"


class LaplaceDistribution(ContinuousDistribution):
    """Laplace (double exponential) distribution with location ``mu`` and scale ``b``."""

    def __init__(self, mu: float = 0.0, b: float = 1.0):
        self.mu = _require_finite("mu", mu)
        self.b = _require_positive("b", b)
        super().__init__(mean=self.mu, variance=2.0 * self.b * self.b)

    def pdf(self, x: float) -> float:
        return math.exp(-abs(float(x) - self.mu) / self.b) / (2.0 * self.b)

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        z = (x - self.mu) / self.b
        if z < 0.0:
            return 0.5 * math.exp(z)
        return 1.0 - 0.5 * math.exp(-z)

    def qdf(self, p: float) -> float:
        p = _require_probability("p", p)
        if p == 0.0:
            return -math.inf
        if p == 1.0:
            return math.inf
        if p < 0.5:
            return self.mu + self.b * math.log(2.0 * p)
        return self.mu - self.b * math.log(2.0 - 2.0 * p)

    def __repr__(self) -> str:
        return f"LaplaceDistribution(mu={self.mu}, b={self.b})"


class LogisticDistribution(ContinuousDistribution):
    """Logistic distribution with location ``mean`` and scale ``scale``."""

    def __init__(self, mean: float = 0.0, scale: float = 1.0):
        self.mu = _require_finite("mean", mean)
        self.scale = _require_positive("scale", scale)
        super().__init__(mean=self.mu,
                         variance=self.scale * self.scale * math.pi * math.pi / 3.0)

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        e = math.exp(-abs(x - self.mu) / self.scale)
        return e / (self.scale * (1.0 + e) * (1.0 + e))

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        return 1.0 / (1.0 + _exp(-(x - self.mu) / self.scale))

    def qdf(self, p: float) -> float:
        p = _require_probability("p", p)
        if p == 0.0:
            return -math.inf
        if p == 1.0:
            return math.inf
        return self.mu + self.scale * math.log(p / (1.0 - p))

    def __repr__(self) -> str:
        return f"LogisticDistribution(mean={self.mu}, scale={self.scale})"


class ParetoDistribution(ContinuousDistribution):
    """Pareto (type I) distribution with tail index ``shape`` and minimum ``scale``.

    The mean is inf for ``shape <= 1`` and the variance is inf for
    ``shape <= 2``.
    """

    def __init__(self, shape: float, scale: float = 1.0):
        self.shape = _require_positive("shape", shape)
        self.scale = _require_positive("scale", scale)
        self.support = (self.scale, math.inf)
        alpha, xm = self.shape, self.scale
        mean = alpha * xm / (alpha - 1.0) if alpha > 1.0 else math.inf
        if alpha > 2.0:
            variance = xm * xm * alpha / ((alpha - 1.0) ** 2 * (alpha - 2.0))
        else:
            variance = math.inf
        super().__init__(mean=mean, variance=variance)

    def pdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x < self.scale:
            return 0.0
        return _exp(math.log(self.shape) + self.shape * math.log(self.scale)
                    - (self.shape + 1.0) * math.log(x))

    def cdf(self, x: float) -> float:
        x = float(x)
        if math.isnan(x):
            return math.nan
        if x <= self.scale:
            return 0.0
        return 1.0 - _pow(self.scale / x, self.shape)

    def qdf(self, p: float) -> float:
        p = _require_probability("p", p)
        if p == 1.0:
            return math.inf
        return self.scale * _pow(1.0 - p, -1.0 / self.shape)

    def __repr__(self) -> str:
        return f"ParetoDistribution(shape={self.shape}, scale={self.scale})"
