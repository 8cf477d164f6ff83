"""Variate generators, one per catalog distribution.

Every generator validates its parameters before touching the source, so a
rejected parameter vector never consumes a draw. After validation each
logarithm and division is well defined as long as the source keeps its
uniforms strictly inside (0, 1).
"""

from __future__ import annotations

import math
from collections.abc import Callable

from ..core import ParameterLike, UniformSource
from ..distributions import check_parameters, get_distribution


class ConvergenceError(RuntimeError):
    """A rejection loop exceeded the caller's ``max_iterations`` cap."""

    def __init__(self, distribution: str, iterations: int) -> None:
        super().__init__(
            f"Sampling from the {distribution} distribution did not finish "
            f"within {iterations} iterations."
        )
        self.distribution = distribution
        self.iterations = iterations


Generator = Callable[..., float]

_SQUEEZE = 0.0331


def _bernoulli_draw(p: float, source: UniformSource) -> float:
    return 1.0 if source.uniform() > 1.0 - p else 0.0


def bernoulli(params: ParameterLike, source: UniformSource) -> float:
    """Bernoulli(p): 1 when ``u > 1 - p``, else 0."""
    (p,) = check_parameters(params, get_distribution("bernoulli"))
    return _bernoulli_draw(p, source)


def binomial(params: ParameterLike, source: UniformSource) -> float:
    """Binomial(n, p) as a sum of ``n`` Bernoulli(p) trials.

    The trial count comes *first*: ``binomial((10, 0.3), source)``. This is
    the reverse of the common ``B(p, n)`` notation.
    """
    n, p = check_parameters(params, get_distribution("binomial"))
    total = 0.0
    for _ in range(int(n)):
        total += _bernoulli_draw(p, source)
    return total


def exponential(params: ParameterLike, source: UniformSource) -> float:
    """Exponential(λ) by inverting the CDF: ``-ln(1 - u) / λ``."""
    (rate,) = check_parameters(params, get_distribution("exponential"))
    u = source.uniform()
    return -math.log(1.0 - u) / rate


def geometric(params: ParameterLike, source: UniformSource) -> float:
    """Geometric(p) counting failures before the first success."""
    (p,) = check_parameters(params, get_distribution("geometric"))
    u = source.uniform()
    if p == 1.0:
        return 0.0
    return float(math.floor(math.log(u) / math.log1p(-p)))


def normal(params: ParameterLike, source: UniformSource) -> float:
    """Normal(μ, σ) via Box-Muller; the sine branch is discarded."""
    mu, sigma = check_parameters(params, get_distribution("normal"))
    u = source.uniform()
    v = source.uniform()
    return mu + sigma * math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)


def poisson(
    params: ParameterLike,
    source: UniformSource,
    *,
    max_iterations: int | None = None,
) -> float:
    """Poisson(λ) by multiplying uniforms until the product drops below e^-λ.

    Uses about λ + 1 draws. Past λ ≈ 745 the threshold underflows to zero and
    the loop only ends through ``max_iterations``.
    """
    (lam,) = check_parameters(params, get_distribution("poisson"))
    threshold = math.exp(-lam)
    x = 0
    product = source.uniform()
    while product >= threshold:
        if max_iterations is not None and x >= max_iterations:
            raise ConvergenceError("Poisson", max_iterations)
        x += 1
        product *= source.uniform()
    return float(x)


def _marsaglia_tsang(
    shape: float,
    source: UniformSource,
    max_iterations: int | None,
) -> float:
    # Returns a unit-scale Gamma(shape) variate, shape >= 1.
    d = shape - 1.0 / 3.0
    c = 1.0 / math.sqrt(9.0 * d)
    attempts = 0
    while True:
        if max_iterations is not None and attempts >= max_iterations:
            raise ConvergenceError("Gamma", max_iterations)
        attempts += 1
        x = source.standard_normal()
        t = 1.0 + c * x
        if t <= 0.0:
            continue
        v = t * t * t
        u = source.uniform()
        if u < 1.0 - _SQUEEZE * x**4:
            return d * v
        if math.log(u) < 0.5 * x * x + d * (1.0 - v + math.log(v)):
            return d * v


def gamma(
    params: ParameterLike,
    source: UniformSource,
    *,
    max_iterations: int | None = None,
) -> float:
    """Gamma(k, θ) with shape k and scale θ.

    Shapes below one sample Gamma(1 + k, θ) first and then scale it by
    ``U ** (1 / k)`` using one more uniform, so the boost happens once.
    """
    k, theta = check_parameters(params, get_distribution("gamma"))
    boosted = k < 1.0
    shape = k + 1.0 if boosted else k
    value = theta * _marsaglia_tsang(shape, source, max_iterations)
    if boosted:
        value *= source.uniform() ** (1.0 / k)
    return value


def triangular(params: ParameterLike, source: UniformSource) -> float:
    """Triangular(a, b, c) with minimum a, maximum b and mode c."""
    a, b, c = check_parameters(params, get_distribution("triangular"))
    u = source.uniform()
    scale = 1.0
    if math.isinf(b - a):
        # Halving is exact and brings the width back into the float range.
        a, b, c, scale = a / 2.0, b / 2.0, c / 2.0, 2.0
    width = b - a
    if width == 0.0:
        return scale * a
    if u < (c - a) / width:
        return scale * (a + math.sqrt(u * (c - a)) * math.sqrt(width))
    return scale * (b - math.sqrt((1.0 - u) * (b - c)) * math.sqrt(width))


def weibull(params: ParameterLike, source: UniformSource) -> float:
    """Weibull(λ, k) with scale λ and shape k: ``λ (-ln u)^(1/k)``."""
    scale, shape = check_parameters(params, get_distribution("weibull"))
    u = source.uniform()
    try:
        return scale * (-math.log(u)) ** (1.0 / shape)
    except OverflowError:
        # Very small shapes exceed the float range; saturate like IEEE pow.
        return math.inf


__all__ = [
    "ConvergenceError",
    "Generator",
    "bernoulli",
    "binomial",
    "exponential",
    "gamma",
    "geometric",
    "normal",
    "poisson",
    "triangular",
    "weibull",
]
