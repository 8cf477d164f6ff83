"""Distribution catalog and parameter domains."""

from __future__ import annotations

import math
from collections.abc import Mapping

from ..core import ParameterVector
from .base import DistributionSpec, Predicate, UnknownDistributionError, build_catalog
from .validation import (
    ArityError,
    DomainError,
    ValidationError,
    check_parameters,
    validate_parameters,
)

__all__ = [
    "CATALOG",
    "DistributionSpec",
    "Predicate",
    "UnknownDistributionError",
    "ValidationError",
    "ArityError",
    "DomainError",
    "check_parameters",
    "validate_parameters",
    "find_distribution",
    "get_distribution",
    "list_distributions",
]


def _is_probability(value: float) -> bool:
    return 0.0 <= value <= 1.0


def _is_count(value: float) -> bool:
    return math.isfinite(value) and value >= 0 and value == math.floor(value)


def _binomial_valid(params: ParameterVector) -> bool:
    n, p = params
    return _is_count(n) and _is_probability(p)


def _triangular_valid(params: ParameterVector) -> bool:
    a, b, c = params
    return a <= c <= b


STANDARD_DISTRIBUTIONS = [
    DistributionSpec(
        key="bernoulli",
        name="Bernoulli",
        num_params=1,
        symbols=("p",),
        bounds=("0 ≤ p ≤ 1",),
        valid=lambda params: _is_probability(params[0]),
        notes="Single trial with success probability p.",
    ),
    DistributionSpec(
        key="binomial",
        name="Binomial",
        num_params=2,
        symbols=("n", "p"),
        bounds=("n ∈ {0, 1, 2,...}", "0 ≤ p ≤ 1"),
        valid=_binomial_valid,
        notes="Successes in n trials; note the (n, p) parameter order.",
    ),
    DistributionSpec(
        key="exponential",
        name="Exponential",
        num_params=1,
        symbols=("λ",),
        bounds=("λ > 0",),
        valid=lambda params: params[0] > 0,
        notes="Inverse-transform sampling with rate λ.",
    ),
    DistributionSpec(
        key="gamma",
        name="Gamma",
        num_params=2,
        symbols=("k", "θ"),
        bounds=("k > 0", "θ > 0"),
        valid=lambda params: params[0] > 0 and params[1] > 0,
        notes="Marsaglia-Tsang squeeze with shape boost for k < 1.",
    ),
    DistributionSpec(
        key="geometric",
        name="Geometric",
        num_params=1,
        symbols=("p",),
        bounds=("0 < p ≤ 1",),
        valid=lambda params: 0 < params[0] <= 1,
        notes="Failures before the first success.",
    ),
    DistributionSpec(
        key="normal",
        name="Normal",
        num_params=2,
        symbols=("μ", "σ"),
        bounds=("μ ∈ ℝ", "σ > 0"),
        valid=lambda params: params[1] > 0,
        notes="Box-Muller transform (cosine branch).",
    ),
    DistributionSpec(
        key="poisson",
        name="Poisson",
        num_params=1,
        symbols=("λ",),
        bounds=("λ > 0",),
        valid=lambda params: params[0] > 0,
        notes="Multiplicative uniform products; cost grows linearly with λ.",
    ),
    DistributionSpec(
        key="triangular",
        name="Triangular",
        num_params=3,
        symbols=("a", "b", "c"),
        bounds=("a ∈ ℝ", "b ≥ a", "a ≤ c ≤ b"),
        valid=_triangular_valid,
        notes="Minimum a, maximum b, mode c.",
    ),
    DistributionSpec(
        key="weibull",
        name="Weibull",
        num_params=2,
        symbols=("λ", "k"),
        bounds=("λ > 0", "k > 0"),
        valid=lambda params: params[0] > 0 and params[1] > 0,
        notes="Inverse-transform sampling with scale λ and shape k.",
    ),
]

CATALOG: Mapping[str, DistributionSpec] = build_catalog(STANDARD_DISTRIBUTIONS)


def find_distribution(name: str) -> DistributionSpec | None:
    """Return the catalog entry for ``name`` or ``None`` when unknown."""
    return CATALOG.get(name.lower())


def get_distribution(name: str) -> DistributionSpec:
    """Retrieve a distribution by name."""
    spec = find_distribution(name)
    if spec is None:
        raise UnknownDistributionError(name)
    return spec


def list_distributions() -> list[str]:
    """Return catalog distribution names."""
    return sorted(CATALOG.keys())
