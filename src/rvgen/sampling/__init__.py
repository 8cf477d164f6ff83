"""Generator registry and batch sampling built on the distribution catalog."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

import numpy as np

from ..core import ParameterLike, UniformSource
from ..distributions import CATALOG, UnknownDistributionError, validate_parameters
from ..sources import NumpySource
from . import generators
from .generators import ConvergenceError, Generator

__all__ = [
    "GENERATORS",
    "ConvergenceError",
    "Generator",
    "find_generator",
    "get_generator",
    "generate",
    "sample_distribution",
]

logger = logging.getLogger(__name__)

GENERATORS: Mapping[str, Generator] = MappingProxyType(
    {
        "bernoulli": generators.bernoulli,
        "binomial": generators.binomial,
        "exponential": generators.exponential,
        "gamma": generators.gamma,
        "geometric": generators.geometric,
        "normal": generators.normal,
        "poisson": generators.poisson,
        "triangular": generators.triangular,
        "weibull": generators.weibull,
    }
)

# Generators whose loops are unbounded and therefore honour ``max_iterations``.
_ITERATIVE = frozenset({"gamma", "poisson"})

if set(GENERATORS) != set(CATALOG):  # pragma: no cover - import-time consistency
    raise RuntimeError("Generator registry and distribution catalog are out of sync.")


def find_generator(name: str) -> Generator | None:
    """Return the generator registered as ``name`` or ``None``."""
    return GENERATORS.get(name.lower())


def get_generator(name: str) -> Generator:
    """Retrieve a generator by name."""
    generator = find_generator(name)
    if generator is None:
        raise UnknownDistributionError(name)
    return generator


def _draw(
    key: str,
    generator: Generator,
    params: ParameterLike,
    source: UniformSource,
    max_iterations: int | None,
) -> float:
    if max_iterations is not None and key in _ITERATIVE:
        return generator(params, source, max_iterations=max_iterations)
    return generator(params, source)


def generate(
    distribution: str,
    params: ParameterLike,
    source: UniformSource | None = None,
    *,
    max_iterations: int | None = None,
) -> float:
    """Draw one variate from ``distribution``.

    ``max_iterations`` caps the rejection loops of Gamma and Poisson and is
    ignored by the closed-form generators.
    """
    key = distribution.lower()
    generator = get_generator(key)
    src = source if source is not None else NumpySource()
    return _draw(key, generator, params, src, max_iterations)


def sample_distribution(
    distribution: str,
    params: ParameterLike,
    size: int,
    *,
    random_state: np.random.Generator | int | None = None,
    source: UniformSource | None = None,
    max_iterations: int | None = None,
) -> np.ndarray:
    """Draw ``size`` variates; element ``i`` holds the ``i``-th draw.

    Parameters are validated once before any draw, so a bad vector fails
    without consuming the source even when ``size`` is zero.
    """
    if size < 0:
        raise ValueError("size must be non-negative.")
    key = distribution.lower()
    generator = get_generator(key)
    frozen = validate_parameters(params, key)
    src = source if source is not None else NumpySource(random_state)
    logger.debug("Sampling %d %s variates with parameters %s", size, key, frozen)
    out = np.empty(size, dtype=float)
    for i in range(size):
        out[i] = _draw(key, generator, frozen, src, max_iterations)
    return out
