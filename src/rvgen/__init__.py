"""Top-level package exports for rvgen."""

from __future__ import annotations

from importlib import metadata

__version__ = "0.1.0"

try:
    __version__ = metadata.version("rvgen")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev fallback
    pass

from . import distributions as distributions  # noqa: F401,E402
from . import sampling as sampling  # noqa: F401,E402
from .core import UniformSource, parse_parameters  # noqa: F401,E402
from .distributions import (  # noqa: F401,E402
    ArityError,
    DistributionSpec,
    DomainError,
    UnknownDistributionError,
    ValidationError,
    find_distribution,
    get_distribution,
    list_distributions,
    validate_parameters,
)
from .sampling import (  # noqa: F401,E402
    ConvergenceError,
    find_generator,
    generate,
    get_generator,
    sample_distribution,
)
from .sources import NumpySource  # noqa: F401,E402

__all__ = [
    "__version__",
    "distributions",
    "sampling",
    "UniformSource",
    "NumpySource",
    "DistributionSpec",
    "ValidationError",
    "ArityError",
    "DomainError",
    "UnknownDistributionError",
    "ConvergenceError",
    "find_distribution",
    "get_distribution",
    "list_distributions",
    "validate_parameters",
    "find_generator",
    "get_generator",
    "generate",
    "sample_distribution",
    "parse_parameters",
]
