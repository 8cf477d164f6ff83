"""Core distribution catalog infrastructure."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from ..core import ParameterVector

Predicate = Callable[[ParameterVector], bool]

logger = logging.getLogger(__name__)


class UnknownDistributionError(KeyError):
    """Raised when a distribution identifier is not in the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown distribution '{self.name}'."


@dataclass(frozen=True, slots=True)
class DistributionSpec:
    """Describe a distribution's parameters and their valid domain."""

    key: str
    name: str
    num_params: int
    symbols: tuple[str, ...]
    bounds: tuple[str, ...]
    valid: Predicate
    notes: str | None = None

    def __post_init__(self) -> None:
        if not (len(self.symbols) == len(self.bounds) == self.num_params):
            raise ValueError(
                f"Distribution '{self.key}' declares {self.num_params} parameters but "
                f"{len(self.symbols)} symbols and {len(self.bounds)} bounds."
            )

    @property
    def signature(self) -> str:
        """Display form such as ``Gamma(k,θ)``."""
        return f"{self.name}({','.join(self.symbols)})"


def build_catalog(specs: Iterable[DistributionSpec]) -> Mapping[str, DistributionSpec]:
    """Freeze ``specs`` into a read-only mapping keyed by lowercase id."""
    catalog: dict[str, DistributionSpec] = {}
    for spec in specs:
        key = spec.key.lower()
        if key in catalog:
            raise ValueError(f"Distribution '{spec.key}' declared twice.")
        catalog[key] = spec
    logger.debug("Built distribution catalog with %d entries", len(catalog))
    return MappingProxyType(catalog)


__all__ = [
    "DistributionSpec",
    "Predicate",
    "UnknownDistributionError",
    "build_catalog",
]
