"""Parameter validation against the distribution catalog."""

from __future__ import annotations

from ..core import ParameterLike, ParameterVector, freeze_parameters
from .base import DistributionSpec


class ValidationError(ValueError):
    """Base class for rejected parameter vectors."""

    def __init__(self, distribution: DistributionSpec, supplied: ParameterVector) -> None:
        self.distribution = distribution
        self.supplied = supplied
        super().__init__(self._render())

    def _render(self) -> str:  # pragma: no cover - overridden
        return f"Invalid parameters for {self.distribution.name}."


class ArityError(ValidationError):
    """The number of supplied parameters does not match the distribution."""

    @property
    def expected(self) -> int:
        return self.distribution.num_params

    @property
    def got(self) -> int:
        return len(self.supplied)

    def _render(self) -> str:
        qualifier = "Too few" if self.got < self.expected else "Too many"
        return (
            f"{qualifier} arguments were supplied for the "
            f"{self.distribution.signature} distribution.\n"
            f"Expected: {self.expected}\nGot: {self.got}"
        )


class DomainError(ValidationError):
    """The parameter count is right but a value lies outside its domain."""

    @property
    def expected_bounds(self) -> tuple[str, ...]:
        return self.distribution.bounds

    def _render(self) -> str:
        got = ", ".join(
            f"{symbol} = {value:.2f}"
            for symbol, value in zip(self.distribution.symbols, self.supplied, strict=True)
        )
        return (
            f"Invalid parameters supplied for the {self.distribution.name} distribution.\n"
            f"Expected: {', '.join(self.expected_bounds)}\nGot: {got}"
        )


def check_parameters(params: ParameterLike, spec: DistributionSpec) -> ParameterVector:
    """Validate ``params`` against an already resolved ``spec``.

    Arity is checked before the predicate runs, since predicates index the
    vector directly.
    """
    frozen = freeze_parameters(params)
    if len(frozen) != spec.num_params:
        raise ArityError(spec, frozen)
    if not spec.valid(frozen):
        raise DomainError(spec, frozen)
    return frozen


def validate_parameters(params: ParameterLike, name: str) -> ParameterVector:
    """Validate ``params`` for the distribution registered as ``name``."""
    from . import get_distribution

    return check_parameters(params, get_distribution(name))


__all__ = [
    "ValidationError",
    "ArityError",
    "DomainError",
    "check_parameters",
    "validate_parameters",
]
