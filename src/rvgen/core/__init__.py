"""Core protocols and shared type aliases for rvgen modules."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol, TypeAlias, runtime_checkable

ParameterVector: TypeAlias = tuple[float, ...]
ParameterLike: TypeAlias = Sequence[float]


@runtime_checkable
class UniformSource(Protocol):
    """Supply the primitive draws consumed by the generators.

    ``uniform`` must return values strictly inside (0, 1). Several generators
    take ``log(u)`` or ``log(1 - u)``, so a source that can hit either endpoint
    breaks the domain guarantees given by parameter validation.
    """

    def uniform(self) -> float: ...

    def standard_normal(self) -> float: ...


def freeze_parameters(params: Iterable[float]) -> ParameterVector:
    """Return ``params`` as an immutable tuple of floats."""
    if isinstance(params, str | bytes):
        raise TypeError("Parameters must be a sequence of numbers, not a string.")
    return tuple(float(value) for value in params)


def parse_parameters(text: str) -> ParameterVector:
    """Parse a whitespace-separated list of numbers, e.g. ``"0 1.5"``."""
    values: list[float] = []
    for token in text.split():
        try:
            values.append(float(token))
        except ValueError as exc:
            raise ValueError(f"Invalid parameter value '{token}'.") from exc
    return tuple(values)


def format_parameters(params: Iterable[float]) -> str:
    """Render parameters compactly, e.g. ``[0 1.5]``."""
    return "[" + " ".join(f"{value:g}" for value in params) + "]"


__all__ = [
    "ParameterVector",
    "ParameterLike",
    "UniformSource",
    "freeze_parameters",
    "parse_parameters",
    "format_parameters",
]
