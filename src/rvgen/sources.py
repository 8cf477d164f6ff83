"""Uniform sources backed by NumPy bit generators."""

from __future__ import annotations

import numpy as np

__all__ = ["NumpySource", "default_source"]


class NumpySource:
    """Draw uniforms on (0, 1) and standard normals from a NumPy generator.

    ``Generator.random`` samples [0, 1); the exact zero is redrawn so every
    uniform lies strictly inside the open interval. A source is not safe to
    share between threads; use :meth:`spawn` to hand each worker its own.
    """

    __slots__ = ("rng",)

    def __init__(self, random_state: np.random.Generator | int | None = None) -> None:
        if isinstance(random_state, np.random.Generator):
            self.rng = random_state
        else:
            self.rng = np.random.default_rng(random_state)

    def uniform(self) -> float:
        u = float(self.rng.random())
        while u == 0.0:
            u = float(self.rng.random())
        return u

    def standard_normal(self) -> float:
        return float(self.rng.standard_normal())

    def spawn(self, n_children: int) -> list[NumpySource]:
        """Return ``n_children`` statistically independent sources."""
        return [NumpySource(child) for child in self.rng.spawn(n_children)]


def default_source(seed: int | None = None) -> NumpySource:
    """Return a fresh source; ``seed=None`` draws entropy from the OS."""
    return NumpySource(seed)
