"""Write generated samples to disk."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

import numpy as np
import pandas as pd

from .core import format_parameters

logger = logging.getLogger(__name__)


def default_output_path(distribution: str, params: Iterable[float]) -> Path:
    """Name an output file after its distribution and parameters."""
    return Path(f"{distribution.lower()}_{format_parameters(params)}.csv")


def write_samples(
    path: str | os.PathLike[str],
    samples: np.ndarray | Iterable[float],
    *,
    precision: int = 3,
) -> Path:
    """Write one sample per row under a ``value`` header."""
    path = Path(path)
    frame = pd.DataFrame({"value": np.asarray(samples, dtype=float)})
    frame.to_csv(path, index=False, float_format=f"%.{precision}f")
    logger.debug("Wrote %d samples to %s", len(frame), path)
    return path


__all__ = ["default_output_path", "write_samples"]
