"""Run configuration for batch generation, loadable from YAML."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from .core import ParameterVector, freeze_parameters, parse_parameters

logger = logging.getLogger(__name__)

SEED_ENV_VAR = "RVGEN_SEED"


@dataclass(slots=True)
class GenerationConfig:
    """Settings for one generation run."""

    distribution: str | None = None
    parameters: ParameterVector = field(default_factory=tuple)
    count: int = 1000
    seed: int | None = None
    output: Path | None = None
    precision: int = 3
    max_iterations: int | None = None

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError("count must be non-negative.")
        if self.precision < 0:
            raise ValueError("precision must be non-negative.")
        if self.seed is not None and self.seed < 0:
            raise ValueError("seed must be non-negative.")
        if self.max_iterations is not None and self.max_iterations <= 0:
            raise ValueError("max_iterations must be positive when set.")


_FIELD_NAMES = frozenset(f.name for f in fields(GenerationConfig))


def _coerce_parameters(raw: Any) -> ParameterVector:
    if raw is None:
        return ()
    if isinstance(raw, str):
        return parse_parameters(raw)
    if isinstance(raw, int | float):
        return (float(raw),)
    if isinstance(raw, list | tuple):
        return freeze_parameters(raw)
    raise ValueError(f"Unsupported parameters value {raw!r}.")


def config_from_mapping(data: dict[str, Any]) -> GenerationConfig:
    """Build a :class:`GenerationConfig` from a plain mapping."""
    values: dict[str, Any] = {}
    for key, raw in data.items():
        name = str(key).replace("-", "_")
        if name not in _FIELD_NAMES:
            logger.warning("Ignoring unknown configuration key '%s'", key)
            continue
        values[name] = raw
    if "parameters" in values:
        values["parameters"] = _coerce_parameters(values["parameters"])
    if values.get("output") is not None:
        values["output"] = Path(values["output"])
    for name in ("count", "precision"):
        if name in values:
            values[name] = int(values[name])
    for name in ("seed", "max_iterations"):
        if values.get(name) is not None:
            values[name] = int(values[name])
    return GenerationConfig(**values)


def apply_environment(config: GenerationConfig) -> GenerationConfig:
    """Override the seed from ``RVGEN_SEED`` when it is set."""
    raw = os.environ.get(SEED_ENV_VAR)
    if not raw:
        return config
    try:
        seed = int(raw)
    except ValueError as exc:
        raise ValueError(f"{SEED_ENV_VAR} must be an integer, got '{raw}'.") from exc
    logger.debug("Seed %d taken from %s", seed, SEED_ENV_VAR)
    return replace(config, seed=seed)


def load_generation_config(path: str | os.PathLike[str] | None = None) -> GenerationConfig:
    """Load a run configuration from YAML, then apply environment overrides."""
    if path is None:
        return apply_environment(GenerationConfig())
    path = Path(path)
    if not path.exists():
        logger.debug("Skipping generation config %s (file not found)", path)
        return apply_environment(GenerationConfig())

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Failed to parse generation config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Generation config {path} must contain a mapping.")
    logger.debug("Loaded generation config from %s", path)
    return apply_environment(config_from_mapping(data))


__all__ = [
    "GenerationConfig",
    "SEED_ENV_VAR",
    "apply_environment",
    "config_from_mapping",
    "load_generation_config",
]
