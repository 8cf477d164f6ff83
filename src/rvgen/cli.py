"""Typer-based CLI entry point."""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import replace
from pathlib import Path
from typing import Any

import numpy as np
import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import GenerationConfig, load_generation_config
from .core import parse_parameters
from .distributions import (
    UnknownDistributionError,
    ValidationError,
    get_distribution,
    list_distributions,
)
from .export import default_output_path, write_samples
from .sampling import ConvergenceError, sample_distribution

app = typer.Typer(help="rvgen random variate generator.")
console = Console()

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable verbose output.")
VERSION_OPTION = typer.Option(False, "--version", help="Show version and exit.")

DISTRIBUTION_ARGUMENT = typer.Argument(
    None,
    help="Distribution to sample (see `rvgen registry`).",
    show_default=False,
)

PARAMS_OPTION = typer.Option(
    None,
    "--params",
    "-p",
    help='Space-separated parameters in catalog order, e.g. "0 1" for normal.',
    show_default=False,
)

COUNT_OPTION = typer.Option(
    None,
    "--count",
    "-n",
    help="Number of variates to generate (default 1000).",
    show_default=False,
)

SEED_OPTION = typer.Option(
    None,
    "--seed",
    help="Seed for reproducible output (default: fresh OS entropy).",
    show_default=False,
)

OUTPUT_OPTION = typer.Option(
    None,
    "--output",
    "-o",
    help="CSV destination (default: <distribution>_[params].csv).",
    show_default=False,
)

PRECISION_OPTION = typer.Option(
    None,
    "--precision",
    help="Decimal places written per value (default 3).",
    show_default=False,
)

MAX_ITERATIONS_OPTION = typer.Option(
    None,
    "--max-iterations",
    help="Abort Gamma/Poisson rejection loops after this many iterations.",
    show_default=False,
)

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    exists=True,
    dir_okay=False,
    readable=True,
    help="YAML file with run settings; command-line options take precedence.",
    show_default=False,
)

PREVIEW_OPTION = typer.Option(
    True,
    "--preview/--no-preview",
    help="Print summary statistics of the generated sample.",
    show_default=True,
)


@app.callback(invoke_without_command=True)
def cli_callback(  # noqa: B008
    ctx: typer.Context,
    verbose: bool = VERBOSE_OPTION,
    version: bool = VERSION_OPTION,
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if verbose or version:
        console.print(f"[bold green]rvgen {__version__}[/bold green]")
    if ctx.invoked_subcommand is None and not ctx.resilient_parsing:
        raise typer.Exit()


@app.command()
def registry() -> None:
    """List available distributions."""
    table = Table(title="Available Distributions")
    table.add_column("Name")
    table.add_column("Distribution")
    table.add_column("Parameters")
    table.add_column("Bounds", overflow="fold")
    for name in list_distributions():
        dist = get_distribution(name)
        table.add_row(name, dist.name, ", ".join(dist.symbols), ", ".join(dist.bounds))
    console.print(table)


def _merge_options(config: GenerationConfig, **overrides: Any) -> GenerationConfig:
    chosen = {key: value for key, value in overrides.items() if value is not None}
    return replace(config, **chosen)


@app.command()
def sample(  # noqa: B008
    distribution: str | None = DISTRIBUTION_ARGUMENT,
    params: str | None = PARAMS_OPTION,
    count: int | None = COUNT_OPTION,
    seed: int | None = SEED_OPTION,
    output: Path | None = OUTPUT_OPTION,
    precision: int | None = PRECISION_OPTION,
    max_iterations: int | None = MAX_ITERATIONS_OPTION,
    config: Path | None = CONFIG_OPTION,
    preview: bool = PREVIEW_OPTION,
) -> None:
    """Generate variates and write them to a CSV file."""
    try:
        settings = _merge_options(
            load_generation_config(config),
            distribution=distribution,
            parameters=parse_parameters(params) if params is not None else None,
            count=count,
            seed=seed,
            output=output,
            precision=precision,
            max_iterations=max_iterations,
        )
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    if settings.distribution is None:
        console.print("[red]No distribution given (argument or config file).[/red]")
        raise typer.Exit(code=1)

    try:
        samples = sample_distribution(
            settings.distribution,
            settings.parameters,
            settings.count,
            random_state=settings.seed,
            max_iterations=settings.max_iterations,
        )
    except (UnknownDistributionError, ValidationError, ConvergenceError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    destination = settings.output or default_output_path(
        settings.distribution, settings.parameters
    )
    write_samples(destination, samples, precision=settings.precision)
    console.print(f"[green]Wrote[/green] {samples.size} samples to {destination}")
    if preview:
        console.print(_summary_table(settings.distribution, samples))


def _summary_table(distribution: str, samples: np.ndarray) -> Table:
    spec = get_distribution(distribution)
    table = Table(title=f"{spec.name} Sample")
    for column in ("Count", "Mean", "Std", "Min", "Max"):
        table.add_column(column, justify="right", no_wrap=True)
    if samples.size:
        stats = [samples.mean(), samples.std(ddof=0), samples.min(), samples.max()]
    else:
        stats = [None, None, None, None]
    table.add_row(str(samples.size), *(_format_metric(value) for value in stats))
    return table


def _format_metric(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, numbers.Real):
        val = float(value)
        if math.isnan(val) or math.isinf(val):
            return "-"
        return f"{val:.4f}"
    return str(value)


def main_entry() -> None:
    app()


def main() -> None:  # pragma: no cover - console entry
    main_entry()
