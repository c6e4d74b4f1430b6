"""Typer-based CLI entry point."""

from __future__ import annotations

import logging
import math
import numbers
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .config import ConfigError, load_config
from .distributions import UnknownDistributionError, get_distribution, list_distributions
from .sampling import evaluate_distribution

app = typer.Typer(help="probviz distribution sampling CLI.")
console = Console()

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable verbose output.")
VERSION_OPTION = typer.Option(False, "--version", help="Show version and exit.")

KIND_ARGUMENT = typer.Argument(
    ...,
    help="Distribution name (see `probviz registry`).",
)

PARAM_OPTION = typer.Option(
    None,
    "--param",
    "-p",
    help="Positional distribution parameter (repeat in canonical order).",
    show_default=False,
)

OUTPUT_OPTION = typer.Option(
    None,
    "--output",
    "-o",
    help="Optional path to write the sampled x/pdf/cdf values as CSV.",
    show_default=False,
)

SHOW_SAMPLES_OPTION = typer.Option(
    False,
    "--show-samples/--hide-samples",
    help="Include the sampled curve in the console output.",
    show_default=False,
)

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="YAML file with a `server` section (defaults to $PROBVIZ_CONFIG).",
    show_default=False,
)

HOST_OPTION = typer.Option(None, "--host", help="Interface to bind.", show_default=False)
PORT_OPTION = typer.Option(None, "--port", help="Port to listen on.", show_default=False)
LOG_LEVEL_OPTION = typer.Option(None, "--log-level", help="Logging level.", show_default=False)


def configure_logging(level: str | int = "info") -> None:
    """Route log records through rich on the root logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root = logging.getLogger()
    root.handlers = [RichHandler(console=console, show_path=False)]
    root.setLevel(level)


@app.callback(invoke_without_command=True)
def cli_callback(  # noqa: B008
    ctx: typer.Context,
    verbose: bool = VERBOSE_OPTION,
    version: bool = VERSION_OPTION,
) -> None:
    if verbose or version:
        console.print(f"[bold green]probviz {__version__}[/bold green]")
    if ctx.invoked_subcommand is None and not ctx.resilient_parsing:
        raise typer.Exit()


@app.command()
def registry() -> None:
    """List registered distributions."""
    table = Table(title="Registered Distributions")
    table.add_column("Name", no_wrap=True)
    table.add_column("Parameters")
    table.add_column("PDF", overflow="fold")
    table.add_column("Description", overflow="fold")
    for name in list_distributions():
        dist = get_distribution(name)
        params = ", ".join(
            f"{param}={_format_metric(default)}"
            for param, default in zip(dist.parameters, dist.defaults, strict=True)
        )
        table.add_row(dist.name, params, dist.pdf_expression, dist.notes or "")
    console.print(table)


@app.command()
def evaluate(  # noqa: B008
    kind: str = KIND_ARGUMENT,
    params: list[float] | None = PARAM_OPTION,
    output: Path | None = OUTPUT_OPTION,
    show_samples: bool = SHOW_SAMPLES_OPTION,
) -> None:
    """Sample a distribution and print its summary statistics."""
    try:
        result = evaluate_distribution(kind, params or ())
    except UnknownDistributionError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    table = Table(title=f"{result.distribution} statistics", expand=True)
    table.add_column("Statistic", no_wrap=True)
    table.add_column("Value", justify="right", no_wrap=True)
    for name, value in result.parameters.items():
        table.add_row(name, _format_metric(value))
    table.add_row("mean", _format_metric(result.stats.mean))
    table.add_row("variance", _format_metric(result.stats.variance))
    table.add_row("std dev", _format_metric(result.stats.std_dev))
    console.print(table)
    console.print(f"PDF: {result.pdf_expression}")
    console.print(f"CDF: {result.cdf_expression}")
    for key, value in result.diagnostics.items():
        console.print(f"[dim]{key}[/dim]: {_format_metric(value)}")

    if show_samples:
        sample_table = Table(title="Samples", expand=True)
        for column in ("x", "pdf", "cdf"):
            sample_table.add_column(column, justify="right", no_wrap=True)
        for x, pdf, cdf in zip(
            result.samples.x_values,
            result.samples.pdf_values,
            result.samples.cdf_values,
            strict=True,
        ):
            sample_table.add_row(_format_metric(x), _format_metric(pdf), _format_metric(cdf))
        console.print(sample_table)

    if output is not None:
        frame = result.to_frame()
        frame.to_csv(output, index=False)
        console.print(f"[green]Samples written[/green] {output} (rows={len(frame)})")


@app.command()
def serve(  # noqa: B008
    config_path: Path | None = CONFIG_OPTION,
    host: str | None = HOST_OPTION,
    port: int | None = PORT_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from .api import create_app

    try:
        config = load_config(config_path)
    except ConfigError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    host = host or config.host
    port = port or config.port
    level = (log_level or config.log_level).lower()
    configure_logging(level)
    logging.getLogger(__name__).info("Server running on port %s", port)
    uvicorn.run(create_app(config), host=host, port=port, log_level=level, log_config=None)


def main() -> None:  # pragma: no cover - console entry
    app()


def _format_metric(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, numbers.Real):
        val = float(value)
        if math.isnan(val):
            return "nan"
        if math.isinf(val):
            return "inf" if val > 0 else "-inf"
        return f"{val:.4f}"
    return str(value)
