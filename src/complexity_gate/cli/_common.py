"""Shared CLI helpers."""

from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console

from ..config import GateConfig, load_config
from ..core import EXIT_ERRORED

console = Console()
err_console = Console(stderr=True)


def resolve_config(
    config: Optional[Path] = None,
    max_delta_pct: Optional[int] = None,
    output_format: Optional[str] = None,
    baseline_file: Optional[Path] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> GateConfig:
    """Build settings from CLI options."""
    overrides = {
        "max_delta_pct": max_delta_pct,
        "output_format": output_format,
        "baseline_file": str(baseline_file) if baseline_file is not None else None,
        "verbose": verbose,
        "quiet": quiet,
    }
    return load_config(config_file=config, **overrides)


def require_input(paths: List[Path], metrics: Optional[Path]) -> List[Path]:
    """Default to the current directory when neither paths nor --metrics were given."""
    if not paths and metrics is None:
        return [Path(".")]
    return paths


def fail(message: str) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(EXIT_ERRORED)
