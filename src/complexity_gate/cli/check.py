"""Check command — gate units and ratchet against the baseline."""

from pathlib import Path
from typing import List, Optional

import typer

from . import app
from ._common import console, fail, require_input, resolve_config
from ..baseline import load_baseline, save_baseline
from ..core import ComplexityGate
from ..exceptions import ComplexityGateError
from ..formatters import RichFormatter, get_formatter
from ..logging_config import setup_logging


@app.command()
def check(
    paths: List[Path] = typer.Argument(
        None,
        help="Python files or directories to analyze (default: current directory)",
    ),
    metrics: Optional[Path] = typer.Option(
        None, "--metrics", "-m",
        help="JSON metrics produced by an external analyzer",
        exists=True, file_okay=True, dir_okay=False, readable=True,
    ),
    baseline: Optional[Path] = typer.Option(
        None, "--baseline", "-b",
        help="Baseline file for the ratchet (default from config)",
    ),
    no_ratchet: bool = typer.Option(
        False, "--no-ratchet",
        help="Skip the baseline comparison",
    ),
    max_delta_pct: Optional[int] = typer.Option(
        None, "--max-delta-pct",
        help="Allowed growth over baseline totals, in percent",
        min=0,
    ),
    update_baseline: bool = typer.Option(
        False, "--update-baseline",
        help="Write the ratcheted baseline after a passing run",
    ),
    fmt: Optional[str] = typer.Option(
        None, "--format", "-f",
        help="Output format: text, rich, json, github",
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Configuration file path (TOML format)",
        exists=True, file_okay=True, dir_okay=False, readable=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file",
        help="Append debug logs to this file",
    ),
):
    """Gate functions and files against thresholds and the baseline ratchet.

    Exit codes: 0 pass or warn only, 1 blocked or regressed, 2 errored units
    or invalid input.
    """
    try:
        settings = resolve_config(
            config=config,
            max_delta_pct=max_delta_pct,
            output_format=fmt,
            baseline_file=baseline,
            verbose=verbose,
            quiet=quiet,
        )
        setup_logging(settings.verbosity, log_file=str(log_file) if log_file else None)
        formatter = get_formatter(settings.output_format)
        gate = ComplexityGate(settings)

        entries = gate.collect(require_input(paths or [], metrics), metrics_file=metrics)
        # The stored baseline is still the floor for --update-baseline under --no-ratchet
        stored = load_baseline(settings.baseline_file) if update_baseline or not no_ratchet else None
        report = gate.run(entries, baseline=None if no_ratchet else stored)
    except ComplexityGateError as e:
        fail(str(e))
    except (ValueError, OSError) as e:
        fail(str(e))

    if isinstance(formatter, RichFormatter):
        formatter.console = console
    formatter.render(report)

    code = gate.exit_code(report)
    if update_baseline and code == 0:
        try:
            save_baseline(gate.next_baseline(report, stored), settings.baseline_file)
        except OSError as e:
            fail(f"Cannot write baseline {settings.baseline_file}: {e}")
        if settings.output_format in ("text", "rich"):
            console.print(f"[green]Baseline updated: {settings.baseline_file}[/green]")

    raise typer.Exit(code)
