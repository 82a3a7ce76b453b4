"""Baseline command."""

from pathlib import Path
from typing import List, Optional

import typer

from . import app
from ._common import console, fail, require_input, resolve_config
from ..baseline import load_baseline, save_baseline
from ..core import ComplexityGate
from ..exceptions import ComplexityGateError
from ..logging_config import setup_logging
from ..metrics_io import dump_metrics
from ..ratchet import snapshot_from_records


@app.command()
def baseline(
    paths: List[Path] = typer.Argument(
        None,
        help="Python files or directories to analyze (default: current directory)",
    ),
    metrics: Optional[Path] = typer.Option(
        None, "--metrics", "-m",
        help="JSON metrics produced by an external analyzer",
        exists=True, file_okay=True, dir_okay=False, readable=True,
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o",
        help="Baseline file to write (default from config)",
    ),
    show: bool = typer.Option(
        False, "--show",
        help="Show current baseline instead of saving",
    ),
    dump: Optional[Path] = typer.Option(
        None, "--dump-metrics",
        help="Also write the measured units as a metrics file (readable by --metrics)",
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Configuration file path (TOML format)",
        exists=True, file_okay=True, dir_okay=False, readable=True,
    ),
):
    """Record current totals as the ratchet baseline."""
    setup_logging("quiet")
    try:
        settings = resolve_config(config=config, baseline_file=output)

        if show:
            data = load_baseline(settings.baseline_file)
            if not data:
                console.print("[yellow]No baseline found.[/yellow]")
                raise typer.Exit(0)
            console.print(f"[bold cyan]Baseline[/bold cyan] ({settings.baseline_file})")
            for identity, total in sorted(data.items(), key=lambda x: (-x[1], x[0])):
                console.print(f"  {total:>6g}  {identity}", highlight=False)
            raise typer.Exit(0)

        gate = ComplexityGate(settings)
        entries = gate.collect(require_input(paths or [], metrics), metrics_file=metrics)
        report = gate.run(entries)
        snapshot = snapshot_from_records(gate.records(report))
        save_baseline(snapshot, settings.baseline_file)
        if dump is not None:
            dump_metrics(gate.records(report), dump)
    except ComplexityGateError as e:
        fail(str(e))
    except OSError as e:
        fail(str(e))

    skipped = report.counts()["errored"]
    message = f"[green]Baseline saved to {settings.baseline_file} ({len(snapshot)} units)[/green]"
    if skipped:
        message += f" [yellow]{skipped} errored units skipped[/yellow]"
    console.print(message)
    if dump is not None:
        console.print(f"[green]Metrics written to {dump}[/green]")
