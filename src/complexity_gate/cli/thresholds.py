"""Thresholds command."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from . import app
from ._common import console, fail, resolve_config
from ..exceptions import ComplexityGateError
from ..thresholds import ThresholdTable


@app.command()
def thresholds(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Configuration file path (TOML format)",
        exists=True, file_okay=True, dir_okay=False, readable=True,
    ),
):
    """Show the effective threshold table and ratchet setting."""
    try:
        settings = resolve_config(config=config)
    except ComplexityGateError as e:
        fail(str(e))

    table = Table(title="Thresholds")
    table.add_column("Metric", style="cyan")
    table.add_column("Green max", justify="right", style="green")
    table.add_column("Yellow max", justify="right", style="yellow")
    table.add_column("Red from", justify="right", style="red")
    for spec in ThresholdTable.from_config(settings.thresholds).specs():
        table.add_row(spec.metric, str(spec.green_max), str(spec.yellow_max), str(spec.red_min))
    console.print(table)
    console.print(f"Ratchet: max delta [bold]{settings.max_delta_pct}%[/bold] over {settings.baseline_file}")
