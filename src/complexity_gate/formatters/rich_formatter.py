"""Rich terminal formatter for Complexity Gate."""

import io
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..models import GateReport, UnitResult, VerdictStatus, fmt_number
from ..statistics import summarize
from .base import BaseFormatter

STATUS_STYLES = {
    VerdictStatus.BLOCK: "[red bold]block[/red bold]",
    VerdictStatus.WARN: "[yellow]warn[/yellow]",
    VerdictStatus.ERRORED: "[magenta]errored[/magenta]",
    VerdictStatus.PASS: "[green]pass[/green]",
}

SEVERITY_STYLES = {"red": "red", "yellow": "yellow", "green": "green"}


class RichFormatter(BaseFormatter):
    """Rich terminal output with summary panel, verdict table, and distribution."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, report: GateReport) -> None:
        self._print(self.console, report)

    def format(self, report: GateReport) -> str:
        buffer = Console(file=io.StringIO(), width=120, record=True, color_system=None)
        self._print(buffer, report)
        return buffer.export_text()

    # -- private helpers --

    def _print(self, console: Console, report: GateReport) -> None:
        counts = report.counts()
        summary_text = (
            f"[green]{counts['pass']}[/green] pass  |  "
            f"[yellow]{counts['warn']}[/yellow] warn  |  "
            f"[red]{counts['block']}[/red] block  |  "
            f"[magenta]{counts['errored']}[/magenta] errored"
        )
        regressed = [r for r in report.regressions if r.regressed]
        if report.regressions:
            summary_text += f"  |  [red]{len(regressed)}[/red] regressed"
        console.print(Panel(summary_text, title="[bold cyan]Complexity Gate[/bold cyan]", expand=False))

        flagged = self._ordered(report.results)
        if flagged:
            table = Table(title="Units over threshold", expand=True)
            table.add_column("Status", width=8)
            table.add_column("Unit", style="cyan", ratio=3)
            table.add_column("Metric", ratio=1)
            table.add_column("Value", justify="right")
            table.add_column("Yellow max", justify="right")
            for result in flagged:
                verdict = result.verdict
                if verdict.status == VerdictStatus.ERRORED:
                    table.add_row(
                        STATUS_STYLES[verdict.status], result.unit_name, verdict.error or "", "", ""
                    )
                    continue
                for i, reason in enumerate(verdict.reasons):
                    style = SEVERITY_STYLES[reason.severity.label]
                    table.add_row(
                        STATUS_STYLES[verdict.status] if i == 0 else "",
                        result.unit_name if i == 0 else "",
                        f"[{style}]{reason.metric}[/{style}]",
                        fmt_number(reason.value),
                        str(reason.boundary),
                    )
            console.print(table)

        if regressed:
            table = Table(title=f"Ratchet regressions (allowed +{report.max_delta_pct}%)", expand=True)
            table.add_column("Unit", style="cyan", ratio=3)
            table.add_column("Baseline", justify="right")
            table.add_column("Current", justify="right")
            table.add_column("Delta", justify="right", style="red")
            for reg in regressed:
                table.add_row(
                    reg.identity,
                    fmt_number(reg.previous_total),
                    fmt_number(reg.current_total),
                    f"+{reg.delta_pct:.1f}%",
                )
            console.print(table)

        records = [r.record for r in report.results if r.record is not None]
        distribution = summarize(records)
        if distribution:
            table = Table(title="Distribution", expand=False)
            table.add_column("Metric")
            for column in ("Units", "Mean", "Median", "P90", "Max"):
                table.add_column(column, justify="right")
            for metric, s in distribution.items():
                table.add_row(
                    metric,
                    str(s.count),
                    f"{s.mean:.1f}",
                    f"{s.median:.1f}",
                    f"{s.p90:.1f}",
                    fmt_number(s.max),
                )
            console.print(table)

    @staticmethod
    def _ordered(results: List[UnitResult]) -> List[UnitResult]:
        rank = {VerdictStatus.BLOCK: 0, VerdictStatus.WARN: 1, VerdictStatus.ERRORED: 2}
        flagged = [r for r in results if r.verdict.status in rank]
        return sorted(flagged, key=lambda r: (rank[r.verdict.status], r.unit_name))
