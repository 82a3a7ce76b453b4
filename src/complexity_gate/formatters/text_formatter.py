"""Plain-text report — deterministic, grep-friendly."""

from typing import Iterable, List, Sequence, Tuple, Union

from ..models import (
    GateReport,
    RegressionVerdict,
    UnitResult,
    Verdict,
    VerdictStatus,
    fmt_number,
)
from .base import BaseFormatter

# Pairs of (unit name, verdict) are accepted alongside UnitResult
ResultLike = Union[UnitResult, Tuple[str, Verdict]]

LABELS = {
    VerdictStatus.BLOCK: "BLOCK",
    VerdictStatus.WARN: "WARN",
    VerdictStatus.ERRORED: "ERROR",
}


def format_report(results: Iterable[ResultLike]) -> str:
    """Render unit verdicts as text.

    Block units come first, then Warn units, each group sorted by unit name.
    Errored units follow in their own group. Passing units only show up in
    the trailing count line.
    """
    pairs = [_as_pair(r) for r in results]

    lines: List[str] = []
    for status in (VerdictStatus.BLOCK, VerdictStatus.WARN, VerdictStatus.ERRORED):
        group = sorted((p for p in pairs if p[1].status == status), key=lambda p: p[0])
        for name, verdict in group:
            lines.append(f"{LABELS[status]:<6} {name}  {_detail(verdict)}")

    lines.append(summary_line(pairs))
    return "\n".join(lines)


def summary_line(pairs: Sequence[Tuple[str, Verdict]]) -> str:
    counts = {status: 0 for status in VerdictStatus}
    for _, verdict in pairs:
        counts[verdict.status] += 1
    return " ".join(f"{status.value}={counts[status]}" for status in VerdictStatus)


def format_regression(verdict: RegressionVerdict, max_delta_pct) -> str:
    return (
        f"RATCHET {verdict.identity}  total {fmt_number(verdict.previous_total)} -> "
        f"{fmt_number(verdict.current_total)} (+{verdict.delta_pct:.1f}% > {max_delta_pct}%)"
    )


class TextFormatter(BaseFormatter):
    """Verdict lines, ratchet regressions, then the count line."""

    def format(self, report: GateReport) -> str:
        text = format_report(report.results)
        regressed = [r for r in report.regressions if r.regressed]
        if not regressed:
            return text

        body, summary = text.rsplit("\n", 1) if "\n" in text else ("", text)
        lines = [body] if body else []
        lines.extend(format_regression(r, report.max_delta_pct) for r in regressed)
        lines.append(f"{summary} regressed={len(regressed)}")
        return "\n".join(lines)


def _as_pair(result: ResultLike) -> Tuple[str, Verdict]:
    if isinstance(result, UnitResult):
        return result.unit_name, result.verdict
    name, verdict = result
    return name, verdict


def _detail(verdict: Verdict) -> str:
    if verdict.status == VerdictStatus.ERRORED:
        return verdict.error or "unknown error"
    worst = verdict.worst_reason
    return worst.describe() if worst else ""
