"""GitHub Actions formatter — annotations and PR comment body."""

from typing import List

from ..models import GateReport, UnitResult, VerdictStatus, fmt_number
from .base import BaseFormatter
from .text_formatter import summary_line


class GithubFormatter(BaseFormatter):
    """Output GitHub Actions ``::warning`` / ``::error`` annotations.

    Also generates a Markdown table suitable for ``gh pr comment``.
    """

    def format(self, report: GateReport) -> str:
        lines: List[str] = []
        flagged = sorted(
            (r for r in report.results if r.verdict.status != VerdictStatus.PASS),
            key=lambda r: r.unit_name,
        )

        for result in flagged:
            lines.append(self._annotation(result))

        for reg in report.regressions:
            if reg.regressed:
                lines.append(
                    f"::error file={reg.identity.split('::')[0]}::Complexity ratchet: total "
                    f"{fmt_number(reg.previous_total)} -> {fmt_number(reg.current_total)} "
                    f"(+{reg.delta_pct:.1f}%, allowed {report.max_delta_pct}%)"
                )

        lines.append("")
        lines.append("## Complexity Gate")
        lines.append("")
        if flagged:
            lines.append("| Unit | Status | Worst metric |")
            lines.append("|------|--------|--------------|")
            for result in flagged:
                verdict = result.verdict
                worst = verdict.worst_reason
                detail = worst.describe() if worst else (verdict.error or "")
                lines.append(f"| `{result.unit_name}` | {verdict.status.value} | {detail} |")
            lines.append("")

        pairs = [(r.unit_name, r.verdict) for r in report.results]
        lines.append(f"**Summary:** {summary_line(pairs)}")
        return "\n".join(lines)

    @staticmethod
    def _annotation(result: UnitResult) -> str:
        verdict = result.verdict
        level = "warning" if verdict.status == VerdictStatus.WARN else "error"

        location = ""
        if result.record is not None:
            location = f" file={result.record.path}"
            if result.record.line is not None:
                location += f",line={result.record.line}"

        if verdict.status == VerdictStatus.ERRORED:
            message = f"Could not evaluate {result.unit_name}: {verdict.error}"
        else:
            message = f"{result.unit_name}: " + ", ".join(r.describe() for r in verdict.reasons)
        return f"::{level}{location}::{message}"
