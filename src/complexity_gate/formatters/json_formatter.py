"""JSON formatter for Complexity Gate."""

import json
from typing import Any, Dict

from ..models import GateReport, UnitResult
from ..statistics import summarize
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the full report, including passing units, as JSON."""

    def format(self, report: GateReport) -> str:
        records = [r.record for r in report.results if r.record is not None]
        data = {
            "summary": report.counts(),
            "units": [_unit(r) for r in sorted(report.results, key=lambda r: r.unit_name)],
            "regressions": [
                {
                    "identity": r.identity,
                    "status": r.status.value,
                    "delta_pct": round(r.delta_pct, 2),
                    "previous_total": r.previous_total,
                    "current_total": r.current_total,
                    "is_new": r.is_new,
                }
                for r in report.regressions
            ],
            "max_delta_pct": report.max_delta_pct,
            "distribution": {m: s.to_dict() for m, s in summarize(records).items()},
        }
        return json.dumps(data, indent=2)


def _unit(result: UnitResult) -> Dict[str, Any]:
    verdict = result.verdict
    data: Dict[str, Any] = {
        "unit": result.unit_name,
        "status": verdict.status.value,
        "reasons": [
            {
                "metric": r.metric,
                "value": r.value,
                "severity": r.severity.label,
                "yellow_max": r.boundary,
            }
            for r in verdict.reasons
        ],
    }
    if verdict.error:
        data["error"] = verdict.error
    if result.record is not None:
        data["path"] = result.record.path
        data["kind"] = result.record.kind.value
        data["metrics"] = dict(result.record.measurements)
    return data
