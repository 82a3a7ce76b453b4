"""Distribution summary of measured metrics across units."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List

import numpy as np

from .models import MetricRecord


@dataclass(frozen=True)
class MetricSummary:
    """Spread of one metric over every unit that reported it."""

    count: int
    mean: float
    median: float
    p90: float
    max: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "count": self.count,
            "mean": round(self.mean, 2),
            "median": round(self.median, 2),
            "p90": round(self.p90, 2),
            "max": self.max,
        }


def summarize(records: Iterable[MetricRecord]) -> Dict[str, MetricSummary]:
    """Per-metric count/mean/median/p90/max, keyed by sorted metric name."""
    values: Dict[str, List[float]] = {}
    for record in records:
        for metric, value in record.measurements.items():
            values.setdefault(metric, []).append(value)

    summary: Dict[str, MetricSummary] = {}
    for metric in sorted(values):
        arr = np.asarray(values[metric], dtype=float)
        summary[metric] = MetricSummary(
            count=int(arr.size),
            mean=float(np.mean(arr)),
            median=float(np.median(arr)),
            p90=float(np.percentile(arr, 90)),
            max=float(np.max(arr)),
        )
    return summary
