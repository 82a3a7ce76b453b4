"""ComplexityGate — collect metrics, gate them, ratchet against the baseline."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Union

from .analyzers import PythonScanner
from .config import GateConfig
from .gate import RecordLike, evaluate_batch
from .logging_config import get_logger
from .metrics_io import load_metrics
from .models import BaselineSnapshot, GateReport, MetricRecord
from .ratchet import check_all, merge_baseline
from .thresholds import ThresholdTable

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_BLOCKED = 1
EXIT_ERRORED = 2


class ComplexityGate:
    """One configured gate.

    Holds no per-run state: ``run`` can be called repeatedly, and
    concurrently, with different inputs.

    Example:
        >>> gate = ComplexityGate(load_config())
        >>> entries = gate.collect(["src"])
        >>> report = gate.run(entries, baseline=load_baseline(".complexity-baseline.json"))
        >>> gate.exit_code(report)
        0
    """

    def __init__(self, config: GateConfig, table: Optional[ThresholdTable] = None) -> None:
        self.config = config
        self.table = table or ThresholdTable.from_config(config.thresholds)

    def collect(
        self,
        paths: Sequence[Union[str, Path]] = (),
        metrics_file: Optional[Union[str, Path]] = None,
    ) -> List[RecordLike]:
        """Gather unit entries from a metrics file and/or Python sources."""
        entries: List[Any] = []
        if metrics_file is not None:
            entries.extend(load_metrics(metrics_file))
        anchor = scan_anchor(paths) if paths else None
        for path in paths:
            scanner = PythonScanner(
                path, exclude_patterns=self.config.exclude_patterns, anchor=anchor
            )
            found = scanner.scan()
            logger.info(f"Analyzed {path}: {len(found)} units")
            entries.extend(found)
        return entries

    def run(
        self,
        entries: Sequence[RecordLike],
        baseline: Optional[Mapping[str, float]] = None,
    ) -> GateReport:
        """Gate every entry; ratchet valid records when a baseline is given."""
        results = evaluate_batch(entries, self.table)

        regressions = []
        if baseline is not None:
            records = self.records(results)
            regressions = check_all(records, baseline, self.config.max_delta_pct)

        return GateReport(
            results=results,
            regressions=regressions,
            max_delta_pct=self.config.max_delta_pct,
        )

    @staticmethod
    def records(report_or_results) -> List[MetricRecord]:
        """Valid records from a report or result list, errored units excluded."""
        results = getattr(report_or_results, "results", report_or_results)
        return [r.record for r in results if r.record is not None and r.verdict.error is None]

    def next_baseline(
        self,
        report: GateReport,
        baseline: Optional[Mapping[str, float]] = None,
        allow_increase: bool = False,
    ) -> BaselineSnapshot:
        return merge_baseline(baseline or {}, self.records(report), allow_increase=allow_increase)

    def exit_code(self, report: GateReport) -> int:
        """1 on any Block or (when enabled) regression, 2 on errored units, else 0."""
        if report.has_blocks:
            return EXIT_BLOCKED
        if self.config.fail_on_regression and report.has_regressions:
            return EXIT_BLOCKED
        if report.has_errors:
            return EXIT_ERRORED
        return EXIT_OK


def scan_anchor(paths: Sequence[Union[str, Path]]) -> Path:
    """Directory every unit path of one run is reported relative to.

    The working directory when all roots sit inside it, so identities do not
    depend on which roots a run names. Otherwise the deepest directory shared
    by all roots.
    """
    cwd = Path.cwd().resolve()
    roots = [Path(p).resolve() for p in paths]
    if all(root == cwd or cwd in root.parents for root in roots):
        return cwd
    dirs = [root.parent if root.is_file() else root for root in roots]
    return Path(os.path.commonpath([str(d) for d in dirs]))
