"""Delta ratchet — stop aggregate complexity from growing past its baseline.

A unit regresses when its total grows by strictly more than
``max_delta_pct`` percent of the recorded baseline. Existing complexity is
tolerated; only growth is flagged.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping

from .logging_config import get_logger
from .models import (
    BaselineSnapshot,
    MetricRecord,
    RegressionStatus,
    RegressionVerdict,
)

logger = get_logger(__name__)


def check_regression(
    current: MetricRecord,
    baseline: Mapping[str, float],
    max_delta_pct: float,
) -> RegressionVerdict:
    """Compare one unit's total against its baseline entry.

    ``delta = (current - previous) / max(previous, 1)``; the unit regresses
    only when ``delta > max_delta_pct / 100``. An exact tie is not a
    regression.

    Units missing from the baseline are never penalised, whatever their
    total: a zero baseline says nothing about how complex the unit used to
    be, so new code is left to the threshold gate.
    """
    identity = current.identity
    current_total = current.total
    previous = baseline.get(identity)

    if previous is None:
        return RegressionVerdict(
            identity=identity,
            status=RegressionStatus.IMPROVED_OR_FLAT,
            delta_pct=0.0,
            previous_total=None,
            current_total=current_total,
            is_new=True,
        )

    denominator = max(previous, 1)
    delta_pct = (current_total - previous) * 100 / denominator

    # cross-multiplied so integer totals compare exactly at the boundary
    if (current_total - previous) * 100 > max_delta_pct * denominator:
        status = RegressionStatus.REGRESSED
    else:
        status = RegressionStatus.IMPROVED_OR_FLAT

    return RegressionVerdict(
        identity=identity,
        status=status,
        delta_pct=delta_pct,
        previous_total=previous,
        current_total=current_total,
    )


def check_all(
    records: Iterable[MetricRecord],
    baseline: Mapping[str, float],
    max_delta_pct: float,
) -> List[RegressionVerdict]:
    """Ratchet every record. Regressions first, then by identity."""
    verdicts = [check_regression(r, baseline, max_delta_pct) for r in records]
    verdicts.sort(key=lambda v: (not v.regressed, v.identity))

    regressed = sum(1 for v in verdicts if v.regressed)
    if regressed:
        logger.info(f"{regressed} of {len(verdicts)} units regressed past {max_delta_pct}%")
    return verdicts


def snapshot_from_records(records: Iterable[MetricRecord]) -> BaselineSnapshot:
    """Baseline entries for the given records, keyed by identity."""
    return {r.identity: r.total for r in records}


def merge_baseline(
    baseline: Mapping[str, float],
    records: Iterable[MetricRecord],
    allow_increase: bool = False,
) -> BaselineSnapshot:
    """Produce the next baseline.

    Existing totals only move down unless ``allow_increase`` is set. New
    units are added; units no longer measured are dropped.
    """
    merged: BaselineSnapshot = {}
    for record in records:
        previous = baseline.get(record.identity)
        if previous is None or allow_increase:
            merged[record.identity] = record.total
        else:
            merged[record.identity] = min(previous, record.total)
    return merged
