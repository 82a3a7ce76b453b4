"""Gate evaluator — classify a unit's measurements against the threshold table.

Every function here is pure: the same record and table always produce the
same Verdict, so batches can be evaluated in any order or in parallel.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Union

from .exceptions import MalformedRecordError, UnknownMetricError
from .logging_config import get_logger
from .models import (
    MetricRecord,
    Reason,
    Severity,
    ThresholdSpec,
    UnitKind,
    UnitResult,
    Verdict,
)
from .thresholds import ThresholdTable

logger = get_logger(__name__)

RecordLike = Union[MetricRecord, Mapping[str, Any]]


def classify(value: float, spec: ThresholdSpec) -> Severity:
    """Green when value <= green_max, yellow up to yellow_max, red above."""
    if value <= spec.green_max:
        return Severity.GREEN
    if value <= spec.yellow_max:
        return Severity.YELLOW
    return Severity.RED


def evaluate(record: MetricRecord, table: ThresholdTable) -> Verdict:
    """Gate one unit.

    Measurements without a registered threshold are skipped. The overall
    verdict is the worst classification across the remaining ones.

    Raises:
        MalformedRecordError: If the record lacks identity fields.
    """
    record.validate()

    reasons: List[Reason] = []
    for metric, value in record.measurements.items():
        try:
            spec = table.boundaries_for(metric)
        except UnknownMetricError:
            logger.debug(f"{record.identity}: no threshold for '{metric}', skipped")
            continue

        severity = classify(value, spec)
        if severity is not Severity.GREEN:
            reasons.append(Reason(metric, value, severity, spec.yellow_max))

    if not reasons:
        return Verdict.passed()

    reasons.sort(key=lambda r: (-r.severity.value, r.metric))
    if reasons[0].severity is Severity.RED:
        return Verdict.block(reasons)
    return Verdict.warn(reasons)


def evaluate_batch(entries: Iterable[RecordLike], table: ThresholdTable) -> List[UnitResult]:
    """Gate many units; a malformed unit becomes an Errored verdict.

    Entries may be MetricRecord instances or raw mappings (as loaded from a
    metrics file). Results keep the input order.
    """
    results: List[UnitResult] = []
    for index, entry in enumerate(entries):
        record = None
        try:
            record = entry if isinstance(entry, MetricRecord) else MetricRecord.from_dict(entry)
            verdict = evaluate(record, table)
        except MalformedRecordError as e:
            unit_name = _fallback_name(entry, index)
            logger.warning(f"{unit_name}: {e.reason}")
            results.append(UnitResult(unit_name, Verdict.errored(e.reason), unit_name, record))
            continue

        results.append(UnitResult(_unit_name(record), verdict, record.identity, record))

    return results


def _unit_name(record: MetricRecord) -> str:
    # Function units are shown with their file so names stay unique in reports
    return record.identity


def _fallback_name(entry: Any, index: int) -> str:
    """Best-effort label for an entry that could not become a record."""
    kind = None
    if isinstance(entry, MetricRecord):
        name, path, kind = entry.name, entry.path, entry.kind
    elif isinstance(entry, Mapping):
        name, path = entry.get("name"), entry.get("path") or entry.get("file")
        kind = entry.get("kind")
    else:
        name = path = None

    name = name if isinstance(name, str) and name.strip() else None
    path = path if isinstance(path, str) and path.strip() else None
    if path and kind == UnitKind.FILE:
        return path
    if name and path:
        return f"{path}::{name}"
    return name or path or f"<unit #{index}>"
