"""Data models for Complexity Gate"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .exceptions import MalformedRecordError

# Unit identity -> last-known aggregate complexity total
BaselineSnapshot = Dict[str, float]


class UnitKind(str, Enum):
    """Granularity of a measured unit."""

    FUNCTION = "function"
    FILE = "file"


class Severity(Enum):
    """Classification of a single measurement. Ordered green < yellow < red."""

    GREEN = 0
    YELLOW = 1
    RED = 2

    @property
    def label(self) -> str:
        return self.name.lower()


class VerdictStatus(str, Enum):
    PASS = "pass"
    WARN = "warn"
    BLOCK = "block"
    ERRORED = "errored"


class RegressionStatus(str, Enum):
    REGRESSED = "regressed"
    IMPROVED_OR_FLAT = "improved_or_flat"


@dataclass(frozen=True)
class MetricRecord:
    """Measured values for one unit of code, as produced by an analyzer."""

    name: str
    path: str
    kind: UnitKind
    measurements: Mapping[str, float] = field(default_factory=dict)
    line: Optional[int] = None

    def __post_init__(self) -> None:
        # Freeze the measurement map; unknown kinds are left for validate() to reject
        object.__setattr__(self, "measurements", MappingProxyType(dict(self.measurements or {})))
        if isinstance(self.kind, str) and not isinstance(self.kind, UnitKind):
            try:
                object.__setattr__(self, "kind", UnitKind(self.kind))
            except ValueError:
                pass

    @property
    def identity(self) -> str:
        """Stable key used by baselines: the path for files, ``path::name`` for functions."""
        if self.kind == UnitKind.FILE:
            return self.path
        return f"{self.path}::{self.name}"

    @property
    def total(self) -> float:
        """Aggregate complexity used by the ratchet."""
        if "file_total" in self.measurements:
            return self.measurements["file_total"]
        return self.measurements.get("cyclomatic", 0)

    def validate(self) -> None:
        """Raise MalformedRecordError if identity fields are missing."""
        if not isinstance(self.name, str) or not self.name.strip():
            raise MalformedRecordError("missing unit name", unit=self.path or None)
        if not isinstance(self.path, str) or not self.path.strip():
            raise MalformedRecordError("missing file path", unit=self.name)
        if not isinstance(self.kind, UnitKind):
            raise MalformedRecordError(f"unknown unit kind {self.kind!r}", unit=self.name)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "MetricRecord":
        """Build a record from a JSON-style mapping.

        Accepts ``metrics`` or ``measurements`` for the measurement map.
        Boolean and non-finite values are rejected.
        """
        if not isinstance(raw, Mapping):
            raise MalformedRecordError(f"expected an object, got {type(raw).__name__}")

        name = raw.get("name")
        path = raw.get("path") or raw.get("file")
        unit = name if isinstance(name, str) else None
        if not isinstance(name, str) or not name.strip():
            raise MalformedRecordError("missing unit name", unit=path if isinstance(path, str) else None)
        if not isinstance(path, str) or not path.strip():
            raise MalformedRecordError("missing file path", unit=unit)

        # Analyzers mark units they could not measure with an "error" entry
        error = raw.get("error")
        if error:
            raise MalformedRecordError(str(error), unit=unit)

        try:
            kind = UnitKind(raw.get("kind", UnitKind.FUNCTION.value))
        except ValueError:
            raise MalformedRecordError(f"unknown unit kind {raw.get('kind')!r}", unit=unit)

        metrics = raw.get("metrics", raw.get("measurements", {}))
        if metrics is None:
            metrics = {}
        if not isinstance(metrics, Mapping):
            raise MalformedRecordError("metrics must be an object", unit=unit)

        measurements: Dict[str, float] = {}
        for metric, value in metrics.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise MalformedRecordError(f"metric {metric!r} is not numeric: {value!r}", unit=unit)
            if not math.isfinite(value):
                raise MalformedRecordError(f"metric {metric!r} is not finite", unit=unit)
            measurements[str(metric)] = value

        line = raw.get("line")
        if line is not None and (isinstance(line, bool) or not isinstance(line, int)):
            line = None

        return cls(name=name, path=path, kind=kind, measurements=measurements, line=line)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "path": self.path,
            "kind": self.kind.value,
            "metrics": dict(self.measurements),
        }
        if self.line is not None:
            data["line"] = self.line
        return data


@dataclass(frozen=True)
class ThresholdSpec:
    """Green/yellow boundaries for one metric. Red is anything above yellow_max."""

    metric: str
    green_max: int
    yellow_max: int

    def __post_init__(self) -> None:
        if self.green_max < 0 or self.yellow_max < 0:
            raise ValueError(f"{self.metric}: boundaries must be non-negative")
        if self.green_max > self.yellow_max:
            raise ValueError(
                f"{self.metric}: green_max ({self.green_max}) exceeds yellow_max ({self.yellow_max})"
            )

    @property
    def red_min(self) -> int:
        return self.yellow_max + 1


@dataclass(frozen=True)
class Reason:
    """A measurement that was not green."""

    metric: str
    value: float
    severity: Severity
    boundary: int

    def describe(self) -> str:
        return f"{self.metric}={fmt_number(self.value)} (yellow-max={self.boundary})"


@dataclass(frozen=True)
class Verdict:
    """Outcome of gating one unit. Build through the classmethods."""

    status: VerdictStatus
    reasons: Tuple[Reason, ...] = ()
    error: Optional[str] = None

    @classmethod
    def passed(cls) -> "Verdict":
        return cls(VerdictStatus.PASS)

    @classmethod
    def warn(cls, reasons) -> "Verdict":
        return cls(VerdictStatus.WARN, tuple(reasons))

    @classmethod
    def block(cls, reasons) -> "Verdict":
        return cls(VerdictStatus.BLOCK, tuple(reasons))

    @classmethod
    def errored(cls, message: str) -> "Verdict":
        return cls(VerdictStatus.ERRORED, (), message)

    @property
    def worst_reason(self) -> Optional[Reason]:
        # reasons are kept sorted worst-first
        return self.reasons[0] if self.reasons else None

    @property
    def metrics(self) -> List[str]:
        return [r.metric for r in self.reasons]


@dataclass(frozen=True)
class UnitResult:
    """A verdict paired with the unit it was produced for."""

    unit_name: str
    verdict: Verdict
    identity: str = ""
    record: Optional[MetricRecord] = None


@dataclass(frozen=True)
class RegressionVerdict:
    """Result of comparing a unit's aggregate total against the baseline."""

    identity: str
    status: RegressionStatus
    delta_pct: float
    previous_total: Optional[float]
    current_total: float
    is_new: bool = False

    @property
    def regressed(self) -> bool:
        return self.status == RegressionStatus.REGRESSED


@dataclass
class GateReport:
    """Everything one gate run produced, handed to formatters."""

    results: List[UnitResult]
    regressions: List[RegressionVerdict] = field(default_factory=list)
    max_delta_pct: Optional[int] = None

    def counts(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in VerdictStatus}
        for result in self.results:
            counts[result.verdict.status.value] += 1
        return counts

    @property
    def has_blocks(self) -> bool:
        return any(r.verdict.status == VerdictStatus.BLOCK for r in self.results)

    @property
    def has_errors(self) -> bool:
        return any(r.verdict.status == VerdictStatus.ERRORED for r in self.results)

    @property
    def has_regressions(self) -> bool:
        return any(r.regressed for r in self.regressions)


def fmt_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"
