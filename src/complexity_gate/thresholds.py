"""ThresholdTable — metric name to green/yellow boundaries.

The table is the single lookup the gate consults. It is built once from
``ThresholdConfig`` and never mutated afterwards, so one table can be
shared by any number of concurrent evaluations.

Usage:
    table = ThresholdTable.from_config(config.thresholds)
    spec = table.boundaries_for(Metric.CYCLOMATIC)
    spec.green_max, spec.yellow_max   # (8, 15)
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Union

from .config import DEFAULT_THRESHOLDS, ThresholdConfig
from .exceptions import UnknownMetricError
from .models import ThresholdSpec


class Metric(str, Enum):
    """Metric names with a default threshold."""

    CYCLOMATIC = "cyclomatic"
    NESTING_DEPTH = "nesting_depth"
    CALLBACK_DEPTH = "callback_depth"
    LINES = "lines"
    PARAMS = "params"
    FILE_TOTAL = "file_total"


MetricName = Union[str, Metric]


class ThresholdTable:
    """Read-only mapping of metric name -> ThresholdSpec."""

    def __init__(self, specs: Mapping[str, ThresholdSpec]) -> None:
        normalized = {}
        for name, spec in specs.items():
            key = _key(name)
            if spec.metric != key:
                spec = ThresholdSpec(key, spec.green_max, spec.yellow_max)
            normalized[key] = spec
        self._specs = MappingProxyType(normalized)

    @classmethod
    def from_config(cls, config: ThresholdConfig) -> "ThresholdTable":
        specs = {}
        for metric in config.metrics():
            green_max, yellow_max = config.boundaries(metric)
            specs[metric] = ThresholdSpec(metric, green_max, yellow_max)
        return cls(specs)

    def boundaries_for(self, metric: MetricName) -> ThresholdSpec:
        """Return the spec for ``metric``.

        Raises:
            UnknownMetricError: If no spec is registered for that name.
        """
        key = _key(metric)
        spec = self._specs.get(key)
        if spec is None:
            raise UnknownMetricError(key)
        return spec

    def get(self, metric: MetricName) -> Optional[ThresholdSpec]:
        return self._specs.get(_key(metric))

    def __contains__(self, metric: object) -> bool:
        if not isinstance(metric, str):
            return False
        return _key(metric) in self._specs

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._specs))

    def __len__(self) -> int:
        return len(self._specs)

    def __repr__(self) -> str:
        inner = ", ".join(
            f"{name}={spec.green_max}/{spec.yellow_max}" for name, spec in sorted(self._specs.items())
        )
        return f"ThresholdTable({inner})"

    def specs(self) -> list[ThresholdSpec]:
        """All specs sorted by metric name."""
        return [self._specs[name] for name in self]


def _key(metric: MetricName) -> str:
    return metric.value if isinstance(metric, Metric) else str(metric)


DEFAULT_TABLE = ThresholdTable.from_config(DEFAULT_THRESHOLDS)
