"""Evaluation exceptions: threshold lookups and unit records."""

from typing import Dict, Optional

from .base import ComplexityGateError


class GateError(ComplexityGateError):
    """Base class for errors raised while gating a unit."""

    pass


class UnknownMetricError(GateError):
    """Raised when no threshold is registered for a metric name."""

    def __init__(self, metric: str):
        super().__init__(f"No threshold registered for metric: {metric}", details={"metric": metric})
        self.metric = metric


class MalformedRecordError(GateError):
    """Raised when a metric record is missing identity fields or has bad values."""

    def __init__(self, reason: str, unit: Optional[str] = None):
        details: Dict[str, str] = {"reason": reason}
        if unit:
            details["unit"] = unit
        super().__init__(f"Malformed metric record: {reason}", details=details)
        self.reason = reason
        self.unit = unit
