"""Exception hierarchy for Complexity Gate."""

from .analysis import AnalysisError, FileAccessError, ParsingError
from .base import ComplexityGateError
from .config import (
    BaselineError,
    ConfigurationError,
    InvalidConfigError,
    MetricsFileError,
)
from .gate import GateError, MalformedRecordError, UnknownMetricError

__all__ = [
    "ComplexityGateError",
    "GateError",
    "UnknownMetricError",
    "MalformedRecordError",
    "ConfigurationError",
    "InvalidConfigError",
    "BaselineError",
    "MetricsFileError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
]
