"""
Complexity Gate - threshold and ratchet checks for code complexity

Classifies functions and files as pass / warn / block against a
configurable threshold table, and stops aggregate complexity from growing
past a recorded baseline.
"""

__version__ = "0.1.0"

from .baseline import load_baseline, save_baseline
from .config import GateConfig, ThresholdConfig, load_config
from .core import ComplexityGate
from .formatters import format_report, get_formatter
from .gate import classify, evaluate, evaluate_batch
from .models import (
    BaselineSnapshot,
    GateReport,
    MetricRecord,
    Reason,
    RegressionStatus,
    RegressionVerdict,
    Severity,
    ThresholdSpec,
    UnitKind,
    UnitResult,
    Verdict,
    VerdictStatus,
)
from .ratchet import check_all, check_regression, merge_baseline, snapshot_from_records
from .thresholds import DEFAULT_TABLE, Metric, ThresholdTable

__all__ = [
    "ComplexityGate",  # Main entry point
    "GateConfig",
    "ThresholdConfig",
    "load_config",
    "MetricRecord",
    "UnitKind",
    "ThresholdSpec",
    "ThresholdTable",
    "DEFAULT_TABLE",
    "Metric",
    "Severity",
    "Reason",
    "Verdict",
    "VerdictStatus",
    "UnitResult",
    "RegressionStatus",
    "RegressionVerdict",
    "BaselineSnapshot",
    "GateReport",
    "classify",
    "evaluate",
    "evaluate_batch",
    "check_regression",
    "check_all",
    "snapshot_from_records",
    "merge_baseline",
    "format_report",
    "get_formatter",
    "load_baseline",
    "save_baseline",
]
