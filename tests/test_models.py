"""Tests for the core data models."""

import pytest

from complexity_gate.exceptions import MalformedRecordError
from complexity_gate.models import (
    GateReport,
    MetricRecord,
    Reason,
    Severity,
    ThresholdSpec,
    UnitKind,
    UnitResult,
    Verdict,
    VerdictStatus,
)


class TestMetricRecord:
    def test_function_identity_includes_path(self):
        record = MetricRecord("handler", "app/views.py", UnitKind.FUNCTION, {"cyclomatic": 3})
        assert record.identity == "app/views.py::handler"

    def test_file_identity_is_path(self):
        record = MetricRecord("app/views.py", "app/views.py", UnitKind.FILE, {"file_total": 30})
        assert record.identity == "app/views.py"

    def test_total_prefers_file_total(self):
        record = MetricRecord("m", "m.py", UnitKind.FILE, {"file_total": 42, "cyclomatic": 3})
        assert record.total == 42

    def test_total_falls_back_to_cyclomatic_then_zero(self):
        assert MetricRecord("f", "m.py", UnitKind.FUNCTION, {"cyclomatic": 7}).total == 7
        assert MetricRecord("f", "m.py", UnitKind.FUNCTION, {"lines": 70}).total == 0

    def test_measurements_are_read_only(self):
        source = {"cyclomatic": 3}
        record = MetricRecord("f", "m.py", UnitKind.FUNCTION, source)
        source["cyclomatic"] = 99
        assert record.measurements["cyclomatic"] == 3
        with pytest.raises(TypeError):
            record.measurements["cyclomatic"] = 5  # type: ignore[index]

    def test_kind_string_is_coerced(self):
        record = MetricRecord("f", "m.py", "file")  # type: ignore[arg-type]
        assert record.kind is UnitKind.FILE

    @pytest.mark.parametrize(
        "name,path,kind",
        [
            ("", "m.py", UnitKind.FUNCTION),
            ("f", "", UnitKind.FUNCTION),
            ("f", "m.py", "method"),
        ],
    )
    def test_validate_rejects_missing_identity(self, name, path, kind):
        record = MetricRecord(name, path, kind)
        with pytest.raises(MalformedRecordError):
            record.validate()


class TestFromDict:
    def test_parses_metrics(self):
        record = MetricRecord.from_dict(
            {"name": "f", "path": "m.py", "kind": "function", "metrics": {"cyclomatic": 4}, "line": 3}
        )
        assert record.measurements == {"cyclomatic": 4}
        assert record.line == 3
        assert record.kind is UnitKind.FUNCTION

    def test_kind_defaults_to_function(self):
        record = MetricRecord.from_dict({"name": "f", "path": "m.py"})
        assert record.kind is UnitKind.FUNCTION
        assert record.measurements == {}

    def test_accepts_measurements_key(self):
        record = MetricRecord.from_dict({"name": "f", "path": "m.py", "measurements": {"lines": 9}})
        assert record.measurements == {"lines": 9}

    @pytest.mark.parametrize(
        "raw,reason",
        [
            ({"path": "m.py"}, "missing unit name"),
            ({"name": "f"}, "missing file path"),
            ({"name": "f", "path": "m.py", "kind": "module"}, "unknown unit kind"),
            ({"name": "f", "path": "m.py", "metrics": {"cyclomatic": "high"}}, "not numeric"),
            ({"name": "f", "path": "m.py", "metrics": {"cyclomatic": True}}, "not numeric"),
            ({"name": "f", "path": "m.py", "metrics": [1, 2]}, "must be an object"),
            ({"name": "f", "path": "m.py", "error": "syntax error"}, "syntax error"),
        ],
    )
    def test_malformed(self, raw, reason):
        with pytest.raises(MalformedRecordError, match=reason):
            MetricRecord.from_dict(raw)

    def test_non_mapping(self):
        with pytest.raises(MalformedRecordError, match="expected an object"):
            MetricRecord.from_dict(["f", "m.py"])  # type: ignore[arg-type]

    def test_to_dict_matches_from_dict_layout(self):
        record = MetricRecord("f", "m.py", UnitKind.FUNCTION, {"cyclomatic": 4}, line=10)
        assert record.to_dict() == {
            "name": "f",
            "path": "m.py",
            "kind": "function",
            "metrics": {"cyclomatic": 4},
            "line": 10,
        }


class TestThresholdSpec:
    def test_red_min(self):
        assert ThresholdSpec("cyclomatic", 8, 15).red_min == 16

    def test_green_above_yellow_rejected(self):
        with pytest.raises(ValueError, match="exceeds yellow_max"):
            ThresholdSpec("cyclomatic", 20, 15)

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            ThresholdSpec("cyclomatic", -1, 15)


class TestVerdict:
    def test_constructors(self):
        reason = Reason("cyclomatic", 12, Severity.YELLOW, 15)
        assert Verdict.passed().status is VerdictStatus.PASS
        assert Verdict.warn([reason]).reasons == (reason,)
        assert Verdict.block([reason]).status is VerdictStatus.BLOCK
        errored = Verdict.errored("missing unit name")
        assert errored.status is VerdictStatus.ERRORED
        assert errored.error == "missing unit name"

    def test_worst_reason(self):
        red = Reason("params", 9, Severity.RED, 6)
        yellow = Reason("cyclomatic", 12, Severity.YELLOW, 15)
        assert Verdict.block([red, yellow]).worst_reason == red
        assert Verdict.passed().worst_reason is None

    def test_reason_describe(self):
        assert Reason("cyclomatic", 12, Severity.YELLOW, 15).describe() == "cyclomatic=12 (yellow-max=15)"
        assert Reason("lines", 12.5, Severity.RED, 10).describe() == "lines=12.50 (yellow-max=10)"

    def test_severity_ordering(self):
        assert Severity.GREEN.value < Severity.YELLOW.value < Severity.RED.value


class TestGateReport:
    def test_counts_and_flags(self):
        report = GateReport(
            results=[
                UnitResult("a", Verdict.passed()),
                UnitResult("b", Verdict.block([Reason("cyclomatic", 20, Severity.RED, 15)])),
                UnitResult("c", Verdict.errored("bad")),
            ]
        )
        assert report.counts() == {"pass": 1, "warn": 0, "block": 1, "errored": 1}
        assert report.has_blocks
        assert report.has_errors
        assert not report.has_regressions
