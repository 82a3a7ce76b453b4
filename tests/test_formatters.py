"""Tests for the formatters package."""

import json

import pytest

from complexity_gate.formatters import (
    GithubFormatter,
    JsonFormatter,
    RichFormatter,
    TextFormatter,
    format_report,
    get_formatter,
)
from complexity_gate.models import (
    GateReport,
    MetricRecord,
    Reason,
    RegressionStatus,
    RegressionVerdict,
    Severity,
    UnitKind,
    UnitResult,
    Verdict,
)


def _warn(metric="cyclomatic", value=12, boundary=15):
    return Verdict.warn([Reason(metric, value, Severity.YELLOW, boundary)])


def _block(metric="cyclomatic", value=20, boundary=15):
    return Verdict.block([Reason(metric, value, Severity.RED, boundary)])


def _result(name, verdict, line=None, **measurements):
    record = MetricRecord(name, "app.py", UnitKind.FUNCTION, measurements or {"cyclomatic": 1}, line=line)
    return UnitResult(f"app.py::{name}", verdict, record.identity, record)


def _report(regressions=None):
    return GateReport(
        results=[
            _result("b", _warn(), cyclomatic=12),
            _result("a", _block(), line=7, cyclomatic=20),
            _result("c", Verdict.passed(), cyclomatic=2),
        ],
        regressions=regressions or [],
        max_delta_pct=15,
    )


def _regression():
    return RegressionVerdict("app.py", RegressionStatus.REGRESSED, 25.0, 40, 50)


class TestFormatReport:
    def test_ordering_block_then_warn_pass_only_counted(self):
        text = format_report([("b", _warn()), ("a", _block()), ("c", Verdict.passed())])
        lines = text.splitlines()
        assert lines[0].startswith("BLOCK")
        assert " a " in lines[0]
        assert lines[1].startswith("WARN")
        assert " b " in lines[1]
        assert len(lines) == 3
        assert lines[-1] == "pass=1 warn=1 block=1 errored=0"
        assert " c " not in text

    def test_group_sorted_by_name(self):
        text = format_report([("zeta", _block()), ("alpha", _block()), ("mid", _warn())])
        names = [line.split()[1] for line in text.splitlines()[:-1]]
        assert names == ["alpha", "zeta", "mid"]

    def test_line_shows_worst_metric_against_boundary(self):
        text = format_report([("a", _block())])
        assert text.splitlines()[0] == "BLOCK  a  cyclomatic=20 (yellow-max=15)"

    def test_errored_listed_separately(self):
        text = format_report(
            [("x", Verdict.errored("missing unit name")), ("w", _warn()), ("y", _block())]
        )
        lines = text.splitlines()
        assert [line.split()[0] for line in lines[:-1]] == ["BLOCK", "WARN", "ERROR"]
        assert lines[2] == "ERROR  x  missing unit name"
        assert lines[-1] == "pass=0 warn=1 block=1 errored=1"

    def test_empty(self):
        assert format_report([]) == "pass=0 warn=0 block=0 errored=0"

    def test_accepts_unit_results(self):
        assert format_report(_report().results).splitlines()[0].split()[1] == "app.py::a"

    def test_deterministic(self):
        results = [("b", _warn()), ("a", _block())]
        assert format_report(results) == format_report(list(reversed(results)))


class TestGetFormatter:
    def test_known_formatters(self):
        for name in ("text", "rich", "json", "github"):
            assert get_formatter(name) is not None

    def test_unknown_formatter(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("xml")


class TestTextFormatter:
    def test_without_regressions_matches_report(self):
        report = _report()
        assert TextFormatter().format(report) == format_report(report.results)

    def test_regressions_before_summary(self):
        text = TextFormatter().format(_report([_regression()]))
        lines = text.splitlines()
        assert lines[-2] == "RATCHET app.py  total 40 -> 50 (+25.0% > 15%)"
        assert lines[-1] == "pass=1 warn=1 block=1 errored=0 regressed=1"

    def test_render_prints(self, capsys):
        TextFormatter().render(_report())
        assert "pass=1 warn=1 block=1 errored=0" in capsys.readouterr().out


class TestJsonFormatter:
    def test_valid_json(self):
        data = json.loads(JsonFormatter().format(_report([_regression()])))
        assert data["summary"] == {"pass": 1, "warn": 1, "block": 1, "errored": 0}
        assert [u["unit"] for u in data["units"]] == ["app.py::a", "app.py::b", "app.py::c"]
        assert data["units"][0]["reasons"] == [
            {"metric": "cyclomatic", "value": 20, "severity": "red", "yellow_max": 15}
        ]
        assert data["regressions"][0]["delta_pct"] == 25.0
        assert data["distribution"]["cyclomatic"]["max"] == 20

    def test_errored_unit(self):
        report = GateReport(results=[UnitResult("x", Verdict.errored("bad"))])
        data = json.loads(JsonFormatter().format(report))
        assert data["units"][0]["error"] == "bad"
        assert "metrics" not in data["units"][0]


class TestGithubFormatter:
    def test_annotations(self):
        output = GithubFormatter().format(_report([_regression()]))
        lines = output.splitlines()
        assert lines[0] == "::error file=app.py,line=7::app.py::a: cyclomatic=20 (yellow-max=15)"
        assert lines[1] == "::warning file=app.py::app.py::b: cyclomatic=12 (yellow-max=15)"
        assert lines[2].startswith("::error file=app.py::Complexity ratchet")
        assert "## Complexity Gate" in output
        assert output.endswith("**Summary:** pass=1 warn=1 block=1 errored=0")

    def test_errored_annotation(self):
        report = GateReport(results=[UnitResult("x", Verdict.errored("bad"))])
        assert GithubFormatter().format(report).splitlines()[0] == "::error::Could not evaluate x: bad"


class TestRichFormatter:
    def test_format_returns_plain_text(self):
        text = RichFormatter().format(_report([_regression()]))
        assert "Complexity Gate" in text
        assert "app.py::a" in text
        assert "Ratchet regressions" in text
        assert "Distribution" in text
        assert "app.py::c" not in text
