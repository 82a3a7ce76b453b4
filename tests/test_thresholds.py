"""Tests for the threshold table."""

import pytest

from complexity_gate.config import ThresholdConfig
from complexity_gate.exceptions import UnknownMetricError
from complexity_gate.models import ThresholdSpec
from complexity_gate.thresholds import DEFAULT_TABLE, Metric, ThresholdTable


class TestBoundariesFor:
    def test_known_metric(self, cyclomatic_table):
        spec = cyclomatic_table.boundaries_for("cyclomatic")
        assert (spec.green_max, spec.yellow_max) == (8, 15)

    def test_accepts_metric_enum(self, cyclomatic_table):
        assert cyclomatic_table.boundaries_for(Metric.CYCLOMATIC).yellow_max == 15

    def test_unknown_metric_raises(self, cyclomatic_table):
        with pytest.raises(UnknownMetricError) as exc:
            cyclomatic_table.boundaries_for("halstead_volume")
        assert exc.value.metric == "halstead_volume"

    def test_get_returns_none_for_unknown(self, cyclomatic_table):
        assert cyclomatic_table.get("halstead_volume") is None


class TestDefaultTable:
    def test_registers_every_metric(self):
        assert set(DEFAULT_TABLE) == {m.value for m in Metric}

    def test_default_cyclomatic(self):
        spec = DEFAULT_TABLE.boundaries_for(Metric.CYCLOMATIC)
        assert (spec.green_max, spec.yellow_max) == (8, 15)

    def test_independent_thresholds(self):
        table = ThresholdTable.from_config(ThresholdConfig(lines_warn=100, lines_max=200))
        assert table.boundaries_for("lines").yellow_max == 200
        assert table.boundaries_for("cyclomatic").yellow_max == 15


class TestTableProtocol:
    def test_iterates_sorted(self):
        table = ThresholdTable(
            {
                "params": ThresholdSpec("params", 4, 6),
                "cyclomatic": ThresholdSpec("cyclomatic", 8, 15),
            }
        )
        assert list(table) == ["cyclomatic", "params"]
        assert len(table) == 2
        assert "params" in table
        assert "lines" not in table
        assert [s.metric for s in table.specs()] == ["cyclomatic", "params"]

    def test_spec_metric_follows_key(self):
        table = ThresholdTable({"cyclomatic": ThresholdSpec("other", 1, 2)})
        assert table.boundaries_for("cyclomatic").metric == "cyclomatic"
