"""Tests for baseline persistence."""

import json

import pytest

from complexity_gate.baseline import load_baseline, save_baseline
from complexity_gate.exceptions import BaselineError


class TestSaveAndLoadBaseline:
    def test_roundtrip(self, tmp_path):
        path = tmp_path / "baseline.json"
        save_baseline({"b.py": 12, "a.py::f": 4.5}, path)
        assert load_baseline(path) == {"a.py::f": 4.5, "b.py": 12}

    def test_file_layout_is_sorted_and_versioned(self, tmp_path):
        path = tmp_path / "baseline.json"
        save_baseline({"b.py": 2, "a.py": 1}, path)
        data = json.loads(path.read_text())
        assert data["version"] == 1
        assert list(data["units"]) == ["a.py", "b.py"]

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "baseline.json"
        save_baseline({"a.py": 1}, path)
        assert path.exists()

    def test_load_missing_file(self, tmp_path):
        assert load_baseline(tmp_path / "nope.json") == {}

    def test_load_flat_layout(self, tmp_path):
        path = tmp_path / "baseline.json"
        path.write_text(json.dumps({"a.py": 10, "b.py": 3}))
        assert load_baseline(path) == {"a.py": 10, "b.py": 3}

    def test_flat_layout_with_unit_named_version(self, tmp_path):
        path = tmp_path / "baseline.json"
        path.write_text(json.dumps({"version": 7, "a.py": 10}))
        assert load_baseline(path) == {"version": 7, "a.py": 10}


class TestInvalidBaseline:
    def test_invalid_json(self, tmp_path):
        path = tmp_path / "baseline.json"
        path.write_text("{not json")
        with pytest.raises(BaselineError, match="Invalid baseline"):
            load_baseline(path)

    def test_non_numeric_total(self, tmp_path):
        path = tmp_path / "baseline.json"
        path.write_text(json.dumps({"version": 1, "units": {"a.py": "lots"}}))
        with pytest.raises(BaselineError) as exc:
            load_baseline(path)
        assert "a.py" in exc.value.reason

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "baseline.json"
        path.write_text(json.dumps([1, 2, 3]))
        with pytest.raises(BaselineError):
            load_baseline(path)
