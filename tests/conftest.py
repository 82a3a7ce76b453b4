"""Shared test fixtures for Complexity Gate tests."""

import os

import pytest

from complexity_gate.models import ThresholdSpec
from complexity_gate.thresholds import ThresholdTable


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)

@pytest.fixture
def cyclomatic_table():
    """Only cyclomatic is registered: green <= 8, yellow <= 15."""
    return ThresholdTable({"cyclomatic": ThresholdSpec("cyclomatic", 8, 15)})


@pytest.fixture
def table():
    """A small table with three registered metrics."""
    return ThresholdTable(
        {
            "cyclomatic": ThresholdSpec("cyclomatic", 8, 15),
            "nesting_depth": ThresholdSpec("nesting_depth", 3, 4),
            "params": ThresholdSpec("params", 4, 6),
        }
    )


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user and project config files and env vars out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr("pathlib.Path.home", lambda: home)
    monkeypatch.chdir(workdir)
    for key in list(os.environ):
        if key.startswith("COMPLEXITY_GATE_"):
            monkeypatch.delenv(key)
    return workdir
