"""Configuration loading and management for Complexity Gate.

Configuration sources are merged in priority order:
    1. Defaults (defined in GateConfig / ThresholdConfig)
    2. Global config (~/.complexity-gate.toml)
    3. Project config (./complexity-gate.toml)
    4. Explicit config file
    5. Environment variables (COMPLEXITY_GATE_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(max_delta_pct=5)
    >>> config.max_delta_pct
    5
    >>> config.thresholds.cyclomatic_max
    15
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ComplexityGateError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]
OutputFormat = Literal["text", "rich", "json", "github"]

OUTPUT_FORMATS = ("text", "rich", "json", "github")
VERBOSITIES = ("quiet", "normal", "verbose")

ENV_PREFIX = "COMPLEXITY_GATE_"

# Names used by lint-rule style configs, mapped onto yellow-max fields
THRESHOLD_ALIASES = {
    "cyclomaticMax": "cyclomatic_max",
    "nestingDepthMax": "nesting_depth_max",
    "callbackDepthMax": "callback_depth_max",
    "linesPerFunctionMax": "lines_max",
    "paramsMax": "params_max",
    "fileTotalMax": "file_total_max",
}

GATE_ALIASES = {
    "maxDeltaPct": "max_delta_pct",
}


@dataclass(frozen=True)
class ThresholdConfig:
    """Green/yellow boundaries for every gated metric.

    Each metric has a ``_warn`` field (green-max: values at or below pass
    quietly) and a ``_max`` field (yellow-max: values above it block).
    Values in between warn.

    Attributes:
        cyclomatic_warn / cyclomatic_max: Cyclomatic complexity per function
        nesting_depth_warn / nesting_depth_max: Nested block depth per function
        callback_depth_warn / callback_depth_max: Nested function/lambda depth
        lines_warn / lines_max: Lines per function
        params_warn / params_max: Parameter count per function
        file_total_warn / file_total_max: Summed complexity per file
    """

    cyclomatic_warn: int = 8
    cyclomatic_max: int = 15

    nesting_depth_warn: int = 3
    nesting_depth_max: int = 4

    callback_depth_warn: int = 2
    callback_depth_max: int = 3

    lines_warn: int = 50
    lines_max: int = 100

    params_warn: int = 4
    params_max: int = 6

    file_total_warn: int = 50
    file_total_max: int = 100

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfigError(f.name, value, "must be an integer")
            if value < 0:
                raise InvalidConfigError(f.name, value, "must be non-negative")

        for metric in self.metrics():
            warn = getattr(self, f"{metric}_warn")
            limit = getattr(self, f"{metric}_max")
            if warn > limit:
                raise InvalidConfigError(
                    f"{metric}_warn", warn, f"must not exceed {metric}_max ({limit})"
                )

    @classmethod
    def metrics(cls) -> list[str]:
        """Metric names covered by this config, in declaration order."""
        return [f.name[: -len("_max")] for f in fields(cls) if f.name.endswith("_max")]

    def boundaries(self, metric: str) -> tuple[int, int]:
        """Return (green_max, yellow_max) for a metric."""
        return getattr(self, f"{metric}_warn"), getattr(self, f"{metric}_max")


DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class GateConfig:
    """Configuration for a gate run.

    Attributes:
        max_delta_pct: Allowed growth of a unit's total over its baseline (percent)
        baseline_file: Where the ratchet baseline is read from and written to
        fail_on_regression: Treat ratchet regressions as a failing run
        exclude_patterns: Glob patterns skipped by the built-in analyzer
        output_format: Report format (text, rich, json, github)
        verbosity: Logging verbosity level
        thresholds: Per-metric boundaries
    """

    max_delta_pct: int = 10
    baseline_file: str = ".complexity-baseline.json"
    fail_on_regression: bool = True

    exclude_patterns: list[str] = field(
        default_factory=lambda: [
            ".git/*",
            "venv/*",
            ".venv/*",
            "__pycache__/*",
            ".tox/*",
            ".mypy_cache/*",
            ".pytest_cache/*",
            "build/*",
            "dist/*",
            "*.egg-info/*",
            "node_modules/*",
        ]
    )

    output_format: OutputFormat = "text"
    verbosity: Verbosity = "normal"

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if isinstance(self.max_delta_pct, bool) or not isinstance(self.max_delta_pct, int):
            raise InvalidConfigError("max_delta_pct", self.max_delta_pct, "must be an integer")
        if self.max_delta_pct < 0:
            raise InvalidConfigError("max_delta_pct", self.max_delta_pct, "must be non-negative")
        if self.output_format not in OUTPUT_FORMATS:
            raise InvalidConfigError(
                "output_format", self.output_format, f"expected one of {', '.join(OUTPUT_FORMATS)}"
            )
        if self.verbosity not in VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(VERBOSITIES)}"
            )
        if not self.baseline_file:
            raise InvalidConfigError("baseline_file", self.baseline_file, "must not be empty")


def load_config(config_file: Optional[Path] = None, **overrides) -> GateConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options fall through.

    Returns:
        Validated GateConfig instance

    Raises:
        ComplexityGateError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".complexity-gate.toml"
    if global_config.exists():
        merged = _merge(merged, _load_checked(global_config, "global config"))

    project_config = Path.cwd() / "complexity-gate.toml"
    if project_config.exists():
        merged = _merge(merged, _load_checked(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise ComplexityGateError(f"Config file not found: {config_file}")
        merged = _merge(merged, _load_checked(config_file, "config file"))

    merged = _merge(merged, _load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged = _merge(merged, {k: v for k, v in overrides.items() if v is not None})

    thresholds = merged.pop("thresholds", None)
    if isinstance(thresholds, dict):
        try:
            merged["thresholds"] = ThresholdConfig(**thresholds)
        except TypeError as e:
            raise ComplexityGateError(f"Invalid [thresholds] config: {e}")
    elif isinstance(thresholds, ThresholdConfig):
        merged["thresholds"] = thresholds

    try:
        return GateConfig(**merged)
    except TypeError as e:
        raise ComplexityGateError(f"Invalid configuration: {e}")


def _merge(base: dict, update: dict) -> dict:
    """Merge config layers; the [thresholds] table merges key by key.

    Aliases are resolved within each layer first, so a camelCase key never
    outranks the snake_case key of a later layer.
    """
    result = dict(base)
    for key, value in _normalize(update).items():
        if key == "thresholds" and isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = {**result[key], **value}
        else:
            result[key] = value
    return result


def _apply_aliases(data: dict, aliases: dict) -> dict:
    return {aliases.get(k, k): v for k, v in data.items()}


def _normalize(layer: dict) -> dict:
    result = _apply_aliases(layer, GATE_ALIASES)
    if isinstance(result.get("thresholds"), dict):
        result["thresholds"] = _apply_aliases(result["thresholds"], THRESHOLD_ALIASES)
    return result


def _load_checked(path: Path, label: str) -> dict:
    try:
        return _load_toml_file(path)
    except ComplexityGateError:
        raise
    except Exception as e:
        raise ComplexityGateError(f"Invalid {label} '{path}': {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from COMPLEXITY_GATE_* environment variables.

    Top-level fields use ``COMPLEXITY_GATE_<FIELD>`` (e.g.
    ``COMPLEXITY_GATE_MAX_DELTA_PCT=5``). Thresholds use
    ``COMPLEXITY_GATE_THRESHOLDS_<FIELD>`` (e.g.
    ``COMPLEXITY_GATE_THRESHOLDS_CYCLOMATIC_MAX=20``).
    """
    result: dict[str, Any] = {}

    type_hints = get_type_hints(GateConfig)
    for field_name in GateConfig.__dataclass_fields__:
        if field_name == "thresholds":
            continue
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue
        try:
            parsed = _parse_env_value(env_value, type_hints.get(field_name))
        except ValueError as e:
            raise ComplexityGateError(f"Invalid {env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    thresholds: dict[str, int] = {}
    for field_name in ThresholdConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}THRESHOLDS_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue
        try:
            thresholds[field_name] = int(env_value)
        except ValueError:
            raise ComplexityGateError(f"Invalid {env_key}: expected an integer, got '{env_value}'")
    if thresholds:
        result["thresholds"] = thresholds

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns None for types that cannot be expressed as a single string.
    """
    origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ComplexityGateError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ComplexityGateError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        data = tomllib.load(f)

    # Allow the settings to live under [complexity-gate] or at top level
    section = data.get("complexity-gate")
    if isinstance(section, dict):
        return section
    return data
