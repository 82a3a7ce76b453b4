"""Configuration and persisted-input exceptions."""

from pathlib import Path
from typing import Any

from .base import ComplexityGateError


class ConfigurationError(ComplexityGateError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class BaselineError(ComplexityGateError):
    """Raised when a baseline file cannot be read or has the wrong shape."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid baseline: {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class MetricsFileError(ComplexityGateError):
    """Raised when an external metrics file cannot be loaded."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Cannot load metrics file: {path}", details={"path": str(path), "reason": reason}
        )
        self.path = path
        self.reason = reason
