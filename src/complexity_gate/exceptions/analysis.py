"""Errors raised while measuring source files."""

from pathlib import Path
from typing import Optional, Union

from .base import ComplexityGateError


class AnalysisError(ComplexityGateError):
    """A scan root or source file could not be measured.

    Scanners turn per-file failures into errored units; only a missing scan
    root aborts the run.
    """


class FileAccessError(AnalysisError):
    """A scan root or source file is missing or unreadable."""

    def __init__(self, filepath: Union[str, Path], reason: str):
        super().__init__(f"Cannot read {filepath}: {reason}", details={"path": filepath})
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Source the language parser rejects; ``line`` is where it gave up."""

    def __init__(
        self, filepath: Union[str, Path], language: str, reason: str, line: Optional[int] = None
    ):
        location = f"{filepath}:{line}" if line else str(filepath)
        super().__init__(f"Failed to parse {language} file: {location}", details={"reason": reason})
        self.filepath = filepath
        self.language = language
        self.reason = reason
        self.line = line
