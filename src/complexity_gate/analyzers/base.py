"""Base scanner class for language-agnostic functionality"""

import fnmatch
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..exceptions import AnalysisError, FileAccessError
from ..logging_config import get_logger

logger = get_logger(__name__)

# A parsed MetricRecord, or a raw entry describing a unit that failed analysis
Entry = Union[Any, Dict[str, Any]]


class BaseScanner(ABC):
    """Abstract base class for language-specific scanners

    Unit paths are reported relative to ``anchor``. Scanners that share one
    run must share one anchor, or files with the same name under different
    roots collide in the baseline. Without an anchor a directory root is its
    own anchor and a single file is reported relative to its parent.
    """

    def __init__(
        self,
        root_dir: Union[str, Path],
        extensions: List[str],
        exclude_patterns: Optional[Sequence[str]] = None,
        anchor: Optional[Union[str, Path]] = None,
    ):
        self.root_dir = Path(root_dir)
        self.extensions = extensions
        self.exclude_patterns = list(exclude_patterns or [])
        if anchor is None:
            anchor = self.root_dir.parent if self.root_dir.is_file() else self.root_dir
        self.anchor = Path(anchor).resolve()

    def scan(self) -> List[Entry]:
        """Scan all source files under root_dir and extract unit records

        Raises:
            FileAccessError: If root_dir does not exist
        """
        if not self.root_dir.exists():
            raise FileAccessError(self.root_dir, "No such file or directory")
        if self.root_dir.is_file():
            return self._scan_file(self.root_dir)

        entries: List[Entry] = []
        for ext in self.extensions:
            for filepath in sorted(self.root_dir.rglob(f"*{ext}")):
                if self._should_skip(filepath):
                    logger.debug(f"Skipping {filepath}")
                    continue
                entries.extend(self._scan_file(filepath))
        return entries

    def _scan_file(self, filepath: Path) -> List[Entry]:
        try:
            return self._analyze_file(filepath)
        except AnalysisError as e:
            logger.warning(str(e))
            # Surfaces as an Errored verdict for this file only
            rel = self._relative(filepath)
            return [{"name": rel, "path": rel, "kind": "file", "metrics": None, "error": e.message}]

    def _relative(self, filepath: Path) -> str:
        try:
            return filepath.resolve().relative_to(self.anchor).as_posix()
        except ValueError:
            return filepath.as_posix()

    def _should_skip(self, filepath: Path) -> bool:
        """Skip files matching any exclude pattern"""
        try:
            rel = filepath.relative_to(self.root_dir).as_posix()
        except ValueError:
            rel = self._relative(filepath)
        return any(
            fnmatch.fnmatch(rel, pattern) or fnmatch.fnmatch(f"/{rel}", f"*/{pattern}")
            for pattern in self.exclude_patterns
        )

    @abstractmethod
    def _analyze_file(self, filepath: Path) -> List[Entry]:
        """Extract unit records from a single file"""
        pass
