"""Built-in metric analyzers."""

from .base import BaseScanner
from .python_analyzer import PythonScanner, function_metrics

__all__ = ["BaseScanner", "PythonScanner", "function_metrics"]
