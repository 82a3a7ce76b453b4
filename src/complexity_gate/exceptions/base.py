"""Root of the Complexity Gate error hierarchy."""

from typing import Any, Dict, Optional


class ComplexityGateError(Exception):
    """A failure reported instead of a verdict.

    ``message`` is the one-line summary the CLI prints after ``Error:``;
    ``details`` holds the context (path, key, offending value) appended in
    parentheses. Detail values are stored as strings so every error stays
    printable.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = {key: str(value) for key, value in (details or {}).items()}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
