"""Base formatter interface for Complexity Gate output rendering."""

from abc import ABC, abstractmethod

from ..models import GateReport


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    def render(self, report: GateReport) -> None:
        """Print the formatted report to stdout."""
        print(self.format(report))

    @abstractmethod
    def format(self, report: GateReport) -> str:
        """Return formatted string representation of the report."""
