"""Base formatter interface for Sitrep report rendering."""

from abc import ABC, abstractmethod

from ..report import Report


class BaseFormatter(ABC):
    """Abstract base class for report formatters."""

    name: str = ""

    def render(self, report: Report) -> None:
        """Print the report to stdout."""
        print(self.format(report))

    @abstractmethod
    def format(self, report: Report) -> str:
        """Return formatted string representation of the report."""
