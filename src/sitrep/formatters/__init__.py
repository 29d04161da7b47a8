"""Output formatters for Sitrep reports."""

from .base import BaseFormatter
from .json_formatter import JsonFormatter
from .rich_formatter import RichFormatter
from .text_formatter import TextFormatter

FORMATTERS = {
    "text": TextFormatter,
    "json": JsonFormatter,
    "rich": RichFormatter,
}


def get_formatter(name: str) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "text", "json", "rich"

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    cls = FORMATTERS.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(FORMATTERS))}")
    return cls()


__all__ = [
    "BaseFormatter",
    "TextFormatter",
    "JsonFormatter",
    "RichFormatter",
    "FORMATTERS",
    "get_formatter",
]
