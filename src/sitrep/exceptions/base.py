"""Base exception for Sitrep."""

from pathlib import Path
from typing import Dict, Optional

# Stands in for a file path when Swift source was parsed from a string
IN_MEMORY = "<in-memory>"


def source_location(filepath: Optional[Path]) -> str:
    return str(filepath) if filepath is not None else IN_MEMORY


class SitrepError(Exception):
    """Base exception for all Sitrep errors.

    ``details`` follow the message as ``key=value`` pairs, in insertion
    order, so the CLI can print any error on a single line.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        pairs = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({pairs})"
