"""Analysis-related exceptions: file access, parsing, tree building."""

from pathlib import Path
from typing import Optional

from .base import SitrepError, source_location


class AnalysisError(SitrepError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when file content cannot be parsed."""

    def __init__(self, filepath: Optional[Path], language: str, reason: str):
        location = source_location(filepath)
        super().__init__(
            f"Failed to parse {language} file: {location}",
            details={"filepath": location, "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason


class NestingError(AnalysisError):
    """Raised when the visitor leaves a scope it never entered.

    This signals a bug in the tree walk, not a problem with the input file,
    so it is never collected as a per-file failure.
    """

    def __init__(self, node_type: str, reason: str):
        super().__init__(
            f"Unbalanced scope while leaving {node_type}",
            details={"node_type": node_type, "reason": reason},
        )
        self.node_type = node_type
        self.reason = reason
