"""Exception hierarchy for Sitrep."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    NestingError,
    ParsingError,
)
from .base import SitrepError
from .config import (
    ConfigurationError,
    InvalidConfigError,
)
from .report import ReportEncodingError

__all__ = [
    "SitrepError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "NestingError",
    "ConfigurationError",
    "InvalidConfigError",
    "ReportEncodingError",
]
