"""Sitrep - source metrics for Swift projects."""

__version__ = "0.1.0"

from .config import SitrepConfig, load_config
from .exceptions import SitrepError
from .report import Report, Stat, build_report
from .results import Results, collate
from .scan import Scan, ScanResult

__all__ = [
    "__version__",
    "Report",
    "Results",
    "Scan",
    "ScanResult",
    "SitrepConfig",
    "SitrepError",
    "Stat",
    "build_report",
    "collate",
    "load_config",
]
