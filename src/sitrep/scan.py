"""Scan: the orchestrator that finds, parses, collates and reports.

Usage:
    scan = Scan(Path("MyApp"), load_config(Path("MyApp")))
    outcome = scan.run(report_format="text")
    print(outcome.output)

Every step is also callable on its own, so callers can stop after
``collate`` when they only need the Results.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import DEFAULT_CONFIG, SitrepConfig
from .formatters import get_formatter
from .logging_config import get_logger
from .report import Report, build_report
from .results import Results, collate
from .scanning.discovery import detect_files
from .scanning.syntax import FileUnit
from .scanning.syntax_extractor import SyntaxExtractor

logger = get_logger(__name__)


@dataclass
class ScanResult:
    """Outcome of a full scan.

    Attributes:
        results: Aggregated statistics
        files: Every discovered file, in processing order
        failures: Files that could not be read or parsed
        report: Report built from ``results``
        output: Report rendered in the requested format, if one was requested
    """

    results: Results
    files: list[Path]
    failures: list[Path]
    report: Report
    output: Optional[str] = None


class Scan:
    """One scan of a directory tree."""

    def __init__(self, root: Path, config: SitrepConfig = DEFAULT_CONFIG) -> None:
        self.root = Path(root)
        self.config = config
        self._extractor = SyntaxExtractor(config)

    def detect_files(self) -> list[Path]:
        """Source files under the root, minus exclusions, in canonical order."""
        return detect_files(
            self.root,
            extensions=self.config.extensions,
            excluded_prefixes=self.config.excluded_paths(self.root),
        )

    def parse(self, files: list[Path]) -> tuple[list[FileUnit], list[Path]]:
        """Parse files; unreadable or unparsable ones are returned as failures."""
        units, failures = self._extractor.parse_files(files)
        if failures:
            logger.warning(f"{len(failures)} of {len(files)} file(s) could not be parsed")
        return units, failures

    def collate(self, units: list[FileUnit]) -> Results:
        return collate(units)

    def create_report(self, results: Results) -> Report:
        return build_report(results)

    def run(self, report_format: Optional[str] = None) -> ScanResult:
        """Run every step and optionally render the report.

        Args:
            report_format: "text", "json" or "rich"; None skips rendering

        Raises:
            ReportEncodingError: If the report cannot be rendered
        """
        files = self.detect_files()
        units, failures = self.parse(files)
        results = self.collate(units)
        report = self.create_report(results)

        output = None
        if report_format is not None:
            output = get_formatter(report_format).format(report)

        logger.info(
            f"Scan complete: {len(units)} parsed, {len(failures)} failed, "
            f"{results.total_stripped_lines_of_code} source lines"
        )
        return ScanResult(
            results=results, files=files, failures=failures, report=report, output=output
        )
