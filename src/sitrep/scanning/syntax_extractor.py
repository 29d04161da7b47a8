"""SyntaxExtractor: produces a FileUnit for every scanned file.

This is the per-file failure boundary. A file that cannot be read or parsed
is reported back as a failure; it never aborts the rest of the batch.

Usage:
    extractor = SyntaxExtractor(config)
    units, failures = extractor.parse_files(paths)

With ``config.workers > 1`` files are parsed on a thread pool. Results are
always returned in input order, so downstream tie-breaking is identical to a
sequential run.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Union

from ..config import DEFAULT_CONFIG, SitrepConfig
from ..exceptions import FileAccessError, ParsingError
from ..exceptions.base import source_location
from ..logging_config import get_logger
from .syntax import FileUnit
from .treesitter_parser import LANGUAGE_NAME, TreeSitterParser
from .visitor import FileVisitor

logger = get_logger(__name__)


class SyntaxExtractor:
    """Parses Swift files into FileUnits.

    Attributes:
        config: Scan configuration (static modifiers, strictness, workers)
    """

    def __init__(
        self, config: SitrepConfig = DEFAULT_CONFIG, parser: Optional[TreeSitterParser] = None
    ) -> None:
        self.config = config
        self._parser = parser or TreeSitterParser()

    def parse_source(self, source: Union[str, bytes], path: Optional[Path] = None) -> FileUnit:
        """Parse in-memory source text.

        Raises:
            ParsingError: If the source cannot be parsed, or contains syntax
                errors while ``allow_syntax_errors`` is off
        """
        if isinstance(source, str):
            source = source.encode("utf-8")

        tree = self._parser.parse(source, path)
        if tree.root_node.has_error:
            if not self.config.allow_syntax_errors:
                raise ParsingError(path, LANGUAGE_NAME, "syntax tree contains errors")
            logger.debug(f"Syntax errors in {source_location(path)}, keeping recovered tree")

        visitor = FileVisitor(source, self.config.static_modifiers)
        return visitor.visit(tree.root_node, path)

    def parse_file(self, path: Path) -> FileUnit:
        """Read and parse one file.

        Raises:
            FileAccessError: If the file cannot be read
            ParsingError: If the file cannot be parsed
        """
        try:
            source = path.read_bytes()
        except OSError as e:
            raise FileAccessError(path, str(e))
        unit = self.parse_source(source, path)
        logger.debug(f"Parsed {path}: {len(unit.root.types)} top-level type(s)")
        return unit

    def parse_files(self, paths: list[Path]) -> tuple[list[FileUnit], list[Path]]:
        """Parse every file, collecting failures instead of raising.

        Returns:
            Tuple of (parsed units, failed paths), both in input order
        """
        if self.config.workers > 1 and len(paths) > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
                outcomes = list(executor.map(self._try_parse, paths))
        else:
            outcomes = [self._try_parse(path) for path in paths]

        units: list[FileUnit] = []
        failures: list[Path] = []
        for path, unit in zip(paths, outcomes):
            if unit is None:
                failures.append(path)
            else:
                units.append(unit)
        return units, failures

    def _try_parse(self, path: Path) -> Optional[FileUnit]:
        try:
            return self.parse_file(path)
        except (FileAccessError, ParsingError) as e:
            logger.warning(f"Skipping {path}: {e}")
            return None
