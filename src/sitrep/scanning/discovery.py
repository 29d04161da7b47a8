"""Source file discovery under a scan root."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from ..logging_config import get_logger

logger = get_logger(__name__)


def is_excluded(path: Path, excluded_prefixes: Iterable[str]) -> bool:
    """True if the directory containing ``path`` starts with any prefix.

    The match is on plain strings, so "Pods" also excludes "Pods2". The
    directory is normalised like ``SitrepConfig.excluded_paths`` prefixes,
    so "./Pods" and the "Pods" that ``Path(".").rglob`` yields compare equal.
    """
    directory = os.path.normpath(str(path.parent))
    return any(directory.startswith(prefix) for prefix in excluded_prefixes)


def detect_files(
    root: Path, extensions: Iterable[str] = (".swift",), excluded_prefixes: Iterable[str] = ()
) -> list[Path]:
    """Recursively list source files below ``root`` in canonical order.

    Args:
        root: Directory to enumerate
        extensions: File suffixes to keep
        excluded_prefixes: Directory path prefixes whose files are dropped

    Returns:
        Sorted list of matching files; empty if ``root`` does not exist
    """
    if not root.is_dir():
        logger.debug(f"Scan root {root} is not a directory, nothing to scan")
        return []

    ext_set = set(extensions)
    prefixes = list(excluded_prefixes)
    files: list[Path] = []
    skipped = 0

    # Single tree walk
    try:
        file_iterator = root.rglob("*")
        for filepath in file_iterator:
            if filepath.suffix not in ext_set or not filepath.is_file():
                continue
            if is_excluded(filepath, prefixes):
                skipped += 1
                logger.debug(f"Skipped (excluded): {filepath}")
                continue
            files.append(filepath)
    except RecursionError:
        logger.error("Symlink loop detected during directory traversal")

    logger.debug(f"Discovered {len(files)} file(s) under {root}, {skipped} excluded")
    return sorted(files)
