"""Shared CLI helpers."""

from pathlib import Path
from typing import List, Optional

from rich.console import Console

from ..config import SitrepConfig, load_config

console = Console()
err_console = Console(stderr=True)


def resolve_config(
    root: Path,
    config: Optional[Path] = None,
    exclude: Optional[List[str]] = None,
    workers: Optional[int] = None,
    strict: bool = False,
    fmt: Optional[str] = None,
) -> SitrepConfig:
    """Build the scan configuration from CLI options."""
    overrides = {}
    if exclude:
        overrides["excluded"] = list(exclude)
    if workers is not None:
        overrides["workers"] = workers
    if strict:
        overrides["allow_syntax_errors"] = False
    if fmt is not None:
        overrides["report_format"] = fmt
    return load_config(root, config_file=config, **overrides)
