"""Configuration loading and management for Sitrep.

Configuration sources are merged in priority order (lowest to highest):
    1. Defaults (defined in SitrepConfig)
    2. Project config in the scanned root (.sitrep.yml or sitrep.toml)
    3. Explicit config file (if config_file provided)
    4. Environment variables (SITREP_* prefix)
    5. CLI overrides (passed as kwargs)

A project without any configuration file behaves exactly like one with an
empty exclusion list.

Example:
    >>> config = load_config(Path("MyApp"), excluded=["Pods"])
    >>> config.excluded
    ['Pods']
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

import yaml

from .exceptions import ConfigurationError, InvalidConfigError
from .logging_config import get_logger

logger = get_logger(__name__)

ReportFormat = Literal["text", "json", "rich"]

# Project-level file names, checked in this order
PROJECT_CONFIG_NAMES = (".sitrep.yml", ".sitrep.yaml", "sitrep.toml", ".sitrep.toml")

_REPORT_FORMATS = ("text", "json", "rich")


@dataclass(frozen=True)
class SitrepConfig:
    """Configuration for one scan.

    Attributes:
        excluded: Directory prefixes, relative to the scan root, whose files are skipped
        extensions: File suffixes recognised as source files
        static_modifiers: Declaration modifiers that make a function type-level
        workers: Number of parser threads (1 = sequential)
        allow_syntax_errors: Keep files whose syntax tree contains error nodes
        report_format: Default output format
    """

    excluded: list[str] = field(default_factory=list)
    extensions: list[str] = field(default_factory=lambda: [".swift"])
    # "class func" is the overridable spelling of "static func"
    static_modifiers: list[str] = field(default_factory=lambda: ["static", "class"])
    workers: int = 1
    allow_syntax_errors: bool = True
    report_format: ReportFormat = "text"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not isinstance(self.excluded, list) or not all(
            isinstance(item, str) for item in self.excluded
        ):
            raise InvalidConfigError("excluded", self.excluded, "must be a list of strings")
        if not self.extensions:
            raise InvalidConfigError("extensions", self.extensions, "must not be empty")
        for ext in self.extensions:
            if not ext.startswith("."):
                raise InvalidConfigError("extensions", ext, "extensions must start with '.'")
        if not self.static_modifiers:
            raise InvalidConfigError(
                "static_modifiers", self.static_modifiers, "must not be empty"
            )
        if self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.report_format not in _REPORT_FORMATS:
            raise InvalidConfigError(
                "report_format",
                self.report_format,
                f"expected one of {', '.join(_REPORT_FORMATS)}",
            )

    def excluded_paths(self, root: Path) -> list[str]:
        """Resolve the exclusion list into path prefixes under ``root``."""
        return [
            os.path.normpath(os.path.join(str(root), excluded)) for excluded in self.excluded
        ]


DEFAULT_CONFIG = SitrepConfig()


def load_config(
    root: Optional[Path] = None, config_file: Optional[Path] = None, **overrides: Any
) -> SitrepConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        root: Scanned project root, searched for a project config file
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``None`` values are ignored

    Returns:
        Validated SitrepConfig instance

    Raises:
        ConfigurationError: If an explicit config file is missing or any source is invalid
    """
    merged: dict[str, Any] = {}

    # 1. Project config (missing file means defaults)
    if root is not None:
        project_config = find_project_config(root)
        if project_config is None:
            logger.debug(f"No configuration file in {root}, using defaults")
        else:
            logger.debug(f"Using project configuration {project_config}")
            merged.update(_load_config_file(project_config))

    # 2. Explicit config file
    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_config_file(config_file))

    # 3. Environment variables (SITREP_* prefix)
    merged.update(_load_env_vars())

    # 4. CLI overrides
    merged.update({key: value for key, value in overrides.items() if value is not None})

    unknown = sorted(set(merged) - set(SitrepConfig.__dataclass_fields__))
    if unknown:
        raise InvalidConfigError(unknown[0], merged[unknown[0]], "unknown configuration key")

    return SitrepConfig(**merged)


def find_project_config(root: Path) -> Optional[Path]:
    """Return the first project config file present in ``root``, if any."""
    for name in PROJECT_CONFIG_NAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def _load_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML or TOML config file, chosen by suffix."""
    try:
        if path.suffix == ".toml":
            data = _load_toml_file(path)
        else:
            data = _load_yaml_file(path)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file '{path}': {e}")
    except (yaml.YAMLError, ValueError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Invalid config file '{path}': expected a mapping at top level")

    # .sitrep.yml may spell "excluded: ~" to mean no exclusions
    if "excluded" in data and data["excluded"] is None:
        data["excluded"] = []
    return data


def _load_yaml_file(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If tomllib/tomli not available
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from SITREP_* environment variables.

    Supported environment variables:
        SITREP_WORKERS: int
        SITREP_ALLOW_SYNTAX_ERRORS: bool (true/false/1/0)
        SITREP_REPORT_FORMAT: text/json/rich
        SITREP_EXCLUDED: comma-separated list of directories

    Returns:
        Dict of field_name -> parsed_value for any SITREP_* vars found.
    """
    type_hints = get_type_hints(SitrepConfig)

    result: dict[str, Any] = {}

    for field_name in SitrepConfig.__dataclass_fields__:
        env_key = f"SITREP_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Lists are comma-separated
    if origin is list:
        return [item.strip() for item in value.split(",") if item.strip()]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    # String (including Literal types like ReportFormat)
    if type_hint is str or origin is Literal:
        return value

    return None
