"""Tests for logging setup."""

import logging

from sitrep.logging_config import get_logger, log_level, setup_logging


class TestLevels:
    """CLI flags to log levels."""

    def test_default_shows_warnings(self):
        """Per-file failures are visible without flags."""
        assert log_level() == logging.WARNING

    def test_verbose(self):
        assert log_level(verbose=True) == logging.DEBUG

    def test_quiet_wins(self):
        """--quiet overrides --verbose."""
        assert log_level(verbose=True, quiet=True) == logging.ERROR

    def test_setup_sets_package_level(self):
        """The sitrep logger takes the chosen level."""
        logger = setup_logging(verbose=True)
        assert logger.name == "sitrep"
        assert logger.level == logging.DEBUG
        setup_logging()
        assert logger.level == logging.WARNING


class TestGetLogger:
    """Namespacing."""

    def test_module_names_kept(self):
        assert get_logger("sitrep.scan").name == "sitrep.scan"

    def test_foreign_names_prefixed(self):
        """Loggers always live under the sitrep namespace."""
        assert get_logger("custom").name == "sitrep.custom"

    def test_root(self):
        assert get_logger().name == "sitrep"
