"""Shared test fixtures for Sitrep tests."""

import os
from pathlib import Path

import pytest

from sitrep.scanning.syntax_extractor import SyntaxExtractor

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def swift_project() -> Path:
    """Ten Swift files, one of them under IgnoredDirectory/."""
    return FIXTURES / "swift_project"


@pytest.fixture
def extractor() -> SyntaxExtractor:
    return SyntaxExtractor()


@pytest.fixture
def parse(extractor):
    """Parse in-memory Swift source into a FileUnit."""
    return extractor.parse_source


@pytest.fixture(autouse=True)
def _clear_sitrep_env(monkeypatch):
    """Keep SITREP_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("SITREP_"):
            monkeypatch.delenv(key)
