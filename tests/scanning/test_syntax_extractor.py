"""Tests for SyntaxExtractor, the per-file failure boundary."""

from pathlib import Path

import pytest

from sitrep.config import SitrepConfig
from sitrep.exceptions import FileAccessError, ParsingError
from sitrep.scanning.syntax import FileUnit
from sitrep.scanning.syntax_extractor import SyntaxExtractor


class TestParseSource:
    """In-memory parsing."""

    def test_returns_file_unit(self, extractor):
        """parse_source() returns a FileUnit without a path."""
        unit = extractor.parse_source("struct A {}")
        assert isinstance(unit, FileUnit)
        assert unit.path is None
        assert unit.display_name == "<in-memory>"

    def test_accepts_bytes(self, extractor):
        """Bytes and str give the same result."""
        assert extractor.parse_source(b"import UIKit").imports == ["UIKit"]

    def test_lenient_by_default(self, extractor):
        """Syntax errors are tolerated unless strict parsing is on."""
        unit = extractor.parse_source("struct Broken {\n    let x =\n")
        assert isinstance(unit, FileUnit)

    def test_strict_rejects_syntax_errors(self):
        """With allow_syntax_errors off, a broken file is a ParsingError."""
        extractor = SyntaxExtractor(SitrepConfig(allow_syntax_errors=False))
        with pytest.raises(ParsingError):
            extractor.parse_source("struct Broken {\n    let x =\n")


class TestParseFile:
    """Reading from disk."""

    def test_missing_file(self, extractor, tmp_path):
        """A missing file raises FileAccessError."""
        with pytest.raises(FileAccessError):
            extractor.parse_file(tmp_path / "missing.swift")

    def test_path_recorded(self, extractor, swift_project):
        """The unit remembers where it came from."""
        unit = extractor.parse_file(swift_project / "enum.swift")
        assert unit.path == swift_project / "enum.swift"
        assert unit.display_name == "enum.swift"


class TestParseFiles:
    """Batches with failures."""

    def test_failure_does_not_abort(self, extractor, swift_project, tmp_path):
        """A bad path is reported and the other files still parse."""
        bad = tmp_path / "nope.swift"
        good = swift_project / "views.swift"
        units, failures = extractor.parse_files([bad, good])
        assert [u.path for u in units] == [good]
        assert failures == [bad]

    def test_only_bad_file(self, extractor):
        """One invalid file: zero successes, one failure, no exception."""
        bad = Path("/Sitrep_ThisWillNeverWorkNuhUh")
        units, failures = extractor.parse_files([bad])
        assert units == []
        assert failures == [bad]

    def test_parallel_keeps_input_order(self, swift_project):
        """Thread-pool parsing returns units in input order."""
        files = sorted(swift_project.glob("*.swift"))
        sequential, _ = SyntaxExtractor(SitrepConfig(workers=1)).parse_files(files)
        parallel, _ = SyntaxExtractor(SitrepConfig(workers=4)).parse_files(files)
        assert [u.path for u in parallel] == files
        assert [u.stripped_body for u in parallel] == [u.stripped_body for u in sequential]
