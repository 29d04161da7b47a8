"""End-to-end tests for Scan over the fixture project."""

import json
from pathlib import Path

import pytest

from sitrep.config import SitrepConfig
from sitrep.scan import Scan

BAD_ROOT = Path("/Sitrep_ThisWillNeverWorkNuhUh")


@pytest.fixture
def outcome(swift_project):
    return Scan(swift_project).run()


class TestScanSteps:
    """Each step on its own."""

    def test_detect_files(self, swift_project):
        """All ten fixture files are discovered."""
        assert len(Scan(swift_project).detect_files()) == 10

    def test_bad_root(self):
        """A missing root gives zero files and zero failures."""
        outcome = Scan(BAD_ROOT).run()
        assert outcome.files == []
        assert outcome.failures == []
        assert outcome.report.scan_stats.scanned_files == 0

    def test_bad_file_parsing(self):
        """An unreadable file is a failure, not an exception."""
        units, failures = Scan(BAD_ROOT).parse([BAD_ROOT])
        assert units == []
        assert failures == [BAD_ROOT]


class TestScanRun:
    """Aggregated statistics for the fixture project."""

    def test_file_counts(self, outcome):
        """Every file parses."""
        assert len(outcome.files) == 10
        assert outcome.failures == []

    def test_type_counts(self, outcome):
        """Top-level types by kind."""
        results = outcome.results
        assert len(results.classes) == 4
        assert len(results.structs) == 3
        assert len(results.enums) == 1
        assert len(results.protocols) == 4
        assert len(results.extensions) == 2

    def test_imports(self, outcome):
        """UIKit in two files, SwiftUI in three, SwiftUI listed first."""
        assert outcome.results.imports["UIKit"] == 2
        assert outcome.results.imports["SwiftUI"] == 3
        assert outcome.report.imports[0].name == "SwiftUI"

    def test_inheritances(self, outcome):
        """Two view controllers, no UIViews, one SwiftUI view."""
        values = {stat.name: stat.value for stat in outcome.report.inheritances}
        assert values == {"UIKit View Controllers": 2, "UIKit Views": 0, "SwiftUI Views": 1}

    def test_longest_type_includes_extensions(self, outcome):
        """Foobar is 20 lines plus a 25 line extension."""
        assert outcome.results.longest_type.name == "Foobar"
        assert outcome.results.longest_type_length == 45

    def test_longest_file(self, outcome):
        """The extension file has the most source lines."""
        assert outcome.report.scan_stats.longest_file.name == "foobar_extension.swift"
        assert outcome.report.scan_stats.longest_file.value == 25

    def test_total_lines(self, outcome):
        """Raw line total over the concatenated files."""
        assert outcome.report.scan_stats.total_lines_of_code == 176

    def test_no_output_without_format(self, outcome):
        """Rendering only happens when asked."""
        assert outcome.output is None


class TestScanOptions:
    """Configuration-driven behaviour."""

    def test_excluded_directory(self, swift_project):
        """IgnoredDirectory is left out of every statistic."""
        outcome = Scan(swift_project, SitrepConfig(excluded=["IgnoredDirectory"])).run()
        assert len(outcome.files) == 9
        assert len(outcome.results.structs) == 2
        assert len(outcome.results.extensions) == 1
        assert "IgnoredStruct" not in outcome.results.type_lengths

    def test_excluded_directory_relative_root(self, swift_project, monkeypatch):
        """Exclusions also apply when scanning the current directory."""
        monkeypatch.chdir(swift_project)
        files = Scan(Path("."), SitrepConfig(excluded=["IgnoredDirectory"])).detect_files()
        assert len(files) == 9
        assert all(path.parent.name != "IgnoredDirectory" for path in files)

    def test_parallel_matches_sequential(self, swift_project):
        """Worker threads produce the same report."""
        sequential = Scan(swift_project, SitrepConfig(workers=1)).run()
        parallel = Scan(swift_project, SitrepConfig(workers=4)).run()
        assert parallel.report == sequential.report
        assert parallel.files == sequential.files

    def test_text_report(self, swift_project):
        """The text report starts with the SITREP banner."""
        outcome = Scan(swift_project).run(report_format="text")
        assert outcome.output.startswith("SITREP\n------\n")

    def test_json_report_decodes(self, swift_project):
        """The JSON report is valid JSON with the report keys."""
        outcome = Scan(swift_project).run(report_format="json")
        data = json.loads(outcome.output)
        assert data["objects"]["classes"] == 4
