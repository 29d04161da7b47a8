"""Report: the immutable, output-ready projection of scan Results.

The JSON form uses camelCase keys and omits absent optional stats:

    {
      "scanStats": {"scannedFiles", "totalLinesOfCode", "totalStrippedLinesOfCode",
                    "longestFile"?: {"name", "value"}, "longestType"?: {"name", "value"}},
      "objects": {"structs", "classes", "enums", "protocols", "extensions"},
      "imports": [{"name", "value"}],
      "inheritances": [{"name", "value"}]
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional

from .exceptions import ReportEncodingError
from .results import Results

# (stat name, kind list on Results, inherited name), in report order
INHERITANCE_HEURISTICS = (
    ("UIKit View Controllers", "classes", "UIViewController"),
    ("UIKit Views", "classes", "UIView"),
    ("SwiftUI Views", "structs", "View"),
)


@dataclass(frozen=True)
class Stat:
    """A named integer statistic."""

    name: str
    value: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Stat:
        return cls(name=str(data["name"]), value=int(data["value"]))


@dataclass(frozen=True)
class ScanStats:
    scanned_files: int = 0
    total_lines_of_code: int = 0
    total_stripped_lines_of_code: int = 0
    longest_file: Optional[Stat] = None
    longest_type: Optional[Stat] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "scannedFiles": self.scanned_files,
            "totalLinesOfCode": self.total_lines_of_code,
            "totalStrippedLinesOfCode": self.total_stripped_lines_of_code,
        }
        if self.longest_file is not None:
            data["longestFile"] = self.longest_file.to_dict()
        if self.longest_type is not None:
            data["longestType"] = self.longest_type.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScanStats:
        longest_file = data.get("longestFile")
        longest_type = data.get("longestType")
        return cls(
            scanned_files=int(data["scannedFiles"]),
            total_lines_of_code=int(data["totalLinesOfCode"]),
            total_stripped_lines_of_code=int(data["totalStrippedLinesOfCode"]),
            longest_file=Stat.from_dict(longest_file) if longest_file is not None else None,
            longest_type=Stat.from_dict(longest_type) if longest_type is not None else None,
        )


@dataclass(frozen=True)
class ObjectStats:
    structs: int = 0
    classes: int = 0
    enums: int = 0
    protocols: int = 0
    extensions: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "structs": self.structs,
            "classes": self.classes,
            "enums": self.enums,
            "protocols": self.protocols,
            "extensions": self.extensions,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ObjectStats:
        return cls(**{key: int(data[key]) for key in cls().to_dict()})


@dataclass(frozen=True)
class Report:
    """Everything a formatter needs to print a scan.

    Attributes:
        scan_stats: File and line totals plus the longest file and type
        objects: Number of top-level types per kind
        imports: Import frequencies, most used first
        inheritances: Framework base-type heuristics, in fixed order
    """

    scan_stats: ScanStats = field(default_factory=ScanStats)
    objects: ObjectStats = field(default_factory=ObjectStats)
    imports: tuple[Stat, ...] = ()
    inheritances: tuple[Stat, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "scanStats": self.scan_stats.to_dict(),
            "objects": self.objects.to_dict(),
            "imports": [stat.to_dict() for stat in self.imports],
            "inheritances": [stat.to_dict() for stat in self.inheritances],
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Report:
        """Decode a report produced by ``to_dict``.

        Raises:
            ReportEncodingError: If required keys are missing or malformed
        """
        try:
            return cls(
                scan_stats=ScanStats.from_dict(data["scanStats"]),
                objects=ObjectStats.from_dict(data["objects"]),
                imports=tuple(Stat.from_dict(item) for item in data["imports"]),
                inheritances=tuple(Stat.from_dict(item) for item in data["inheritances"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ReportEncodingError("json", f"malformed report: {e!r}")

    @classmethod
    def from_json(cls, text: str) -> Report:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ReportEncodingError("json", str(e))
        return cls.from_dict(data)


def build_report(results: Results) -> Report:
    """Project Results into a Report. Pure: ``results`` is not modified."""
    longest_file = None
    if results.longest_file is not None:
        longest_file = Stat(results.longest_file.display_name, results.longest_file_length)

    longest_type = None
    if results.longest_type is not None:
        longest_type = Stat(results.longest_type.name, results.longest_type_length)

    # sorted() is stable, so ties keep first-import order
    imports = tuple(
        Stat(name, count)
        for name, count in sorted(results.imports.items(), key=lambda item: -item[1])
    )

    inheritances = tuple(
        Stat(name, sum(1 for item in getattr(results, kind) if base in item.inheritance))
        for name, kind, base in INHERITANCE_HEURISTICS
    )

    return Report(
        scan_stats=ScanStats(
            scanned_files=len(results.files),
            total_lines_of_code=results.total_lines_of_code,
            total_stripped_lines_of_code=results.total_stripped_lines_of_code,
            longest_file=longest_file,
            longest_type=longest_type,
        ),
        objects=ObjectStats(
            structs=len(results.structs),
            classes=len(results.classes),
            enums=len(results.enums),
            protocols=len(results.protocols),
            extensions=len(results.extensions),
        ),
        imports=imports,
        inheritances=inheritances,
    )
