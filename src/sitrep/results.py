"""Project-wide aggregation of parsed files.

``collate`` folds FileUnits, in order, into a single Results accumulator.
The fold is deterministic for a given input order: both running maxima
(longest file, longest type) only change on a strictly greater value, so
the first file or type to reach a length keeps it.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .logging_config import get_logger
from .scanning.syntax import FileUnit, ObjectKind, TypeDef, count_lines

logger = get_logger(__name__)


@dataclass
class Results:
    """Everything collected across all scanned files.

    Attributes:
        files: Successfully parsed files, in scan order
        classes, structs, enums, protocols, extensions: Top-level types by kind
        imports: Import name -> number of import statements (insertion ordered)
        total_code: Raw text of all files, concatenated
        total_stripped_code: Stripped text of all files, concatenated
        longest_file / longest_file_length: File with the most stripped lines
        longest_type / longest_type_length: Type whose name has the most
            stripped lines summed over every declaration and extension
        type_lengths: Summed stripped line count per type name
    """

    files: list[FileUnit] = field(default_factory=list)
    classes: list[TypeDef] = field(default_factory=list)
    structs: list[TypeDef] = field(default_factory=list)
    enums: list[TypeDef] = field(default_factory=list)
    protocols: list[TypeDef] = field(default_factory=list)
    extensions: list[TypeDef] = field(default_factory=list)
    imports: Counter = field(default_factory=Counter)
    total_code: str = ""
    total_stripped_code: str = ""
    longest_file: Optional[FileUnit] = None
    longest_file_length: int = 0
    longest_type: Optional[TypeDef] = None
    longest_type_length: int = 0
    type_lengths: dict[str, int] = field(default_factory=dict)

    def of_kind(self, kind: ObjectKind) -> list[TypeDef]:
        return getattr(self, _LIST_BY_KIND[kind])

    @property
    def total_lines_of_code(self) -> int:
        return count_lines(self.total_code)

    @property
    def total_stripped_lines_of_code(self) -> int:
        return count_lines(self.total_stripped_code)

    def add_file(self, unit: FileUnit) -> None:
        """Fold one file into the running totals."""
        self.files.append(unit)

        for item in unit.root.types:
            self.of_kind(item.kind).append(item)

            # Extensions add to the length of the type they extend
            length = self.type_lengths.get(item.name, 0) + item.stripped_line_count
            self.type_lengths[item.name] = length
            if length > self.longest_type_length:
                self.longest_type = item
                self.longest_type_length = length

        self.imports.update(unit.imports)

        self.total_code += unit.body
        self.total_stripped_code += unit.stripped_body

        file_length = unit.stripped_line_count
        if file_length > self.longest_file_length:
            self.longest_file = unit
            self.longest_file_length = file_length


_LIST_BY_KIND = {
    ObjectKind.CLASS: "classes",
    ObjectKind.STRUCT: "structs",
    ObjectKind.ENUM: "enums",
    ObjectKind.PROTOCOL: "protocols",
    ObjectKind.EXTENSION: "extensions",
}


def collate(units: Iterable[FileUnit]) -> Results:
    """Aggregate parsed files into project-wide Results."""
    results = Results()
    for unit in units:
        results.add_file(unit)
    logger.debug(
        f"Collated {len(results.files)} file(s): "
        f"{len(results.classes)} classes, {len(results.structs)} structs, "
        f"{len(results.enums)} enums, {len(results.protocols)} protocols, "
        f"{len(results.extensions)} extensions"
    )
    return results
