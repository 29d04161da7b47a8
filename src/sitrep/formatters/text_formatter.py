"""Plain text formatter for Sitrep.

The layout is fixed so it can be diffed between runs:

    SITREP
    ------

    Overview
       Files scanned: 10
       ...
"""

from typing import List

from ..report import Report
from .base import BaseFormatter

INDENT = "   "


class TextFormatter(BaseFormatter):
    """Render the report as the classic plain text summary."""

    name = "text"

    def format(self, report: Report) -> str:
        stats = report.scan_stats
        objects = report.objects

        output: List[str] = ["SITREP", "------", ""]

        output.append("Overview")
        output.append(f"{INDENT}Files scanned: {stats.scanned_files}")
        output.append(f"{INDENT}Structs: {objects.structs}")
        output.append(f"{INDENT}Classes: {objects.classes}")
        output.append(f"{INDENT}Enums: {objects.enums}")
        output.append(f"{INDENT}Protocols: {objects.protocols}")
        output.append(f"{INDENT}Extensions: {objects.extensions}")
        output.append("")

        output.append("Sizes")
        output.append(f"{INDENT}Total lines of code: {stats.total_lines_of_code}")
        output.append(f"{INDENT}Source lines of code: {stats.total_stripped_lines_of_code}")
        if stats.longest_file is not None:
            output.append(
                f"{INDENT}Longest file: {stats.longest_file.name} "
                f"({stats.longest_file.value} source lines)"
            )
        if stats.longest_type is not None:
            output.append(
                f"{INDENT}Longest type: {stats.longest_type.name} "
                f"({stats.longest_type.value} source lines)"
            )
        output.append("")

        output.append("Structure")
        imports = ", ".join(f"{stat.name} ({stat.value})" for stat in report.imports)
        output.append(f"{INDENT}Imports: {imports}")
        for stat in report.inheritances:
            output.append(f"{INDENT}{stat.name}: {stat.value}")

        return "\n".join(output)
