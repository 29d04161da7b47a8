"""Rich terminal formatter for Sitrep."""

from io import StringIO

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..report import Report
from .base import BaseFormatter


def _overview_table(report: Report) -> Table:
    table = Table(title="Overview", show_header=False, title_justify="left")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    objects = report.objects
    table.add_row("Files scanned", str(report.scan_stats.scanned_files))
    table.add_row("Structs", str(objects.structs))
    table.add_row("Classes", str(objects.classes))
    table.add_row("Enums", str(objects.enums))
    table.add_row("Protocols", str(objects.protocols))
    table.add_row("Extensions", str(objects.extensions))
    return table


def _sizes_table(report: Report) -> Table:
    stats = report.scan_stats
    table = Table(title="Sizes", show_header=False, title_justify="left")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Total lines of code", str(stats.total_lines_of_code))
    table.add_row("Source lines of code", str(stats.total_stripped_lines_of_code))
    if stats.longest_file is not None:
        table.add_row(
            "Longest file",
            f"{stats.longest_file.name} [dim]({stats.longest_file.value} source lines)[/dim]",
        )
    if stats.longest_type is not None:
        table.add_row(
            "Longest type",
            f"{stats.longest_type.name} [dim]({stats.longest_type.value} source lines)[/dim]",
        )
    return table


def _structure_table(report: Report) -> Table:
    table = Table(title="Structure", title_justify="left")
    table.add_column("Name", style="cyan")
    table.add_column("Count", justify="right")
    for stat in report.imports:
        table.add_row(f"import {stat.name}", str(stat.value))
    for stat in report.inheritances:
        table.add_row(stat.name, str(stat.value), style="bold" if stat.value else "dim")
    return table


class RichFormatter(BaseFormatter):
    """Rich terminal output: a title panel followed by one table per section."""

    name = "rich"

    def render(self, report: Report) -> None:
        self._print(Console(), report)

    def format(self, report: Report) -> str:
        buffer = StringIO()
        self._print(Console(file=buffer, width=100, color_system=None), report)
        return buffer.getvalue()

    def _print(self, console: Console, report: Report) -> None:
        console.print(Panel("[bold]SITREP[/bold]", expand=False))
        console.print(_overview_table(report))
        console.print(_sizes_table(report))
        console.print(_structure_table(report))
