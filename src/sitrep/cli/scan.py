"""Scan command: report metrics for a Swift project."""

from pathlib import Path
from typing import List, Optional

import typer

from ..exceptions import SitrepError
from ..formatters import get_formatter
from ..logging_config import setup_logging
from ..scan import Scan
from . import app
from ._common import console, err_console, resolve_config


@app.command()
def scan(
    path: Path = typer.Argument(
        Path("."),
        help="Path to the project directory",
        file_okay=False,
        dir_okay=True,
    ),
    fmt: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: text, json or rich (default from config: text)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (.sitrep.yml or TOML)",
        file_okay=True,
        dir_okay=False,
    ),
    exclude: Optional[List[str]] = typer.Option(
        None,
        "--exclude",
        "-x",
        help="Directory to skip, relative to PATH (repeatable)",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Parallel parser threads",
        min=1,
        max=32,
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Treat files with syntax errors as failures",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report to a file instead of stdout",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
):
    """
    Scan a Swift project and print its sitrep.

    [bold cyan]Examples:[/bold cyan]

      sitrep scan MyApp

      sitrep scan . --format json -o sitrep.json

      sitrep scan . -x Pods -x Carthage
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(
            path, config=config, exclude=exclude, workers=workers, strict=strict, fmt=fmt
        )
        outcome = Scan(path, settings).run()
        formatter = get_formatter(settings.report_format)

        if output is not None:
            output.write_text(formatter.format(outcome.report) + "\n", encoding="utf-8")
            if not quiet:
                err_console.print(f"Report written to [green]{output}[/green]")
        elif settings.report_format == "rich":
            formatter.render(outcome.report)
        else:
            # Plain print keeps the output byte-exact (no rich wrapping or markup)
            typer.echo(formatter.format(outcome.report))

        if outcome.failures and not quiet:
            err_console.print(f"[yellow]{len(outcome.failures)} file(s) failed:[/yellow]")
            for failure in outcome.failures:
                err_console.print(f"  {failure}", markup=False)

    except SitrepError as e:
        err_console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(1)
    except OSError as e:
        err_console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        err_console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)
