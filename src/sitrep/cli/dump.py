"""Dump command: print the declaration tree of one file."""

from pathlib import Path

import typer

from ..exceptions import SitrepError
from ..logging_config import setup_logging
from ..scanning.syntax_extractor import SyntaxExtractor
from . import app
from ._common import err_console


@app.command()
def dump(
    file: Path = typer.Argument(
        ...,
        help="Swift file to parse",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Print the parsed declaration tree of FILE as JSON."""
    setup_logging(verbose=verbose)

    try:
        unit = SyntaxExtractor().parse_file(file)
    except SitrepError as e:
        err_console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(1)

    typer.echo(unit.debug_json())
