"""CLI entry point: registers all subcommands."""

import typer

from .. import __version__

app = typer.Typer(
    name="sitrep",
    help=f"Sitrep {__version__} - source metrics for Swift projects",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


# Import subcommands to register them
from .scan import scan as _scan  # noqa: F401, E402
from .dump import dump as _dump  # noqa: F401, E402


def main() -> None:
    app()
