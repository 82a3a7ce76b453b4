"""CLI entry point — registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="complexity-gate",
    help="Complexity Gate - threshold and ratchet checks for code complexity",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"complexity-gate {__version__}")
        raise typer.Exit()


@app.callback()
def _root(
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True,
        help="Show version and exit",
    ),
):
    """Gate functions and files on complexity thresholds and a baseline ratchet."""


def main() -> None:
    app()


# Import subcommands to register them
from .check import check as _check  # noqa: F401, E402
from .baseline import baseline as _baseline  # noqa: F401, E402
from .thresholds import thresholds as _thresholds  # noqa: F401, E402
