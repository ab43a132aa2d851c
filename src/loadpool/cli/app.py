"""Main Typer application, the entry point for the ``loadpool`` CLI."""

from __future__ import annotations

import typer

from loadpool import __version__
from loadpool.cli.run import run_cmd

app = typer.Typer(
    name="loadpool",
    help="Keep a fixed pool of workers hammering every URL in a file.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("run", help="Generate load against every URL in the URL file.")(run_cmd)


def _version_callback(value: bool) -> None:
    """Print version and exit.

    Args:
        value: True if --version was passed.
    """
    if value:
        typer.echo(f"loadpool {__version__}")
        raise typer.Exit


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """loadpool: sustained concurrent HTTP load against a list of URLs."""
