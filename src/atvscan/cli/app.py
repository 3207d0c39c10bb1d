from __future__ import annotations

from typing import Annotated

import typer

from atvscan.utils.logging import setup_logging

from . import config as config_cmd
from .scan import register as register_scan

app = typer.Typer(
    help="atvscan - find Apple TV, HomePod and AirPlay devices", no_args_is_help=True
)

app.add_typer(config_cmd.app, name="config")

register_scan(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
) -> None:
    """atvscan CLI."""
    setup_logging()

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"atvscan version {get_version('atvscan')}")
        raise typer.Exit()
