from __future__ import annotations

from typing import Annotated

import typer
from pydantic import ValidationError

from atvscan.config import (
    ScanningConfig,
    Settings,
    render_settings_toml,
    write_settings,
)
from atvscan.core.transport import normalize_host
from atvscan.errors import TransportError

from .common import load_settings_or_exit, resolve_config_path_or_exit

app = typer.Typer(no_args_is_help=True, help="Inspect or create the scan config")


@app.command("path")
def config_path() -> None:
    """Print where the config file is read from."""
    path, exists = resolve_config_path_or_exit(allow_missing=True)
    typer.echo(str(path) if exists else f"{path} (not created yet)")


@app.command("show")
def show_config(
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the settings as JSON")
    ] = False,
) -> None:
    """Print the effective scan settings."""
    settings = load_settings_or_exit()
    if as_json:
        typer.echo(settings.model_dump_json(indent=2))
        return

    path, exists = resolve_config_path_or_exit(allow_missing=True)
    typer.echo(f"Config source: {path if exists else 'defaults'}")
    typer.echo(render_settings_toml(settings))


def _scanning_config(
    timeout: float | None, info_timeout: float | None, hosts: list[str]
) -> ScanningConfig:
    values: dict[str, object] = {}
    if timeout is not None:
        values["timeout"] = timeout
    if info_timeout is not None:
        values["info_timeout"] = info_timeout
    if hosts:
        values["hosts"] = tuple(normalize_host(host) for host in hosts)
    return ScanningConfig.model_validate(values)


@app.command("init")
def init_config(
    timeout: Annotated[
        float | None, typer.Option("--timeout", "-t", help="Scan timeout (seconds)")
    ] = None,
    info_timeout: Annotated[
        float | None,
        typer.Option("--info-timeout", help="Per-service lookup timeout (seconds)"),
    ] = None,
    hosts: Annotated[
        list[str] | None,
        typer.Option("--host", "-s", help="Scan only this IP address (repeatable)"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing config"),
    ] = False,
) -> None:
    """Write a config file, seeded with the given scan options."""
    path, exists = resolve_config_path_or_exit(allow_missing=True)
    if exists and not force:
        typer.echo(f"Config already exists at {path} (use --force to replace it)")
        return

    try:
        scanning = _scanning_config(timeout, info_timeout, hosts or [])
    except (TransportError, ValidationError) as exc:
        typer.echo(f"Invalid scan option: {exc}", err=True)
        raise typer.Exit(1) from exc

    write_settings(Settings(scanning=scanning), path)
    typer.echo(f"Wrote config to {path}")
