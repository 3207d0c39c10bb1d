from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console
from rich.table import Table

from atvscan.const import Protocol
from atvscan.core import scan as run_scan
from atvscan.errors import ScanError
from atvscan.models import ScanOptions
from atvscan.utils.redaction import Redactor

from .common import load_settings_or_exit

logger = logging.getLogger(__name__)


def register(app: typer.Typer) -> None:
    @app.command()
    def scan(
        timeout: float | None = typer.Option(
            None, "--timeout", "-t", help="Seconds to wait for answers"
        ),
        identifier: str | None = typer.Option(
            None, "--id", help="Only show the device with this identifier"
        ),
        protocol: Protocol | None = typer.Option(
            None, "--protocol", "-p", help="Only query this protocol"
        ),
        hosts: list[str] | None = typer.Option(
            None,
            "--host",
            "-s",
            help="Query this IP address directly (repeatable)",
        ),
        redact: bool = typer.Option(
            False,
            "--redact",
            help="Redact sensitive values in output",
        ),
    ) -> None:
        """Scan the local network for Apple devices."""
        console = Console()
        settings = load_settings_or_exit()

        options = ScanOptions(
            timeout=timeout or settings.scanning.timeout,
            identifier=identifier,
            protocol=protocol,
            hosts=list(hosts or settings.scanning.hosts),
        )
        console.print("Scanning for devices...")
        logger.info(
            "Scan settings: timeout=%.2fs, info_timeout=%.2fs",
            options.timeout,
            settings.scanning.info_timeout,
        )
        try:
            devices = asyncio.run(
                run_scan(options, info_timeout=settings.scanning.info_timeout)
            )
        except ScanError as exc:
            typer.echo(f"Scan failed: {exc}", err=True)
            raise typer.Exit(1) from exc

        if not devices:
            console.print("No devices found.")
            return

        redactor = Redactor(enabled=redact)
        table = Table()
        table.add_column("Name", style="green")
        table.add_column("Address", style="cyan")
        table.add_column("Identifier", style="yellow")
        table.add_column("Model")
        table.add_column("OS")
        table.add_column("MAC Address")
        table.add_column("Services")

        for device in devices:
            info = device.device_info
            os_col = info.version and f"{info.operating_system} {info.version}"
            services = ", ".join(
                f"{service.protocol}:{service.port}" for service in device.services
            )
            table.add_row(
                device.name,
                redactor.redact_ip(device.address),
                redactor.redact_identifier(device.identifier),
                str(info.model),
                os_col,
                redactor.redact_mac(info.mac),
                services,
            )

        console.print(table)
        console.print(f"\n[green]Found {len(devices)} device(s)[/green]")
