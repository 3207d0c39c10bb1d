"""Tests for the command line interface."""

from __future__ import annotations

import json

from typer.testing import CliRunner

import atvscan.cli.scan as scan_cmd
from atvscan import __version__
from atvscan.cli import app
from atvscan.config import default_config_path, load_settings
from atvscan.const import Protocol
from atvscan.errors import ScanError
from atvscan.models import DeviceRecord, ScanOptions, ServiceRecord

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"atvscan version {__version__}" in result.stdout


def test_scan_prints_devices(monkeypatch):
    seen: list[ScanOptions] = []

    async def _fake_scan(options: ScanOptions, info_timeout: float):
        seen.append(options)
        return [
            DeviceRecord(
                address="192.168.1.10",
                name="Kitchen",
                identifier="id-1",
                services=[
                    ServiceRecord(
                        protocol=Protocol.AIRPLAY, port=7000, identifier="id-1"
                    )
                ],
            )
        ]

    monkeypatch.setattr(scan_cmd, "run_scan", _fake_scan)

    result = runner.invoke(
        app,
        ["scan", "-t", "2", "--protocol", "AirPlay", "--host", "192.168.1.10"],
        env={"COLUMNS": "200"},
    )
    assert result.exit_code == 0
    assert "Kitchen" in result.stdout
    assert "Found 1 device(s)" in result.stdout
    assert seen[0].timeout == 2
    assert seen[0].protocol == Protocol.AIRPLAY
    assert seen[0].hosts == ["192.168.1.10"]


def test_scan_without_devices(monkeypatch):
    async def _fake_scan(options: ScanOptions, info_timeout: float):
        return []

    monkeypatch.setattr(scan_cmd, "run_scan", _fake_scan)

    result = runner.invoke(app, ["scan"])
    assert result.exit_code == 0
    assert "No devices found." in result.stdout


def test_scan_failure_exits_non_zero(monkeypatch):
    async def _fake_scan(options: ScanOptions, info_timeout: float):
        raise ScanError("Could not start mDNS discovery")

    monkeypatch.setattr(scan_cmd, "run_scan", _fake_scan)

    result = runner.invoke(app, ["scan"])
    assert result.exit_code == 1


def test_config_show_defaults():
    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0
    assert "Config source: defaults" in result.stdout
    assert "[scanning]" in result.stdout


def test_config_path_reports_missing_file():
    result = runner.invoke(app, ["config", "path"])
    assert result.exit_code == 0
    assert str(default_config_path()) in result.stdout
    assert "not created yet" in result.stdout


def test_config_init_seeds_scan_options():
    result = runner.invoke(
        app,
        ["config", "init", "--timeout", "2.5", "--host", "FE80::1", "-s", "10.0.0.2"],
    )
    assert result.exit_code == 0

    settings = load_settings(default_config_path())
    assert settings.scanning.timeout == 2.5
    assert settings.scanning.hosts == ("fe80::1", "10.0.0.2")

    again = runner.invoke(app, ["config", "init"])
    assert "already exists" in again.stdout


def test_config_init_rejects_bad_host():
    result = runner.invoke(app, ["config", "init", "--host", "living-room.local"])
    assert result.exit_code == 1
    assert not default_config_path().exists()


def test_config_show_json():
    result = runner.invoke(app, ["config", "show", "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["scanning"]["timeout"] == 5.0
