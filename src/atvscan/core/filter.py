from __future__ import annotations

from collections.abc import Mapping

from atvscan.models import DeviceRecord


def filter_devices(
    devices: Mapping[str, DeviceRecord], identifier: str | None = None
) -> list[DeviceRecord]:
    """Keep ready devices, optionally only the one carrying ``identifier``.

    Results are ordered by device key.
    """
    result: list[DeviceRecord] = []
    for key in sorted(devices):
        device = devices[key]
        if not device.ready:
            continue
        if identifier and identifier not in device.all_identifiers:
            continue
        result.append(device)
    return result
