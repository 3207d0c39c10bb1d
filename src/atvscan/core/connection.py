"""Entry points for control sessions.

Remote control, metadata, pairing and streaming are not implemented; these
functions only check that a discovered device is usable before refusing.
"""

from __future__ import annotations

from typing import NoReturn

from atvscan.const import Protocol
from atvscan.errors import DeviceIdMissingError, NoServiceError, NotSupportedError
from atvscan.models import DeviceRecord, ServiceRecord


def _select_service(device: DeviceRecord, protocol: Protocol | None) -> ServiceRecord:
    if protocol is None:
        if not device.services:
            raise NoServiceError(f"'{device.name}' has no services to connect to")
        return device.services[0]
    service = device.get_service(protocol)
    if service is None:
        raise NoServiceError(f"'{device.name}' has no {protocol} service")
    return service


def connect(device: DeviceRecord, protocol: Protocol | None = None) -> NoReturn:
    service = _select_service(device, protocol)
    if not device.identifier:
        raise DeviceIdMissingError(f"'{device.name}' has no identifier")
    raise NotSupportedError(f"Connecting over {service.protocol} is not supported")


def pair(device: DeviceRecord, protocol: Protocol) -> NoReturn:
    service = _select_service(device, protocol)
    raise NotSupportedError(f"Pairing over {service.protocol} is not supported")
