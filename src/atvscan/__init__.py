"""atvscan - discover Apple TV, HomePod and AirPlay devices on the local network."""

from __future__ import annotations

from importlib.metadata import version

from .const import DeviceModel, OperatingSystem, PairingRequirement, Protocol
from .core import connect, pair, scan
from .errors import (
    AtvScanError,
    DeviceIdMissingError,
    NoServiceError,
    NotSupportedError,
    ScanError,
    TransportError,
)
from .models import (
    DeviceInfo,
    DeviceRecord,
    RawAnnouncement,
    ScanOptions,
    ServiceRecord,
)

__all__ = [
    "AtvScanError",
    "DeviceIdMissingError",
    "DeviceInfo",
    "DeviceModel",
    "DeviceRecord",
    "NoServiceError",
    "NotSupportedError",
    "OperatingSystem",
    "PairingRequirement",
    "Protocol",
    "RawAnnouncement",
    "ScanError",
    "ScanOptions",
    "ServiceRecord",
    "TransportError",
    "__version__",
    "connect",
    "pair",
    "scan",
]

__version__ = version("atvscan")
