from __future__ import annotations

from .aggregator import DeviceAggregator, device_key, extract_identifier
from .connection import connect, pair
from .dispatcher import QueryDispatcher
from .filter import filter_devices
from .metadata import extract_metadata, parse_model
from .pairing import pairing_requirement
from .parser import parse_announcement, parse_attributes, protocol_for_service_type
from .scanner import scan
from .transport import DiscoveryTransport, ZeroconfTransport

__all__ = [
    "DeviceAggregator",
    "DiscoveryTransport",
    "QueryDispatcher",
    "ZeroconfTransport",
    "connect",
    "device_key",
    "extract_identifier",
    "extract_metadata",
    "filter_devices",
    "pair",
    "pairing_requirement",
    "parse_announcement",
    "parse_attributes",
    "parse_model",
    "protocol_for_service_type",
    "scan",
]
