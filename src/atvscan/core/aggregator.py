from __future__ import annotations

import logging
import threading
from collections.abc import Mapping

from atvscan.const import DEVICE_ID_KEYS, PROTOCOLS, Protocol
from atvscan.models import DeviceRecord, RawAnnouncement, ServiceRecord

from .metadata import extract_metadata
from .pairing import pairing_requirement
from .parser import parse_announcement

logger = logging.getLogger(__name__)

NAME_DELIMITER = "._"


def _device_id(attributes: Mapping[str, str]) -> str:
    for key in DEVICE_ID_KEYS:
        value = attributes.get(key, "")
        if value:
            return value
    return ""


def device_key(announcement: RawAnnouncement, attributes: Mapping[str, str]) -> str:
    """Key that ties announcements for different protocols to one device."""
    return _device_id(attributes) or announcement.address or announcement.name


def extract_identifier(attributes: Mapping[str, str], protocol: Protocol) -> str:
    identifier = attributes.get(PROTOCOLS[protocol].identifier_key, "")
    return identifier or _device_id(attributes)


def display_name(service_name: str) -> str:
    # "Living Room._airplay._tcp.local." -> "Living Room"
    return service_name.split(NAME_DELIMITER, 1)[0]


class DeviceAggregator:
    """Folds announcements into one DeviceRecord per physical device."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._devices: dict[str, DeviceRecord] = {}

    def ingest(self, announcement: RawAnnouncement) -> DeviceRecord | None:
        parsed = parse_announcement(announcement)
        if parsed is None:
            return None
        protocol, attributes = parsed.protocol, parsed.attributes
        key = device_key(announcement, attributes)

        with self._lock:
            device = self._devices.get(key)
            if device is None:
                device = DeviceRecord(
                    address=announcement.address,
                    name=display_name(announcement.name),
                )
                self._devices[key] = device
                logger.debug("New device '%s' (key %s)", device.name, key)

            if not device.name:
                device.name = display_name(announcement.name)

            device.device_info.apply(extract_metadata(attributes, protocol))

            service = ServiceRecord(
                protocol=protocol,
                port=announcement.port,
                identifier=extract_identifier(attributes, protocol),
                properties=dict(attributes),
                pairing=pairing_requirement(protocol, attributes),
            )
            device.add_service(service)

            if not device.identifier and service.identifier:
                device.identifier = service.identifier

            device.properties[PROTOCOLS[protocol].service_type] = dict(attributes)
            logger.debug("Merged %s service into '%s'", protocol, device.name)
            return device

    def devices(self) -> dict[str, DeviceRecord]:
        with self._lock:
            return dict(self._devices)

    def __len__(self) -> int:
        with self._lock:
            return len(self._devices)
