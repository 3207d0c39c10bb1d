from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from atvscan.const import PROTOCOL_SPECS, Protocol
from atvscan.models import RawAnnouncement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedAnnouncement:
    protocol: Protocol
    attributes: dict[str, str]


def protocol_for_service_type(service_type: str) -> Protocol | None:
    for spec in PROTOCOL_SPECS:
        if spec.service_type in service_type:
            return spec.protocol
    return None


def parse_attributes(entries: Iterable[str]) -> dict[str, str]:
    """Split ``key=value`` TXT entries on the first ``=``.

    Bare flags map to an empty string and later duplicates replace earlier ones.
    """
    attributes: dict[str, str] = {}
    for entry in entries:
        key, _, value = entry.partition("=")
        if not key:
            continue
        attributes[key] = value
    return attributes


def parse_announcement(announcement: RawAnnouncement) -> ParsedAnnouncement | None:
    protocol = protocol_for_service_type(announcement.service_type)
    if protocol is None:
        logger.debug(
            "Ignoring '%s' with unknown service type %s",
            announcement.name,
            announcement.service_type,
        )
        return None
    return ParsedAnnouncement(protocol, parse_attributes(announcement.attributes))
