"""Protocols, enums and the per-protocol discovery table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Protocol(StrEnum):
    DMAP = "DMAP"
    MRP = "MRP"
    AIRPLAY = "AirPlay"
    COMPANION = "Companion"
    RAOP = "RAOP"


class PairingRequirement(StrEnum):
    UNSUPPORTED = "Unsupported"
    DISABLED = "Disabled"
    NOT_NEEDED = "NotNeeded"
    OPTIONAL = "Optional"
    MANDATORY = "Mandatory"


class OperatingSystem(StrEnum):
    UNKNOWN = "Unknown"
    LEGACY = "Legacy"
    TVOS = "tvOS"
    AIRPORTOS = "AirPortOS"
    MACOS = "macOS"


class DeviceModel(StrEnum):
    UNKNOWN = "Unknown"
    GEN1 = "Apple TV 1"
    GEN2 = "Apple TV 2"
    GEN3 = "Apple TV 3"
    GEN4 = "Apple TV 4"
    GEN4K = "Apple TV 4K"
    APPLETV_4K_GEN2 = "Apple TV 4K (gen 2)"
    APPLETV_4K_GEN3 = "Apple TV 4K (gen 3)"
    HOMEPOD = "HomePod"
    HOMEPOD_MINI = "HomePod Mini"
    HOMEPOD_GEN2 = "HomePod (gen 2)"
    AIRPORT_EXPRESS = "AirPort Express"
    AIRPORT_EXPRESS_GEN2 = "AirPort Express (gen 2)"
    MUSIC = "Music"


@dataclass(frozen=True)
class ProtocolSpec:
    """Discovery facts for one protocol.

    ``pairing_flag`` names a TXT attribute whose presence downgrades the
    pairing requirement to optional.
    """

    protocol: Protocol
    service_type: str
    identifier_key: str
    pairing: PairingRequirement = PairingRequirement.NOT_NEEDED
    pairing_flag: str | None = None


# Generic spellings of the device id attribute, in lookup order.
DEVICE_ID_KEYS = ("deviceid", "DeviceID")

# Order matters: service types are classified by the first matching row.
PROTOCOL_SPECS: tuple[ProtocolSpec, ...] = (
    ProtocolSpec(
        Protocol.MRP,
        "_mediaremotetv._tcp",
        "UniqueIdentifier",
        pairing=PairingRequirement.MANDATORY,
    ),
    ProtocolSpec(Protocol.DMAP, "_dacp._tcp", "HSGID"),
    ProtocolSpec(
        Protocol.AIRPLAY,
        "_airplay._tcp",
        "deviceid",
        pairing_flag="sf",
    ),
    ProtocolSpec(Protocol.RAOP, "_raop._tcp", "deviceid"),
    ProtocolSpec(
        Protocol.COMPANION,
        "_companion-link._tcp",
        "rpHA",
        pairing=PairingRequirement.MANDATORY,
    ),
)

PROTOCOLS: dict[Protocol, ProtocolSpec] = {
    spec.protocol: spec for spec in PROTOCOL_SPECS
}

DEFAULT_TIMEOUT = 5.0
