"""Device facts derived from TXT attributes."""

from __future__ import annotations

import re
from collections.abc import Mapping

from atvscan.const import DEVICE_ID_KEYS, DeviceModel, OperatingSystem, Protocol
from atvscan.models import DeviceInfo

MODEL_KEY = "model"
VERSION_KEY = "osvers"
BUILD_KEY = "srcvers"

_MAC_PATTERN = re.compile(r"^[0-9a-fA-F]{2}(:[0-9a-fA-F]{2}){5}$")

# Hardware revisions, checked before the generic family names below.
_MODEL_TOKENS: tuple[tuple[str, DeviceModel], ...] = (
    ("appletv1,1", DeviceModel.GEN1),
    ("appletv2,1", DeviceModel.GEN2),
    ("appletv3,1", DeviceModel.GEN3),
    ("appletv3,2", DeviceModel.GEN3),
    ("appletv5,3", DeviceModel.GEN4),
    ("appletv6,2", DeviceModel.GEN4K),
    ("appletv11,1", DeviceModel.APPLETV_4K_GEN2),
    ("appletv14,1", DeviceModel.APPLETV_4K_GEN3),
    ("audioaccessory5,1", DeviceModel.HOMEPOD_MINI),
    ("audioaccessory6,1", DeviceModel.HOMEPOD_GEN2),
    ("audioaccessory1,1", DeviceModel.HOMEPOD),
    ("audioaccessory1,2", DeviceModel.HOMEPOD),
    ("airport10,115", DeviceModel.AIRPORT_EXPRESS_GEN2),
)


def parse_model(raw_model: str) -> DeviceModel:
    model = raw_model.lower()
    for token, device_model in _MODEL_TOKENS:
        if token in model:
            return device_model
    if "homepod" in model:
        if "mini" in model:
            return DeviceModel.HOMEPOD_MINI
        return DeviceModel.HOMEPOD
    if "airport" in model:
        return DeviceModel.AIRPORT_EXPRESS
    return DeviceModel.UNKNOWN


def _mac_address(attributes: Mapping[str, str]) -> str:
    for key in DEVICE_ID_KEYS:
        value = attributes.get(key, "")
        if _MAC_PATTERN.match(value):
            return value
    return ""


def extract_metadata(attributes: Mapping[str, str], protocol: Protocol) -> DeviceInfo:
    """Build a partial DeviceInfo from one service's attributes.

    Fields without a source attribute keep their defaults, so the result can
    be applied on top of earlier data without erasing it.
    """
    patch = DeviceInfo()

    raw_model = attributes.get(MODEL_KEY, "")
    if raw_model:
        patch.raw_model = raw_model
        patch.model = parse_model(raw_model)

    version = attributes.get(VERSION_KEY, "")
    if version:
        patch.version = version
        patch.operating_system = OperatingSystem.TVOS

    build = attributes.get(BUILD_KEY, "")
    if build:
        patch.build_number = build

    patch.mac = _mac_address(attributes)
    return patch
