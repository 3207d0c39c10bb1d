"""Data models for atvscan."""

from atvscan.models.announcement import RawAnnouncement
from atvscan.models.device import DeviceInfo, DeviceRecord, ServiceRecord
from atvscan.models.options import ScanOptions

__all__ = [
    "DeviceInfo",
    "DeviceRecord",
    "RawAnnouncement",
    "ScanOptions",
    "ServiceRecord",
]
