"""Exceptions raised by atvscan."""

from __future__ import annotations


class AtvScanError(Exception):
    """Base class for all atvscan errors."""


class ScanError(AtvScanError):
    """A scan could not run at all."""


class TransportError(AtvScanError):
    """A discovery query for one service type failed."""


class NoServiceError(AtvScanError):
    """No usable service to connect or pair with."""


class DeviceIdMissingError(AtvScanError):
    """The device has no identifier."""


class NotSupportedError(AtvScanError):
    """The requested operation is not implemented."""
