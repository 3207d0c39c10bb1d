from __future__ import annotations

import logging

from atvscan.models import DeviceRecord, ScanOptions

from .aggregator import DeviceAggregator
from .dispatcher import QueryDispatcher
from .filter import filter_devices
from .transport import DEFAULT_INFO_TIMEOUT, DiscoveryTransport, ZeroconfTransport

logger = logging.getLogger(__name__)


async def _scan_with(
    transport: DiscoveryTransport, options: ScanOptions
) -> list[DeviceRecord]:
    aggregator = DeviceAggregator()
    await QueryDispatcher(transport, aggregator).run(options)
    devices = filter_devices(aggregator.devices(), options.identifier)
    logger.debug(
        "Scan complete: %d of %d devices ready", len(devices), len(aggregator)
    )
    return devices


async def scan(
    options: ScanOptions | None = None,
    transport: DiscoveryTransport | None = None,
    info_timeout: float = DEFAULT_INFO_TIMEOUT,
) -> list[DeviceRecord]:
    """Discover devices on the local network.

    Without a ``transport`` a ZeroconfTransport is opened for the duration of
    the scan. Raises ScanError when discovery cannot start at all; failures
    of single queries are only logged.
    """
    options = options or ScanOptions()
    logger.debug(
        "Scanning (timeout=%.2fs, protocol=%s, hosts=%s)",
        options.timeout,
        options.protocol or "all",
        ",".join(options.hosts) or "multicast",
    )
    if transport is not None:
        return await _scan_with(transport, options)
    async with ZeroconfTransport(info_timeout=info_timeout) as zeroconf_transport:
        return await _scan_with(zeroconf_transport, options)
