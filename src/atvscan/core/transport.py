"""mDNS transport that turns zeroconf browse results into RawAnnouncements."""

from __future__ import annotations

import asyncio
import ipaddress
import logging
import typing
from collections.abc import AsyncGenerator, Callable, Sequence

from zeroconf import Error as ZeroconfError
from zeroconf import ServiceStateChange, Zeroconf
from zeroconf.asyncio import AsyncServiceBrowser, AsyncServiceInfo, AsyncZeroconf

from atvscan.errors import ScanError, TransportError
from atvscan.models import RawAnnouncement

logger = logging.getLogger(__name__)

DOMAIN_SUFFIX = ".local."
DEFAULT_INFO_TIMEOUT = 3.0


class DiscoveryTransport(typing.Protocol):
    """Source of announcements for one service type.

    Implementations stop yielding once ``timeout`` seconds have passed and
    raise TransportError when the query cannot be issued.
    """

    def query(
        self, service_type: str, hosts: Sequence[str], timeout: float
    ) -> AsyncGenerator[RawAnnouncement, None]: ...


def _txt_entries(properties: dict[bytes, bytes | None]) -> tuple[str, ...]:
    entries: list[str] = []
    for key, value in properties.items():
        key_text = key.decode("utf-8", errors="replace")
        if value is None:
            entries.append(key_text)
        else:
            entries.append(f"{key_text}={value.decode('utf-8', errors='replace')}")
    return tuple(entries)


def normalize_host(host: str) -> str:
    try:
        return str(ipaddress.ip_address(host))
    except ValueError as exc:
        raise TransportError(f"Not an IP address: {host}") from exc


def _normalized_addresses(addresses: Sequence[str]) -> set[str]:
    normalized: set[str] = set()
    for address in addresses:
        try:
            normalized.add(str(ipaddress.ip_address(address.split("%", 1)[0])))
        except ValueError:
            continue
    return normalized


def announcement_from_service_info(
    info: AsyncServiceInfo, service_type: str, service_name: str
) -> RawAnnouncement:
    return RawAnnouncement(
        name=service_name,
        service_type=service_type,
        port=info.port or 0,
        addresses=tuple(info.parsed_addresses()),
        attributes=_txt_entries(info.properties),
    )


class ServiceResolver:
    """Resolves browsed services on the event loop.

    Every lookup is a task so that ``cancel`` can drop the ones still
    waiting for an answer.
    """

    def __init__(
        self,
        queue: asyncio.Queue[RawAnnouncement],
        info_timeout: float,
        hosts: Sequence[str] = (),
    ) -> None:
        self._queue = queue
        self._info_timeout_ms = max(int(info_timeout * 1000), 1)
        self._hosts = set(hosts)
        self._tasks: set[asyncio.Task[None]] = set()

    def handler(self, addr: str | None = None) -> Callable[..., None]:
        def on_state_change(
            zeroconf: Zeroconf,
            service_type: str,
            name: str,
            state_change: ServiceStateChange,
        ) -> None:
            if state_change is ServiceStateChange.Removed:
                logger.debug("Service %s went away", name)
                return
            task = asyncio.get_running_loop().create_task(
                self._resolve(zeroconf, service_type, name, addr)
            )
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

        return on_state_change

    async def _resolve(
        self, zeroconf: Zeroconf, service_type: str, name: str, addr: str | None
    ) -> None:
        info = AsyncServiceInfo(service_type, name)
        if addr is None:
            found = await info.async_request(zeroconf, self._info_timeout_ms)
        else:
            found = await info.async_request(
                zeroconf, self._info_timeout_ms, addr=addr
            )
        if not found:
            logger.debug("Could not resolve %s", name)
            return
        announcement = announcement_from_service_info(info, service_type, name)
        if self._hosts and self._hosts.isdisjoint(
            _normalized_addresses(announcement.addresses)
        ):
            logger.debug("Skipping %s from untargeted host", name)
            return
        self._queue.put_nowait(announcement)

    async def cancel(self) -> None:
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)


class ZeroconfTransport:
    """Browses service types with one shared AsyncZeroconf instance.

    Use as an async context manager around the scan. With explicit hosts,
    each host is browsed by unicast and no multicast browse is started.
    """

    def __init__(self, info_timeout: float = DEFAULT_INFO_TIMEOUT) -> None:
        self._info_timeout = info_timeout
        self._aiozc: AsyncZeroconf | None = None

    async def __aenter__(self) -> ZeroconfTransport:
        try:
            self._aiozc = AsyncZeroconf()
            await self._aiozc.zeroconf.async_wait_for_start()
        except (OSError, ZeroconfError) as exc:
            raise ScanError("Could not start mDNS discovery") from exc
        return self

    async def __aexit__(self, *_exc_info: object) -> None:
        if self._aiozc is not None:
            await self._aiozc.async_close()
            self._aiozc = None

    async def query(
        self, service_type: str, hosts: Sequence[str], timeout: float
    ) -> AsyncGenerator[RawAnnouncement, None]:
        if self._aiozc is None:
            raise RuntimeError("ZeroconfTransport used outside 'async with'")

        targets = [normalize_host(host) for host in hosts]
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[RawAnnouncement] = asyncio.Queue()
        resolver = ServiceResolver(queue, self._info_timeout, targets)
        type_ = f"{service_type}{DOMAIN_SUFFIX}"

        browsers: list[AsyncServiceBrowser] = []
        try:
            try:
                if targets:
                    for host in targets:
                        browsers.append(
                            AsyncServiceBrowser(
                                self._aiozc.zeroconf,
                                type_,
                                handlers=[resolver.handler(host)],
                                addr=host,
                            )
                        )
                else:
                    browsers.append(
                        AsyncServiceBrowser(
                            self._aiozc.zeroconf, type_, handlers=[resolver.handler()]
                        )
                    )
            except (RuntimeError, ZeroconfError) as exc:
                raise TransportError(
                    f"Could not browse {service_type}: {exc}"
                ) from exc

            deadline = loop.time() + timeout
            while True:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    break
                try:
                    announcement = await asyncio.wait_for(queue.get(), remaining)
                except (asyncio.TimeoutError, TimeoutError):
                    break
                yield announcement
        finally:
            for browser in browsers:
                await browser.async_cancel()
            await resolver.cancel()
