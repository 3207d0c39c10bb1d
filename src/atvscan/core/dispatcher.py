from __future__ import annotations

import asyncio
import logging
from contextlib import aclosing

from atvscan.const import PROTOCOL_SPECS, ProtocolSpec
from atvscan.errors import TransportError
from atvscan.models import RawAnnouncement, ScanOptions

from .aggregator import DeviceAggregator
from .transport import DiscoveryTransport

logger = logging.getLogger(__name__)


class QueryDispatcher:
    """Runs one query per protocol and feeds the results to an aggregator.

    Workers push announcements onto a single queue. One consumer drains it,
    so announcements from the same query are ingested in arrival order.
    """

    def __init__(
        self, transport: DiscoveryTransport, aggregator: DeviceAggregator
    ) -> None:
        self._transport = transport
        self._aggregator = aggregator

    def eligible(self, options: ScanOptions) -> list[ProtocolSpec]:
        return [
            spec
            for spec in PROTOCOL_SPECS
            if options.protocol is None or spec.protocol == options.protocol
        ]

    async def run(self, options: ScanOptions) -> None:
        queue: asyncio.Queue[RawAnnouncement | None] = asyncio.Queue()
        consumer = asyncio.create_task(self._consume(queue))
        workers = [
            asyncio.create_task(self._query(spec, options, queue))
            for spec in self.eligible(options)
        ]

        try:
            if workers:
                _done, pending = await asyncio.wait(workers, timeout=options.timeout)
                if pending:
                    logger.debug(
                        "Deadline reached, abandoning %d pending queries", len(pending)
                    )
        finally:
            for task in workers:
                task.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
            # Everything queued before the deadline is still ingested.
            queue.put_nowait(None)
            await consumer

    async def _query(
        self,
        spec: ProtocolSpec,
        options: ScanOptions,
        queue: asyncio.Queue[RawAnnouncement | None],
    ) -> None:
        logger.debug("Querying %s", spec.service_type)
        announcements = self._transport.query(
            spec.service_type, options.hosts, options.timeout
        )
        count = 0
        try:
            async with aclosing(announcements):
                async for announcement in announcements:
                    queue.put_nowait(announcement)
                    count += 1
        except (TransportError, OSError) as exc:
            logger.warning("Failed to query %s: %s", spec.service_type, exc)
            return
        except Exception as exc:
            logger.warning(
                "Query for %s failed unexpectedly: %r",
                spec.service_type,
                exc,
                exc_info=True,
            )
            return
        logger.debug("Query for %s returned %d answers", spec.service_type, count)

    async def _consume(self, queue: asyncio.Queue[RawAnnouncement | None]) -> None:
        while True:
            announcement = await queue.get()
            if announcement is None:
                return
            self._aggregator.ingest(announcement)
