"""Fan-out of freshly stored records to live stream subscribers."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from gelf_collector.ingest.parser import Record

logger = logging.getLogger(__name__)


class LogBroadcaster:
    """Deliver each published record to every connected subscriber.

    Records are serialised once at publish time, so subscribers only ever
    see an immutable JSON string. A subscriber whose queue is full misses
    the message instead of holding up ingestion.
    """

    def __init__(self, queue_size: int = 100) -> None:
        self._queue_size = queue_size
        self._subscribers: set[asyncio.Queue[str]] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @asynccontextmanager
    async def subscribe(self) -> AsyncIterator[asyncio.Queue[str]]:
        queue: asyncio.Queue[str] = asyncio.Queue(maxsize=self._queue_size)
        self._subscribers.add(queue)
        logger.debug("Stream subscriber connected (%s active)", len(self._subscribers))
        try:
            yield queue
        finally:
            self._subscribers.discard(queue)
            logger.debug(
                "Stream subscriber disconnected (%s active)", len(self._subscribers)
            )

    def publish(self, record: Record) -> int:
        """Queue ``record`` for every subscriber; return how many received it."""
        if not self._subscribers:
            return 0
        payload = json.dumps(record, separators=(",", ":"))
        delivered = 0
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(payload)
            except asyncio.QueueFull:
                logger.debug("Stream subscriber lagging; dropping message")
                continue
            delivered += 1
        return delivered


__all__ = ["LogBroadcaster"]
