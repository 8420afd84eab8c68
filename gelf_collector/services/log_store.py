"""In-memory bounded buffer for the most recent GELF records."""

from __future__ import annotations

import copy
import logging
from collections import deque
from dataclasses import asdict, dataclass
from typing import Any, Deque

from gelf_collector.core.rwlock import ReadWriteLock
from gelf_collector.ingest.parser import Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreStats:
    total_messages: int
    max_capacity: int
    capacity_used_percent: float

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


class BoundedLogStore:
    """Fixed-capacity, insertion-ordered record buffer.

    The oldest record is evicted when a new one arrives at capacity. Reads
    hand out deep copies, so a later insert or eviction never changes data
    a caller already holds.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be a positive integer, got {capacity}")
        self._capacity = capacity
        self._records: Deque[Record] = deque()
        self._lock = ReadWriteLock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._records)

    def insert(self, record: Record) -> None:
        """Append ``record``, evicting the oldest entry when full."""
        with self._lock.write_locked():
            if len(self._records) >= self._capacity:
                self._records.popleft()
            self._records.append(record)

    def snapshot(self, limit: int | None = None) -> list[Record]:
        """Return up to ``limit`` most recent records, newest first."""
        if limit is not None and limit <= 0:
            return []
        with self._lock.read_locked():
            count = len(self._records)
            if limit is not None and limit < count:
                count = limit
            # Reverse iteration stops after ``count`` items without copying the rest.
            iterator = reversed(self._records)
            refs = [next(iterator) for _ in range(count)]
        # Stored records are never mutated, so copying outside the lock is safe.
        return [copy.deepcopy(record) for record in refs]

    def stats(self) -> StoreStats:
        with self._lock.read_locked():
            total = len(self._records)
        return StoreStats(
            total_messages=total,
            max_capacity=self._capacity,
            capacity_used_percent=100.0 * total / self._capacity,
        )

    def clear(self) -> None:
        """Drop every record (mainly for tests)."""
        with self._lock.write_locked():
            self._records.clear()
        logger.debug("Log store cleared")


__all__ = ["BoundedLogStore", "StoreStats"]
