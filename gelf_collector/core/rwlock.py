"""Reader-writer lock with a turnstile so neither side starves."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ReadWriteLock:
    """Many concurrent readers or one writer.

    Every acquirer passes through ``_turnstile``. A writer keeps holding it
    while it waits for the active readers to drain, so readers that arrive
    after a writer queue behind it instead of overtaking it forever. Readers
    only hold the turnstile for an instant, so a stream of writers cannot
    lock readers out either.
    """

    def __init__(self) -> None:
        self._turnstile = threading.Lock()
        self._readers_done = threading.Condition(threading.Lock())
        self._readers = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._turnstile:
            with self._readers_done:
                self._readers += 1
        try:
            yield
        finally:
            with self._readers_done:
                self._readers -= 1
                if self._readers == 0:
                    self._readers_done.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._turnstile:
            with self._readers_done:
                while self._readers:
                    self._readers_done.wait()
            yield

    @property
    def active_readers(self) -> int:
        with self._readers_done:
            return self._readers


__all__ = ["ReadWriteLock"]
