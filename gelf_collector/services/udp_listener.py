"""UDP ingestion loop for GELF datagrams."""

from __future__ import annotations

import asyncio
import errno
import logging
import socket
import time
from dataclasses import dataclass
from typing import Any

from gelf_collector.ingest.decoder import DecodeError, decode_payload
from gelf_collector.ingest.parser import ParseError, Record, parse_record, safe_preview
from gelf_collector.services.broadcaster import LogBroadcaster
from gelf_collector.services.log_store import BoundedLogStore

logger = logging.getLogger(__name__)

_PREVIEW_CHARS = 200
_HEX_PREVIEW_BYTES = 32


class SocketFatalError(RuntimeError):
    """The UDP socket could not be set up; the collector cannot start."""


@dataclass
class IngestionCounters:
    received: int = 0
    stored: int = 0
    decode_failures: int = 0
    parse_failures: int = 0
    internal_errors: int = 0

    @property
    def dropped(self) -> int:
        return self.decode_failures + self.parse_failures + self.internal_errors


def _format_addr(addr: Any) -> str:
    if isinstance(addr, tuple) and len(addr) >= 2:
        return f"{addr[0]}:{addr[1]}"
    return str(addr)


class DatagramIngestor:
    """Drive one datagram through decode, parse and store.

    Failures are logged and the datagram is dropped; nothing raised here
    ever reaches the socket loop.
    """

    def __init__(
        self,
        store: BoundedLogStore,
        broadcaster: LogBroadcaster | None = None,
    ) -> None:
        self.store = store
        self.broadcaster = broadcaster
        self.counters = IngestionCounters()

    def handle(
        self, data: bytes, addr: Any, received_at: float | None = None
    ) -> Record | None:
        if received_at is None:
            received_at = time.time()
        self.counters.received += 1
        source = _format_addr(addr)
        try:
            return self._process(data, source, received_at)
        except Exception:
            self.counters.internal_errors += 1
            logger.exception("Unexpected error while ingesting datagram from %s", source)
            return None

    def _process(self, data: bytes, source: str, received_at: float) -> Record | None:
        try:
            text = decode_payload(data)
        except DecodeError as exc:
            self.counters.decode_failures += 1
            logger.warning(
                "Dropping datagram from %s: %s (%s, %s bytes, head=%s)",
                source,
                exc.kind,
                exc,
                len(data),
                data[:_HEX_PREVIEW_BYTES].hex(),
            )
            return None

        try:
            record = parse_record(text, received_at)
        except ParseError as exc:
            self.counters.parse_failures += 1
            logger.warning(
                "Dropping datagram from %s: %s (%s) preview=%r",
                source,
                exc.kind,
                exc,
                safe_preview(text, _PREVIEW_CHARS),
            )
            return None

        self.store.insert(record)
        self.counters.stored += 1
        message = record.get("short_message") or "(no message)"
        logger.info(
            "Received GELF message from %s: %s",
            source,
            safe_preview(str(message), _PREVIEW_CHARS),
        )
        if self.broadcaster is not None:
            self.broadcaster.publish(record)
        return record


class GelfDatagramProtocol(asyncio.DatagramProtocol):
    def __init__(self, ingestor: DatagramIngestor) -> None:
        self.ingestor = ingestor

    def datagram_received(self, data: bytes, addr) -> None:  # type: ignore[override]
        received_at = time.time()
        self.ingestor.handle(data, addr, received_at)

    def error_received(self, exc: Exception) -> None:
        logger.error("UDP receive error: %s", exc)


def _describe_bind_error(exc: OSError) -> str:
    if exc.errno == errno.EADDRINUSE:
        return "address already in use"
    if exc.errno in (errno.EACCES, errno.EPERM):
        return "permission denied"
    if exc.errno == errno.EADDRNOTAVAIL:
        return "address not available on this host"
    if isinstance(exc, socket.gaierror):
        return "invalid bind address"
    return exc.strerror or str(exc)


class UdpListener:
    """Own the UDP socket and feed every datagram to a ``DatagramIngestor``."""

    def __init__(
        self,
        ingestor: DatagramIngestor,
        host: str,
        port: int,
        *,
        receive_buffer: int | None = None,
    ) -> None:
        self.ingestor = ingestor
        self.host = host
        self.port = port
        self.receive_buffer = receive_buffer
        self._transport: asyncio.DatagramTransport | None = None

    @property
    def running(self) -> bool:
        return self._transport is not None and not self._transport.is_closing()

    @property
    def address(self) -> tuple[str, int]:
        """Return the bound ``(host, port)``; resolves port 0 to the real port."""
        if self._transport is None:
            return (self.host, self.port)
        sockname = self._transport.get_extra_info("sockname")
        return (sockname[0], sockname[1])

    async def start(self) -> None:
        if self.running:
            return
        loop = asyncio.get_running_loop()
        try:
            transport, _ = await loop.create_datagram_endpoint(
                lambda: GelfDatagramProtocol(self.ingestor),
                local_addr=(self.host, self.port),
            )
        except OSError as exc:
            reason = _describe_bind_error(exc)
            logger.error(
                "Unable to bind UDP socket on %s:%s: %s", self.host, self.port, reason
            )
            raise SocketFatalError(
                f"cannot listen on udp://{self.host}:{self.port}: {reason}"
            ) from exc

        self._transport = transport  # type: ignore[assignment]
        if self.receive_buffer:
            sock = transport.get_extra_info("socket")
            if sock is not None:
                try:
                    sock.setsockopt(
                        socket.SOL_SOCKET, socket.SO_RCVBUF, self.receive_buffer
                    )
                except OSError:
                    logger.warning(
                        "Could not set UDP receive buffer to %s bytes",
                        self.receive_buffer,
                    )
        host, port = self.address
        logger.info("UDP listener started on %s:%s", host, port)

    def stop(self) -> None:
        if self._transport is None:
            return
        self._transport.close()
        self._transport = None
        logger.info("UDP listener stopped")


__all__ = [
    "DatagramIngestor",
    "GelfDatagramProtocol",
    "IngestionCounters",
    "SocketFatalError",
    "UdpListener",
]
