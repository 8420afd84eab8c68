"""Datagram payload decoding: compression detection and UTF-8 text."""

from __future__ import annotations

import enum
import gzip
import logging
import zlib

logger = logging.getLogger(__name__)

_GZIP_MAGIC = b"\x1f\x8b"
_ZLIB_CMF = 0x78
_ZLIB_FLG = frozenset({0x9C, 0xDA, 0x01})


class CompressionFormat(str, enum.Enum):
    """Payload encodings recognised by their leading magic bytes."""

    UNCOMPRESSED = "uncompressed"
    GZIP = "gzip"
    ZLIB = "zlib"


class DecodeError(Exception):
    """Raised when a datagram payload cannot be turned into text."""

    kind = "decode_error"

    def __init__(self, message: str, *, compression: CompressionFormat) -> None:
        super().__init__(message)
        self.compression = compression


class DecompressionFailedError(DecodeError):
    kind = "decompression_failed"


class InvalidEncodingError(DecodeError):
    kind = "invalid_encoding"


def detect_compression(data: bytes) -> CompressionFormat:
    """Classify ``data`` by its first two bytes."""
    if len(data) < 2:
        return CompressionFormat.UNCOMPRESSED
    if data[:2] == _GZIP_MAGIC:
        return CompressionFormat.GZIP
    if data[0] == _ZLIB_CMF and data[1] in _ZLIB_FLG:
        return CompressionFormat.ZLIB
    return CompressionFormat.UNCOMPRESSED


def _decompress(data: bytes, compression: CompressionFormat) -> bytes:
    try:
        if compression is CompressionFormat.GZIP:
            return gzip.decompress(data)
        return zlib.decompress(data)
    except (OSError, EOFError, zlib.error) as exc:
        raise DecompressionFailedError(
            f"{compression.value} stream is corrupt or truncated: {exc}",
            compression=compression,
        ) from exc


def decode_payload(data: bytes) -> str:
    """Return the UTF-8 text carried by a raw datagram payload.

    GZIP and ZLIB payloads are decompressed fully in memory first; anything
    else is treated as plain text. Invalid UTF-8 is rejected outright rather
    than replaced, so a record never contains a mangled character.
    """
    compression = detect_compression(data)
    if compression is CompressionFormat.UNCOMPRESSED:
        raw = data
    else:
        raw = _decompress(data, compression)
        logger.debug(
            "Decompressed %s payload from %s to %s bytes",
            compression.value,
            len(data),
            len(raw),
        )

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidEncodingError(
            f"payload is not valid UTF-8 at byte {exc.start}",
            compression=compression,
        ) from exc


__all__ = [
    "CompressionFormat",
    "DecodeError",
    "DecompressionFailedError",
    "InvalidEncodingError",
    "decode_payload",
    "detect_compression",
]
