"""Datagram decoding and record parsing."""

from .decoder import (
    CompressionFormat,
    DecodeError,
    DecompressionFailedError,
    InvalidEncodingError,
    decode_payload,
    detect_compression,
)
from .parser import (
    MAX_NESTING_DEPTH,
    NotAnObjectError,
    ParseError,
    Record,
    SyntaxParseError,
    parse_record,
    safe_preview,
)

__all__ = [
    "CompressionFormat",
    "DecodeError",
    "DecompressionFailedError",
    "InvalidEncodingError",
    "MAX_NESTING_DEPTH",
    "NotAnObjectError",
    "ParseError",
    "Record",
    "SyntaxParseError",
    "decode_payload",
    "detect_compression",
    "parse_record",
    "safe_preview",
]
