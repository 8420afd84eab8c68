"""Turn decoded datagram text into a stored log record."""

from __future__ import annotations

import json
import math
from typing import Any

Record = dict[str, Any]

RECEIVED_AT_FIELD = "received_at"
PREVIEW_CHARS = 100
MAX_NESTING_DEPTH = 100

_JSON_TYPE_NAMES = {
    list: "array",
    str: "string",
    int: "number",
    float: "number",
    bool: "boolean",
    type(None): "null",
}


class ParseError(Exception):
    """Raised when decoded text is not a usable GELF record."""

    kind = "parse_error"


class SyntaxParseError(ParseError):
    """The text is not well-formed JSON."""

    kind = "syntax"

    def __init__(self, message: str, *, line: int, column: int, preview: str) -> None:
        super().__init__(f"{message} (line {line}, column {column}): {preview!r}")
        self.line = line
        self.column = column
        self.preview = preview


class NotAnObjectError(ParseError):
    """The text is valid JSON but its top-level value is not an object."""

    kind = "not_an_object"

    def __init__(self, json_type: str) -> None:
        super().__init__(f"expected a JSON object, got {json_type}")
        self.json_type = json_type


def safe_preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    """Return at most ``limit`` characters of ``text``.

    Slicing a ``str`` never splits a code point, so the preview is always
    printable text even when the payload is multi-byte.
    """
    if limit <= 0:
        return ""
    return text if len(text) <= limit else text[:limit]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _parse_finite_float(literal: str) -> float:
    number = float(literal)
    if not math.isfinite(number):
        raise ValueError(f"number out of range: {literal}")
    return number


def _nesting_depth(value: Any, limit: int) -> int:
    """Return the container depth of ``value``, stopping once it exceeds ``limit``."""
    deepest = 0
    stack = [(value, 1)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        deepest = max(deepest, depth)
        if deepest > limit:
            break
        stack.extend((child, depth + 1) for child in children)
    return deepest


def parse_record(text: str, received_at: float) -> Record:
    """Parse ``text`` as a GELF JSON object stamped with ``received_at``.

    Only JSON well-formedness and the object shape are checked; GELF fields
    such as ``version`` or ``short_message`` may be missing. An existing
    ``received_at`` key in the payload is overwritten so the field always
    reflects server-side receipt.

    Documents nested deeper than ``MAX_NESTING_DEPTH`` containers and numbers
    that overflow a float are rejected, so every stored record can be copied
    and served back as JSON.
    """
    try:
        value = json.loads(
            text, parse_constant=_reject_constant, parse_float=_parse_finite_float
        )
    except json.JSONDecodeError as exc:
        raise SyntaxParseError(
            exc.msg, line=exc.lineno, column=exc.colno, preview=safe_preview(text)
        ) from exc
    except ValueError as exc:
        raise SyntaxParseError(
            str(exc), line=1, column=1, preview=safe_preview(text)
        ) from exc
    except RecursionError as exc:
        raise SyntaxParseError(
            "document nested too deeply", line=1, column=1, preview=safe_preview(text)
        ) from exc

    if not isinstance(value, dict):
        raise NotAnObjectError(_JSON_TYPE_NAMES.get(type(value), type(value).__name__))

    if _nesting_depth(value, MAX_NESTING_DEPTH) > MAX_NESTING_DEPTH:
        raise SyntaxParseError(
            f"document nested deeper than {MAX_NESTING_DEPTH} levels",
            line=1,
            column=1,
            preview=safe_preview(text),
        )

    value[RECEIVED_AT_FIELD] = received_at
    return value


__all__ = [
    "MAX_NESTING_DEPTH",
    "NotAnObjectError",
    "ParseError",
    "RECEIVED_AT_FIELD",
    "Record",
    "SyntaxParseError",
    "parse_record",
    "safe_preview",
]
