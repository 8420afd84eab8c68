"""Logging filters that scrub secrets out of payload previews."""

from __future__ import annotations

import logging
import re

_SENSITIVE_PATTERN = re.compile(
    r"(Authorization: Bearer\s+[\w\.-]+"
    r"|\"_?(?:password|passwd|secret|token|access_token|api_key|apikey)\"\s*:\s*\"[^\"]*\")",
    re.IGNORECASE,
)
_REDACTED = "**REDACTED**"


def redact(text: str) -> str:
    return _SENSITIVE_PATTERN.sub(_REDACTED, text)


def _scrub(arg: object) -> object:
    if isinstance(arg, str):
        return redact(arg)
    if isinstance(arg, BaseException):
        return redact(str(arg))
    return arg


class SensitiveFilter(logging.Filter):
    """Replace sensitive tokens in log messages with a redaction marker.

    Datagram previews arrive as ``%r`` arguments rather than in the format
    string, so string and exception arguments are scrubbed as well.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        if isinstance(record.args, tuple) and record.args:
            record.args = tuple(_scrub(arg) for arg in record.args)
        return True


def install_sensitive_filter(*logger_names: str) -> None:
    """Attach ``SensitiveFilter`` once to each named logger."""
    for name in logger_names:
        target = logging.getLogger(name)
        if not any(isinstance(flt, SensitiveFilter) for flt in target.filters):
            target.addFilter(SensitiveFilter())


__all__ = ["SensitiveFilter", "install_sensitive_filter", "redact"]
