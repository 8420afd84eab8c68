"""Tests for log redaction."""

from __future__ import annotations

import logging

from gelf_collector.security.logging_filters import (
    SensitiveFilter,
    install_sensitive_filter,
    redact,
)


def test_redact_masks_secret_fields() -> None:
    text = '{"host":"h","password":"hunter2","_api_key":"abc123","short_message":"ok"}'
    redacted = redact(text)
    assert "hunter2" not in redacted
    assert "abc123" not in redacted
    assert '"short_message":"ok"' in redacted


def test_redact_masks_bearer_tokens() -> None:
    assert "eyJhbGci" not in redact("Authorization: Bearer eyJhbGci.abc.def")


def test_filter_scrubs_string_arguments() -> None:
    record = logging.LogRecord(
        "gelf_collector.services.udp_listener",
        logging.WARNING,
        __file__,
        1,
        "Dropping datagram from %s: preview=%r",
        ("1.2.3.4:5", '{"token":"s3cr3t"'),
        None,
    )
    assert SensitiveFilter().filter(record)
    assert "s3cr3t" not in record.getMessage()
    assert "1.2.3.4:5" in record.getMessage()


def test_install_is_idempotent() -> None:
    name = "gelf_collector.tests.redaction"
    install_sensitive_filter(name, name)
    install_sensitive_filter(name)
    target = logging.getLogger(name)
    assert sum(isinstance(flt, SensitiveFilter) for flt in target.filters) == 1
