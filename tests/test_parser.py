"""Tests for GELF record parsing."""

from __future__ import annotations

import pytest

from gelf_collector.ingest.parser import (
    MAX_NESTING_DEPTH,
    PREVIEW_CHARS,
    NotAnObjectError,
    SyntaxParseError,
    parse_record,
    safe_preview,
)


def test_parse_injects_received_at_and_keeps_fields() -> None:
    record = parse_record(
        '{"version":"1.1","host":"h","short_message":"m","level":6,"_extra":{"a":[1,2]}}',
        1700000000.25,
    )
    assert record == {
        "version": "1.1",
        "host": "h",
        "short_message": "m",
        "level": 6,
        "_extra": {"a": [1, 2]},
        "received_at": 1700000000.25,
    }
    assert list(record)[:4] == ["version", "host", "short_message", "level"]


def test_existing_received_at_is_overwritten() -> None:
    record = parse_record('{"received_at": "yesterday", "host": "h"}', 42.5)
    assert record["received_at"] == 42.5


def test_missing_gelf_fields_are_accepted() -> None:
    assert parse_record("{}", 1.0) == {"received_at": 1.0}


@pytest.mark.parametrize(
    "text,json_type",
    [("[1, 2]", "array"), ('"hi"', "string"), ("3", "number"), ("true", "boolean"), ("null", "null")],
)
def test_non_object_is_rejected(text: str, json_type: str) -> None:
    with pytest.raises(NotAnObjectError) as exc_info:
        parse_record(text, 1.0)
    assert exc_info.value.json_type == json_type
    assert exc_info.value.kind == "not_an_object"


def test_malformed_json_reports_position_and_preview() -> None:
    with pytest.raises(SyntaxParseError) as exc_info:
        parse_record('{"host": "h",\n "level": }', 1.0)
    err = exc_info.value
    assert err.kind == "syntax"
    assert err.line == 2
    assert err.preview.startswith('{"host"')


def test_syntax_preview_is_truncated_for_large_payloads() -> None:
    text = "{" + "é" * 5000
    with pytest.raises(SyntaxParseError) as exc_info:
        parse_record(text, 1.0)
    assert len(exc_info.value.preview) == PREVIEW_CHARS
    assert "é" * 10 in exc_info.value.preview


@pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity", "1e400", "-1e400"])
def test_non_standard_constants_are_rejected(constant: str) -> None:
    with pytest.raises(SyntaxParseError):
        parse_record('{"value": %s}' % constant, 1.0)


def test_deeply_nested_document_is_a_syntax_error() -> None:
    with pytest.raises(SyntaxParseError):
        parse_record('{"a":' + "[" * 100000 + "]" * 100000 + "}", 1.0)


def test_safe_preview_limits() -> None:
    assert safe_preview("short", 10) == "short"
    assert safe_preview("✓✓✓✓", 2) == "✓✓"
    assert safe_preview("anything", 0) == ""


def _nested(depth: int) -> str:
    # One object wrapping depth - 1 arrays.
    return '{"a":' + "[" * (depth - 1) + "]" * (depth - 1) + "}"


def test_nesting_up_to_the_limit_is_accepted() -> None:
    record = parse_record(_nested(MAX_NESTING_DEPTH), 1.0)
    assert record["received_at"] == 1.0


def test_nesting_beyond_the_limit_is_a_syntax_error() -> None:
    with pytest.raises(SyntaxParseError, match="nested deeper"):
        parse_record(_nested(600), 1.0)
