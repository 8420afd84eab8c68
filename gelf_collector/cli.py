"""Command line entry point for the GELF collector."""

from __future__ import annotations

import argparse
import logging
from typing import Any, Sequence

import uvicorn
from pydantic import ValidationError

from gelf_collector.core.config import Settings
from gelf_collector.main import create_app
from gelf_collector.security.logging_filters import SensitiveFilter

LOGGER = logging.getLogger("gelf_collector")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gelf-collector",
        description="A lightweight GELF log collector",
    )
    parser.add_argument(
        "-u", "--udp-port", type=int, help="UDP port to listen for GELF messages (default 12201)"
    )
    parser.add_argument(
        "-H", "--http-port", type=int, help="HTTP port for the web service (default 8080)"
    )
    parser.add_argument(
        "-m",
        "--max-messages",
        type=int,
        help="Maximum number of log messages to keep in memory (default 10000)",
    )
    parser.add_argument(
        "-b", "--bind-address", help="Address to bind both listeners to (default 0.0.0.0)"
    )
    parser.add_argument("--log-level", help="Logging level (default INFO)")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Overlay explicit command line values on environment configuration."""
    overrides: dict[str, Any] = {
        key: value
        for key, value in (
            ("udp_port", args.udp_port),
            ("http_port", args.http_port),
            ("max_messages", args.max_messages),
            ("bind_address", args.bind_address),
            ("log_level", args.log_level),
        )
        if value is not None
    }
    return Settings(**overrides)


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    for handler in logging.getLogger().handlers:
        if not any(isinstance(flt, SensitiveFilter) for flt in handler.filters):
            handler.addFilter(SensitiveFilter())


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = settings_from_args(args)
    except ValidationError as exc:
        parser.error(str(exc))

    configure_logging(settings.log_level)
    LOGGER.info(
        "Starting GELF collector: udp=%s:%s http=%s:%s max_messages=%s",
        settings.bind_address,
        settings.udp_port,
        settings.bind_address,
        settings.http_port,
        settings.max_messages,
    )

    uvicorn.run(
        create_app(settings),
        host=settings.bind_address,
        port=settings.http_port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
