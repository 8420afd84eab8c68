"""Test fixtures for the GELF collector."""
from __future__ import annotations

import gzip
import json
from collections.abc import AsyncIterator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from gelf_collector.core.config import Settings
from gelf_collector.main import create_app

SAMPLE_GELF: dict[str, Any] = {
    "version": "1.1",
    "host": "h",
    "short_message": "m",
    "level": 6,
}


def gelf_bytes(payload: dict[str, Any] | None = None, *, compress: bool = False) -> bytes:
    raw = json.dumps(payload if payload is not None else SAMPLE_GELF).encode("utf-8")
    return gzip.compress(raw) if compress else raw


@pytest.fixture()
def settings() -> Settings:
    """Settings for an in-process app without a UDP socket."""
    return Settings(
        udp_enabled=False,
        max_messages=5,
        bind_address="127.0.0.1",
        app_name="GELF Collector (test)",
        app_env="test",
    )


@pytest_asyncio.fixture()
async def app_context(settings: Settings) -> AsyncIterator[dict[str, object]]:
    """Yield an async client together with the app's store and ingestor."""
    app = create_app(settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield {
            "app": app,
            "client": client,
            "store": app.state.store,
            "ingestor": app.state.ingestor,
            "settings": settings,
        }
