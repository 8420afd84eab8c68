"""Server-Sent Events stream of newly ingested records."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from gelf_collector.api.deps import get_app_settings, get_broadcaster
from gelf_collector.core.config import Settings
from gelf_collector.services.broadcaster import LogBroadcaster

router = APIRouter()

KEEPALIVE_COMMENT = ": keep-alive\n\n"


def sse_event(event: str, data: str) -> str:
    return f"event: {event}\ndata: {data}\n\n"


async def event_stream(
    broadcaster: LogBroadcaster,
    is_disconnected: Callable[[], Awaitable[bool]],
    keepalive_seconds: float,
) -> AsyncIterator[str]:
    """Yield SSE frames for each published record until the client leaves."""
    async with broadcaster.subscribe() as queue:
        yield KEEPALIVE_COMMENT
        while not await is_disconnected():
            try:
                payload = await asyncio.wait_for(queue.get(), timeout=keepalive_seconds)
            except asyncio.TimeoutError:
                yield KEEPALIVE_COMMENT
                continue
            yield sse_event("message", payload)


@router.get("/stream", tags=["logs"])
async def stream_logs(
    request: Request,
    broadcaster: Annotated[LogBroadcaster, Depends(get_broadcaster)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> StreamingResponse:
    """Push every new record to the client as it is stored."""
    return StreamingResponse(
        event_stream(
            broadcaster, request.is_disconnected, settings.stream_keepalive_seconds
        ),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
