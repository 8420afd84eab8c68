"""FastAPI application entrypoint.

Serve with `gelf-collector`, or with `uvicorn --factory gelf_collector.main:create_app`.
No app is built at import time, so settings are only read once one is requested.
"""

import logging
from contextlib import asynccontextmanager

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from secure import ReferrerPolicy, Secure, XContentTypeOptions, XFrameOptions

from gelf_collector.api import api_router
from gelf_collector.core.config import Settings, get_settings
from gelf_collector.security.logging_filters import install_sensitive_filter
from gelf_collector.services.broadcaster import LogBroadcaster
from gelf_collector.services.log_store import BoundedLogStore
from gelf_collector.services.udp_listener import DatagramIngestor, UdpListener

logger = logging.getLogger(__name__)

_secure_headers = Secure(
    xcto=XContentTypeOptions(),
    xfo=XFrameOptions().deny(),
    referrer=ReferrerPolicy().no_referrer(),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    listener: UdpListener | None = None
    if settings.udp_enabled:
        listener = UdpListener(
            app.state.ingestor,
            settings.bind_address,
            settings.udp_port,
            receive_buffer=settings.udp_receive_buffer,
        )
        # SocketFatalError propagates so the server refuses to start.
        await listener.start()
    app.state.udp_listener = listener
    logger.info(
        "GELF collector running (capacity=%s, udp=%s)",
        settings.max_messages,
        f"{settings.bind_address}:{settings.udp_port}" if listener else "disabled",
    )
    try:
        yield
    finally:
        if listener is not None:
            listener.stop()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the collector application around a fresh store."""
    settings = settings or get_settings()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = BoundedLogStore(settings.max_messages)
    app.state.broadcaster = LogBroadcaster(settings.stream_queue_size)
    app.state.ingestor = DatagramIngestor(app.state.store, app.state.broadcaster)
    app.state.udp_listener = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")

    @app.middleware("http")
    async def _apply_security_headers(request, call_next):
        response = await call_next(request)
        _secure_headers.set_headers(response)
        return response

    install_sensitive_filter(
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "gelf_collector.services.udp_listener",
    )

    app.include_router(api_router)
    return app

