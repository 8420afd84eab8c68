"""Common API dependencies."""

from __future__ import annotations

from fastapi import Request

from gelf_collector.core.config import Settings
from gelf_collector.services.broadcaster import LogBroadcaster
from gelf_collector.services.log_store import BoundedLogStore


def get_store(request: Request) -> BoundedLogStore:
    """Return the process-wide log store attached to the application."""
    return request.app.state.store


def get_broadcaster(request: Request) -> LogBroadcaster:
    return request.app.state.broadcaster


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
