"""Service layer exports."""
from gelf_collector.services import (
    broadcaster,
    log_store,
    udp_listener,
)

__all__ = [
    "broadcaster",
    "log_store",
    "udp_listener",
]
