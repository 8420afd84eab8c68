"""Log query endpoints."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from gelf_collector.api.deps import get_store
from gelf_collector.schemas import StoreStatsRead
from gelf_collector.services.log_store import BoundedLogStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/logs", tags=["logs"])
async def list_logs(
    store: Annotated[BoundedLogStore, Depends(get_store)],
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> list[dict[str, Any]]:
    """Return retained records, newest first."""
    records = store.snapshot(limit)
    logger.debug("Returning %s records (limit=%s)", len(records), limit)
    return records


@router.get("/stats", response_model=StoreStatsRead, tags=["logs"])
async def store_stats(
    store: Annotated[BoundedLogStore, Depends(get_store)],
) -> StoreStatsRead:
    """Return the store's fill level."""
    return StoreStatsRead(**store.stats().as_dict())
