"""Health check endpoints."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from gelf_collector.api.deps import get_app_settings
from gelf_collector.core.config import Settings
from gelf_collector.schemas import HealthRead

router = APIRouter()


@router.get("/health", response_model=HealthRead, summary="Service health status")
async def healthcheck(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthRead:
    """Return application health metadata."""
    return HealthRead(
        status="ok",
        service=settings.app_name,
        timestamp=datetime.now(UTC).isoformat(),
        environment=settings.app_env,
    )
