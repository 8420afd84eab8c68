"""HTTP endpoints."""

from fastapi import APIRouter

from . import health, logs, stream, viewer

router = APIRouter()
router.include_router(viewer.router)
router.include_router(health.router, tags=["health"])
router.include_router(logs.router)
router.include_router(stream.router)

__all__ = ["router"]
