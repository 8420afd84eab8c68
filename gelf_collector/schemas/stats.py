"""Schemas for store statistics and health responses."""

from __future__ import annotations

from pydantic import BaseModel, Field


class StoreStatsRead(BaseModel):
    total_messages: int = Field(..., ge=0)
    max_capacity: int = Field(..., ge=1)
    capacity_used_percent: float = Field(..., ge=0, le=100)


class HealthRead(BaseModel):
    status: str
    service: str
    timestamp: str
    environment: str
