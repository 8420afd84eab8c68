"""Schema exports."""

from gelf_collector.schemas.stats import HealthRead, StoreStatsRead

__all__ = ["HealthRead", "StoreStatsRead"]
