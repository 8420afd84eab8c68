"""Application configuration via pydantic settings."""

from functools import lru_cache
from ipaddress import ip_address
from pathlib import Path

from typing import Annotated, Any

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


class Settings(BaseSettings):
    """Typed, immutable collector configuration."""

    app_env: str = Field("local", alias="APP_ENV")
    app_name: str = Field("GELF Collector", alias="APP_NAME")

    udp_port: int = Field(12201, ge=0, le=65535, alias="UDP_PORT")
    http_port: int = Field(8080, ge=0, le=65535, alias="HTTP_PORT")
    max_messages: int = Field(10000, ge=1, alias="MAX_MESSAGES")
    bind_address: str = Field("0.0.0.0", alias="BIND_ADDRESS")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    udp_enabled: bool = Field(default=True, alias="UDP_ENABLED")
    udp_receive_buffer: int | None = Field(None, ge=1024, alias="UDP_RECEIVE_BUFFER")

    stream_queue_size: int = Field(100, ge=1, alias="STREAM_QUEUE_SIZE")
    stream_keepalive_seconds: float = Field(
        15.0, gt=0, alias="STREAM_KEEPALIVE_SECONDS"
    )

    cors_allow_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["*"], alias="CORS_ALLOW_ORIGINS"
    )

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        case_sensitive=False,
        populate_by_name=True,
        frozen=True,
    )

    @field_validator("bind_address")
    @classmethod
    def _check_bind_address(cls, value: str) -> str:
        value = value.strip()
        ip_address(value)
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
