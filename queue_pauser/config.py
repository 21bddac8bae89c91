"""
Application configuration using Pydantic Settings.
Loads configuration from environment variables with sensible defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Redis
    redis_url: str = "redis://localhost:6379/0"

    # Queue pausing
    pauser_enabled: bool = True
    pauser_backend: Literal["redis", "memory"] = "redis"
    pauser_resync_interval_seconds: float = 60.0
    pauser_reconnect_delay_seconds: float = 1.0
    paused_queues_key: str = "pauser:paused_queues"
    pauser_channel: str = "pauser:communicator"

    # Queue naming
    queue_prefix: str = "queue:"

    # Worker Configuration
    worker_id: str | None = None
    worker_queues: list[str] = ["default"]
    worker_fetch_timeout_seconds: float = 2.0

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Observability
    otel_exporter_otlp_endpoint: str = "http://localhost:4317"
    otel_service_name: str = "queue-pauser"
    log_level: str = "INFO"
    log_format: str = "json"  # json or console


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
