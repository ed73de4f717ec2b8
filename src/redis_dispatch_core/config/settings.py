"""Application settings using pydantic-settings."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from redis_dispatch_core.constants import (
    DEFAULT_REDIS_URL,
    DEFAULT_TIMEOUT_SECONDS,
    POOL_SIZE,
)


class Settings(BaseSettings):
    """Central configuration for redis-dispatch."""

    model_config = SettingsConfigDict(env_prefix="RD_", env_file=".env", extra="ignore")

    # --- Redis ---
    redis_url: str = Field(
        default=DEFAULT_REDIS_URL,
        validation_alias=AliasChoices("REDIS_URL", "RD_REDIS_URL", "redis_url"),
        description="Connection string for the backing store",
    )
    pool_size: int = Field(
        default=POOL_SIZE,
        description="Maximum number of pooled connections",
    )
    pool_timeout_seconds: float | None = Field(
        default=None,
        description="How long acquire() waits for a free lease (None waits indefinitely)",
    )
    connect_timeout_seconds: float = Field(
        default=5.0,
        description="Connect timeout for the multiplexed connection",
    )
    response_timeout_seconds: float = Field(
        default=5.0,
        description="Per-command response timeout for the multiplexed connection",
    )
    query_timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        description="Deadline applied by run_query",
    )

    # --- Logging ---
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer: 'console' for humans, 'json' for machines",
    )

    @model_validator(mode="after")
    def validate_pool_config(self) -> Settings:
        """Reject pools that could never hand out a lease."""
        if self.pool_size < 1:
            msg = "pool_size must be at least 1"
            raise ValueError(msg)
        return self
