"""Observability: structured logging."""

from redis_dispatch_strategies.observability.logging import (
    backend_context,
    configure_logging,
    redact_urls,
)

__all__ = [
    "backend_context",
    "configure_logging",
    "redact_urls",
]
