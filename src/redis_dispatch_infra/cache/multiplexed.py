"""Single shared connection provider."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

from redis_dispatch_core.exceptions import ConnectionFailedError
from redis_dispatch_infra.cache.url import sanitize_url, validate_url

if TYPE_CHECKING:
    from redis_dispatch_core.config.settings import Settings

logger = structlog.get_logger()


class MultiplexedConnectionProvider:
    """One client shared by every caller.

    Cloning the handle returns the same client object, never a new
    connection, so all callers share one session.
    """

    def __init__(self, client: Redis) -> None:
        """Initialize with an established redis-py asyncio client."""
        self._client = client

    @property
    def client(self) -> Redis:
        """The shared client."""
        return self._client

    def clone(self) -> Redis:
        """Return a handle to the shared client."""
        return self._client

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[Redis]:
        """Yield the shared client; nothing is released on exit."""
        yield self._client

    async def aclose(self) -> None:
        """Close the shared client."""
        await self._client.aclose()
        logger.info("redis_connection_closed")


async def create_connection(settings: Settings) -> MultiplexedConnectionProvider:
    """Create and establish the shared client.

    Raises:
        InvalidConfigurationError: if the URL cannot be parsed.
        ConnectionFailedError: if the store cannot be reached.
    """
    validate_url(settings.redis_url)
    client = Redis.from_url(
        settings.redis_url,
        socket_timeout=settings.response_timeout_seconds,
        socket_connect_timeout=settings.connect_timeout_seconds,
    )
    try:
        await client.ping()
    except (RedisError, OSError) as exc:
        await client.aclose()
        raise ConnectionFailedError() from exc

    logger.info("redis_connection_established", url=sanitize_url(settings.redis_url))
    return MultiplexedConnectionProvider(client)
