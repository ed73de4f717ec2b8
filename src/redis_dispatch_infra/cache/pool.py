"""Bounded connection pool provider."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from redis.asyncio import BlockingConnectionPool, Redis
from redis.exceptions import RedisError

from redis_dispatch_core.exceptions import ConnectionFailedError
from redis_dispatch_infra.cache.url import sanitize_url, validate_url

if TYPE_CHECKING:
    from redis_dispatch_core.config.settings import Settings

logger = structlog.get_logger()


class PooledConnectionProvider:
    """Hands out exclusive leases from a fixed-capacity pool.

    ``acquire()`` suspends the calling task (never the thread) while every
    lease is taken, and returns the lease to the pool when the context
    exits, whether or not the body raised.
    """

    def __init__(self, pool: BlockingConnectionPool) -> None:
        """Initialize with an already-built redis-py blocking pool."""
        self._pool = pool

    @property
    def pool(self) -> BlockingConnectionPool:
        """The underlying redis-py pool."""
        return self._pool

    @property
    def max_connections(self) -> int:
        """Pool capacity."""
        return self._pool.max_connections

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[Redis]:
        """Lease one pooled connection for the duration of the block.

        Raises:
            ConnectionFailedError: if the pool cannot produce a connection.
        """
        lease = Redis(connection_pool=self._pool, single_connection_client=True)
        try:
            await lease.initialize()
        except (RedisError, OSError) as exc:
            await lease.aclose()
            raise ConnectionFailedError() from exc
        try:
            yield lease
        finally:
            await lease.aclose()

    def handle(self) -> Redis:
        """Return a shared client that leases a connection per command."""
        return Redis(connection_pool=self._pool)

    async def aclose(self) -> None:
        """Disconnect every pooled connection."""
        await self._pool.disconnect()
        logger.info("redis_pool_closed")


def create_pool(settings: Settings) -> PooledConnectionProvider:
    """Build the bounded pool described by ``settings``.

    The URL is validated before anything else, so a malformed one fails
    with ``InvalidConfigurationError`` without any network I/O. The pool
    itself connects lazily on the first ``acquire()``.
    """
    validate_url(settings.redis_url)
    try:
        pool = BlockingConnectionPool.from_url(
            settings.redis_url,
            max_connections=settings.pool_size,
            timeout=settings.pool_timeout_seconds,
        )
    except (ValueError, TypeError) as exc:
        raise ConnectionFailedError() from exc

    logger.info(
        "redis_pool_created",
        url=sanitize_url(settings.redis_url),
        max_connections=settings.pool_size,
    )
    return PooledConnectionProvider(pool)
