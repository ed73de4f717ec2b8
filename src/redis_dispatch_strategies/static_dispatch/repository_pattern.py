"""Repository dispatch through a structural protocol.

A repository is anything with ``get_conn()``. The operations only see that
capability, so the real repositories below and the mock ones used in
tests are interchangeable without sharing a base class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from redis.asyncio import Redis

from redis_dispatch_core.interfaces.connection import ConnectionLike
from redis_dispatch_infra.cache.commands import query_get, query_set

if TYPE_CHECKING:
    from redis_dispatch_infra.cache.pool import PooledConnectionProvider


@runtime_checkable
class ConnectionRepository[C: ConnectionLike](Protocol):
    """Supplies a connection handle on demand."""

    def get_conn(self) -> C:
        """Return a handle for one call."""
        ...


class CacheRepository:
    """Repository over the shared multiplexed client."""

    def __init__(self, conn: Redis) -> None:
        """Initialize with an established redis-py client."""
        self._conn = conn

    def get_conn(self) -> Redis:
        """Return the shared client."""
        return self._conn


class PooledCacheRepository:
    """Repository over a bounded pool; each command leases a connection."""

    def __init__(self, provider: PooledConnectionProvider) -> None:
        """Initialize with a pooled provider."""
        self._provider = provider
        self._handle = provider.handle()

    def get_conn(self) -> Redis:
        """Return the pool-bound client."""
        return self._handle

    async def aclose(self) -> None:
        """Close the pool-bound client and the pool behind it."""
        await self._handle.aclose()
        await self._provider.aclose()


async def get_value[C: ConnectionLike](conn_repo: ConnectionRepository[C], key: str) -> int:
    """Read ``key`` through the repository's connection."""
    conn = conn_repo.get_conn()
    return await query_get(conn, key)


async def set_value[C: ConnectionLike](
    conn_repo: ConnectionRepository[C], key: str, value: int
) -> None:
    """Write ``value`` under ``key`` through the repository's connection."""
    conn = conn_repo.get_conn()
    await query_set(conn, key, value)
