"""Repository dispatch with the repository type as an explicit parameter.

Same capability as ``repository_pattern``, but declared as an abstract
base class and threaded through the operations as the type parameter
``R`` instead of being named in the argument annotation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from redis.asyncio import Redis

from redis_dispatch_core.interfaces.connection import ConnectionLike
from redis_dispatch_infra.cache.commands import query_get, query_set


class ConnectionRepository[C: ConnectionLike](ABC):
    """Supplies a connection handle on demand."""

    @abstractmethod
    def get_conn(self) -> C:
        """Return a handle for one call."""


class CacheRepository(ConnectionRepository[Redis]):
    """Repository over the shared multiplexed client."""

    def __init__(self, conn: Redis) -> None:
        """Initialize with an established redis-py client."""
        self._conn = conn

    def get_conn(self) -> Redis:
        """Return the shared client."""
        return self._conn


# Written out with ``R`` instead of annotating ``conn_repo`` with the base
# class directly; both spellings accept the same repositories.
async def get_value[R: ConnectionRepository[Any]](conn_repo: R, key: str) -> int:
    """Read ``key`` through the repository's connection."""
    conn = conn_repo.get_conn()
    return await query_get(conn, key)


async def set_value[R: ConnectionRepository[Any]](conn_repo: R, key: str, value: int) -> None:
    """Write ``value`` under ``key`` through the repository's connection."""
    conn = conn_repo.get_conn()
    await query_set(conn, key, value)
