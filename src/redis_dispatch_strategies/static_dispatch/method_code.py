"""Generic wrapper class holding its connection."""

from __future__ import annotations

from redis_dispatch_core.interfaces.connection import ConnectionLike
from redis_dispatch_infra.cache.commands import query_get, query_set


class CacheConnection[C: ConnectionLike]:
    """Cache operations bound to one connection handle.

    Every call uses the same handle; for a multiplexed client that is the
    shared session, for a mock it is the same scripted double.
    """

    def __init__(self, conn: C) -> None:
        """Initialize with any connection-like object."""
        self._conn = conn

    @property
    def conn(self) -> C:
        """The wrapped connection."""
        return self._conn

    async def get_value(self, key: str) -> int:
        """Read ``key``."""
        return await query_get(self._conn, key)

    async def set_value(self, key: str, value: int) -> None:
        """Write ``value`` under ``key``."""
        await query_set(self._conn, key, value)
