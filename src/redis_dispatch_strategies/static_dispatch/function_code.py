"""Generic free functions over any connection type."""

from __future__ import annotations

from redis_dispatch_core.interfaces.connection import ConnectionLike
from redis_dispatch_infra.cache.commands import query_get, query_set


async def get_value[C: ConnectionLike](conn: C, key: str) -> int:
    """Read ``key`` through ``conn``."""
    return await query_get(conn, key)


async def set_value[C: ConnectionLike](conn: C, key: str, value: int) -> None:
    """Write ``value`` under ``key`` through ``conn``."""
    await query_set(conn, key, value)
