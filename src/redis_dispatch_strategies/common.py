"""Cache operations over a concrete redis-py client.

These are the only helpers that also accept string values. Keys and
values are passed straight through to the command layer.
"""

from __future__ import annotations

from redis.asyncio import Redis

from redis_dispatch_infra.cache.commands import query_get, query_get_text, query_set


async def common_get_value(conn: Redis, key: str) -> int:
    """Read ``key`` as an unsigned integer."""
    return await query_get(conn, key)


async def common_get_text(conn: Redis, key: str) -> str:
    """Read ``key`` as text."""
    return await query_get_text(conn, key)


async def common_set_value(conn: Redis, key: str, value: int | str) -> None:
    """Write ``value`` under ``key`` with the default TTL."""
    await query_set(conn, key, value)
