"""Tagged-union dispatch.

The set of backends is closed: a call site hands over one of the
``ConnectionType`` variants and the operation matches on it. Adding a
backend means adding a variant and a ``case`` arm to every operation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import assert_never

from redis.asyncio import Redis

from redis_dispatch_core.interfaces.connection import ConnectionLike
from redis_dispatch_infra.cache.commands import query_get, query_set


@dataclass(frozen=True, slots=True)
class Connection:
    """Production variant wrapping a redis-py client."""

    conn: Redis


@dataclass(frozen=True, slots=True)
class MockConnection:
    """Test variant wrapping a scripted connection double."""

    conn: ConnectionLike


type ConnectionType = Connection | MockConnection


async def enum_get_value(conn_type: ConnectionType, key: str) -> int:
    """Read ``key`` from whichever backend the variant carries."""
    match conn_type:
        case Connection(conn=connection):
            return await query_get(connection, key)
        case MockConnection(conn=connection):
            return await query_get(connection, key)
        case _:  # ConnectionType is closed; the type checker proves this unreachable
            assert_never(conn_type)


async def enum_set_value(conn_type: ConnectionType, key: str, value: int) -> None:
    """Write ``value`` under ``key`` on whichever backend the variant carries."""
    match conn_type:
        case Connection(conn=connection):
            await query_set(connection, key, value)
        case MockConnection(conn=connection):
            await query_set(connection, key, value)
        case _:  # ConnectionType is closed; the type checker proves this unreachable
            assert_never(conn_type)
