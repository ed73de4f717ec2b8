"""The two cache commands, issued against anything connection-like.

Only two command shapes ever reach the store: ``GET key`` and
``SET key value EX ttl``. Every transport or decoding failure is collapsed
into :class:`QueryFailedError`; the original exception stays reachable as
``__cause__`` but its type never escapes this module.
"""

from __future__ import annotations

from typing import Any

from redis.exceptions import RedisError

from redis_dispatch_core.constants import (
    DEFAULT_TTL_SECONDS,
    EXPIRY_OPTION,
    GET_COMMAND,
    SET_COMMAND,
    U64_MAX,
)
from redis_dispatch_core.exceptions import QueryFailedError
from redis_dispatch_core.interfaces.connection import ConnectionLike

_OK_REPLIES: tuple[str | bytes, ...] = ("OK", b"OK")


def get_cmd(key: str) -> tuple[str, str]:
    """Build the read-by-key command."""
    return (GET_COMMAND, key)


def set_cmd(
    key: str, value: int | str, ttl: int = DEFAULT_TTL_SECONDS
) -> tuple[str, str, int | str, str, int]:
    """Build the write-with-expiry command."""
    return (SET_COMMAND, key, value, EXPIRY_OPTION, ttl)


async def _execute(conn: ConnectionLike, *args: Any) -> Any:
    """Run one command, collapsing transport errors."""
    try:
        return await conn.execute_command(*args)
    except (RedisError, OSError) as exc:
        raise QueryFailedError() from exc


def _decode_u64(reply: Any) -> int:
    """Convert a GET reply into an unsigned 64-bit integer."""
    if reply is None:
        msg = "key does not exist"
        raise ValueError(msg)
    if isinstance(reply, bool) or not isinstance(reply, (int, str, bytes)):
        msg = f"unexpected reply type {type(reply).__name__}"
        raise TypeError(msg)
    if isinstance(reply, bytes):
        reply = reply.decode("utf-8")
    if isinstance(reply, str):
        digits = reply.removeprefix("+")
        if not (digits.isascii() and digits.isdigit()):
            msg = f"{reply!r} is not an unsigned integer"
            raise ValueError(msg)
    value = int(reply)
    if not 0 <= value <= U64_MAX:
        msg = f"{value} is out of range for u64"
        raise ValueError(msg)
    return value


def _decode_text(reply: Any) -> str:
    """Convert a GET reply into text."""
    if reply is None:
        msg = "key does not exist"
        raise ValueError(msg)
    if isinstance(reply, bytes):
        return reply.decode("utf-8")
    if isinstance(reply, (str, int)) and not isinstance(reply, bool):
        return str(reply)
    msg = f"unexpected reply type {type(reply).__name__}"
    raise TypeError(msg)


def _check_value(value: object) -> None:
    """Only u64 integers and strings can be written."""
    if isinstance(value, bool):
        raise QueryFailedError()
    if isinstance(value, int):
        if not 0 <= value <= U64_MAX:
            raise QueryFailedError()
        return
    if not isinstance(value, str):
        raise QueryFailedError()


async def query_get(conn: ConnectionLike, key: str) -> int:
    """Read ``key`` as an unsigned 64-bit integer.

    Raises:
        QueryFailedError: on a missing key, an undecodable reply or any
            transport failure.
    """
    reply = await _execute(conn, *get_cmd(key))
    try:
        return _decode_u64(reply)
    except (ValueError, TypeError) as exc:
        raise QueryFailedError() from exc


async def query_get_text(conn: ConnectionLike, key: str) -> str:
    """Read ``key`` as UTF-8 text."""
    reply = await _execute(conn, *get_cmd(key))
    try:
        return _decode_text(reply)
    except (ValueError, TypeError) as exc:
        raise QueryFailedError() from exc


async def query_set(
    conn: ConnectionLike,
    key: str,
    value: int | str,
    ttl: int = DEFAULT_TTL_SECONDS,
) -> None:
    """Write ``value`` under ``key`` with an expiry of ``ttl`` seconds.

    Raises:
        QueryFailedError: if the value is not writable, the store rejects
            the write, or the transport fails.
    """
    _check_value(value)
    reply = await _execute(conn, *set_cmd(key, value, ttl))
    if reply is not True and reply not in _OK_REPLIES:
        raise QueryFailedError()
