"""Timeout guard for cache operations."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable

from redis_dispatch_core.constants import DEFAULT_TIMEOUT_SECONDS
from redis_dispatch_core.exceptions import QueryTimeoutError


async def run_query[T](
    operation: Awaitable[T],
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> T:
    """Race ``operation`` against a fixed deadline.

    On expiry the awaiting task is cancelled and :class:`QueryTimeoutError`
    is raised. Cancellation stops the client, not the server: a SET that was
    already written to the socket may still be applied.
    """
    try:
        return await asyncio.wait_for(operation, timeout=timeout)
    except TimeoutError as exc:
        raise QueryTimeoutError() from exc
