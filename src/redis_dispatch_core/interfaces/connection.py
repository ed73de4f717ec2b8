"""Abstract connection capability interfaces."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ConnectionLike(Protocol):
    """Anything that can run a Redis command: a client, a pool lease or a mock."""

    async def execute_command(self, *args: Any, **options: Any) -> Any:
        """Send one command and return the decoded reply."""
        ...


@runtime_checkable
class ConnectionProvider(Protocol):
    """Supplies connections to the remote store."""

    def acquire(self) -> AbstractAsyncContextManager[ConnectionLike]:
        """Yield a connection for the duration of one call."""
        ...

    async def aclose(self) -> None:
        """Release every underlying connection."""
        ...
