"""Public interface re-exports for redis_dispatch_core."""

from redis_dispatch_core.interfaces.connection import ConnectionLike, ConnectionProvider

__all__ = [
    "ConnectionLike",
    "ConnectionProvider",
]
