"""Closed error taxonomy for redis-dispatch.

Every failure in the cache layer is mapped to exactly one of these kinds
before it reaches the caller. The exceptions carry no payload beyond the
kind; the original error, when there is one, is only kept as ``__cause__``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar


class ErrorKind(StrEnum):
    """The four failure kinds surfaced to callers."""

    INVALID_CONFIGURATION = "invalid_configuration"
    CONNECTION_FAILED = "connection_failed"
    QUERY_FAILED = "query_failed"
    TIMEOUT = "timeout"


class RedisDispatchError(Exception):
    """Base exception for all redis-dispatch errors."""

    kind: ClassVar[ErrorKind]
    default_message: ClassVar[str] = "redis-dispatch error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidConfigurationError(RedisDispatchError):
    """Raised when the Redis URL cannot be parsed."""

    kind = ErrorKind.INVALID_CONFIGURATION
    default_message = "Redis URL was invalid"


class ConnectionFailedError(RedisDispatchError):
    """Raised when a connection cannot be established or leased."""

    kind = ErrorKind.CONNECTION_FAILED
    default_message = "Redis connection failed"


class QueryFailedError(RedisDispatchError):
    """Raised when a command fails, including reply decoding failures."""

    kind = ErrorKind.QUERY_FAILED
    default_message = "The query failed"


class QueryTimeoutError(RedisDispatchError):
    """Raised when an operation does not finish before its deadline."""

    kind = ErrorKind.TIMEOUT
    default_message = "The query timed out"
