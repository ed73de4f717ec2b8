"""Redis URL validation and redaction helpers."""

from __future__ import annotations

import re

from redis.asyncio.connection import parse_url

from redis_dispatch_core.exceptions import InvalidConfigurationError

_PASSWORD_RE = re.compile(r":([^:@/]+)@")


def validate_url(redis_url: str) -> None:
    """Parse the URL without touching the network.

    Raises:
        InvalidConfigurationError: if the URL has an unsupported scheme or
            malformed components.
    """
    try:
        parse_url(redis_url)
    except (ValueError, TypeError) as exc:
        raise InvalidConfigurationError() from exc


def sanitize_url(redis_url: str) -> str:
    """Remove the password from a URL for logging."""
    return _PASSWORD_RE.sub(":***@", redis_url)
