"""Integration test fixtures: a real Redis on localhost, test DB 1."""

from __future__ import annotations

import socket
import time
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from redis.asyncio import Redis

from redis_dispatch_core.config.settings import Settings
from tests.mocks.mock_settings import make_settings

REDIS_TEST_URL = "redis://localhost:6379/1"


def _tcp_reachable(
    host: str,
    port: int,
    timeout: float = 1.0,
    retries: int = 3,
    delay: float = 1.0,
) -> bool:
    """Check if a TCP service is reachable, retrying on failure."""
    for attempt in range(retries):
        try:
            with socket.create_connection((host, port), timeout=timeout):
                return True
        except OSError:
            if attempt < retries - 1:
                time.sleep(delay)
    return False


_redis_up = _tcp_reachable("localhost", 6379)

require_redis = pytest.mark.skipif(
    not _redis_up,
    reason="Redis not reachable on localhost:6379",
)


@pytest.fixture
def redis_settings() -> Settings:
    """Settings pointing at the test database."""
    return make_settings(redis_url=REDIS_TEST_URL)


@pytest_asyncio.fixture
async def redis_client() -> AsyncGenerator[Redis, None]:
    """Function-scoped raw client on test DB 1, flushed around each test."""
    if not _redis_up:
        pytest.skip("Redis not available")

    client = Redis.from_url(REDIS_TEST_URL)
    await client.flushdb()
    yield client
    await client.flushdb()
    await client.aclose()
