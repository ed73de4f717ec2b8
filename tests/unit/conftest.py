"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

from redis_dispatch_core.config.settings import Settings
from redis_dispatch_infra.cache.commands import get_cmd, set_cmd
from tests.mocks.mock_redis import MockCmd, MockRedisConnection
from tests.mocks.mock_settings import make_settings


@pytest.fixture
def settings() -> Settings:
    """Return Settings pointing at the local loopback."""
    return make_settings()


@pytest.fixture
def foo_roundtrip() -> MockRedisConnection:
    """Scripted connection expecting SET foo 1 EX 300 then GET foo."""
    return MockRedisConnection(
        [
            MockCmd(set_cmd("foo", 1), True),
            MockCmd(get_cmd("foo"), b"1"),
        ]
    )


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Save and restore root logger handlers.

    configure_logging() replaces the root handlers; stale StreamHandlers
    would otherwise write to streams pytest has already closed.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.level = original_level
