"""Tests for the generic and repository dispatch variants."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.asyncio import BlockingConnectionPool, Redis

from redis_dispatch_core.interfaces.connection import ConnectionLike
from redis_dispatch_infra.cache.pool import PooledConnectionProvider
from redis_dispatch_strategies.static_dispatch import (
    method_code,
    repository_pattern,
    repository_pattern_without_impl,
)
from tests.mocks.mock_redis import MockRedisConnection, StubPoolConnection
from tests.mocks.mock_repositories import MockBaseCacheRepository, MockCacheRepository


@pytest.mark.unit
class TestCacheConnection:
    """Tests for the generic wrapper class."""

    @pytest.mark.asyncio
    async def test_methods_share_one_handle(self, foo_roundtrip: MockRedisConnection) -> None:
        """set and get go through the same wrapped connection."""
        cache = method_code.CacheConnection(foo_roundtrip)
        await cache.set_value("foo", 1)
        assert await cache.get_value("foo") == 1
        assert cache.conn is foo_roundtrip

    def test_accepts_real_client_type(self) -> None:
        """A redis-py client satisfies the connection capability."""
        client = Redis()
        assert isinstance(client, ConnectionLike)
        assert method_code.CacheConnection(client).conn is client


@pytest.mark.unit
class TestRepositoryPattern:
    """Tests for the protocol-based repositories."""

    def test_real_and_mock_repositories_satisfy_protocol(self) -> None:
        """Neither repository inherits the protocol, both satisfy it."""
        client = MagicMock(spec=Redis)
        real = repository_pattern.CacheRepository(client)
        mock = MockCacheRepository(MockRedisConnection([]))
        assert isinstance(real, repository_pattern.ConnectionRepository)
        assert isinstance(mock, repository_pattern.ConnectionRepository)

    def test_cache_repository_returns_shared_client(self) -> None:
        """get_conn hands back the same client every time."""
        client = MagicMock(spec=Redis)
        repo = repository_pattern.CacheRepository(client)
        assert repo.get_conn() is client
        assert repo.get_conn() is repo.get_conn()

    @pytest.mark.asyncio
    async def test_cache_repository_issues_commands(self) -> None:
        """Operations run on the repository's client."""
        client = MagicMock(spec=Redis)
        client.execute_command = AsyncMock(side_effect=[True, b"7"])
        repo = repository_pattern.CacheRepository(client)

        await repository_pattern.set_value(repo, "foo", 7)
        assert await repository_pattern.get_value(repo, "foo") == 7

        assert [c.args for c in client.execute_command.await_args_list] == [
            ("SET", "foo", 7, "EX", 300),
            ("GET", "foo"),
        ]

    @pytest.mark.asyncio
    async def test_pooled_repository_uses_pool_handle(self) -> None:
        """The pooled repository's connection is bound to the provider's pool."""
        pool = BlockingConnectionPool(
            connection_class=StubPoolConnection, max_connections=3, timeout=None
        )
        provider = PooledConnectionProvider(pool)
        repo = repository_pattern.PooledCacheRepository(provider)

        conn = repo.get_conn()
        assert conn is repo.get_conn()
        assert conn.connection_pool is pool

        await repo.aclose()


@pytest.mark.unit
class TestRepositoryPatternWithoutImpl:
    """Tests for the abstract-base repositories."""

    def test_base_cannot_be_instantiated(self) -> None:
        """get_conn is abstract."""
        with pytest.raises(TypeError):
            repository_pattern_without_impl.ConnectionRepository()  # type: ignore[abstract]

    def test_cache_repository_returns_shared_client(self) -> None:
        """get_conn hands back the same client every time."""
        client = MagicMock(spec=Redis)
        repo = repository_pattern_without_impl.CacheRepository(client)
        assert repo.get_conn() is client
        assert isinstance(repo, repository_pattern_without_impl.ConnectionRepository)

    @pytest.mark.asyncio
    async def test_both_repository_forms_send_identical_commands(self) -> None:
        """The two repository variants are indistinguishable from the store's side."""
        protocol_client = MagicMock(spec=Redis)
        protocol_client.execute_command = AsyncMock(side_effect=[True, b"3"])
        base_client = MagicMock(spec=Redis)
        base_client.execute_command = AsyncMock(side_effect=[True, b"3"])

        protocol_repo = repository_pattern.CacheRepository(protocol_client)
        base_repo = repository_pattern_without_impl.CacheRepository(base_client)

        await repository_pattern.set_value(protocol_repo, "k", 3)
        await repository_pattern_without_impl.set_value(base_repo, "k", 3)
        first = await repository_pattern.get_value(protocol_repo, "k")
        second = await repository_pattern_without_impl.get_value(base_repo, "k")

        assert first == second == 3
        assert protocol_client.execute_command.await_args_list == (
            base_client.execute_command.await_args_list
        )

    @pytest.mark.asyncio
    async def test_mock_repository_clones_share_script(
        self, foo_roundtrip: MockRedisConnection
    ) -> None:
        """Each get_conn returns a handle onto the same scripted session."""
        repo = MockBaseCacheRepository(foo_roundtrip)
        await repository_pattern_without_impl.set_value(repo, "foo", 1)
        assert await repository_pattern_without_impl.get_value(repo, "foo") == 1
        assert foo_roundtrip.exhausted
