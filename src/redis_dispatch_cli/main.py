"""CLI entrypoint using typer.

Writes one key through a pooled lease, reads it back, and prints the
result. Any failure prints the error and exits with code 1.
"""

from __future__ import annotations

import asyncio

import structlog
import typer
from pydantic import ValidationError
from rich.console import Console

from redis_dispatch_core.config.settings import Settings
from redis_dispatch_core.exceptions import InvalidConfigurationError, RedisDispatchError
from redis_dispatch_core.interfaces import ConnectionProvider
from redis_dispatch_infra.cache.guard import run_query
from redis_dispatch_infra.cache.pool import create_pool
from redis_dispatch_strategies.common import common_get_value, common_set_value
from redis_dispatch_strategies.observability import backend_context, configure_logging

DEMO_KEY = "foo"
DEMO_VALUE = 1

app = typer.Typer(
    name="redis-dispatch",
    help="Write one key to Redis and read it back",
    add_completion=False,
)
console = Console()
logger = structlog.get_logger()


@app.command()
def run() -> None:
    """Set foo=1, read it back and print it."""
    try:
        settings = _load_settings()
        configure_logging(settings)
        result = asyncio.run(_roundtrip(settings))
    except RedisDispatchError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(f"result = {result}")


def _load_settings() -> Settings:
    """Read settings from the environment.

    Raises:
        InvalidConfigurationError: if any setting fails validation.
    """
    try:
        return Settings()
    except ValidationError as exc:
        raise InvalidConfigurationError() from exc


async def _roundtrip(settings: Settings) -> int:
    """Write the demo key and read it back through one lease."""
    provider: ConnectionProvider = create_pool(settings)
    with backend_context("pool"):
        try:
            async with provider.acquire() as conn:
                await run_query(
                    common_set_value(conn, DEMO_KEY, DEMO_VALUE),
                    timeout=settings.query_timeout_seconds,
                )
                result = await run_query(
                    common_get_value(conn, DEMO_KEY),
                    timeout=settings.query_timeout_seconds,
                )
            logger.info("roundtrip_complete", key=DEMO_KEY)
            return result
        finally:
            await provider.aclose()


if __name__ == "__main__":
    app()
