"""Structured logging for the cache layer.

structlog owns the pipeline; stdlib records (redis-py's included) are fed
through the same processors by a ``ProcessorFormatter`` on the root handler.
Connection URLs are redacted in every event, whichever logger emits them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from structlog.contextvars import bound_contextvars, merge_contextvars

from redis_dispatch_infra.cache.url import sanitize_url

if TYPE_CHECKING:
    from redis_dispatch_core.config.settings import Settings

_QUIET_LOGGERS = ("redis", "asyncio")


def redact_urls(
    _logger: Any, _method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Strip passwords from ``url`` and ``*_url`` event keys."""
    for key, value in event_dict.items():
        if isinstance(value, str) and (key == "url" or key.endswith("_url")):
            event_dict[key] = sanitize_url(value)
    return event_dict


def _renderer(log_format: str) -> list[structlog.types.Processor]:
    if log_format == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer()]


def configure_logging(settings: Settings) -> None:
    """Install the structlog pipeline and a single root handler."""
    pre_chain: list[structlog.types.Processor] = [
        merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.UnicodeDecoder(),
        redact_urls,
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderer(settings.log_format),
            ],
            foreign_pre_chain=pre_chain,
        )
    )

    level = _resolve_level(settings.log_level)
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)

    # redis-py logs every reconnect at DEBUG
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


@contextmanager
def backend_context(backend: str) -> Iterator[None]:
    """Tag log entries emitted inside the block with ``backend``."""
    with bound_contextvars(backend=backend):
        yield


def _resolve_level(level_name: str) -> int:
    return logging.getLevelNamesMapping().get(level_name.upper(), logging.INFO)
