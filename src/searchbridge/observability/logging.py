"""Structured logging configuration using structlog.

Library modules log through ``logging.getLogger(__name__)``. Once
``setup_logging()`` has run, the root handler renders those records with
structlog's ``ProcessorFormatter``, so they carry any context bound with
``bind_search_context()``.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from searchbridge.config.settings import ObservabilitySettings

NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(settings: ObservabilitySettings | None = None) -> None:
    """Configure structured logging for SearchBridge.

    Args:
        settings: Observability settings. Uses defaults if None.
    """
    debug = settings.debug if settings else False
    log_level = "DEBUG" if debug else (settings.log_level.upper() if settings else "INFO")
    log_format = settings.log_format if settings else "json"

    # Applied to structlog events and to records from stdlib loggers alike
    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level, logging.INFO))

    noisy_level = logging.NOTSET if debug else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)


def bind_search_context(index_id: str, collection: str) -> None:
    """Tag subsequent log lines of the current context with the search target."""
    structlog.contextvars.bind_contextvars(index_id=index_id, collection=collection)


def clear_search_context() -> None:
    structlog.contextvars.unbind_contextvars("index_id", "collection")
