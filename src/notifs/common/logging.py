"""Structured logging setup built on structlog.

Library loggers write through the stdlib ``notifs`` logger, which carries a
``NullHandler``: nothing is emitted until the application configures
logging (``setup_logging`` or its own stdlib handlers).
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from notifs.common.settings import get_settings

LIBRARY_LOGGER = "notifs"

logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())


def setup_logging(level: str | None = None, json: bool | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: Log level name; defaults to ``Settings.log_level``
        json: Render JSON lines instead of console output; defaults to
            ``Settings.log_json``
    """
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    use_json = settings.log_json if json is None else json

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )

    renderer: Any
    if use_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger backed by the stdlib logger ``name``."""
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
