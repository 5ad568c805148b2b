"""Loguru setup for the Bodegoes API.

Every record carries a ``service`` extra so API and UI logs can be told
apart once they share a collector.  Stdlib loggers used by the server,
the OpenAI SDK and the Places HTTP client are routed through loguru.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable

from loguru import logger

SERVICE_NAME = "bodegoes-api"

INTERCEPTED_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "fastapi",
    "openai",
    "httpx",
    "pydantic_ai",
)

# httpx logs every Places/OpenAI request at INFO
NOISY_LOGGERS = {"httpx": logging.WARNING}

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[service]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Forward a stdlib record to loguru, keeping the caller's location."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).bind(stdlib=record.name).log(
            level, record.getMessage()
        )


def setup_logging(
    *,
    level: str = "INFO",
    json: bool = False,
    service: str = SERVICE_NAME,
    loggers: Iterable[str] = INTERCEPTED_LOGGERS,
) -> None:
    """Make loguru the only logging backend.

    Args:
        level: Minimum level for the stderr sink.
        json: Emit serialized JSON records instead of coloured text.
        service: Value of the ``service`` extra bound to every record.
        loggers: Stdlib logger names to route through loguru.
    """
    logger.remove()
    logger.configure(extra={"service": service})

    if json:
        logger.add(sys.stderr, level=level.upper(), serialize=True)
    else:
        logger.add(sys.stderr, level=level.upper(), format=TEXT_FORMAT, colorize=True)

    intercept = InterceptHandler()
    for name in loggers:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = [intercept]
        stdlib_logger.propagate = False
        stdlib_logger.setLevel(NOISY_LOGGERS.get(name, logging.NOTSET))

    logging.root.handlers = [intercept]
    logging.root.setLevel(logging.DEBUG)
