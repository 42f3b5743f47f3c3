"""structlog configuration."""

from __future__ import annotations

import logging
import sys

import structlog

from widgetize.core.models.config import LogConfig


def configure_logging(config: LogConfig | None = None) -> None:
    """
    Configure structlog for the process.

    Args:
        config: Logging configuration; defaults to INFO console output
    """
    config = config or LogConfig()
    level = logging.getLevelName(config.level)

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if config.structured:
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
