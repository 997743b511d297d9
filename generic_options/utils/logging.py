"""structlog setup driven by :class:`~generic_options.config.Settings`."""

import logging
import sys
from typing import Any

import structlog

from generic_options.config import Settings, get_settings

# Library loggers that stay quiet regardless of the configured level.
# SQL echo is controlled by Settings.debug instead.
QUIET_LOGGERS = ("sqlalchemy.engine", "alembic.runtime.migration")


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_logging(settings: Settings | None = None) -> None:
    """Route option events through structlog.

    Level and output format come from ``settings.log_level`` and
    ``settings.log_format``, so ``GENERIC_OPTIONS_LOG_LEVEL`` and
    ``GENERIC_OPTIONS_LOG_FORMAT`` apply when no settings are passed.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            _renderer(settings.log_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Pool events from generic_options.database go through stdlib logging
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Get a structlog logger."""
    return structlog.get_logger(name)
