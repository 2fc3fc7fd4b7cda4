"""structlog setup.

Learn: Every module does `logger = structlog.get_logger()` and logs
dotted event names with keyword context. This module decides how those
events are rendered: a readable console renderer in development, one
JSON object per line everywhere else. The request_id bound by
RequestIdMiddleware is merged in from contextvars.
"""

import logging

import structlog

from blogapi.config import settings


def configure_logging() -> None:
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.environment == "development":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
