"""Structlog setup: library loggers and the command line configuration."""

import logging
import logging.config
import sys
from typing import Optional

import structlog

from settings import settings


def get_logger(name: str):
    """
    Structlog logger backed by the stdlib logger ``name``.

    Events go through stdlib logging, so nothing is printed until the caller
    configures handlers (or calls configure_logging).
    """
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger)


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure structlog on top of stdlib logging.

    Args:
        level: Level name overriding PATCH_VIEW_LOG_LEVEL
    """
    log_level_name = (level or settings.log_level()).upper()
    log_level = getattr(logging, log_level_name, logging.WARNING)

    shared_processors = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if settings.log_format() == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors
        + [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    # stdout carries the report, so logs go to stderr
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"()": lambda: formatter}},
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": sys.stderr,
                }
            },
            "root": {"handlers": ["default"], "level": log_level},
            "loggers": {
                "git": {"handlers": ["default"], "level": logging.WARNING, "propagate": False},
            },
        }
    )
