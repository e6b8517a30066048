"""Structured logging configuration for jjview.

Console output by default; JSON when ``JJVIEW_LOG_FORMAT=json``. The level
comes from ``JJVIEW_LOG_LEVEL`` (default ``WARNING``) so the summary output
on stdout stays clean.

Usage:
    from jjview.logging import configure_logging, get_logger

    configure_logging()
    log = get_logger(__name__)
    log.info("refresh_done", files=3)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import List, Optional

import structlog
from structlog.types import Processor

__all__ = ["configure_logging", "get_logger"]

LOG_FORMAT_ENV_VAR = "JJVIEW_LOG_FORMAT"
LOG_LEVEL_ENV_VAR = "JJVIEW_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def _get_log_level() -> int:
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.WARNING)


def _is_json_output() -> bool:
    return os.environ.get(LOG_FORMAT_ENV_VAR, "").lower() == "json"


def _get_shared_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(*, force_json: bool = False, level: Optional[int] = None) -> None:
    """Configure structlog and the stdlib root logger.

    Safe to call more than once; later calls replace the handler.
    """
    use_json = force_json or _is_json_output()
    log_level = level if level is not None else _get_log_level()

    renderer: Processor
    if use_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *_get_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
            foreign_pre_chain=_get_shared_processors(),
        )
    )
    root_logger.addHandler(handler)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to *name*."""
    log: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return log
