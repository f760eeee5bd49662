"""Opt-in structlog output for the ``octoclient`` logger hierarchy.

Every module logs through ``structlog.get_logger(__name__)``, so events are
named ``octoclient.services.git`` and so on.  Nothing is configured on
import.  ``configure_logging`` attaches one rendering handler to the
``octoclient`` stdlib logger and leaves the root logger and its handlers
to the host application.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from octoclient.config import Settings

LOGGER_NAME = "octoclient"

# Marks the handler installed here so a second call replaces it.
_HANDLER_MARKER = "_octoclient_handler"


def _configure_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def configure_logging(
    *,
    json_logs: bool = True,
    log_level: str = "INFO",
    handler: logging.Handler | None = None,
) -> logging.Logger:
    """Route octoclient events to *handler* (stdout by default).

    structlog is pointed at the stdlib logging module unless the application
    configured structlog already, in which case its pipeline is kept.

    Args:
        json_logs: Render events as JSON; *False* uses the console renderer.
        log_level: Level name for the ``octoclient`` logger.
        handler: Destination for rendered events.  Its formatter is replaced.

    Returns:
        The configured ``octoclient`` stdlib logger.
    """
    if not structlog.is_configured():
        _configure_structlog()

    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    )
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    setattr(handler, _HANDLER_MARKER, True)

    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        if getattr(existing, _HANDLER_MARKER, False):
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(log_level.upper())
    logger.propagate = False
    return logger


def configure_from_settings(settings: Settings, handler: logging.Handler | None = None) -> logging.Logger:
    """Configure logging from ``Settings`` (console output in debug mode)."""
    return configure_logging(
        json_logs=not settings.debug, log_level=settings.log_level, handler=handler
    )
