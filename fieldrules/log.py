"""Structured logging setup.

Loggers returned by ``get_logger()`` hand their events to the standard
``logging`` logger of the same name, so the library stays silent until the
host application configures logging. ``configure_logging()`` is the opt-in
setup for applications that want fieldrules' own processor chain.
"""

import logging
import sys
from typing import Optional

import structlog

from fieldrules.config import Settings, get_settings

ROOT_LOGGER_NAME = "fieldrules"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: Optional[str] = None):
    """
    Get a structlog logger backed by a stdlib logger.

    Args:
        name: Module name (typically __name__). If None, returns the root fieldrules logger.

    Returns:
        A structlog logger whose output follows the host's logging configuration.
    """
    return structlog.wrap_logger(
        logging.getLogger(name or ROOT_LOGGER_NAME),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure structlog and the fieldrules stdlib logger from settings.

    DEBUG selects the console renderer, otherwise events are rendered as JSON.
    LOG_LEVEL sets the fieldrules level (unknown names fall back to INFO).
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.WARNING,
        format="%(message)s",
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)
