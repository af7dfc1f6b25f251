"""
Logging configuration.

structlog on top of the standard library, writing to stderr so that stdout
only ever carries the command's single result line.
"""

import logging
import sys

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(level: str = "WARNING") -> None:
    """
    Configure structlog for the package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    log_level = getattr(logging, level.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f"unknown log level: {level!r}")

    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a structlog logger (typically for ``__name__``).

    Events always go through the standard library logger of that name, so
    before ``configure_logging`` runs nothing is written to stdout.
    """
    return structlog.wrap_logger(logging.getLogger(name))
