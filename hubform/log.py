"""Logging setup for the hubform CLI and server."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "hubform"


def configure_logging(level: str = "INFO", console: Console | None = None) -> logging.Logger:
    """Attach a RichHandler to the package logger.

    Safe to call more than once; the handler is replaced, not duplicated.

    Args:
        level: Log level name (e.g., "INFO", "DEBUG").
        console: Optional rich Console to log to (defaults to stderr).

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False
    return logger
