"""Package logger setup."""

import logging
import sys
from typing import Optional, TextIO


LOGGER_NAME = "multibase64"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ConsoleHandler(logging.StreamHandler):
    """Stream handler owned by the package logger."""


def setup_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Attach a console handler to the package logger, or retune the existing one.

    Args:
        level: Level for both the logger and its handler.
        stream: Destination stream; stdout when the handler is first created.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    handler = next((h for h in logger.handlers if isinstance(h, ConsoleHandler)), None)
    if handler is None:
        handler = ConsoleHandler(stream or sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)
    handler.setLevel(level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger."""
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


logger = setup_logging()
