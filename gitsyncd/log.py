"""
Logging setup for gitsyncd.

All modules log through children of the "gitsyncd" logger; the command line
attaches a single stderr handler to it at the requested level.
"""

import logging
import sys

LOGGER_NAME = "gitsyncd"
LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"

_handler = None


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def configure_logging(level="ERROR", stream=None) -> logging.Logger:
    """
    Attach a stderr handler to the package logger.

    Calling it again replaces the previous handler instead of adding another.

    Args:
        level: Level name or number
        stream: Output stream (default: sys.stderr)

    Returns:
        The package logger
    """
    global _handler
    logger = get_logger()

    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = False
    return logger
