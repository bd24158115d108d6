"""
Logging helpers.

The package logger is silent by default. Applications enable it with
``setup_logging`` or with the standard logging API::

    import logging
    logging.getLogger("text_art_converter").setLevel(logging.DEBUG)
"""

import logging
import sys
from typing import Optional

LOGGER_NAME = "text_art_converter"

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger or one of its children."""
    if name:
        return logger.getChild(name)
    return logger


def setup_logging(debug: bool = False, log_path: Optional[str] = None) -> logging.Logger:
    """
    Attach console (and optionally file) handlers to the package logger.

    Args:
        debug: Log DEBUG and above to stderr instead of WARNING and above
        log_path: Optional file that receives every record at DEBUG level

    Returns:
        The configured package logger
    """
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()

    level = logging.DEBUG if debug else logging.WARNING

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(stream_handler)

    if log_path:
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(file_handler)

    logger.setLevel(logging.DEBUG if (debug or log_path) else logging.WARNING)
    logger.propagate = False
    return logger
