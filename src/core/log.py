"""Logging configuration for the ray tracer."""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None, name: str = "") -> logging.Logger:
    """
    Set up console logging.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        name: Logger to configure; the root logger when empty

    Returns:
        Configured logger instance
    """
    if level is None:
        level = "INFO"
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name or None)
    logger.setLevel(numeric_level)

    # Calling twice must not duplicate output.
    for handler in list(logger.handlers):
        if getattr(handler, "_raytracer_console", False):
            logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler._raytracer_console = True
    logger.addHandler(console_handler)

    return logger
