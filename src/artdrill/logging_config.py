"""Logging setup for the API process."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO", debug: bool = False) -> logging.Logger:
    """Configure the ``artdrill`` logger with a single stderr handler.

    Args:
        level: Level name from settings (e.g. "INFO"). Unknown names fall back to INFO.
        debug: Force DEBUG regardless of ``level``.

    Returns:
        Root logger for artdrill
    """
    resolved = logging.DEBUG if debug else logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    logger = logging.getLogger("artdrill")
    logger.setLevel(resolved)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.setLevel(resolved)
    logger.addHandler(handler)

    return logger
