"""Logging configuration."""

import logging
import sys

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the root logger with a single stderr handler.

    Safe to call on every Streamlit rerun: existing handlers are replaced,
    not stacked.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).

    Returns:
        The configured root logger.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))

    logger = logging.getLogger()
    logger.setLevel(log_level)
    logger.handlers = [handler]
    return logger
