"""Minimal logging utilities for unixhuman.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from unixhuman.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Matcher ready")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "unixhuman." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'unixhuman.mymodule'
    """
    if not (name == "unixhuman" or name.startswith("unixhuman.")):
        name = f"unixhuman.{name}"
    return logging.getLogger(name)
