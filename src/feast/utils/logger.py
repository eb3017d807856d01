"""Minimal logging utilities for Feast.

Provides a get_logger function that namespaces standard library loggers
under "feast." so applications can tune combinator diagnostics in one place.

Example:
    >>> from feast.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("parser failed at offset %d", 3)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "feast." prefix. No handlers
    are attached; configuring output is left to the application.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("combinators")
        >>> logger.name
        'feast.combinators'
    """
    if not (name == "feast" or name.startswith("feast.")):
        name = f"feast.{name}"
    return logging.getLogger(name)
