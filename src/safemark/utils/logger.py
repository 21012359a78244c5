"""Minimal logging utilities for Safemark.

Provides a simple get_logger function that wraps the standard library logging.
Safemark never configures handlers; applications decide where records go.

Example:
    >>> from safemark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rejected link target")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "safemark." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'safemark.mymodule'
    """
    if not (name == "safemark" or name.startswith("safemark.")):
        name = f"safemark.{name}"
    return logging.getLogger(name)
