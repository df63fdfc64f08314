"""Logging helpers for tintrack.

All loggers hang off the "tintrack" logger, which carries a NullHandler so a
host that never configures logging sees nothing. Reconciliation and handle
churn log at DEBUG; recoverable faults (bad settings, failing style
loaders, failing queued tasks) log at WARNING.

Example:
    >>> from tintrack.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Reconciling semantic ranges")
"""

from __future__ import annotations

import logging

ROOT_LOGGER = "tintrack"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the tintrack namespace.

    Args:
        name: Logger name (typically __name__)

    Example:
        >>> get_logger("mymodule").name
        'tintrack.mymodule'
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
