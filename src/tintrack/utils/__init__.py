"""Utility modules for tintrack.

Provides:
- logger: get_logger for logging
"""

from tintrack.utils.logger import get_logger

__all__ = [
    "get_logger",
]
