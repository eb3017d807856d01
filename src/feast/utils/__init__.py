"""Utility modules for Feast.

Provides:
- logger: get_logger for logging
"""

from feast.utils.logger import get_logger

__all__ = [
    "get_logger",
]
