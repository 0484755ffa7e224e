"""Utility modules for unixhuman.

Provides:
- logger: get_logger for logging
"""

from unixhuman.utils.logger import get_logger

__all__ = ["get_logger"]
