"""Utility modules for Garabato.

Provides:
- logger: get_logger and the nesting-limit fallback message
"""

from garabato.utils.logger import get_logger

__all__ = [
    "get_logger",
]
