"""
Utility helpers (logging setup).
"""

from hotfeed.utils.logger import setup_logging, reset_logging

__all__ = [
    "setup_logging",
    "reset_logging",
]
