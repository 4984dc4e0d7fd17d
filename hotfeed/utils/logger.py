"""
Centralized logging configuration for Hot Feed.

Usage:
    from loguru import logger
    from hotfeed.utils.logger import setup_logging

    setup_logging(log_dir=Path("logs"), log_level="INFO", app_name="api")
    logger.info("Your message")
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

_configured = False


def setup_logging(log_dir: Optional[Path] = None, log_level: str = "INFO", app_name: str = "hotfeed") -> None:
    """
    Configure logging with console and file outputs.

    Safe to call more than once; only the first call installs sinks.

    Args:
        log_dir: Directory to store log files. If None, file logging is disabled.
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        app_name: Name prefix for log files (e.g., "api", "cli")
    """
    global _configured

    if _configured:
        return

    logger.remove()

    logger.add(
        sys.stderr,
        level=log_level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    )

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        # Rotates at midnight, keeps two weeks
        logger.add(
            log_dir / f"{app_name}_{{time:YYYY-MM-DD}}.log",
            level="INFO",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            rotation="00:00",
            retention="14 days",
            compression="gz",
            encoding="utf-8",
        )

        logger.info(f"Logging configured. Log directory: {log_dir}")

    _configured = True


def reset_logging() -> None:
    """Drop all sinks and allow setup_logging() to run again (used by tests)."""
    global _configured
    logger.remove()
    _configured = False
