"""
Configuration module.

Handles environment variables, API endpoints, and ranking settings.
"""

from hotfeed.config.config import (
    APP_ENV,
    DEBUG,
    LOG_LEVEL,
    LOG_DIR,
    API_BASE_URL,
    REQUEST_TIMEOUT,
    HOT_WINDOW_DAYS,
    HOT_DECAY_HALF_LIFE_HOURS,
    HOT_DEFAULT_LIMIT,
    HOT_MAX_LIMIT,
    FEED_CACHE_TTL,
    is_production,
    is_development,
    validate_config,
    print_config_summary,
)

__all__ = [
    "APP_ENV",
    "DEBUG",
    "LOG_LEVEL",
    "LOG_DIR",
    "API_BASE_URL",
    "REQUEST_TIMEOUT",
    "HOT_WINDOW_DAYS",
    "HOT_DECAY_HALF_LIFE_HOURS",
    "HOT_DEFAULT_LIMIT",
    "HOT_MAX_LIMIT",
    "FEED_CACHE_TTL",
    "is_production",
    "is_development",
    "validate_config",
    "print_config_summary",
]
