"""
Configuration module for Hot Feed.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading and provides safe defaults where appropriate.
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Load .env file from project root
# The .env file should be in the root directory (parent of hotfeed/)
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)


def _optional_float(name: str) -> Optional[float]:
    """Read a float env var, treating empty/unset as None."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    return float(raw)


# =============================================================================
# Application Environment
# =============================================================================

# Application environment: "development", "staging", or "production"
APP_ENV: str = os.getenv("APP_ENV", "development")

# Enable debug mode (Flask debug, verbose errors)
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

# Minimum log level for the console sink
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()

# Directory for rotating log files; empty disables file logging
LOG_DIR: str = os.getenv("LOG_DIR", "")


# =============================================================================
# Community API Configuration
# =============================================================================

# Base URL of the community REST API that owns threads, content and brokers
API_BASE_URL: str = os.getenv("API_BASE_URL", os.getenv("INTERNAL_API_URL", "http://127.0.0.1:3001"))

# HTTP request timeout in seconds
REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))


# =============================================================================
# Ranking Configuration
# =============================================================================

# Trailing window (days) within which content is eligible for the hot feed
HOT_WINDOW_DAYS: float = float(os.getenv("HOT_WINDOW_DAYS", "7"))

# Optional exponential decay half-life in hours (unset = hard cutoff only)
HOT_DECAY_HALF_LIFE_HOURS: Optional[float] = _optional_float("HOT_DECAY_HALF_LIFE_HOURS")

# Items returned when the caller does not pass a limit
HOT_DEFAULT_LIMIT: int = int(os.getenv("HOT_DEFAULT_LIMIT", "50"))

# Hard cap on caller-supplied limits
HOT_MAX_LIMIT: int = int(os.getenv("HOT_MAX_LIMIT", "100"))

# Seconds a computed feed may be served from cache
FEED_CACHE_TTL: int = int(os.getenv("FEED_CACHE_TTL", "60"))


# =============================================================================
# Helper Functions
# =============================================================================

def is_production() -> bool:
    """Check if running in production environment."""
    return APP_ENV == "production"


def is_development() -> bool:
    """Check if running in development environment."""
    return APP_ENV == "development"


def validate_config() -> list[str]:
    """
    Validate configuration values.

    Returns:
        List of missing or invalid configuration keys (empty if all valid).
    """
    errors = []

    if is_production() and not API_BASE_URL.startswith("https://") and "127.0.0.1" not in API_BASE_URL and "localhost" not in API_BASE_URL:
        errors.append("API_BASE_URL must use https:// in production")

    if not (API_BASE_URL.startswith("http://") or API_BASE_URL.startswith("https://")):
        errors.append(f"API_BASE_URL must start with http:// or https://, got {API_BASE_URL}")

    if REQUEST_TIMEOUT < 1:
        errors.append("REQUEST_TIMEOUT must be at least 1 second")

    if HOT_WINDOW_DAYS <= 0:
        errors.append("HOT_WINDOW_DAYS must be positive")

    if HOT_DECAY_HALF_LIFE_HOURS is not None and HOT_DECAY_HALF_LIFE_HOURS <= 0:
        errors.append("HOT_DECAY_HALF_LIFE_HOURS must be positive when set")

    if HOT_DEFAULT_LIMIT < 0:
        errors.append("HOT_DEFAULT_LIMIT cannot be negative")

    if HOT_MAX_LIMIT < 1:
        errors.append("HOT_MAX_LIMIT must be at least 1")

    if FEED_CACHE_TTL < 0:
        errors.append("FEED_CACHE_TTL cannot be negative")

    return errors


def print_config_summary() -> None:
    """Print a summary of current configuration (safe for logs, no secrets)."""
    print(f"  APP_ENV: {APP_ENV}")
    print(f"  DEBUG: {DEBUG}")
    print(f"  LOG_LEVEL: {LOG_LEVEL}")
    print(f"  LOG_DIR: {LOG_DIR or '(console only)'}")
    print(f"  API_BASE_URL: {API_BASE_URL}")
    print(f"  REQUEST_TIMEOUT: {REQUEST_TIMEOUT}s")
    print(f"  HOT_WINDOW_DAYS: {HOT_WINDOW_DAYS:g}")
    print(f"  HOT_DECAY_HALF_LIFE_HOURS: {HOT_DECAY_HALF_LIFE_HOURS if HOT_DECAY_HALF_LIFE_HOURS is not None else '(disabled)'}")
    print(f"  HOT_DEFAULT_LIMIT: {HOT_DEFAULT_LIMIT}")
    print(f"  HOT_MAX_LIMIT: {HOT_MAX_LIMIT}")
    print(f"  FEED_CACHE_TTL: {FEED_CACHE_TTL}s")
