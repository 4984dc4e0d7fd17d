"""
Recency normalization for Hot Feed.

Content older than the recency window is not eligible for the feed at all.
Inside the window the raw score is used as-is, unless an exponential
half-life is configured.
"""

from datetime import datetime, timedelta
from typing import Optional

from hotfeed.config import HOT_WINDOW_DAYS


# Default eligibility window ("last 7 days")
DEFAULT_WINDOW_DAYS: float = HOT_WINDOW_DAYS


def age_in_hours(created_at: datetime, now: datetime) -> float:
    """
    Age of an item in hours. Future-dated items have age 0.
    """
    age = (now - created_at).total_seconds() / 3600
    return max(age, 0.0)


def is_within_window(created_at: datetime, now: datetime, window_days: float = DEFAULT_WINDOW_DAYS) -> bool:
    """
    True when the item is at most window_days old (boundary inclusive).
    """
    return age_in_hours(created_at, now) <= window_days * 24


def window_start(now: datetime, window_days: float = DEFAULT_WINDOW_DAYS) -> datetime:
    """Oldest created_at still inside the window."""
    return now - timedelta(days=window_days)


def normalize(
    raw_score: float,
    created_at: datetime,
    now: datetime,
    window_days: float = DEFAULT_WINDOW_DAYS,
    half_life_hours: Optional[float] = None,
) -> float:
    """
    Adjust a raw score for content age.

    Rules:
    - Outside the window: 0.0
    - Negative raw scores are clamped to 0.0
    - half_life_hours=None: hard cutoff only, score unchanged
    - half_life_hours set: score * 0.5 ** (age_hours / half_life_hours)

    With counters fixed, the result never increases as the item ages.

    Args:
        raw_score: Output of the engagement scorer.
        created_at: Item creation time (aware).
        now: Reference time (aware).
        window_days: Eligibility window in days.
        half_life_hours: Optional decay half-life.

    Returns:
        Normalized score (>= 0.0 for finite input).
    """
    if not is_within_window(created_at, now, window_days):
        return 0.0

    score = max(raw_score, 0.0)

    if half_life_hours is None:
        return score

    if half_life_hours <= 0:
        raise ValueError(f"half_life_hours must be positive, got {half_life_hours}")

    return score * 0.5 ** (age_in_hours(created_at, now) / half_life_hours)
