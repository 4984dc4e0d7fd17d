"""
Engagement scoring for Hot Feed.

Maps a content item's interaction counters to one comparable scalar.
Pure, deterministic and total over every ContentItem variant: counters a
variant does not have are treated as 0.
"""

import math

from hotfeed.models.content_item import ContentItem, EngagementCounters


# =============================================================================
# Scoring Configuration
# =============================================================================

# Weight per interaction type. A share costs the user more than a view, so it
# counts for more; reports subtract at the same weight as shares.
WEIGHT_VIEWS: float = 1
WEIGHT_REPLIES: float = 3
WEIGHT_LIKES: float = 4
WEIGHT_BOOKMARKS: float = 2
WEIGHT_SHARES: float = 5
WEIGHT_REPORTS: float = -5

ENGAGEMENT_WEIGHTS: dict[str, float] = {
    "views": WEIGHT_VIEWS,
    "replies": WEIGHT_REPLIES,
    "likes": WEIGHT_LIKES,
    "bookmarks": WEIGHT_BOOKMARKS,
    "shares": WEIGHT_SHARES,
    "reports": WEIGHT_REPORTS,
}


# =============================================================================
# Scoring Functions
# =============================================================================

def score_counters(counters: EngagementCounters) -> float:
    """
    Weighted linear combination of interaction counters.

    Formula:
        views*1 + replies*3 + likes*4 + bookmarks*2 + shares*5 - reports*5

    Inputs are not clamped: negative counters lower the score and a
    non-finite counter yields a non-finite score.

    Example:
        >>> score_counters(EngagementCounters(views=100, replies=10, likes=5, bookmarks=2, shares=1))
        159
    """
    return (
        counters.views * WEIGHT_VIEWS
        + counters.replies * WEIGHT_REPLIES
        + counters.likes * WEIGHT_LIKES
        + counters.bookmarks * WEIGHT_BOOKMARKS
        + counters.shares * WEIGHT_SHARES
        + counters.reports * WEIGHT_REPORTS
    )


def compute_raw_score(item: ContentItem) -> float:
    """
    Raw engagement score of a content item.

    This is a pure function - it does not modify the input item.
    """
    return score_counters(item.engagement_counters())


def is_finite_score(value: float) -> bool:
    """False for NaN, +/-inf and non-numeric values."""
    try:
        return math.isfinite(value)
    except TypeError:
        return False
