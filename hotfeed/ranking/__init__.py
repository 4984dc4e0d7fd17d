"""
Ranking module.

Scores, recency-filters, orders and decorates content for the hot feed.
"""

from hotfeed.ranking.scorer import (
    WEIGHT_VIEWS,
    WEIGHT_REPLIES,
    WEIGHT_LIKES,
    WEIGHT_BOOKMARKS,
    WEIGHT_SHARES,
    WEIGHT_REPORTS,
    ENGAGEMENT_WEIGHTS,
    score_counters,
    compute_raw_score,
    is_finite_score,
)
from hotfeed.ranking.recency import (
    DEFAULT_WINDOW_DAYS,
    age_in_hours,
    is_within_window,
    window_start,
    normalize,
)
from hotfeed.ranking.aggregator import (
    HIGHLIGHT_TABS,
    ranking_key,
    score_candidates,
    aggregate,
    select_highlights,
)
from hotfeed.ranking.assembler import (
    DisplayInfo,
    DISPLAY_RULES,
    assemble,
    assemble_feed,
)

__all__ = [
    # Scorer
    "WEIGHT_VIEWS",
    "WEIGHT_REPLIES",
    "WEIGHT_LIKES",
    "WEIGHT_BOOKMARKS",
    "WEIGHT_SHARES",
    "WEIGHT_REPORTS",
    "ENGAGEMENT_WEIGHTS",
    "score_counters",
    "compute_raw_score",
    "is_finite_score",
    # Recency
    "DEFAULT_WINDOW_DAYS",
    "age_in_hours",
    "is_within_window",
    "window_start",
    "normalize",
    # Aggregation
    "HIGHLIGHT_TABS",
    "ranking_key",
    "score_candidates",
    "aggregate",
    "select_highlights",
    # Display
    "DisplayInfo",
    "DISPLAY_RULES",
    "assemble",
    "assemble_feed",
]
