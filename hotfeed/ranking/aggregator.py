"""
Cross-type aggregation for Hot Feed.

Merges threads, marketplace listings and brokers into one ranked feed with a
total, deterministic order:

    normalized score desc -> created_at desc -> id asc -> type asc

Candidates are never mutated. A candidate whose counters cannot be scored, or
whose score is not a finite number, is dropped from the feed and logged; the
rest of the feed is unaffected.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from loguru import logger

from hotfeed.models.content_item import ContentItem, ContentType, ThreadItem
from hotfeed.models.feed import EngagementScore, RankedEntry, RankedFeed
from hotfeed.ranking.recency import DEFAULT_WINDOW_DAYS, is_within_window, normalize
from hotfeed.ranking.scorer import compute_raw_score, is_finite_score


HIGHLIGHT_TABS: tuple[str, ...] = ("new", "trending", "solved")
DEFAULT_HIGHLIGHTS_LIMIT: int = 10


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ranking_key(entry: RankedEntry) -> tuple:
    """Sort key implementing the feed's total order."""
    item = entry.item
    return (
        -entry.score.normalized_score,
        -item.created_at.timestamp(),
        item.id,
        item.type.value,
    )


def score_candidates(
    candidates: Iterable[ContentItem],
    now: datetime,
    window_days: float = DEFAULT_WINDOW_DAYS,
    half_life_hours: Optional[float] = None,
) -> List[RankedEntry]:
    """
    Filter to the recency window and score every surviving candidate.

    Returns:
        Unsorted entries; candidates outside the window, with non-numeric
        counters or with a non-finite score are left out.
    """
    entries: List[RankedEntry] = []

    for item in candidates:
        if not is_within_window(item.created_at, now, window_days):
            continue

        try:
            raw_score = compute_raw_score(item)
        except (TypeError, ValueError) as e:
            logger.warning(f"Dropping {item.type.value} {item.id!r} from feed: unscorable counters ({e})")
            continue

        if not is_finite_score(raw_score):
            logger.warning(f"Dropping {item.type.value} {item.id!r} from feed: non-finite score {raw_score!r}")
            continue

        normalized = normalize(raw_score, item.created_at, now, window_days, half_life_hours)
        entries.append(RankedEntry(item=item, score=EngagementScore(raw_score=raw_score, normalized_score=normalized)))

    return entries


def aggregate(
    candidates: Iterable[ContentItem],
    limit: int,
    now: Optional[datetime] = None,
    window_days: float = DEFAULT_WINDOW_DAYS,
    half_life_hours: Optional[float] = None,
) -> RankedFeed:
    """
    Rank heterogeneous candidates into a single feed.

    Steps:
    1. Drop candidates outside the recency window
    2. Score the rest (raw + normalized); drop unscorable or non-finite scores
    3. Sort by normalized score desc, created_at desc, id asc
    4. Truncate to limit

    Args:
        candidates: Content items of any type.
        limit: Maximum number of items to return (caller-supplied).
        now: Reference time; defaults to the current UTC time.
        window_days: Eligibility window in days.
        half_life_hours: Optional decay half-life.

    Returns:
        RankedFeed whose last_updated is `now`.

    Raises:
        ValueError: If limit is negative.
    """
    if limit < 0:
        raise ValueError(f"limit cannot be negative, got {limit}")

    if now is None:
        now = _utc_now()

    entries = score_candidates(candidates, now, window_days, half_life_hours)
    entries.sort(key=ranking_key)

    logger.debug(f"Ranked {len(entries)} eligible candidates, returning top {limit}")
    return RankedFeed(last_updated=now, items=entries[:limit])


def select_highlights(
    candidates: Iterable[ContentItem],
    tab: str = "new",
    limit: int = DEFAULT_HIGHLIGHTS_LIMIT,
    now: Optional[datetime] = None,
    window_days: float = DEFAULT_WINDOW_DAYS,
) -> RankedFeed:
    """
    This week's thread highlights.

    Tabs:
    - "new": newest first
    - "trending": same order as aggregate()
    - "solved": solved threads first, then by reply count

    Raises:
        ValueError: If tab is unknown or limit is negative.
    """
    if tab not in HIGHLIGHT_TABS:
        raise ValueError(f"unknown highlights tab {tab!r}, expected one of {', '.join(HIGHLIGHT_TABS)}")
    if limit < 0:
        raise ValueError(f"limit cannot be negative, got {limit}")

    if now is None:
        now = _utc_now()

    threads = [c for c in candidates if c.type is ContentType.THREAD]
    entries = score_candidates(threads, now, window_days)

    if tab == "trending":
        entries.sort(key=ranking_key)
    elif tab == "solved":
        entries.sort(key=lambda e: (not _is_solved(e.item), -_reply_count(e.item), ranking_key(e)))
    else:
        entries.sort(key=lambda e: (-e.item.created_at.timestamp(), e.item.id))

    return RankedFeed(last_updated=now, items=entries[:limit])


def _is_solved(item: ContentItem) -> bool:
    return isinstance(item, ThreadItem) and item.is_solved


def _reply_count(item: ContentItem) -> float:
    return item.reply_count if isinstance(item, ThreadItem) else 0
