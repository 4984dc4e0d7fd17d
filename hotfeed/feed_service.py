"""
Hot Feed service - gathers, ranks and caches feeds.

    Sources -> Recency window -> Scoring -> Ordering -> Limit -> Cache

Steps:
1. Resolve the requested content types and limit
2. Serve from cache when a fresh feed exists for (types, window, limit)
3. Fetch candidates from each source (with error isolation)
4. Rank with aggregate()
5. Cache the feed when every source answered

Design principles:
- Error isolation: one source failure doesn't stop others
- Stateless ranking: the cache is the only state, and it holds whole results
- Recompute on demand: ranking is cheap enough to run on every miss
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Iterable, List, Optional
import time

from loguru import logger

from hotfeed.cache import FeedCache
from hotfeed.config import (
    FEED_CACHE_TTL,
    HOT_DECAY_HALF_LIFE_HOURS,
    HOT_DEFAULT_LIMIT,
    HOT_MAX_LIMIT,
    HOT_WINDOW_DAYS,
)
from hotfeed.models.content_item import ContentItem, ContentType
from hotfeed.models.feed import RankedFeed
from hotfeed.ranking.aggregator import (
    DEFAULT_HIGHLIGHTS_LIMIT,
    HIGHLIGHT_TABS,
    aggregate,
    select_highlights,
)
from hotfeed.ranking.assembler import assemble
from hotfeed.ranking.recency import window_start
from hotfeed.sources import CandidateSource, get_default_sources


# =============================================================================
# Result Data Structures
# =============================================================================

@dataclass
class SourceResult:
    """Result of fetching from a single source."""
    source_name: str
    items_fetched: int
    success: bool
    error: Optional[str] = None
    duration_ms: float = 0.0


@dataclass
class FeedResult:
    """A ranked feed plus how it was produced."""
    feed: RankedFeed
    source_results: List[SourceResult] = field(default_factory=list)
    cached: bool = False
    duration_ms: float = 0.0

    @property
    def sources_succeeded(self) -> int:
        return sum(1 for r in self.source_results if r.success)

    @property
    def sources_failed(self) -> int:
        return sum(1 for r in self.source_results if not r.success)

    @property
    def total_candidates(self) -> int:
        return sum(r.items_fetched for r in self.source_results)

    @property
    def all_sources_failed(self) -> bool:
        return bool(self.source_results) and self.sources_succeeded == 0

    def to_summary(self) -> str:
        """Generate a human-readable summary."""
        lines = [
            "=" * 60,
            "HOT FEED",
            "=" * 60,
            f"Computed: {self.feed.last_updated.strftime('%Y-%m-%d %H:%M:%S %Z')}",
            f"Duration: {self.duration_ms:.0f}ms{' (cached)' if self.cached else ''}",
            "",
            "Sources:",
        ]

        for sr in self.source_results:
            status = "✓" if sr.success else "✗"
            lines.append(f"  {status} {sr.source_name}: {sr.items_fetched} candidates ({sr.duration_ms:.0f}ms)")
            if sr.error:
                lines.append(f"      Error: {sr.error}")

        lines.extend([
            "",
            f"Candidates: {self.total_candidates}",
            f"Ranked:     {len(self.feed)}",
            "",
        ])

        if self.feed.is_empty:
            lines.append("(no hot content in the window)")

        for rank, entry in enumerate(self.feed, start=1):
            display = assemble(entry.item)
            lines.append(
                f"{rank:>3}. [{display.label}] {entry.item.title} "
                f"(score {entry.score.normalized_score:g}) {display.link_path}"
            )

        lines.append("=" * 60)
        return "\n".join(lines)


# =============================================================================
# Service Configuration
# =============================================================================

@dataclass
class FeedConfig:
    """
    Settings for the feed service. Defaults come from hotfeed.config.
    """
    window_days: float = HOT_WINDOW_DAYS
    half_life_hours: Optional[float] = HOT_DECAY_HALF_LIFE_HOURS
    default_limit: int = HOT_DEFAULT_LIMIT
    max_limit: int = HOT_MAX_LIMIT

    # Seconds a computed feed is reused (0 = no caching)
    cache_ttl: int = FEED_CACHE_TTL

    # Content types to rank (None = all)
    types: Optional[frozenset] = None

    @classmethod
    def from_args(cls, args) -> "FeedConfig":
        """
        Create config from argparse namespace.

        Raises:
            ValueError: If a window or half-life is not positive, or a type is unknown.
        """
        config = cls()
        window_days = getattr(args, "window_days", None)
        if window_days is not None:
            if window_days <= 0:
                raise ValueError(f"--window-days must be positive, got {window_days:g}")
            config.window_days = window_days
        half_life_hours = getattr(args, "half_life_hours", None)
        if half_life_hours is not None:
            if half_life_hours <= 0:
                raise ValueError(f"--half-life-hours must be positive, got {half_life_hours:g}")
            config.half_life_hours = half_life_hours
        if getattr(args, "types", None):
            config.types = parse_types(args.types)
        return config


def parse_types(values: Iterable[str]) -> frozenset:
    """
    Parse content type names (comma-separated values allowed).

    Raises:
        ValueError: On an unknown type name.
    """
    types = set()
    for value in values:
        for name in str(value).split(","):
            name = name.strip()
            if not name:
                continue
            try:
                types.add(ContentType(name))
            except ValueError:
                valid = ", ".join(t.value for t in ContentType)
                raise ValueError(f"unknown content type {name!r}, expected one of: {valid}") from None
    return frozenset(types)


# =============================================================================
# Service
# =============================================================================

class HotFeedService:
    """
    Produces ranked hot feeds from a set of candidate sources.

    Usage:
        service = HotFeedService()
        result = service.get_hot_feed(limit=5)
        print(result.to_summary())
    """

    def __init__(
        self,
        sources: Optional[List[CandidateSource]] = None,
        config: Optional[FeedConfig] = None,
        cache: Optional[FeedCache] = None,
    ):
        """
        Args:
            sources: Candidate sources. Defaults to one API source per content type.
            config: Service settings. Defaults to FeedConfig().
            cache: Feed cache. Defaults to an in-process FeedCache with config.cache_ttl.
        """
        self.config = config or FeedConfig()
        self.sources = sources if sources is not None else get_default_sources(self.config.types)
        self.cache = cache if cache is not None else FeedCache(timeout=self.config.cache_ttl)

    def resolve_limit(self, limit: Optional[int]) -> int:
        """
        Default a missing limit and cap it at max_limit.

        Raises:
            ValueError: If limit is negative.
        """
        if limit is None:
            limit = self.config.default_limit
        if limit < 0:
            raise ValueError(f"limit cannot be negative, got {limit}")
        return min(limit, self.config.max_limit)

    def resolve_types(self, types: Optional[Iterable[ContentType]]) -> frozenset:
        if types is None:
            types = self.config.types
        if types is None:
            return frozenset(ContentType)
        return frozenset(types)

    def _sources_for(self, types: frozenset) -> List[CandidateSource]:
        return [s for s in self.sources if s.content_types & types]

    def _fetch_from_source(self, source: CandidateSource, since: datetime) -> tuple[List[ContentItem], SourceResult]:
        """
        Fetch candidates from a single source with error isolation.
        """
        start = time.perf_counter()

        try:
            items = source.fetch_candidates(since=since)
        except Exception as e:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.exception(f"[{source.name}] Candidate fetch failed")
            return [], SourceResult(
                source_name=source.name,
                items_fetched=0,
                success=False,
                error=f"{type(e).__name__}: {e}",
                duration_ms=duration_ms,
            )

        duration_ms = (time.perf_counter() - start) * 1000
        return items, SourceResult(
            source_name=source.name,
            items_fetched=len(items),
            success=True,
            duration_ms=duration_ms,
        )

    def _collect(self, types: frozenset, now: datetime) -> tuple[List[ContentItem], List[SourceResult]]:
        """
        Fetch candidates of the given types from every matching source.

        One source failing does not affect others.
        """
        since = window_start(now, self.config.window_days)
        candidates: List[ContentItem] = []
        results: List[SourceResult] = []

        for source in self._sources_for(types):
            items, result = self._fetch_from_source(source, since)
            results.append(result)
            candidates.extend(item for item in items if item.type in types)

        return candidates, results

    def get_hot_feed(
        self,
        limit: Optional[int] = None,
        types: Optional[Iterable[ContentType]] = None,
        now: Optional[datetime] = None,
    ) -> FeedResult:
        """
        Rank content across the selected types.

        Passing `now` bypasses the cache (used for reproducible rankings).

        Args:
            limit: Maximum items (None = default_limit, capped at max_limit).
            types: Content types to include (None = config types or all).
            now: Reference time for the recency window.

        Returns:
            FeedResult with the ranked feed and per-source outcomes.

        Raises:
            ValueError: If limit is negative.
        """
        limit = self.resolve_limit(limit)
        types = self.resolve_types(types)
        key = FeedCache.feed_key(types, self.config.window_days, limit, self.config.half_life_hours)

        if now is None:
            cached = self.cache.get(key)
            if cached is not None:
                return replace(cached, cached=True)
            now = datetime.now(timezone.utc)
            use_cache = True
        else:
            use_cache = False

        start = time.perf_counter()
        candidates, source_results = self._collect(types, now)
        feed = aggregate(
            candidates,
            limit=limit,
            now=now,
            window_days=self.config.window_days,
            half_life_hours=self.config.half_life_hours,
        )
        result = FeedResult(
            feed=feed,
            source_results=source_results,
            duration_ms=(time.perf_counter() - start) * 1000,
        )

        logger.info(
            f"Hot feed: {len(feed)} of {len(candidates)} candidates "
            f"from {result.sources_succeeded}/{len(source_results)} sources"
        )

        if use_cache and result.sources_failed == 0:
            self.cache.set(key, result)
        return result

    def get_highlights(
        self,
        tab: str = "new",
        limit: int = DEFAULT_HIGHLIGHTS_LIMIT,
        now: Optional[datetime] = None,
    ) -> FeedResult:
        """
        This week's thread highlights for the given tab.

        Raises:
            ValueError: On an unknown tab or negative limit.
        """
        if tab not in HIGHLIGHT_TABS:
            raise ValueError(f"unknown highlights tab {tab!r}, expected one of {', '.join(HIGHLIGHT_TABS)}")
        limit = self.resolve_limit(limit)
        key = FeedCache.highlights_key(tab, self.config.window_days, limit)

        if now is None:
            cached = self.cache.get(key)
            if cached is not None:
                return replace(cached, cached=True)
            now = datetime.now(timezone.utc)
            use_cache = True
        else:
            use_cache = False

        start = time.perf_counter()
        candidates, source_results = self._collect(frozenset({ContentType.THREAD}), now)
        feed = select_highlights(candidates, tab=tab, limit=limit, now=now, window_days=self.config.window_days)
        result = FeedResult(
            feed=feed,
            source_results=source_results,
            duration_ms=(time.perf_counter() - start) * 1000,
        )

        if use_cache and result.sources_failed == 0:
            self.cache.set(key, result)
        return result

    def clear_cache(self) -> None:
        """Drop every cached feed (e.g. after new content is published)."""
        self.cache.clear()


# =============================================================================
# Convenience Functions
# =============================================================================

def get_hot_feed(
    limit: Optional[int] = None,
    types: Optional[Iterable[str]] = None,
    window_days: Optional[float] = None,
    half_life_hours: Optional[float] = None,
) -> FeedResult:
    """
    Compute a hot feed with the default API sources.

    Convenience function for programmatic use.

    Args:
        limit: Max items (default: config value).
        types: Content type names (None = all).
        window_days: Recency window override.
        half_life_hours: Decay half-life override.

    Returns:
        FeedResult with the ranked feed.
    """
    config = FeedConfig()
    if window_days is not None:
        config.window_days = window_days
    if half_life_hours is not None:
        config.half_life_hours = half_life_hours
    if types:
        config.types = parse_types(types)

    service = HotFeedService(config=config)
    return service.get_hot_feed(limit=limit)
