"""
Feed cache.

An explicit TTL cache that sits in front of the feed service. Ranking code
does not know it exists: a cached feed is only ever a whole, previously
computed result, keyed by (type-set, window, half-life, limit).

Works with any cachelib-compatible backend (cachelib.SimpleCache,
Flask-Caching's Cache, Redis via cachelib, ...).
"""

from typing import Any, Iterable, Optional

from cachelib import SimpleCache
from loguru import logger

from hotfeed.config import FEED_CACHE_TTL
from hotfeed.models.content_item import ContentType


class FeedCache:
    """Namespaced TTL cache over a cachelib-style backend."""

    NAMESPACE = "hotfeed"

    def __init__(self, backend: Any = None, timeout: int = FEED_CACHE_TTL):
        """
        Args:
            backend: Object with get/set(timeout=)/delete/clear. Defaults to
                an in-process cachelib SimpleCache.
            timeout: Seconds an entry stays valid. 0 disables caching.
        """
        self.backend = backend if backend is not None else SimpleCache()
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return self.timeout > 0

    @classmethod
    def feed_key(
        cls,
        types: Iterable[ContentType],
        window_days: float,
        limit: int,
        half_life_hours: Optional[float] = None,
    ) -> str:
        type_part = ",".join(sorted(t.value for t in types)) or "none"
        decay_part = "off" if half_life_hours is None else f"{half_life_hours:g}"
        return f"{cls.NAMESPACE}:feed:{type_part}:{window_days:g}:{decay_part}:{limit}"

    @classmethod
    def highlights_key(cls, tab: str, window_days: float, limit: int) -> str:
        return f"{cls.NAMESPACE}:highlights:{tab}:{window_days:g}:{limit}"

    def get(self, key: str) -> Optional[Any]:
        if not self.enabled:
            return None
        value = self.backend.get(key)
        if value is not None:
            logger.debug(f"Cache hit: {key}")
        return value

    def set(self, key: str, value: Any) -> None:
        if self.enabled:
            self.backend.set(key, value, timeout=self.timeout)

    def clear(self) -> None:
        self.backend.clear()
