"""
In-memory candidate source.

Serves a fixed list of content items. Used in development (no community API
running) and in tests.
"""

from datetime import datetime
from typing import FrozenSet, Iterable, List, Optional

from hotfeed.models.content_item import ContentItem, ContentType
from hotfeed.sources.base import CandidateSource


class StaticCandidateSource(CandidateSource):
    """Candidate source backed by a list held in memory."""

    def __init__(self, items: Iterable[ContentItem] = (), name: str = "static"):
        self._items: List[ContentItem] = list(items)
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def content_types(self) -> FrozenSet[ContentType]:
        return frozenset(item.type for item in self._items)

    def fetch_candidates(self, since: datetime, limit: Optional[int] = None) -> List[ContentItem]:
        items = [item for item in self._items if item.created_at >= since]
        return items if limit is None else items[:limit]

    def add(self, item: ContentItem) -> None:
        self._items.append(item)

    def clear(self) -> None:
        self._items.clear()

    def count(self) -> int:
        return len(self._items)
