"""
Ranking result structures.

EngagementScore is derived data, never persisted as a source of truth.
RankedFeed is a point-in-time snapshot; it has no identity of its own and
is recomputed (or served from an external cache) on each request.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, List

from hotfeed.models.content_item import ContentItem


@dataclass(frozen=True)
class EngagementScore:
    """
    Attributes:
        raw_score: Weighted sum of interaction counters (may be negative).
        normalized_score: raw_score after the recency window, clamping and
            optional decay. Never negative.
    """
    raw_score: float
    normalized_score: float


@dataclass(frozen=True)
class RankedEntry:
    """A content item paired with the score it was ranked by."""
    item: ContentItem
    score: EngagementScore

    def to_dict(self) -> dict:
        data = self.item.to_dict()
        data["engagementScore"] = self.score.raw_score
        data["normalizedScore"] = self.score.normalized_score
        return data


@dataclass
class RankedFeed:
    """
    Ordered, limited result of ranking.

    Attributes:
        items: Entries sorted by normalized score desc, created_at desc, id asc.
        last_updated: The instant the ranking was computed for.
    """
    last_updated: datetime
    items: List[RankedEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[RankedEntry]:
        return iter(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def content_items(self) -> List[ContentItem]:
        """The ranked items without their scores."""
        return [entry.item for entry in self.items]

    def to_dict(self) -> dict:
        """Wire shape of GET /api/hot."""
        return {
            "items": [entry.to_dict() for entry in self.items],
            "lastUpdated": self.last_updated.isoformat(),
        }
