"""
Sources module.

Candidate suppliers for ranking: the community REST API and an in-memory source.
"""

from typing import Iterable, List, Optional

from hotfeed.models.content_item import ContentType
from hotfeed.sources.base import CandidateSource
from hotfeed.sources.api import ApiCandidateSource, ThreadSource, MarketplaceSource, BrokerSource
from hotfeed.sources.static import StaticCandidateSource


def get_default_sources(types: Optional[Iterable[ContentType]] = None) -> List[CandidateSource]:
    """
    One API source per content type, optionally filtered.

    Args:
        types: Content types to include (None = all six).
    """
    sources: List[CandidateSource] = [
        ThreadSource(),
        MarketplaceSource(ContentType.EA),
        MarketplaceSource(ContentType.INDICATOR),
        MarketplaceSource(ContentType.ARTICLE),
        MarketplaceSource(ContentType.SOURCE_CODE),
        BrokerSource(),
    ]

    if types is None:
        return sources

    wanted = set(types)
    return [s for s in sources if s.content_types & wanted]


__all__ = [
    "CandidateSource",
    "ApiCandidateSource",
    "ThreadSource",
    "MarketplaceSource",
    "BrokerSource",
    "StaticCandidateSource",
    "get_default_sources",
]
