"""
Data models module.

Defines the ContentItem tagged union and the ranked feed structures.
"""

from hotfeed.models.content_item import (
    ContentType,
    MARKETPLACE_TYPES,
    Author,
    EngagementCounters,
    ContentItem,
    ThreadItem,
    MarketplaceItem,
    EAItem,
    IndicatorItem,
    ArticleItem,
    SourceCodeItem,
    BrokerItem,
    ITEM_CLASSES,
    content_item_from_dict,
    parse_timestamp,
)
from hotfeed.models.feed import EngagementScore, RankedEntry, RankedFeed

__all__ = [
    "ContentType",
    "MARKETPLACE_TYPES",
    "Author",
    "EngagementCounters",
    "ContentItem",
    "ThreadItem",
    "MarketplaceItem",
    "EAItem",
    "IndicatorItem",
    "ArticleItem",
    "SourceCodeItem",
    "BrokerItem",
    "ITEM_CLASSES",
    "content_item_from_dict",
    "parse_timestamp",
    "EngagementScore",
    "RankedEntry",
    "RankedFeed",
]
