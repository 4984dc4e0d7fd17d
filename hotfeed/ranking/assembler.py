"""
Display affordances for ranked content.

The single place where content types map to a badge label, an icon and a
link target. The ranked items themselves are never modified.
"""

from dataclasses import dataclass
from typing import Dict

from hotfeed.models.content_item import ContentItem, ContentType
from hotfeed.models.feed import RankedFeed


@dataclass(frozen=True)
class DisplayInfo:
    label: str
    icon_kind: str
    link_path: str

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "iconKind": self.icon_kind,
            "linkPath": self.link_path,
        }


# type -> (label, icon_kind, route prefix)
DISPLAY_RULES: Dict[ContentType, tuple[str, str, str]] = {
    ContentType.THREAD: ("Discussion", "message-square", "/thread"),
    ContentType.EA: ("EA", "shopping-cart", "/content"),
    ContentType.INDICATOR: ("Indicator", "trending-up", "/content"),
    ContentType.ARTICLE: ("Article", "eye", "/content"),
    ContentType.SOURCE_CODE: ("Code", "shopping-cart", "/content"),
    ContentType.BROKER: ("Broker", "star", "/brokers"),
}

_missing = set(ContentType) - set(DISPLAY_RULES)
if _missing:
    raise RuntimeError(f"DISPLAY_RULES has no entry for: {sorted(t.value for t in _missing)}")


def assemble(item: ContentItem) -> DisplayInfo:
    """
    Map a content item to its label, icon and link path.

    Example:
        >>> assemble(broker).link_path
        '/brokers/ic-markets'
    """
    label, icon_kind, prefix = DISPLAY_RULES[item.type]
    return DisplayInfo(label=label, icon_kind=icon_kind, link_path=f"{prefix}/{item.slug}")


def assemble_feed(feed: RankedFeed) -> dict:
    """
    Wire dict for a feed with a "display" block attached to every item.
    """
    data = feed.to_dict()
    for entry, item_data in zip(feed.items, data["items"]):
        item_data["display"] = assemble(entry.item).to_dict()
    return data
