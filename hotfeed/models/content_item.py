"""
Core data model for Hot Feed.

Defines ContentItem, a tagged union with one dataclass per content type
(forum thread, marketplace listings, broker profile). Each variant carries
only the fields relevant to it and knows how to expose its interaction
counters for scoring.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Dict, Optional
import re

from hotfeed.text.slugs import generate_slug


class ContentType(str, Enum):
    """Discriminant tag for ContentItem variants."""

    THREAD = "thread"
    EA = "ea"
    INDICATOR = "indicator"
    ARTICLE = "article"
    SOURCE_CODE = "source_code"
    BROKER = "broker"


MARKETPLACE_TYPES: frozenset[ContentType] = frozenset({
    ContentType.EA,
    ContentType.INDICATOR,
    ContentType.ARTICLE,
    ContentType.SOURCE_CODE,
})


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an ISO 8601 string (trailing 'Z' allowed) or datetime into an
    aware UTC datetime. Naive values are taken to be UTC.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    else:
        raise ValueError(f"invalid timestamp: {value!r}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _to_snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


@dataclass(frozen=True)
class Author:
    """
    Denormalized author snapshot attached to a content item.

    A copy taken when the item was read, not a live reference to the user.
    """
    id: Optional[str] = None
    username: Optional[str] = None
    profile_image_url: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "profileImageUrl": self.profile_image_url,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Author":
        if not data:
            return cls()
        return cls(
            id=data.get("id"),
            username=data.get("username"),
            profile_image_url=data.get("profileImageUrl", data.get("profile_image_url")),
        )


@dataclass(frozen=True)
class EngagementCounters:
    """Interaction counters fed to the scorer; absent counters are 0."""
    views: float = 0
    replies: float = 0
    likes: float = 0
    bookmarks: float = 0
    shares: float = 0
    reports: float = 0


@dataclass
class ContentItem:
    """
    Base class for every rankable content item.

    Attributes:
        id: Opaque identifier, unique within its type.
        title: Display title.
        created_at: When the item was created (aware UTC, immutable).
        slug: Routing slug; generated from the title when missing.
        category_slug: Category the item belongs to.
        views: View counter, maintained by the community API.
        author: Denormalized author snapshot.
    """

    content_type: ClassVar[ContentType]

    # Legacy/alternate wire keys mapped onto field names
    _ALIASES: ClassVar[Dict[str, str]] = {"category": "category_slug"}

    id: str
    title: str
    created_at: datetime
    slug: str = ""
    category_slug: str = ""
    views: int = 0
    author: Author = field(default_factory=Author)

    def __post_init__(self) -> None:
        """Normalize timestamps, fill a missing slug, then validate."""
        if isinstance(self.created_at, (str, datetime)):
            self.created_at = parse_timestamp(self.created_at)
        if not self.slug and self.title:
            self.slug = generate_slug(self.title)
        self.validate()

    @property
    def type(self) -> ContentType:
        return self.content_type

    def validate(self) -> None:
        """
        Validate required fields.

        Counters are not checked here: bad counter values are handled
        by the aggregator, one item at a time.

        Raises:
            ValueError: If validation fails.
        """
        errors = []

        if not isinstance(getattr(self, "content_type", None), ContentType):
            errors.append(f"{type(self).__name__} is not a concrete content type")

        if self.id is None or not str(self.id).strip():
            errors.append("id is required and cannot be empty")

        if not self.title or not str(self.title).strip():
            errors.append("title is required and cannot be empty")

        if not isinstance(self.created_at, datetime):
            errors.append(f"created_at must be a datetime, got {self.created_at!r}")

        if errors:
            raise ValueError(f"ContentItem validation failed: {'; '.join(errors)}")

    def engagement_counters(self) -> EngagementCounters:
        """Counters for scoring. Variants override to expose their own."""
        return EngagementCounters(views=self.views)

    def _variant_fields(self) -> dict:
        """Variant-specific wire fields (camelCase)."""
        return {}

    def to_dict(self) -> dict:
        """
        Convert to the camelCase wire format used by the community UI.

        Returns:
            Dictionary with common fields, author snapshot and the variant's own fields.
        """
        data = {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "slug": self.slug,
            "categorySlug": self.category_slug,
            "views": self.views,
            "createdAt": self.created_at.isoformat(),
            "author": self.author.to_dict(),
        }
        data.update(self._variant_fields())
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ContentItem":
        """
        Build this variant from an API record.

        Accepts camelCase or snake_case keys and ignores keys the variant
        does not define. None values fall back to field defaults.
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}

        for key, value in data.items():
            if key in ("type", "author") or value is None:
                continue
            name = cls._ALIASES.get(key) or cls._ALIASES.get(_to_snake(key)) or _to_snake(key)
            if name in known and name not in kwargs:
                kwargs[name] = value

        missing = [name for name in ("id", "title", "created_at") if name not in kwargs]
        if missing:
            raise ValueError(f"ContentItem validation failed: missing {', '.join(missing)}")

        kwargs["id"] = str(kwargs["id"])
        if data.get("author"):
            kwargs["author"] = Author.from_dict(data["author"])
        else:
            kwargs["author"] = Author(id=data.get("authorId", data.get("author_id")))

        return cls(**kwargs)

    def __str__(self) -> str:
        return f"[{self.type.value}] {self.title}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, title={self.title!r}, created_at={self.created_at.isoformat()!r})"


@dataclass(repr=False)
class ThreadItem(ContentItem):
    """A forum thread."""

    content_type: ClassVar[ContentType] = ContentType.THREAD

    reply_count: int = 0
    like_count: int = 0
    bookmark_count: int = 0
    share_count: int = 0
    is_solved: bool = False
    is_pinned: bool = False

    def engagement_counters(self) -> EngagementCounters:
        return EngagementCounters(
            views=self.views,
            replies=self.reply_count,
            likes=self.like_count,
            bookmarks=self.bookmark_count,
            shares=self.share_count,
        )

    def _variant_fields(self) -> dict:
        return {
            "replyCount": self.reply_count,
            "likeCount": self.like_count,
            "bookmarkCount": self.bookmark_count,
            "shareCount": self.share_count,
            "isSolved": self.is_solved,
            "isPinned": self.is_pinned,
        }


@dataclass(repr=False)
class MarketplaceItem(ContentItem):
    """Shared shape of coin-priced marketplace listings."""

    _ALIASES: ClassVar[Dict[str, str]] = {
        "category": "category_slug",
        "downloads": "purchase_count",
    }

    price_coins: int = 0
    is_free: bool = True
    purchase_count: int = 0
    likes: int = 0

    def engagement_counters(self) -> EngagementCounters:
        return EngagementCounters(views=self.views, likes=self.likes)

    def _variant_fields(self) -> dict:
        return {
            "priceCoins": self.price_coins,
            "isFree": self.is_free,
            "purchaseCount": self.purchase_count,
            "likes": self.likes,
        }


@dataclass(repr=False)
class EAItem(MarketplaceItem):
    content_type: ClassVar[ContentType] = ContentType.EA


@dataclass(repr=False)
class IndicatorItem(MarketplaceItem):
    content_type: ClassVar[ContentType] = ContentType.INDICATOR


@dataclass(repr=False)
class ArticleItem(MarketplaceItem):
    content_type: ClassVar[ContentType] = ContentType.ARTICLE


@dataclass(repr=False)
class SourceCodeItem(MarketplaceItem):
    content_type: ClassVar[ContentType] = ContentType.SOURCE_CODE


@dataclass(repr=False)
class BrokerItem(ContentItem):
    """A broker profile; scam reports count against it."""

    content_type: ClassVar[ContentType] = ContentType.BROKER

    _ALIASES: ClassVar[Dict[str, str]] = {
        "name": "title",
        "category": "category_slug",
    }

    overall_rating: float = 0
    review_count: int = 0
    scam_report_count: int = 0

    def engagement_counters(self) -> EngagementCounters:
        return EngagementCounters(views=self.views, reports=self.scam_report_count)

    def _variant_fields(self) -> dict:
        return {
            "overallRating": self.overall_rating,
            "reviewCount": self.review_count,
            "scamReportCount": self.scam_report_count,
        }


ITEM_CLASSES: Dict[ContentType, type] = {
    ContentType.THREAD: ThreadItem,
    ContentType.EA: EAItem,
    ContentType.INDICATOR: IndicatorItem,
    ContentType.ARTICLE: ArticleItem,
    ContentType.SOURCE_CODE: SourceCodeItem,
    ContentType.BROKER: BrokerItem,
}


def content_item_from_dict(data: dict, default_type: Optional[ContentType] = None) -> ContentItem:
    """
    Create the right ContentItem variant from a dictionary.

    Args:
        data: Record with a "type" key (or default_type for endpoints whose
            records do not carry one, e.g. threads and brokers).
        default_type: Type used when the record has no "type".

    Returns:
        The matching ContentItem subclass instance.

    Raises:
        ValueError: If the type is unknown or the record is invalid.
    """
    raw_type = data.get("type") or (default_type.value if default_type else None)
    try:
        content_type = ContentType(raw_type)
    except ValueError:
        raise ValueError(f"unknown content type: {raw_type!r}") from None

    return ITEM_CLASSES[content_type].from_dict(data)
