"""
Community API candidate sources.

Reads threads, marketplace listings and brokers from the community REST API
and normalizes each record into a ContentItem variant.

Endpoints:
    GET /api/threads?sortBy=newest&status=approved&limit=N
    GET /api/content?type=<ea|indicator|article|source_code>&status=approved
    GET /api/brokers?status=approved
    GET /api/users/<id>                     (author lookup for bare authorId records)
"""

from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional

import requests
from loguru import logger

from hotfeed.config import API_BASE_URL, REQUEST_TIMEOUT
from hotfeed.models.content_item import (
    Author,
    ContentItem,
    ContentType,
    MARKETPLACE_TYPES,
    content_item_from_dict,
)
from hotfeed.sources.base import CandidateSource


# Records requested per source when the caller gives no limit
DEFAULT_FETCH_LIMIT: int = 200

# Keys under which list endpoints may wrap their records
_LIST_KEYS: tuple[str, ...] = ("items", "threads", "content", "brokers", "data")


class ApiCandidateSource(CandidateSource):
    """
    Base class for sources backed by one community API endpoint.

    Subclasses set `path`, `default_type` and build query params. Records
    missing required fields, of an unexpected type, or older than `since`
    are skipped.
    """

    path: str = ""
    default_type: Optional[ContentType] = None

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None):
        """
        Args:
            base_url: API base URL. Defaults to config.API_BASE_URL.
            timeout: Request timeout in seconds. Defaults to config.REQUEST_TIMEOUT.
        """
        self.base_url = (base_url if base_url is not None else API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else REQUEST_TIMEOUT

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}"

    def _params(self, limit: int) -> Dict[str, Any]:
        return {"status": "approved"}

    def fetch_candidates(self, since: datetime, limit: Optional[int] = None) -> List[ContentItem]:
        if limit is None:
            limit = DEFAULT_FETCH_LIMIT

        records = self._fetch_records(limit)
        if records is None:
            return []

        items: List[ContentItem] = []
        authors: Dict[str, Author] = {}
        skipped = 0
        for record in records:
            item = self._normalize_record(record)
            if item is None:
                skipped += 1
                continue
            if item.type not in self.content_types or item.created_at < since:
                continue
            if item.author.id and item.author.username is None:
                item.author = self._lookup_author(item.author.id, authors)
            items.append(item)
            if len(items) >= limit:
                break

        if skipped:
            logger.warning(f"[{self.name}] Skipped {skipped} malformed records")
        logger.info(f"[{self.name}] Fetched {len(items)} candidates (requested {limit})")
        return items

    def _fetch_records(self, limit: int) -> Optional[List[dict]]:
        """
        GET the endpoint and unwrap the record list.

        Returns:
            List of raw records, or None if the request failed.
        """
        try:
            response = requests.get(self.url, params=self._params(limit), timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.error(f"[{self.name}] Error fetching {self.url}: {e}")
            return None
        except ValueError as e:
            logger.error(f"[{self.name}] Invalid JSON from {self.url}: {e}")
            return None

        return _unwrap_records(payload)

    def _lookup_author(self, author_id: Any, authors: Dict[str, Author]) -> Author:
        """
        Resolve a bare author id to a snapshot via GET /api/users/<id>.

        Results are memoized in `authors` for the duration of one fetch. A
        failed lookup keeps the bare id.
        """
        key = str(author_id)
        if key in authors:
            return authors[key]

        url = f"{self.base_url}/api/users/{key}"
        author = Author(id=key)
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.warning(f"[{self.name}] Author lookup failed for {key!r}: {e}")
            payload = None
        except ValueError as e:
            logger.warning(f"[{self.name}] Invalid JSON from {url}: {e}")
            payload = None

        if isinstance(payload, dict):
            payload = payload.get("user", payload)
        if isinstance(payload, dict):
            resolved = Author.from_dict(payload)
            author = Author(id=key, username=resolved.username, profile_image_url=resolved.profile_image_url)

        authors[key] = author
        return author

    def _normalize_record(self, record: Any) -> Optional[ContentItem]:
        """
        Convert a raw API record to a ContentItem.

        Returns:
            ContentItem, or None if the record is not usable.
        """
        if not isinstance(record, dict):
            return None
        try:
            return content_item_from_dict(record, default_type=self.default_type)
        except (ValueError, TypeError) as e:
            logger.debug(f"[{self.name}] Skipping record {record.get('id')!r}: {e}")
            return None


class ThreadSource(ApiCandidateSource):
    """Forum threads, newest first."""

    path = "/api/threads"
    default_type = ContentType.THREAD

    @property
    def name(self) -> str:
        return "threads"

    @property
    def content_types(self) -> FrozenSet[ContentType]:
        return frozenset({ContentType.THREAD})

    def _params(self, limit: int) -> Dict[str, Any]:
        return {"sortBy": "newest", "status": "approved", "limit": limit}


class MarketplaceSource(ApiCandidateSource):
    """One marketplace content type (EA, indicator, article or source code)."""

    path = "/api/content"

    def __init__(self, content_type: ContentType, base_url: Optional[str] = None, timeout: Optional[int] = None):
        if content_type not in MARKETPLACE_TYPES:
            raise ValueError(f"{content_type!r} is not a marketplace content type")
        super().__init__(base_url=base_url, timeout=timeout)
        self.default_type = content_type

    @property
    def name(self) -> str:
        return f"content:{self.default_type.value}"

    @property
    def content_types(self) -> FrozenSet[ContentType]:
        return frozenset({self.default_type})

    def _params(self, limit: int) -> Dict[str, Any]:
        return {"type": self.default_type.value, "status": "approved"}


class BrokerSource(ApiCandidateSource):
    """Broker profiles."""

    path = "/api/brokers"
    default_type = ContentType.BROKER

    @property
    def name(self) -> str:
        return "brokers"

    @property
    def content_types(self) -> FrozenSet[ContentType]:
        return frozenset({ContentType.BROKER})


def _unwrap_records(payload: Any) -> List[dict]:
    """Accept a bare list or an object wrapping one under a known key."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in _LIST_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    return []
