"""
Base candidate source abstraction for Hot Feed.

Defines the interface every supplier of ranking candidates must implement.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import FrozenSet, List, Optional

from hotfeed.models.content_item import ContentItem, ContentType


class CandidateSource(ABC):
    """
    Abstract base class for candidate sources.

    A source returns content items with their current counters and creation
    time. It only reads; ranking never writes back to a source.

    Attributes:
        name: Unique identifier for this source (e.g., "threads", "content:ea").
        content_types: Content types this source can produce.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Return the unique name identifier for this source.

        Used in SourceResult and log messages.
        """
        pass

    @property
    @abstractmethod
    def content_types(self) -> FrozenSet[ContentType]:
        """Content types produced by this source."""
        pass

    @abstractmethod
    def fetch_candidates(self, since: datetime, limit: Optional[int] = None) -> List[ContentItem]:
        """
        Fetch candidates created at or after `since`.

        Implementations should:
        - Respect REQUEST_TIMEOUT from config
        - Skip records that cannot be normalized into a ContentItem
        - Return an empty list on network failure (log, don't raise)

        Args:
            since: Oldest creation time of interest (aware UTC).
            limit: Maximum number of records to request, None for the source default.

        Returns:
            List of ContentItem instances (may be empty).
        """
        pass

    def __str__(self) -> str:
        return f"CandidateSource({self.name})"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
