"""
Pytest Configuration and Fixtures

This module provides:
- Project root on sys.path (tests import `hotfeed`, `web` and `main`)
- Shared fixtures for all tests
- Test category markers
"""

import sys
from pathlib import Path

import pytest
from loguru import logger

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tests.factories import NOW, make_broker, make_listing, make_thread  # noqa: E402
from hotfeed.models.content_item import ContentType  # noqa: E402


# =============================================================================
# SHARED FIXTURES
# =============================================================================

@pytest.fixture
def now():
    """Fixed reference time."""
    return NOW


@pytest.fixture
def mixed_candidates():
    """One item of every content type, all inside the window."""
    return [
        make_thread(id="t1", views=100, reply_count=10, like_count=5, bookmark_count=2, share_count=1),
        make_listing(ContentType.EA, id="ea1", views=80, likes=2),
        make_listing(ContentType.INDICATOR, id="ind1", title="Smart RSI Divergence", views=40),
        make_listing(ContentType.ARTICLE, id="art1", title="Risk Management Basics", views=300),
        make_listing(ContentType.SOURCE_CODE, id="src1", title="Grid EA Source", views=5),
        make_broker(id="b1", views=60, scam_report_count=1),
    ]


@pytest.fixture
def log_messages():
    """Capture loguru messages (WARNING and above) as plain strings."""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def mock_source():
    """Provide a mock candidate source producing threads."""
    from unittest.mock import Mock
    from hotfeed.sources.base import CandidateSource

    source = Mock(spec=CandidateSource)
    source.name = "mock_source"
    source.content_types = frozenset({ContentType.THREAD})
    source.fetch_candidates.return_value = []

    return source


# =============================================================================
# MARKERS FOR TEST CATEGORIES
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "ranking: Scoring, recency and ordering tests"
    )
    config.addinivalue_line(
        "markers", "config_validation: Configuration validation tests"
    )
    config.addinivalue_line(
        "markers", "source_resilience: Source error isolation tests"
    )
    config.addinivalue_line(
        "markers", "api: HTTP API tests"
    )
