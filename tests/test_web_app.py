"""
Tests for the Hot Feed JSON API.

Tests the Flask routes, query parameter validation, response shapes,
cache headers and error handling.
"""

import pytest
from unittest.mock import patch

from hotfeed.cache import FeedCache
from hotfeed.feed_service import HotFeedService
from hotfeed.models import ContentType
from hotfeed.sources import StaticCandidateSource
from tests.factories import make_broker, make_listing, make_thread, utc_now

from web.app import FEED_CACHE_CONTROL, app


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def client():
    """Flask test client."""
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def service():
    """Feed service over in-memory content created relative to the real clock."""
    now = utc_now()
    items = [
        make_thread(id="t1", title="Gold Breakout Thread", views=100, reply_count=10, now=now),
        make_thread(id="t2", title="Solved: MT5 Login Issue", views=5, reply_count=4, is_solved=True, days_ago=2, now=now),
        make_thread(id="t_old", title="Ancient Thread", views=99999, days_ago=30, now=now),
        make_listing(ContentType.EA, id="ea1", title="Gold Scalper EA", views=50, likes=5, now=now),
        make_broker(id="b1", title="IC Markets", slug="ic-markets", views=40, now=now),
    ]
    return HotFeedService(sources=[StaticCandidateSource(items)], cache=FeedCache(timeout=0))


@pytest.fixture
def patched_service(service):
    with patch("web.app.get_service", return_value=service):
        yield service


# =============================================================================
# /api/hot
# =============================================================================

@pytest.mark.api
class TestHotEndpoint:
    """Tests for GET /api/hot."""

    def test_returns_ranked_items(self, client, patched_service):
        """Items are ranked across types and carry display info."""
        response = client.get("/api/hot")

        assert response.status_code == 200
        data = response.get_json()
        assert set(data) == {"items", "lastUpdated"}
        assert [i["id"] for i in data["items"]] == ["t1", "ea1", "b1", "t2"]

    def test_item_shape(self, client, patched_service):
        """Each item has wire fields, scores and a display block."""
        data = client.get("/api/hot").get_json()
        broker = next(i for i in data["items"] if i["id"] == "b1")

        assert broker["type"] == "broker"
        assert broker["engagementScore"] == 40
        assert broker["normalizedScore"] == 40
        assert broker["display"] == {"label": "Broker", "iconKind": "star", "linkPath": "/brokers/ic-markets"}

    def test_old_content_excluded(self, client, patched_service):
        """Content older than the window never appears."""
        data = client.get("/api/hot").get_json()
        assert "t_old" not in [i["id"] for i in data["items"]]

    def test_limit(self, client, patched_service):
        data = client.get("/api/hot?limit=2").get_json()
        assert [i["id"] for i in data["items"]] == ["t1", "ea1"]

    def test_limit_zero(self, client, patched_service):
        data = client.get("/api/hot?limit=0").get_json()
        assert data["items"] == []

    def test_types_filter(self, client, patched_service):
        data = client.get("/api/hot?types=broker,ea").get_json()
        assert [i["id"] for i in data["items"]] == ["ea1", "b1"]

    def test_cache_control_header(self, client, patched_service):
        response = client.get("/api/hot")
        assert response.headers["Cache-Control"] == FEED_CACHE_CONTROL

    @pytest.mark.parametrize("query", ["limit=abc", "limit=-1", "limit=1.5"])
    def test_invalid_limit(self, client, patched_service, query):
        """Bad limits are rejected with 400."""
        response = client.get(f"/api/hot?{query}")

        assert response.status_code == 400
        assert "limit" in response.get_json()["error"]

    def test_unknown_type(self, client, patched_service):
        response = client.get("/api/hot?types=thread,podcast")

        assert response.status_code == 400
        assert "podcast" in response.get_json()["error"]

    def test_empty_feed(self, client):
        """No content in the window gives an empty list, not an error."""
        empty = HotFeedService(sources=[StaticCandidateSource()], cache=FeedCache(timeout=0))
        with patch("web.app.get_service", return_value=empty):
            response = client.get("/api/hot")

        assert response.status_code == 200
        assert response.get_json()["items"] == []

    def test_service_error_returns_500(self, client):
        """Unexpected errors are reported as JSON 500s."""
        with patch("web.app.get_service") as mock_get_service:
            mock_get_service.return_value.get_hot_feed.side_effect = RuntimeError("boom")
            response = client.get("/api/hot")

        assert response.status_code == 500
        assert response.get_json() == {"error": "boom"}


# =============================================================================
# /api/threads/hot and /api/threads/highlights
# =============================================================================

@pytest.mark.api
class TestThreadsEndpoints:
    """Tests for the thread-only endpoints."""

    def test_hot_threads_shape(self, client, patched_service):
        """The sidebar widget gets {threads, lastUpdated}."""
        response = client.get("/api/threads/hot")

        assert response.status_code == 200
        data = response.get_json()
        assert set(data) == {"threads", "lastUpdated"}
        assert [t["id"] for t in data["threads"]] == ["t1", "t2"]
        assert data["threads"][0]["display"]["linkPath"] == "/thread/gold-breakout-thread"
        assert response.headers["Cache-Control"] == FEED_CACHE_CONTROL

    def test_hot_threads_default_limit(self, client, patched_service):
        """Without a limit, at most 10 threads are returned."""
        with patch.object(patched_service, "get_hot_feed", wraps=patched_service.get_hot_feed) as spy:
            client.get("/api/threads/hot")

        assert spy.call_args.kwargs["limit"] == 10

    def test_highlights_solved(self, client, patched_service):
        data = client.get("/api/threads/highlights?tab=solved").get_json()
        assert data["threads"][0]["id"] == "t2"

    def test_highlights_default_tab_is_new(self, client, patched_service):
        data = client.get("/api/threads/highlights").get_json()
        assert [t["id"] for t in data["threads"]] == ["t1", "t2"]

    def test_highlights_unknown_tab(self, client, patched_service):
        response = client.get("/api/threads/highlights?tab=hottest")

        assert response.status_code == 400
        assert "tab" in response.get_json()["error"]


# =============================================================================
# Misc
# =============================================================================

@pytest.mark.api
class TestMiscEndpoints:
    """Tests for health and error routes."""

    def test_health(self, client, patched_service):
        data = client.get("/api/health").get_json()

        assert data["status"] == "ok"
        assert data["sources"] == ["static"]
        assert data["windowDays"] == 7.0
        assert "version" in data

    def test_unknown_route_is_json_404(self, client):
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert "error" in response.get_json()
