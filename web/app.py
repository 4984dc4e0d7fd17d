"""
Hot Feed - JSON API

Flask app serving the ranked "What's Hot" feeds to the community UI.

Run with: python -m web.app
Or: cd web && python app.py
"""

import sys
from pathlib import Path
from typing import Optional

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from flask import Flask, jsonify, request
from flask_caching import Cache
from loguru import logger
from werkzeug.exceptions import HTTPException

from hotfeed import __version__
from hotfeed.cache import FeedCache
from hotfeed.config import DEBUG, FEED_CACHE_TTL, LOG_DIR, LOG_LEVEL
from hotfeed.feed_service import FeedResult, HotFeedService, parse_types
from hotfeed.models.content_item import ContentType
from hotfeed.ranking.aggregator import DEFAULT_HIGHLIGHTS_LIMIT
from hotfeed.ranking.assembler import assemble_feed
from hotfeed.utils.logger import setup_logging

app = Flask(__name__)

cache = Cache(config={"CACHE_TYPE": "SimpleCache", "CACHE_DEFAULT_TIMEOUT": FEED_CACHE_TTL})
cache.init_app(app)

# Browsers and CDNs may reuse a feed for a minute
FEED_CACHE_CONTROL = "public, max-age=60, stale-while-revalidate=120"

# Legacy sidebar widget size
THREADS_HOT_DEFAULT_LIMIT = 10

_service: Optional[HotFeedService] = None


def get_service() -> HotFeedService:
    """Get the shared feed service (created on first use)."""
    global _service
    if _service is None:
        _service = HotFeedService(cache=FeedCache(cache, timeout=FEED_CACHE_TTL))
    return _service


class InvalidParameter(ValueError):
    """Invalid query parameter."""


def _parse_limit(default: Optional[int]) -> Optional[int]:
    raw = request.args.get("limit")
    if raw is None or raw.strip() == "":
        return default
    try:
        limit = int(raw)
    except ValueError:
        raise InvalidParameter(f"limit must be an integer, got {raw!r}") from None
    if limit < 0:
        raise InvalidParameter(f"limit cannot be negative, got {limit}")
    return limit


def _feed_response(payload: dict):
    response = jsonify(payload)
    response.headers["Cache-Control"] = FEED_CACHE_CONTROL
    return response


def _threads_payload(result: FeedResult) -> dict:
    data = assemble_feed(result.feed)
    return {"threads": data["items"], "lastUpdated": data["lastUpdated"]}


@app.errorhandler(InvalidParameter)
def handle_bad_request(error):
    return jsonify({"error": str(error)}), 400


@app.errorhandler(Exception)
def handle_unexpected(error):
    if isinstance(error, HTTPException):
        return jsonify({"error": error.description}), error.code
    logger.exception(f"Unhandled error on {request.path}")
    return jsonify({"error": str(error)}), 500


@app.route("/api/hot")
def api_hot():
    """Ranked feed across all content types: {items, lastUpdated}."""
    limit = _parse_limit(default=None)

    types = None
    raw_types = request.args.get("types", "").strip()
    if raw_types:
        try:
            types = parse_types([raw_types])
        except ValueError as e:
            raise InvalidParameter(str(e)) from None

    result = get_service().get_hot_feed(limit=limit, types=types)
    return _feed_response(assemble_feed(result.feed))


@app.route("/api/threads/hot")
def api_threads_hot():
    """Hot threads only, in the sidebar widget's {threads, lastUpdated} shape."""
    limit = _parse_limit(default=THREADS_HOT_DEFAULT_LIMIT)
    result = get_service().get_hot_feed(limit=limit, types=frozenset({ContentType.THREAD}))
    return _feed_response(_threads_payload(result))


@app.route("/api/threads/highlights")
def api_threads_highlights():
    """This week's highlights: ?tab=new|trending|solved."""
    tab = request.args.get("tab", "new")
    limit = _parse_limit(default=DEFAULT_HIGHLIGHTS_LIMIT)

    try:
        result = get_service().get_highlights(tab=tab, limit=limit)
    except ValueError as e:
        raise InvalidParameter(str(e)) from None

    return _feed_response(_threads_payload(result))


@app.route("/api/health")
def api_health():
    """Liveness and configured sources."""
    service = get_service()
    return jsonify({
        "status": "ok",
        "version": __version__,
        "sources": [s.name for s in service.sources],
        "windowDays": service.config.window_days,
    })


if __name__ == "__main__":
    setup_logging(log_dir=Path(LOG_DIR) if LOG_DIR else None, log_level=LOG_LEVEL, app_name="api")
    print("=" * 50)
    print("Hot Feed API")
    print("=" * 50)
    print("Open http://localhost:5001/api/hot in your browser")
    print("Press Ctrl+C to stop")
    print("=" * 50)
    app.run(debug=DEBUG, port=5001)
