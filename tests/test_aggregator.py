"""
Tests for Cross-Type Aggregation.

Covers the total ordering, recency cutoff, limit truncation, non-finite
score handling and the thread highlight tabs.
"""

import copy
import pytest
from datetime import timedelta

from hotfeed.models import ContentType, content_item_from_dict
from hotfeed.ranking.aggregator import (
    HIGHLIGHT_TABS,
    aggregate,
    ranking_key,
    score_candidates,
    select_highlights,
)
from tests.factories import NOW, make_broker, make_listing, make_thread


def _ids(feed):
    return [entry.item.id for entry in feed]


# =============================================================================
# Ordering
# =============================================================================

@pytest.mark.ranking
class TestAggregateOrdering:
    """Tests for the feed's total order."""

    def test_orders_by_score_across_types(self, mixed_candidates):
        """Higher normalized score ranks first regardless of type."""
        feed = aggregate(mixed_candidates, limit=10, now=NOW)

        # art1=300, t1=159, ea1=88, ind1=40, b1=55, src1=5
        assert _ids(feed) == ["art1", "t1", "ea1", "b1", "ind1", "src1"]

    def test_scores_attached(self, mixed_candidates):
        """Each entry carries its raw and normalized score."""
        feed = aggregate(mixed_candidates, limit=10, now=NOW)
        thread_entry = next(e for e in feed if e.item.id == "t1")

        assert thread_entry.score.raw_score == 159
        assert thread_entry.score.normalized_score == 159

    def test_tie_broken_by_newer_created_at(self):
        """Equal scores: the newer item comes first."""
        older = make_thread(id="old", views=10, days_ago=3)
        newer = make_listing(ContentType.EA, id="new", views=10, days_ago=1)

        feed = aggregate([older, newer], limit=10, now=NOW)

        assert _ids(feed) == ["new", "old"]

    def test_tie_broken_by_id(self):
        """Equal scores and creation times: lower id first."""
        b = make_thread(id="b", views=10)
        a = make_thread(id="a", views=10)

        feed = aggregate([b, a], limit=10, now=NOW)

        assert _ids(feed) == ["a", "b"]

    def test_same_id_different_types_ordered_by_type(self):
        """Ids are unique per type only; the type tag breaks the last tie."""
        thread = make_thread(id="42", views=10)
        broker = make_broker(id="42", views=10)

        feed = aggregate([thread, broker], limit=10, now=NOW)

        assert [e.item.type for e in feed] == [ContentType.BROKER, ContentType.THREAD]

    def test_order_is_total(self, mixed_candidates):
        """Adjacent entries are strictly ordered by the ranking key."""
        extra = [make_thread(id=f"x{i}", views=40, days_ago=1) for i in range(5)]
        feed = aggregate(mixed_candidates + extra, limit=50, now=NOW)

        keys = [ranking_key(e) for e in feed]
        assert all(a < b for a, b in zip(keys, keys[1:]))

    def test_deterministic(self, mixed_candidates):
        """Same inputs and time give the same feed, whatever the input order."""
        first = aggregate(mixed_candidates, limit=10, now=NOW)
        second = aggregate(list(reversed(mixed_candidates)), limit=10, now=NOW)

        assert first.to_dict() == second.to_dict()

    def test_negative_scores_tie_at_zero(self):
        """Heavily reported items clamp to 0 and sort among zero-engagement items by age."""
        reported = make_broker(id="scam", views=1, scam_report_count=10, days_ago=1)
        quiet = make_thread(id="quiet", views=0, days_ago=2)

        feed = aggregate([quiet, reported], limit=10, now=NOW)

        assert _ids(feed) == ["scam", "quiet"]
        assert feed.items[0].score.raw_score == -49
        assert feed.items[0].score.normalized_score == 0.0

    def test_decay_can_reorder(self):
        """With a half-life, a fresher item can overtake an older, busier one."""
        busy_old = make_thread(id="old", views=100, days_ago=2)
        fresh = make_thread(id="fresh", views=60, days_ago=0)

        plain = aggregate([busy_old, fresh], limit=10, now=NOW)
        decayed = aggregate([busy_old, fresh], limit=10, now=NOW, half_life_hours=24)

        assert _ids(plain) == ["old", "fresh"]
        assert _ids(decayed) == ["fresh", "old"]


# =============================================================================
# Window, Limit & Edge Cases
# =============================================================================

@pytest.mark.ranking
class TestAggregateEdgeCases:
    """Tests for cutoff, limit and degenerate inputs."""

    def test_old_item_excluded_despite_engagement(self):
        """A huge score 8 days ago never appears."""
        old = make_thread(id="viral", views=1_000_000, days_ago=8)
        recent = make_thread(id="recent", views=1, days_ago=1)

        feed = aggregate([old, recent], limit=10, now=NOW)

        assert _ids(feed) == ["recent"]

    def test_limit_truncates_after_sorting(self):
        """100 eligible candidates, limit 5: exactly the top 5."""
        candidates = [make_thread(id=f"t{i:03d}", views=i) for i in range(100)]

        feed = aggregate(candidates, limit=5, now=NOW)

        assert _ids(feed) == ["t099", "t098", "t097", "t096", "t095"]

    def test_limit_larger_than_candidates(self, mixed_candidates):
        """A generous limit returns everything eligible."""
        feed = aggregate(mixed_candidates, limit=100, now=NOW)
        assert len(feed) == len(mixed_candidates)

    def test_limit_zero(self, mixed_candidates):
        """limit=0 yields an empty feed."""
        feed = aggregate(mixed_candidates, limit=0, now=NOW)
        assert feed.is_empty

    def test_negative_limit_rejected(self, mixed_candidates):
        """Negative limits are invalid input."""
        with pytest.raises(ValueError, match="limit"):
            aggregate(mixed_candidates, limit=-1, now=NOW)

    def test_empty_candidates(self):
        """No candidates: empty items, last_updated is now."""
        feed = aggregate([], limit=10, now=NOW)

        assert feed.items == []
        assert feed.last_updated == NOW

    def test_all_candidates_too_old(self):
        """Nothing in the window gives an empty feed, not an error."""
        candidates = [make_thread(id=f"t{i}", days_ago=10 + i) for i in range(3)]

        feed = aggregate(candidates, limit=10, now=NOW)

        assert feed.is_empty
        assert feed.to_dict() == {"items": [], "lastUpdated": NOW.isoformat()}

    def test_future_dated_item_included(self):
        """Clock skew: future items are treated as brand new."""
        future = make_thread(id="future", views=5, days_ago=-1)

        feed = aggregate([future], limit=10, now=NOW)

        assert _ids(feed) == ["future"]
        assert feed.items[0].score.normalized_score == 5

    def test_non_finite_score_dropped_and_logged(self, log_messages):
        """A NaN counter excludes that item only and logs a warning."""
        bad = make_thread(id="bad", views=float("nan"))
        good = make_thread(id="good", views=3)

        feed = aggregate([bad, good], limit=10, now=NOW)

        assert _ids(feed) == ["good"]
        assert any("'bad'" in m and "non-finite" in m for m in log_messages)

    def test_non_numeric_counter_dropped_and_logged(self, log_messages):
        """A record with a string counter excludes that item only."""
        bad = content_item_from_dict(
            {"id": "b", "title": "Bad Counter", "createdAt": NOW.isoformat(), "views": "12"},
            default_type=ContentType.THREAD,
        )
        good = make_thread(id="g", views=3)

        feed = aggregate([bad, good], limit=10, now=NOW)

        assert _ids(feed) == ["g"]
        assert any("'b'" in m and "unscorable" in m for m in log_messages)

    def test_infinite_score_dropped(self):
        """Infinite counters are treated like NaN."""
        bad = make_listing(ContentType.EA, id="inf", likes=float("inf"))

        feed = aggregate([bad], limit=10, now=NOW)

        assert feed.is_empty

    def test_candidates_not_mutated(self, mixed_candidates):
        """Aggregation leaves the input list and items untouched."""
        snapshot = copy.deepcopy(mixed_candidates)

        aggregate(mixed_candidates, limit=3, now=NOW)

        assert mixed_candidates == snapshot

    def test_accepts_generator(self, mixed_candidates):
        """Any iterable of candidates works."""
        feed = aggregate((c for c in mixed_candidates), limit=10, now=NOW)
        assert len(feed) == 6

    def test_defaults_now_to_current_time(self):
        """Without `now`, last_updated is an aware current timestamp."""
        feed = aggregate([], limit=5)
        assert feed.last_updated.tzinfo is not None


class TestScoreCandidates:
    """Tests for score_candidates()."""

    def test_filters_window(self):
        """Only in-window candidates are scored."""
        entries = score_candidates(
            [make_thread(id="in", days_ago=1), make_thread(id="out", days_ago=9)],
            now=NOW,
        )
        assert [e.item.id for e in entries] == ["in"]


# =============================================================================
# Highlights
# =============================================================================

@pytest.fixture
def week_of_threads():
    """Threads for highlight tabs (plus non-thread noise)."""
    return [
        make_thread(id="newest", views=1, days_ago=0.5),
        make_thread(id="popular", views=500, reply_count=2, days_ago=3),
        make_thread(id="solved_busy", views=10, reply_count=30, is_solved=True, days_ago=5),
        make_thread(id="solved_quiet", views=50, reply_count=1, is_solved=True, days_ago=2),
        make_thread(id="stale", views=9999, days_ago=10),
        make_listing(ContentType.EA, id="ea1", views=10_000, days_ago=0.1),
    ]


@pytest.mark.ranking
class TestSelectHighlights:
    """Tests for select_highlights()."""

    def test_tabs(self):
        """Three tabs are supported."""
        assert HIGHLIGHT_TABS == ("new", "trending", "solved")

    def test_new_tab(self, week_of_threads):
        """'new' lists this week's threads newest first."""
        feed = select_highlights(week_of_threads, tab="new", now=NOW)
        assert _ids(feed) == ["newest", "solved_quiet", "popular", "solved_busy"]

    def test_trending_tab(self, week_of_threads):
        """'trending' ranks by engagement."""
        feed = select_highlights(week_of_threads, tab="trending", now=NOW)
        assert _ids(feed)[0] == "popular"
        assert "ea1" not in _ids(feed)

    def test_solved_tab(self, week_of_threads):
        """'solved' lists solved threads first, busiest first."""
        feed = select_highlights(week_of_threads, tab="solved", now=NOW)
        assert _ids(feed)[:2] == ["solved_busy", "solved_quiet"]

    def test_excludes_other_types_and_old_threads(self, week_of_threads):
        """Only threads inside the window appear."""
        feed = select_highlights(week_of_threads, tab="new", now=NOW)
        assert "ea1" not in _ids(feed)
        assert "stale" not in _ids(feed)

    def test_limit(self, week_of_threads):
        """The limit applies after sorting."""
        feed = select_highlights(week_of_threads, tab="new", limit=2, now=NOW)
        assert _ids(feed) == ["newest", "solved_quiet"]

    def test_unknown_tab_rejected(self, week_of_threads):
        """Unknown tabs raise ValueError."""
        with pytest.raises(ValueError, match="unknown highlights tab"):
            select_highlights(week_of_threads, tab="hottest", now=NOW)

    def test_negative_limit_rejected(self, week_of_threads):
        """Negative limits raise ValueError."""
        with pytest.raises(ValueError, match="limit"):
            select_highlights(week_of_threads, tab="new", limit=-3, now=NOW)
