"""
Unit tests for pipeline orchestration
"""

from datetime import date

from schemas.canonical import CANONICAL_PLATFORMS, Platform
from schemas.options import PipelineOptions
from schemas.requests import FilterSpec, SortKey
from services.pipeline import available_categories, build_dashboard_view, build_working_set


class TestBuildWorkingSet:

    def test_drops_invalid_and_unknown_rows(self, raw_rows, options):
        posts = build_working_set(raw_rows, options)

        assert [p.username for p in posts] == ["udon_channel", "udon_lover"]

    def test_respects_youtube_share_flag(self, options):
        rows = [{"platform": "youtube", "Shares": "9", "Keyword": "k"}]

        with_shares = build_working_set(rows, options)
        without = build_working_set(rows, PipelineOptions(include_youtube_shares=False))

        assert with_shares[0].shares == 9
        assert without[0].shares == 0

    def test_empty_rows(self, options):
        assert build_working_set([], options) == []


class TestBuildDashboardView:

    def test_full_view_for_sample(self, sample_posts, options, now):
        view = build_dashboard_view(sample_posts, FilterSpec(), SortKey.LIKES, options, now)

        assert view.stats.total_posts == 4
        assert [v.post.likes for v in view.posts] == [120, 55, 40, 5]
        assert list(view.posts_by_platform) == list(CANONICAL_PLATFORMS)
        assert [v.post.likes for v in view.posts_by_platform[Platform.YOUTUBE]] == [120, 5]
        assert len(view.time_series) == 3
        assert len(view.trailing_series) == 7
        assert view.trailing_chart.has_data is True
        assert view.category_ranking[0].count == 2
        assert view.posts[0].age_label == "1 days ago"

    def test_categories_come_from_unfiltered_working_set(self, sample_posts, options, now):
        view = build_dashboard_view(sample_posts, FilterSpec(category="白ごま担々"), SortKey.DATE, options, now)

        assert view.stats.total_posts == 2
        assert view.categories == ["天ぷら定期券", "白ごま担々"]

    def test_empty_result_is_safe(self, sample_posts, options, now):
        view = build_dashboard_view(sample_posts, FilterSpec(date_end=date(2020, 1, 1)), SortKey.DATE, options, now)

        assert view.stats.total_posts == 0
        assert view.stats.average_engagement == 0.0
        assert view.posts == []
        assert view.time_series == []
        assert view.time_series_chart.has_data is False
        assert all(b.count == 0 for b in view.platform_buckets)


def test_available_categories_first_seen_order(sample_posts):
    assert available_categories(sample_posts) == ["天ぷら定期券", "白ごま担々"]


def test_tempura_scenario(options, now):
    """
    Business Critical: Uncategorized rows are dropped before any totals are computed
    """
    rows = [
        {"platform": "youtube", "LikeCount": "10", "Keyword": "tempura", "Channel": "a"},
        {"platform": "youtube", "LikeCount": "20", "Keyword": "tempura", "Channel": "b"},
        {"platform": "youtube", "LikeCount": "0", "Keyword": "tempura", "Channel": "c"},
        {"platform": "youtube", "LikeCount": "99", "Keyword": "", "Channel": "d"},
    ]

    posts = build_working_set(rows, options)
    view = build_dashboard_view(posts, FilterSpec(), SortKey.DATE, options, now)
    twitter_only = build_dashboard_view(posts, FilterSpec(platform="twitter"), SortKey.DATE, options, now)

    assert view.stats.total_posts == 3
    assert view.stats.total_likes == 30
    assert twitter_only.stats.total_posts == 0
    assert twitter_only.posts == []
