"""
Pipeline orchestration: raw rows -> working set -> dashboard view
"""

import time
from datetime import datetime
from typing import Iterable, List, Optional

from schemas.canonical import Platform, Post, PostNormalizer, RawRow
from schemas.options import PipelineOptions
from schemas.requests import FilterSpec, SortKey
from schemas.responses import DashboardView
from services.aggregator import aggregate
from services.chart_geometry import build_chart
from services.presentation import latest_per_platform, partition_by_platform, sort_posts, to_views
from services.query_filter import filter_posts
from services.validity_filter import is_valid_post
from utils.metrics_collector import metrics
from utils.structured_logging import get_structured_logger

logger = get_structured_logger(__name__)


def build_working_set(rows: Iterable[RawRow], options: PipelineOptions) -> List[Post]:
    """Normalize rows and keep only valid posts from known platforms"""
    normalizer = PostNormalizer(
        timezone=options.timezone,
        include_youtube_shares=options.include_youtube_shares,
    )
    rows = list(rows)
    posts = normalizer.normalize_many(rows)

    valid = [post for post in posts if is_valid_post(post)]
    known = [post for post in valid if post.platform != Platform.UNKNOWN]

    invalid_count = len(posts) - len(valid)
    unknown_count = len(valid) - len(known)
    metrics.track_dropped_rows("invalid_category", invalid_count)
    metrics.track_dropped_rows("unknown_platform", unknown_count)
    if unknown_count:
        logger.warning("Dropped posts with unrecognized platform labels", count=unknown_count)
    logger.debug(
        "Built working set",
        rows=len(rows), valid=len(known), invalid=invalid_count, unknown_platform=unknown_count,
    )
    return known


def available_categories(posts: Iterable[Post]) -> List[str]:
    """Distinct category keywords in first-seen order"""
    return list(dict.fromkeys(post.category_keyword for post in posts))


def build_dashboard_view(
    posts: List[Post],
    filters: Optional[FilterSpec],
    sort_by: SortKey,
    options: PipelineOptions,
    now: datetime,
) -> DashboardView:
    """Recompute every derived structure from the working set"""
    started = time.perf_counter()
    filters = filters or FilterSpec()

    matched = filter_posts(posts, filters, now)
    aggregates = aggregate(matched, options, now)
    ordered = sort_posts(matched, sort_by)

    view = DashboardView(
        stats=aggregates.stats,
        platform_buckets=aggregates.platform_buckets,
        time_series=aggregates.time_series,
        trailing_series=aggregates.trailing_series,
        time_series_chart=build_chart(aggregates.time_series, options.min_bar_percent),
        trailing_chart=build_chart(aggregates.trailing_series, options.min_bar_percent),
        category_ranking=aggregates.category_ranking,
        posts=to_views(ordered, now),
        posts_by_platform={
            platform: to_views(items, now)
            for platform, items in partition_by_platform(ordered).items()
        },
        latest_by_platform={
            platform: to_views(items, now)
            for platform, items in latest_per_platform(matched, options.latest_posts_per_platform).items()
        },
        categories=available_categories(posts),
    )
    metrics.track_pipeline(time.perf_counter() - started)
    return view
