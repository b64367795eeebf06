"""
Aggregation of filtered posts into stats, platform, time and category buckets
"""

from collections import OrderedDict
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, NamedTuple, Sequence

from schemas.canonical import CANONICAL_PLATFORMS, UNKNOWN_USERNAME, Platform, Post
from schemas.options import BucketMode, PipelineOptions
from schemas.responses import (
    AggregateStats, CategoryRanking, PlatformBucket, PlatformTally, TimeSeriesBucket,
)
from utils.logging import get_logger

logger = get_logger(__name__)

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class Aggregates(NamedTuple):
    stats: AggregateStats
    platform_buckets: List[PlatformBucket]
    time_series: List[TimeSeriesBucket]
    trailing_series: List[TimeSeriesBucket]
    category_ranking: List[CategoryRanking]


def compute_stats(posts: Sequence[Post], reach_per_post: int = 1000) -> AggregateStats:
    """Summary statistics; an empty collection yields all zeros"""
    total_posts = len(posts)
    total_likes = sum(p.likes for p in posts)
    total_comments = sum(p.comments for p in posts)
    total_shares = sum(p.shares for p in posts)
    engagement = total_likes + total_comments + total_shares
    users = {p.username for p in posts if p.username.strip() and p.username != UNKNOWN_USERNAME}

    return AggregateStats(
        total_posts=total_posts,
        total_likes=total_likes,
        total_comments=total_comments,
        total_shares=total_shares,
        average_engagement=engagement / total_posts if total_posts else 0.0,
        estimated_reach=total_posts * reach_per_post,
        unique_user_count=len(users),
    )


def compute_platform_buckets(posts: Sequence[Post]) -> List[PlatformBucket]:
    """One bucket per canonical platform in fixed order, zero-filled"""
    buckets = {platform: PlatformBucket(platform=platform) for platform in CANONICAL_PLATFORMS}
    for post in posts:
        bucket = buckets.get(post.platform)
        if bucket is None:
            continue
        bucket.count += 1
        bucket.likes += post.likes
        bucket.comments += post.comments
        bucket.shares += post.shares

    total = len(posts)
    for bucket in buckets.values():
        bucket.percentage_of_total = round(bucket.count / total * 100, 1) if total else 0.0
    return list(buckets.values())


def _empty_tallies() -> Dict[Platform, PlatformTally]:
    return {platform: PlatformTally() for platform in CANONICAL_PLATFORMS}


def _day_bucket(day: date) -> TimeSeriesBucket:
    return TimeSeriesBucket(
        key=day.isoformat(),
        label=f"{day.month}/{day.day}",
        day=day,
        platforms=_empty_tallies(),
    )


def _weekday_bucket(weekday: int) -> TimeSeriesBucket:
    return TimeSeriesBucket(
        key=WEEKDAY_LABELS[weekday].lower(),
        label=WEEKDAY_LABELS[weekday],
        platforms=_empty_tallies(),
    )


def _add(bucket: TimeSeriesBucket, post: Post) -> None:
    tally = bucket.platforms.get(post.platform)
    if tally is None:
        return
    tally.count += 1
    tally.likes += post.likes


def matched_day_series(posts: Iterable[Post], mode: BucketMode = BucketMode.CALENDAR_DAY) -> List[TimeSeriesBucket]:
    """Buckets for every day (or weekday) with at least one dated post, chronological"""
    if mode == BucketMode.WEEKDAY:
        by_weekday: Dict[int, TimeSeriesBucket] = {}
        for post in posts:
            if post.post_date is None:
                continue
            weekday = post.post_date.weekday()
            if weekday not in by_weekday:
                by_weekday[weekday] = _weekday_bucket(weekday)
            _add(by_weekday[weekday], post)
        return [by_weekday[k] for k in sorted(by_weekday)]

    # Keyed by full date so posts from different years never merge
    by_day: Dict[date, TimeSeriesBucket] = {}
    for post in posts:
        if post.post_date is None:
            continue
        day = post.post_date.date()
        if day not in by_day:
            by_day[day] = _day_bucket(day)
        _add(by_day[day], post)
    return [by_day[k] for k in sorted(by_day)]


def trailing_window_series(
    posts: Iterable[Post],
    days: int,
    now: datetime,
    mode: BucketMode = BucketMode.CALENDAR_DAY,
) -> List[TimeSeriesBucket]:
    """Zero-filled buckets for each of the last `days` days ending today"""
    today = now.date()
    window: "OrderedDict[date, TimeSeriesBucket]" = OrderedDict()
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        bucket = _day_bucket(day)
        if mode == BucketMode.WEEKDAY:
            bucket.label = WEEKDAY_LABELS[day.weekday()]
        window[day] = bucket

    for post in posts:
        if post.post_date is None:
            continue
        bucket = window.get(post.post_date.date())
        if bucket is not None:
            _add(bucket, post)
    return list(window.values())


def compute_category_ranking(posts: Iterable[Post], top_n: int = 5) -> List[CategoryRanking]:
    """Top categories by post count; ties keep first-seen order"""
    groups: Dict[str, List[int]] = {}
    for post in posts:
        counts = groups.setdefault(post.category_keyword, [0, 0])
        counts[0] += 1
        counts[1] += post.engagement

    ranked = sorted(groups.items(), key=lambda item: item[1][0], reverse=True)
    return [
        CategoryRanking(
            category=category,
            count=count,
            total_engagement=engagement,
            average_engagement=engagement / count if count else 0.0,
        )
        for category, (count, engagement) in ranked[:top_n]
    ]


def aggregate(posts: Sequence[Post], options: PipelineOptions, now: datetime) -> Aggregates:
    """Full recomputation of every derived aggregate for one query"""
    posts = list(posts)
    result = Aggregates(
        stats=compute_stats(posts, options.reach_per_post),
        platform_buckets=compute_platform_buckets(posts),
        time_series=matched_day_series(posts, options.bucket_mode),
        trailing_series=trailing_window_series(posts, options.trailing_window_days, now, options.bucket_mode),
        category_ranking=compute_category_ranking(posts, options.top_categories),
    )
    logger.debug(
        "Aggregated %d posts into %d days, %d categories",
        len(posts), len(result.time_series), len(result.category_ranking),
    )
    return result
