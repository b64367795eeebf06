"""
Sort / presentation selector for post listings
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

from schemas.canonical import CANONICAL_PLATFORMS, Platform, Post
from schemas.requests import SortKey
from schemas.responses import PostView

# Undated posts sort as if posted at the epoch
EPOCH = datetime(1970, 1, 1)


def sort_posts(posts: Iterable[Post], sort_by: SortKey = SortKey.DATE) -> List[Post]:
    """Descending order by the chosen key; ties keep input order"""
    posts = list(posts)
    if sort_by == SortKey.LIKES:
        return sorted(posts, key=lambda p: p.likes or 0, reverse=True)
    if sort_by == SortKey.COMMENTS:
        return sorted(posts, key=lambda p: p.comments or 0, reverse=True)
    return sorted(posts, key=lambda p: p.post_date or EPOCH, reverse=True)


def partition_by_platform(
    posts: Iterable[Post],
    platforms: Sequence[Platform] = CANONICAL_PLATFORMS,
) -> Dict[Platform, List[Post]]:
    """Group already-ordered posts per platform, every platform present"""
    groups: Dict[Platform, List[Post]] = {platform: [] for platform in platforms}
    for post in posts:
        if post.platform in groups:
            groups[post.platform].append(post)
    return groups


def latest_per_platform(posts: Iterable[Post], limit: int = 6) -> Dict[Platform, List[Post]]:
    """Newest `limit` posts for each platform"""
    groups = partition_by_platform(sort_posts(posts, SortKey.DATE))
    return {platform: items[:limit] for platform, items in groups.items()}


def relative_age_label(post_date: Optional[datetime], now: datetime) -> str:
    """Coarse "n hours/days ago" label"""
    if post_date is None:
        return "unknown"
    hours = int((now - post_date).total_seconds() // 3600)
    if hours < 1:
        return "1 hour ago"
    if hours < 24:
        return f"{hours} hours ago"
    return f"{hours // 24} days ago"


def to_view(post: Post, now: datetime) -> PostView:
    return PostView(
        post=post,
        engagement=post.engagement,
        age_label=relative_age_label(post.post_date, now),
    )


def to_views(posts: Iterable[Post], now: datetime) -> List[PostView]:
    return [to_view(post, now) for post in posts]
