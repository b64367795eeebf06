"""
Query filter engine: applies dashboard filters to the working set
"""

from datetime import datetime, time, timedelta
from typing import Callable, Iterable, List, Optional

from schemas.canonical import Post
from schemas.requests import FilterSpec
from utils.logging import get_logger

logger = get_logger(__name__)

END_OF_DAY = time(23, 59, 59)

Predicate = Callable[[Post], bool]


def range_bounds(spec: FilterSpec, now: datetime) -> tuple:
    """Lower / upper datetime bounds implied by the date range and period"""
    lower: Optional[datetime] = None
    upper: Optional[datetime] = None
    if spec.date_start is not None:
        lower = datetime.combine(spec.date_start, time.min)
    if spec.period is not None:
        period_start = now - timedelta(days=spec.period.days)
        lower = period_start if lower is None else max(lower, period_start)
    if spec.date_end is not None:
        upper = datetime.combine(spec.date_end, END_OF_DAY)
    return lower, upper


def build_predicates(spec: FilterSpec, now: datetime) -> List[Predicate]:
    """Translate a filter spec into independent post predicates"""
    predicates: List[Predicate] = []

    if spec.platform is not None:
        platform = spec.platform
        predicates.append(lambda p: p.platform == platform)

    lower, upper = range_bounds(spec, now)
    if lower is not None:
        predicates.append(lambda p: p.post_date is not None and p.post_date >= lower)
    if upper is not None:
        predicates.append(lambda p: p.post_date is not None and p.post_date <= upper)

    if spec.keyword:
        needle = spec.keyword.lower()
        predicates.append(
            lambda p: needle in p.content.lower() or needle in p.category_keyword.lower()
        )

    if spec.category is not None:
        category = spec.category
        predicates.append(lambda p: p.category_keyword == category)

    return predicates


def filter_posts(posts: Iterable[Post], spec: FilterSpec, now: datetime) -> List[Post]:
    """Return the posts matching every predicate, preserving order"""
    posts = list(posts)
    predicates = build_predicates(spec, now)
    if not predicates:
        return posts

    matched = [post for post in posts if all(pred(post) for pred in predicates)]
    logger.debug("Filtered %d of %d posts with %d predicates", len(matched), len(posts), len(predicates))
    return matched
