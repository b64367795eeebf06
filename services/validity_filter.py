"""
Validity filter applied right after normalization
"""

from typing import Iterable, List

from schemas.canonical import Post, RESERVED_CATEGORY_SENTINELS


def is_valid_post(post: Post) -> bool:
    """A post is usable iff it carries a real category keyword"""
    keyword = post.category_keyword.strip()
    return bool(keyword) and keyword not in RESERVED_CATEGORY_SENTINELS


def filter_valid_posts(posts: Iterable[Post]) -> List[Post]:
    return [post for post in posts if is_valid_post(post)]
