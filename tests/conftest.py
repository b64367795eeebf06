"""
Pytest configuration and shared fixtures for UGC dashboard tests
"""

import pytest
from datetime import datetime
from typing import Any, Dict, List, Optional

from schemas.canonical import Platform, Post
from schemas.options import PipelineOptions
from services.sources.base import BaseDataSource, SourceResult


FIXED_NOW = datetime(2024, 3, 15, 12, 0, 0)


def make_post(
    platform: Platform = Platform.YOUTUBE,
    category: str = "天ぷら定期券",
    post_date: Optional[datetime] = FIXED_NOW,
    likes: int = 0,
    comments: int = 0,
    shares: int = 0,
    username: str = "user",
    content: str = "",
) -> Post:
    return Post(
        platform=platform,
        username=username,
        post_date=post_date,
        content=content,
        likes=likes,
        comments=comments,
        shares=shares,
        category_keyword=category,
    )


class StaticSource(BaseDataSource):
    """In-memory source returning canned results in order"""

    def __init__(self, *results: SourceResult):
        self.results = list(results)
        self.calls = 0

    @property
    def source_name(self) -> str:
        return "static"

    async def fetch_rows(self, filters=None) -> SourceResult:
        result = self.results[min(self.calls, len(self.results) - 1)]
        self.calls += 1
        return result


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def options() -> PipelineOptions:
    return PipelineOptions(timezone="Asia/Tokyo")


@pytest.fixture
def youtube_sheet_row() -> Dict[str, Any]:
    """Row shaped like the YouTube export sheet"""
    return {
        "Channel": "udon_channel",
        "PublishedAt": "2024-03-14T10:00:00",
        "Description": "Trying the new tempura pass",
        "LikeCount": "120",
        "CommentCount": "8",
        "Keyword": "天ぷら定期券",
        "Thumbnail": "https://i.ytimg.com/vi/abc/default.jpg",
        "URL": "https://youtube.com/watch?v=abc",
        "platform": "YouTube",
    }


@pytest.fixture
def twitter_sheet_row() -> Dict[str, Any]:
    """Row shaped like the X export sheet with localized headers"""
    return {
        "ユーザー名": "udon_lover",
        "投稿日時": "2024-03-13 18:30:00",
        "本文": "白ごま担々 was great",
        "いいね数": "1,204",
        "返信数": "3",
        "リツイート数": "15",
        "キーワード": "白ごま担々",
        "パーマリンク": "https://x.com/udon_lover/status/1",
        "platform": "x",
    }


@pytest.fixture
def raw_rows(youtube_sheet_row, twitter_sheet_row) -> List[Dict[str, Any]]:
    return [
        youtube_sheet_row,
        twitter_sheet_row,
        {"platform": "Instagram", "Username": "insta", "Caption": "lunch", "Keyword": "キーワード設定"},
        {"platform": "Instagram", "Username": "insta2", "Caption": "no tag", "Keyword": ""},
        {"platform": "TikTok", "Username": "tt", "Keyword": "天ぷら定期券"},
    ]


@pytest.fixture
def sample_posts() -> List[Post]:
    return [
        make_post(Platform.YOUTUBE, "天ぷら定期券", datetime(2024, 3, 14, 10), likes=120, comments=8, username="a"),
        make_post(Platform.TWITTER, "白ごま担々", datetime(2024, 3, 13, 18, 30), likes=40, comments=3, shares=15, username="b"),
        make_post(Platform.INSTAGRAM, "天ぷら定期券", datetime(2024, 3, 11, 9), likes=55, comments=2, username="c"),
        make_post(Platform.YOUTUBE, "白ごま担々", None, likes=5, username="a"),
    ]


@pytest.fixture
def post_factory():
    return make_post


@pytest.fixture
def static_source():
    return StaticSource
