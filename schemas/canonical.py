"""
Canonical schemas for normalizing UGC post rows
"""

import re
import math
from datetime import datetime
from typing import Optional, Dict, Any, List, Sequence, Tuple
from zoneinfo import ZoneInfo
from enum import Enum

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, validator


RawRow = Dict[str, Any]


class Platform(str, Enum):
    """Supported social media platforms"""
    YOUTUBE = "YouTube"
    INSTAGRAM = "Instagram"
    TWITTER = "Twitter"
    UNKNOWN = "Unknown"


# Fixed display order used by every per-platform structure
CANONICAL_PLATFORMS: Tuple[Platform, ...] = (
    Platform.YOUTUBE,
    Platform.INSTAGRAM,
    Platform.TWITTER,
)

PLATFORM_LABELS: Dict[str, Platform] = {
    "youtube": Platform.YOUTUBE,
    "twitter": Platform.TWITTER,
    "x": Platform.TWITTER,
    "instagram": Platform.INSTAGRAM,
}

# Placeholder categories meaning "keyword not set yet"
RESERVED_CATEGORY_SENTINELS = frozenset({"_キーワード設定", "キーワード設定"})

# Stand-in author for rows without a username
UNKNOWN_USERNAME = "unknown"


# Ordered alias keys per canonical field: API name, localized sheet header, canonical column
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "platform": ("platform", "Platform"),
    "username": ("Channel", "Username", "ユーザー名", "username"),
    "post_date": ("PublishedAt", "PostedAt", "投稿日時", "post_date"),
    "content": ("Description", "Text", "Caption", "本文", "content"),
    "likes": ("LikeCount", "Likes", "いいね数", "likes"),
    "comments": ("CommentCount", "Comments", "返信数", "comments"),
    "shares": ("RetweetCount", "Shares", "リツイート数", "shares"),
    "category_keyword": ("Keyword", "キーワード", "menu_keyword"),
    "media_url": ("Thumbnail", "MediaUrl", "media_url"),
    "post_url": ("URL", "パーマリンク", "post_url"),
}

_LEADING_INT = re.compile(r"^[+-]?\d+")

# Words pandas resolves relative to the clock instead of rejecting
_RELATIVE_DATE_WORDS = frozenset({"now", "today", "tomorrow", "yesterday"})
# Year-less strings such as "3/14" come back as year 1
MIN_POST_YEAR = 1900


class Post(BaseModel):
    """Normalized UGC post"""
    model_config = ConfigDict(frozen=True)

    platform: Platform = Field(..., description="Source platform")
    username: str = Field(UNKNOWN_USERNAME, description="Author handle or channel name")
    post_date: Optional[datetime] = Field(None, description="Local post time, None when missing or unparseable")
    content: str = Field("", description="Post body / caption / description")
    likes: int = Field(0, ge=0, description="Like count")
    comments: int = Field(0, ge=0, description="Comment / reply count")
    shares: int = Field(0, ge=0, description="Share / retweet count")
    category_keyword: str = Field("", description="Menu keyword the post was collected for")
    media_url: Optional[str] = Field(None, description="Thumbnail or media URL")
    post_url: Optional[str] = Field(None, description="Permalink")

    @validator("username")
    def default_username(cls, v):
        return v if v and v.strip() else UNKNOWN_USERNAME

    @property
    def engagement(self) -> int:
        return self.likes + self.comments + self.shares

    def to_raw_row(self) -> RawRow:
        """Render the post back into canonical relational column names"""
        return {
            "platform": self.platform.value,
            "username": self.username,
            "post_date": self.post_date.isoformat() if self.post_date else None,
            "content": self.content,
            "likes": self.likes,
            "comments": self.comments,
            "shares": self.shares,
            "menu_keyword": self.category_keyword,
            "media_url": self.media_url,
            "post_url": self.post_url,
        }


def resolve_field(row: RawRow, aliases: Sequence[str]) -> Any:
    """Return the first present, non-empty value among the alias keys"""
    for key in aliases:
        value = row.get(key)
        if value is None:
            continue
        if isinstance(value, float) and math.isnan(value):
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def normalize_platform(label: Any) -> Platform:
    """Map a raw platform label to the canonical enum, Unknown when unrecognized"""
    if label is None:
        return Platform.UNKNOWN
    if isinstance(label, Platform):
        return label
    return PLATFORM_LABELS.get(str(label).strip().lower(), Platform.UNKNOWN)


def coerce_count(value: Any) -> int:
    """Parse a non-negative integer count, 0 on anything unusable"""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return 0
        return max(int(value), 0)
    match = _LEADING_INT.match(str(value).strip().replace(",", ""))
    if not match:
        return 0
    return max(int(match.group(0)), 0)


def parse_post_date(value: Any, timezone: str = "Asia/Tokyo") -> Optional[datetime]:
    """Parse a date-like value into a naive local datetime, None when unparseable"""
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.year < MIN_POST_YEAR:
            return None
        ts = pd.Timestamp(value)
    else:
        text = str(value).strip()
        if not text or text.lower() in _RELATIVE_DATE_WORDS:
            return None
        ts = pd.to_datetime(text, errors="coerce")
    if ts is None or pd.isna(ts) or ts.year < MIN_POST_YEAR:
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert(ZoneInfo(timezone)).tz_localize(None)
    return ts.to_pydatetime()


def _optional_text(value: Any) -> Optional[str]:
    return str(value).strip() if value is not None else None


class PostNormalizer:
    """Maps heterogeneous spreadsheet / table rows to canonical posts"""

    def __init__(self, timezone: str = "Asia/Tokyo", include_youtube_shares: bool = True):
        self.timezone = timezone
        self.include_youtube_shares = include_youtube_shares

    def normalize(self, row: RawRow, platform_hint: Optional[str] = None) -> Post:
        """Normalize one raw row; never raises on malformed input"""
        platform = normalize_platform(
            platform_hint if platform_hint else resolve_field(row, FIELD_ALIASES["platform"])
        )

        shares = coerce_count(resolve_field(row, FIELD_ALIASES["shares"]))
        if platform == Platform.YOUTUBE and not self.include_youtube_shares:
            shares = 0

        username = resolve_field(row, FIELD_ALIASES["username"])
        content = resolve_field(row, FIELD_ALIASES["content"])
        category = resolve_field(row, FIELD_ALIASES["category_keyword"])

        return Post(
            platform=platform,
            username=str(username).strip() if username is not None else UNKNOWN_USERNAME,
            post_date=parse_post_date(resolve_field(row, FIELD_ALIASES["post_date"]), self.timezone),
            content=str(content) if content is not None else "",
            likes=coerce_count(resolve_field(row, FIELD_ALIASES["likes"])),
            comments=coerce_count(resolve_field(row, FIELD_ALIASES["comments"])),
            shares=shares,
            category_keyword=str(category) if category is not None else "",
            media_url=_optional_text(resolve_field(row, FIELD_ALIASES["media_url"])),
            post_url=_optional_text(resolve_field(row, FIELD_ALIASES["post_url"])),
        )

    def normalize_many(self, rows: List[RawRow]) -> List[Post]:
        return [self.normalize(row) for row in rows]
