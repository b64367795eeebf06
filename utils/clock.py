"""
Local wall-clock helpers
"""

from datetime import datetime
from zoneinfo import ZoneInfo


def local_now(timezone: str = "Asia/Tokyo") -> datetime:
    """Current local time as a naive datetime, comparable with post dates"""
    return datetime.now(ZoneInfo(timezone)).replace(tzinfo=None)


def to_aware(value: datetime, timezone: str = "Asia/Tokyo") -> datetime:
    """Attach the configured zone to a naive local datetime"""
    return value.replace(tzinfo=ZoneInfo(timezone))
