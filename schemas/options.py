"""
Pipeline configuration flags replacing per-page variants
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class BucketMode(str, Enum):
    """Time-series bucketing dimension"""
    CALENDAR_DAY = "calendar_day"
    WEEKDAY = "weekday"


class PipelineOptions(BaseModel):
    """Knobs for the normalization / aggregation / charting pipeline"""
    model_config = ConfigDict(frozen=True)

    trailing_window_days: int = Field(7, ge=1, le=366, description="Length of the fixed trailing window")
    bucket_mode: BucketMode = Field(BucketMode.CALENDAR_DAY, description="Time-series bucketing")
    include_youtube_shares: bool = Field(True, description="Count shares for YouTube posts")
    reach_per_post: int = Field(1000, ge=0, description="Estimated reach per post")
    min_bar_percent: float = Field(3.0, ge=0, le=100, description="Minimum visible bar height")
    top_categories: int = Field(5, ge=1, description="Category ranking size")
    latest_posts_per_platform: int = Field(6, ge=1, description="Latest posts panel size")
    timezone: str = Field("Asia/Tokyo", description="Local timezone for day keys")
