"""
Response schemas for dashboard endpoints
"""

from datetime import datetime, date
from typing import List, Optional, Dict
from pydantic import BaseModel, ConfigDict, Field

from schemas.canonical import Platform, Post


class AggregateStats(BaseModel):
    """Summary statistics over a filtered post collection"""
    total_posts: int = Field(0, description="Number of posts")
    total_likes: int = Field(0, description="Sum of likes")
    total_comments: int = Field(0, description="Sum of comments")
    total_shares: int = Field(0, description="Sum of shares")
    average_engagement: float = Field(0.0, description="(likes + comments + shares) / posts")
    estimated_reach: int = Field(0, description="Posts times the per-post reach constant")
    unique_user_count: int = Field(0, description="Distinct non-empty usernames")


class PlatformBucket(BaseModel):
    """Per-platform totals; always emitted for every canonical platform"""
    platform: Platform
    count: int = 0
    likes: int = 0
    comments: int = 0
    shares: int = 0
    percentage_of_total: float = 0.0


class PlatformTally(BaseModel):
    """Count / likes sub-tally inside a time bucket"""
    count: int = 0
    likes: int = 0


class TimeSeriesBucket(BaseModel):
    """One time-series cell keyed by day (or weekday)"""
    key: str = Field(..., description="Bucket key: ISO date or weekday name")
    label: str = Field(..., description="Display label, e.g. 3/14 or Mon")
    day: Optional[date] = Field(None, description="Calendar day for calendar buckets")
    platforms: Dict[Platform, PlatformTally] = Field(default_factory=dict)

    def tally(self, platform: Platform) -> PlatformTally:
        return self.platforms.get(platform) or PlatformTally()


class CategoryRanking(BaseModel):
    """Menu keyword performance"""
    category: str
    count: int
    total_engagement: int
    average_engagement: float


class AxisScale(BaseModel):
    """Axis scale derived from an observed maximum"""
    step: int
    max_value: int
    ticks: List[int] = Field(..., description="Tick values from top to bottom")


class BarGeometry(BaseModel):
    """A single bar in percentage space"""
    platform: Platform
    value: int
    height_percent: float
    is_placeholder: bool = Field(..., description="True for zero values rendered as empty slots")
    title: str


class BucketBars(BaseModel):
    """All bars drawn in one x cell"""
    key: str
    label: str
    x_percent: float
    bars: List[BarGeometry]


class PolylinePoint(BaseModel):
    index: int
    x: float
    y: float
    value: int
    label: str


class PolylineSegment(BaseModel):
    """A contiguous run of non-zero points; a single point renders as a marker"""
    points: List[PolylinePoint]

    @property
    def is_marker(self) -> bool:
        return len(self.points) == 1


class PlatformLine(BaseModel):
    platform: Platform
    segments: List[PolylineSegment] = Field(default_factory=list)


class ChartGeometry(BaseModel):
    """Renderable combination bar/line chart"""
    has_data: bool
    bar_axis: AxisScale
    line_axis: AxisScale
    buckets: List[BucketBars] = Field(default_factory=list)
    lines: List[PlatformLine] = Field(default_factory=list)


class PostView(BaseModel):
    """Post plus display-only derived fields"""
    model_config = ConfigDict(frozen=True)

    post: Post
    engagement: int
    age_label: str


class DashboardView(BaseModel):
    """Everything the presentation layer needs for one query"""
    stats: AggregateStats
    platform_buckets: List[PlatformBucket]
    time_series: List[TimeSeriesBucket]
    trailing_series: List[TimeSeriesBucket]
    time_series_chart: ChartGeometry
    trailing_chart: ChartGeometry
    category_ranking: List[CategoryRanking]
    posts: List[PostView]
    posts_by_platform: Dict[Platform, List[PostView]]
    latest_by_platform: Dict[Platform, List[PostView]]
    categories: List[str] = Field(default_factory=list, description="Selectable categories in the working set")


class DashboardResponse(BaseModel):
    """Dashboard payload with fetch status"""
    view: DashboardView
    loading: bool = False
    error: Optional[str] = None
    last_updated: Optional[datetime] = None
    working_set_size: int = 0


class HealthResponse(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    timestamp: datetime = Field(..., description="Health check timestamp")
    dependencies: Dict[str, str] = Field(default_factory=dict, description="Dependency status")
