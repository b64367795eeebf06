"""
Request schemas for dashboard queries
"""

from datetime import date
from typing import Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, validator

from schemas.canonical import Platform, normalize_platform


# Values meaning "no constraint" in the platform / category selectors
ALL = "all"
ALL_ALIASES = frozenset({"", "all", "すべて"})


class SortKey(str, Enum):
    """Post list ordering"""
    DATE = "date"
    LIKES = "likes"
    COMMENTS = "comments"


class Period(str, Enum):
    """Named trailing windows relative to now"""
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"

    @property
    def days(self) -> int:
        return int(self.value[:-1])


class FilterSpec(BaseModel):
    """User-selected dashboard filters; every field defaults to no constraint"""
    model_config = ConfigDict(frozen=True)

    platform: Optional[Platform] = Field(None, description="Canonical platform, None for all")
    date_start: Optional[date] = Field(None, description="Inclusive start date")
    date_end: Optional[date] = Field(None, description="Inclusive end date (end of day)")
    keyword: Optional[str] = Field(None, description="Substring matched against content or category")
    category: Optional[str] = Field(None, description="Exact category keyword, None for all")
    period: Optional[Period] = Field(None, description="Trailing window")

    @validator("platform", pre=True)
    def validate_platform(cls, v):
        if v is None or isinstance(v, Platform):
            return v
        if str(v).strip().lower() in ALL_ALIASES:
            return None
        platform = normalize_platform(v)
        if platform == Platform.UNKNOWN:
            raise ValueError(f"Unsupported platform: {v}")
        return platform

    @validator("keyword", pre=True)
    def blank_keyword_to_none(cls, v):
        if v is None or not str(v).strip():
            return None
        return str(v)

    @validator("category", pre=True)
    def all_category_to_none(cls, v):
        if v is None or str(v).strip().lower() in ALL_ALIASES:
            return None
        return str(v)

    @validator("date_end")
    def validate_date_range(cls, v, values):
        start = values.get("date_start")
        if v is not None and start is not None and v < start:
            raise ValueError("date_end must not be before date_start")
        return v
