"""
Centralized configuration management with strict validation
"""

from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from pydantic import validator, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
import logging

from schemas.options import BucketMode, PipelineOptions

logger = logging.getLogger(__name__)

DATA_SOURCES = ("spreadsheet", "supabase")
ENVIRONMENTS = ("development", "staging", "production", "test")


class Config(BaseSettings):
    """Application configuration with validation"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        validate_assignment=True,
        extra="ignore",
    )

    # Data source selection
    data_source: str = Field("spreadsheet", description="spreadsheet or supabase")

    # Spreadsheet export
    spreadsheet_id: str = Field("1Mwlw2dKBIchpZ2WEQtsyu-NjEQZDdr_HNhXCbHv4UZg")
    youtube_sheet: str = Field("YouTube投稿データ")
    twitter_sheet: str = Field("X投稿データ")
    instagram_sheet: str = Field("Instagram投稿データ")
    items_per_platform: int = Field(10)
    source_timeout_seconds: float = Field(30.0)

    # Supabase
    supabase_url: Optional[str] = Field(None)
    supabase_key: Optional[str] = Field(None)
    supabase_table: str = Field("ugc_posts")
    source_fetch_limit: int = Field(500)

    # Pipeline
    timezone: str = Field("Asia/Tokyo")
    trailing_window_days: int = Field(7)
    bucket_mode: BucketMode = Field(BucketMode.CALENDAR_DAY)
    include_youtube_shares: bool = Field(True)
    reach_per_post: int = Field(1000)
    min_bar_percent: float = Field(3.0)
    top_categories: int = Field(5)
    latest_posts_per_platform: int = Field(6)

    # Application
    environment: str = Field("development")
    log_level: str = Field("INFO")
    log_format: str = Field("json")
    sentry_dsn: Optional[str] = Field(None)
    port: int = Field(8000)

    @validator('data_source')
    def validate_data_source(cls, v):
        if v not in DATA_SOURCES:
            raise ValueError(f"DATA_SOURCE must be one of: {', '.join(DATA_SOURCES)}")
        return v

    @validator('supabase_url')
    def validate_supabase_url(cls, v):
        if v and not v.startswith('https://'):
            raise ValueError("SUPABASE_URL must be a valid HTTPS URL")
        return v

    @validator('items_per_platform', 'source_fetch_limit', 'trailing_window_days', 'top_categories', 'latest_posts_per_platform')
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("Window and limit sizes must be positive")
        return v

    @validator('timezone')
    def validate_timezone(cls, v):
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {v}")
        return v

    @validator('environment')
    def validate_environment(cls, v):
        if v not in ENVIRONMENTS:
            raise ValueError(f"ENVIRONMENT must be one of: {', '.join(ENVIRONMENTS)}")
        return v

    @validator('log_format')
    def validate_log_format(cls, v):
        if v not in ('json', 'plain'):
            raise ValueError("LOG_FORMAT must be json or plain")
        return v

    def pipeline_options(self) -> PipelineOptions:
        """Pipeline flags derived from configuration"""
        return PipelineOptions(
            trailing_window_days=self.trailing_window_days,
            bucket_mode=self.bucket_mode,
            include_youtube_shares=self.include_youtube_shares,
            reach_per_post=self.reach_per_post,
            min_bar_percent=self.min_bar_percent,
            top_categories=self.top_categories,
            latest_posts_per_platform=self.latest_posts_per_platform,
            timezone=self.timezone,
        )


@lru_cache()
def get_config() -> Config:
    """Get cached configuration instance"""
    try:
        return Config()
    except Exception as e:
        raise RuntimeError(f"Configuration validation failed: {str(e)}")


def validate_config_on_startup() -> Config:
    """Validate configuration at application startup with fail-fast approach"""
    try:
        config = get_config()

        if config.data_source == "supabase":
            missing = [
                name for name, value in {
                    "SUPABASE_URL": config.supabase_url,
                    "SUPABASE_KEY": config.supabase_key,
                }.items()
                if not value or len(value.strip()) == 0
            ]
            if missing:
                raise RuntimeError(f"CRITICAL: Missing settings for supabase source: {', '.join(missing)}")

        if config.data_source == "spreadsheet" and not config.spreadsheet_id.strip():
            raise RuntimeError("CRITICAL: SPREADSHEET_ID is required for the spreadsheet source")

        logger.info("All configuration validation passed")
        return config

    except Exception as e:
        logger.error(f"CONFIGURATION VALIDATION FAILED: {str(e)}")
        raise SystemExit(f"Application startup aborted: {str(e)}")
