"""
Unit tests for configuration validation
"""

import pytest
from unittest.mock import patch
from pydantic import ValidationError

from schemas.options import BucketMode
from utils.config import Config, validate_config_on_startup


def make_config(**overrides) -> Config:
    return Config(_env_file=None, **overrides)


class TestConfig:

    def test_defaults(self):
        config = make_config()

        assert config.data_source == "spreadsheet"
        assert config.items_per_platform == 10
        assert config.timezone == "Asia/Tokyo"
        assert config.youtube_sheet == "YouTube投稿データ"

    @pytest.mark.parametrize("overrides", [
        {"data_source": "mysql"},
        {"supabase_url": "http://insecure.example.com"},
        {"items_per_platform": 0},
        {"timezone": "Mars/Olympus_Mons"},
        {"environment": "qa"},
        {"log_format": "xml"},
    ])
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(ValidationError):
            make_config(**overrides)

    def test_pipeline_options_follow_config(self):
        config = make_config(
            trailing_window_days=14,
            bucket_mode="weekday",
            include_youtube_shares=False,
            reach_per_post=500,
        )

        options = config.pipeline_options()

        assert options.trailing_window_days == 14
        assert options.bucket_mode == BucketMode.WEEKDAY
        assert options.include_youtube_shares is False
        assert options.reach_per_post == 500


class TestStartupValidation:

    def test_supabase_without_credentials_aborts(self):
        """
        Business Critical: Missing credentials must stop startup, not fail on first request
        """
        config = make_config(data_source="supabase")

        with patch("utils.config.get_config", return_value=config):
            with pytest.raises(SystemExit):
                validate_config_on_startup()

    def test_valid_config_returned(self):
        config = make_config()

        with patch("utils.config.get_config", return_value=config):
            assert validate_config_on_startup() is config
