"""
Data source registry for dependency injection
"""

from typing import Callable, Dict

from utils.config import Config
from utils.exceptions import ConfigurationError
from .base import BaseDataSource
from .spreadsheet import SpreadsheetSource, default_sheets
from .supabase_source import SupabaseSource


def _spreadsheet(config: Config) -> BaseDataSource:
    return SpreadsheetSource(
        spreadsheet_id=config.spreadsheet_id,
        sheets=default_sheets(config.youtube_sheet, config.twitter_sheet, config.instagram_sheet),
        items_per_platform=config.items_per_platform,
        timezone=config.timezone,
        timeout=config.source_timeout_seconds,
    )


def _supabase(config: Config) -> BaseDataSource:
    return SupabaseSource(
        supabase_url=config.supabase_url,
        supabase_key=config.supabase_key,
        table=config.supabase_table,
        fetch_limit=config.source_fetch_limit,
        timezone=config.timezone,
    )


class DataSourceRegistry:
    """Registry of interchangeable data sources"""

    def __init__(self):
        self._factories: Dict[str, Callable[[Config], BaseDataSource]] = {
            "spreadsheet": _spreadsheet,
            "supabase": _supabase,
        }

    def create(self, name: str, config: Config) -> BaseDataSource:
        factory = self._factories.get(name.lower())
        if factory is None:
            raise ConfigurationError(f"Unsupported data source: {name}", {"data_source": name})
        return factory(config)

    def list_sources(self) -> list[str]:
        """List all supported sources"""
        return list(self._factories.keys())


# Global registry instance
source_registry = DataSourceRegistry()


def get_data_source(config: Config) -> BaseDataSource:
    """Build the data source selected by configuration"""
    return source_registry.create(config.data_source, config)
