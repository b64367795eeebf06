"""
Relational (Supabase table) data source with predicate pushdown
"""

import asyncio
from datetime import datetime
from typing import Any, List, Optional

from supabase import create_client, Client

from schemas.canonical import RESERVED_CATEGORY_SENTINELS, RawRow
from schemas.requests import FilterSpec
from services.query_filter import range_bounds
from services.sources.base import BaseDataSource, SourceResult
from utils.clock import local_now, to_aware
from utils.structured_logging import get_structured_logger

logger = get_structured_logger(__name__)


class SupabaseSource(BaseDataSource):
    """Reads already-normalized rows from a Supabase / PostgREST table"""

    def __init__(
        self,
        supabase_url: Optional[str] = None,
        supabase_key: Optional[str] = None,
        table: str = "ugc_posts",
        fetch_limit: int = 500,
        timezone: str = "Asia/Tokyo",
        client: Optional[Client] = None,
    ):
        if client is None:
            if not supabase_url or not supabase_key:
                raise ValueError("Supabase URL and key must be set")
            client = create_client(supabase_url, supabase_key)
        self.client = client
        self.table = table
        self.fetch_limit = fetch_limit
        self.timezone = timezone

    @property
    def source_name(self) -> str:
        return "supabase"

    def build_query(self, filters: Optional[FilterSpec] = None, now: Optional[datetime] = None) -> Any:
        """
        Translate the filter spec into a PostgREST query.

        Date bounds are local wall-clock times and are sent with their UTC offset
        so a timestamptz column compares them in the configured zone.
        """
        query = self.client.table(self.table).select("*")
        filters = filters or FilterSpec()

        if filters.platform is not None:
            query = query.eq("platform", filters.platform.value)
        if filters.category is not None:
            query = query.eq("menu_keyword", filters.category)

        lower, upper = range_bounds(filters, now or local_now(self.timezone))
        if lower is not None:
            query = query.gte("post_date", to_aware(lower, self.timezone).isoformat())
        if upper is not None:
            query = query.lte("post_date", to_aware(upper, self.timezone).isoformat())

        query = query.not_.in_("menu_keyword", sorted(RESERVED_CATEGORY_SENTINELS))
        return query.order("post_date", desc=True).limit(self.fetch_limit)

    async def fetch_rows(self, filters: Optional[FilterSpec] = None) -> SourceResult:
        try:
            query = self.build_query(filters)
            response = await asyncio.to_thread(query.execute)
        except Exception as e:
            logger.error("Supabase source unavailable", table=self.table, error=str(e))
            return SourceResult.failed(f"Failed to query {self.table}: {e}")

        rows: List[RawRow] = list(response.data or [])
        logger.info("Fetched table rows", table=self.table, total=len(rows))
        return SourceResult.ok(rows, limits={"fetch_limit": self.fetch_limit, "total_items": len(rows)})
