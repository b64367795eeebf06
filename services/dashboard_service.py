"""
Dashboard service: owns the current state and the fetch boundary
"""

import time
from datetime import datetime
from functools import lru_cache
from typing import Callable, Optional

from schemas.options import PipelineOptions
from schemas.requests import FilterSpec, SortKey
from services.dashboard_state import (
    DashboardState, fetch_completed, fetch_failed, fetch_started, initial_state, query_changed,
)
from services.sources import BaseDataSource, SourceResult, get_data_source
from utils.clock import local_now
from utils.config import get_config
from utils.metrics_collector import metrics
from utils.structured_logging import get_structured_logger

logger = get_structured_logger(__name__)


class DashboardService:
    """Pulls rows on demand and derives dashboard views from the working set"""

    def __init__(
        self,
        source: BaseDataSource,
        options: PipelineOptions,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.source = source
        self.options = options
        self._clock = clock or (lambda: local_now(options.timezone))
        self.state: DashboardState = initial_state(options, self._clock())

    @property
    def is_loaded(self) -> bool:
        return self.state.last_updated is not None or self.state.error is not None

    async def fetch_raw(self) -> SourceResult:
        """
        Raw source envelope, timed and counted.

        The whole table or sheet set is fetched and filters are applied in memory,
        so the source's optional predicate pushdown is not used here.
        """
        started = time.perf_counter()
        result = await self.source.fetch_rows()
        metrics.track_source_fetch(
            self.source.source_name,
            "success" if result.success else "failure",
            time.perf_counter() - started,
        )
        return result

    async def refresh(self) -> DashboardState:
        """Fetch and install a new working set; stale completions are dropped"""
        self.state, token = fetch_started(self.state)
        result = await self.fetch_raw()
        now = self._clock()

        if result.success:
            self.state = fetch_completed(self.state, token, result.data, self.options, now)
        else:
            logger.warning("Source fetch failed", source=self.source.source_name, error=result.error)
            self.state = fetch_failed(
                self.state, token, result.error or "Data source unavailable", self.options, now,
            )

        if token == self.state.request_generation:
            logger.info(
                "Dashboard refreshed",
                source=self.source.source_name,
                rows=result.count,
                working_set=len(self.state.working_set),
            )
        metrics.update_working_set(len(self.state.working_set))
        return self.state

    async def query(
        self,
        filters: Optional[FilterSpec] = None,
        sort_by: SortKey = SortKey.DATE,
        refresh: bool = False,
    ) -> DashboardState:
        """Derive a view for the given filters, loading the working set when needed"""
        if refresh or not self.is_loaded:
            await self.refresh()
        self.state = query_changed(self.state, filters or FilterSpec(), sort_by, self.options, self._clock())
        return self.state


@lru_cache()
def get_dashboard_service() -> DashboardService:
    """FastAPI dependency returning the process-wide dashboard service"""
    config = get_config()
    return DashboardService(get_data_source(config), config.pipeline_options())
