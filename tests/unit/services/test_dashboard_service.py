"""
Unit tests for the dashboard service fetch / query cycle
"""

import pytest

from schemas.canonical import Platform
from schemas.requests import FilterSpec, SortKey
from services.dashboard_service import DashboardService
from services.sources.base import SourceResult


@pytest.fixture
def make_service(options, now):
    def _make(source):
        return DashboardService(source, options, clock=lambda: now)
    return _make


class TestDashboardService:

    @pytest.mark.asyncio
    async def test_first_query_loads_working_set(self, make_service, static_source, raw_rows, now):
        source = static_source(SourceResult.ok(raw_rows))
        service = make_service(source)

        state = await service.query()

        assert source.calls == 1
        assert service.is_loaded
        assert state.last_updated == now
        assert state.view.stats.total_posts == 2

    @pytest.mark.asyncio
    async def test_later_queries_reuse_working_set(self, make_service, static_source, raw_rows):
        """
        Business Critical: Filter and sort changes never hit the data source
        """
        source = static_source(SourceResult.ok(raw_rows))
        service = make_service(source)

        await service.query()
        state = await service.query(FilterSpec(platform="youtube"), SortKey.LIKES)

        assert source.calls == 1
        assert state.view.stats.total_posts == 1
        assert state.view.posts[0].post.platform == Platform.YOUTUBE

    @pytest.mark.asyncio
    async def test_refresh_flag_refetches(self, make_service, static_source, raw_rows):
        source = static_source(SourceResult.ok(raw_rows), SourceResult.ok(raw_rows[:1]))
        service = make_service(source)

        await service.query()
        state = await service.query(refresh=True)

        assert source.calls == 2
        assert state.view.stats.total_posts == 1

    @pytest.mark.asyncio
    async def test_source_failure_sets_error_and_empty_view(self, make_service, static_source):
        """
        Business Critical: A failed fetch shows an error instead of stale numbers
        """
        source = static_source(SourceResult.failed("Failed to fetch sheet"))
        service = make_service(source)

        state = await service.refresh()

        assert state.error == "Failed to fetch sheet"
        assert state.loading is False
        assert state.working_set == ()
        assert state.view.stats.total_posts == 0
        assert service.is_loaded

    @pytest.mark.asyncio
    async def test_recovery_after_failure_clears_error(self, make_service, static_source, raw_rows):
        source = static_source(SourceResult.failed("down"), SourceResult.ok(raw_rows))
        service = make_service(source)

        await service.refresh()
        state = await service.refresh()

        assert state.error is None
        assert len(state.working_set) == 2

    @pytest.mark.asyncio
    async def test_fetch_raw_passes_envelope_through(self, make_service, static_source, raw_rows):
        service = make_service(static_source(SourceResult.ok(raw_rows)))

        result = await service.fetch_raw()

        assert result.success is True
        assert result.count == len(raw_rows)
        assert not service.is_loaded
