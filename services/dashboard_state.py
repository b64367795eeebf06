"""
Immutable dashboard state and pure reducers.

Every reducer returns a new DashboardState with the derived view recomputed
from the working set; inputs are never mutated. Fetches are tagged with a
request generation so a late response from an older refresh is discarded.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from schemas.canonical import Post, RawRow
from schemas.options import PipelineOptions
from schemas.requests import FilterSpec, SortKey
from schemas.responses import DashboardView
from services.pipeline import build_dashboard_view, build_working_set


class DashboardState(BaseModel):
    """Single source of truth for one dashboard"""
    model_config = ConfigDict(frozen=True)

    working_set: Tuple[Post, ...] = Field(default_factory=tuple)
    filters: FilterSpec = Field(default_factory=FilterSpec)
    sort_by: SortKey = SortKey.DATE
    loading: bool = False
    error: Optional[str] = None
    last_updated: Optional[datetime] = None
    request_generation: int = 0
    view: DashboardView


def _derive(state: DashboardState, options: PipelineOptions, now: datetime, **changes) -> DashboardState:
    working_set = changes.get("working_set", state.working_set)
    filters = changes.get("filters", state.filters)
    sort_by = changes.get("sort_by", state.sort_by)
    changes["view"] = build_dashboard_view(list(working_set), filters, sort_by, options, now)
    return state.model_copy(update=changes)


def initial_state(options: PipelineOptions, now: datetime) -> DashboardState:
    return DashboardState(view=build_dashboard_view([], FilterSpec(), SortKey.DATE, options, now))


def fetch_started(state: DashboardState) -> Tuple[DashboardState, int]:
    """Mark a fetch in flight; stale data stays visible meanwhile"""
    token = state.request_generation + 1
    return state.model_copy(update={"loading": True, "request_generation": token}), token


def fetch_completed(
    state: DashboardState,
    token: int,
    rows: Iterable[RawRow],
    options: PipelineOptions,
    now: datetime,
) -> DashboardState:
    """Install a fresh working set unless a newer fetch has started since"""
    if token != state.request_generation:
        return state
    working_set: List[Post] = build_working_set(rows, options)
    return _derive(
        state, options, now,
        working_set=tuple(working_set),
        loading=False,
        error=None,
        last_updated=now,
    )


def fetch_failed(
    state: DashboardState,
    token: int,
    error: str,
    options: PipelineOptions,
    now: datetime,
) -> DashboardState:
    """Surface a source failure as an empty working set plus an error"""
    if token != state.request_generation:
        return state
    return _derive(state, options, now, working_set=(), loading=False, error=error)


def filter_changed(
    state: DashboardState,
    filters: FilterSpec,
    options: PipelineOptions,
    now: datetime,
) -> DashboardState:
    return _derive(state, options, now, filters=filters)


def sort_changed(
    state: DashboardState,
    sort_by: SortKey,
    options: PipelineOptions,
    now: datetime,
) -> DashboardState:
    return _derive(state, options, now, sort_by=sort_by)


def query_changed(
    state: DashboardState,
    filters: FilterSpec,
    sort_by: SortKey,
    options: PipelineOptions,
    now: datetime,
) -> DashboardState:
    """Filter and sort change applied together in one recomputation"""
    return _derive(state, options, now, filters=filters, sort_by=sort_by)
