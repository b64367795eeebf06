"""
Dashboard endpoints: filtered statistics, chart geometry and post listings
"""

from datetime import date
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Query
from pydantic import ValidationError as PydanticValidationError

from schemas.requests import FilterSpec, Period, SortKey
from schemas.responses import DashboardResponse
from services.dashboard_service import DashboardService, get_dashboard_service
from services.dashboard_state import DashboardState
from utils.error_codes import ErrorCode
from utils.exceptions import create_http_exception
from utils.response_envelope import success_response

router = APIRouter()


def _payload(state: DashboardState) -> Dict[str, Any]:
    return DashboardResponse(
        view=state.view,
        loading=state.loading,
        error=state.error,
        last_updated=state.last_updated,
        working_set_size=len(state.working_set),
    ).model_dump(mode="json")


def _validation_code(errors: List[Dict[str, Any]]) -> ErrorCode:
    fields = {err["loc"][0] for err in errors if err.get("loc")}
    if "platform" in fields:
        return ErrorCode.VALIDATION_UNSUPPORTED_PLATFORM
    if "date_end" in fields:
        return ErrorCode.VALIDATION_INVALID_DATE_RANGE
    return ErrorCode.VALIDATION_INVALID_INPUT


def build_filters(
    platform: Optional[str] = Query(None, description="YouTube, Instagram, Twitter or all"),
    start_date: Optional[date] = Query(None, description="Inclusive start date (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="Inclusive end date (YYYY-MM-DD)"),
    keyword: Optional[str] = Query(None, max_length=200, description="Matches content or category"),
    category: Optional[str] = Query(None, description="Exact category keyword or all"),
    period: Optional[Period] = Query(None, description="Trailing window: 7d, 30d, 90d"),
) -> FilterSpec:
    """Query parameters -> FilterSpec, 422 on invalid combinations"""
    try:
        return FilterSpec(
            platform=platform,
            date_start=start_date,
            date_end=end_date,
            keyword=keyword,
            category=category,
            period=period,
        )
    except PydanticValidationError as e:
        raise create_http_exception(
            _validation_code(e.errors()),
            details={"errors": [err["msg"] for err in e.errors()]},
        )


@router.get("")
async def get_dashboard(
    filters: FilterSpec = Depends(build_filters),
    sort_by: SortKey = Query(SortKey.DATE, description="date, likes or comments"),
    refresh: bool = Query(False, description="Re-fetch the working set first"),
    service: DashboardService = Depends(get_dashboard_service),
) -> Dict[str, Any]:
    """Full dashboard view for the given filters"""
    state = await service.query(filters, sort_by, refresh=refresh)
    return success_response(_payload(state), meta={"filters": filters.model_dump(mode="json")})


@router.post("/refresh")
async def refresh_dashboard(
    service: DashboardService = Depends(get_dashboard_service),
) -> Dict[str, Any]:
    """Force a re-fetch and return the unfiltered view"""
    await service.refresh()
    state = await service.query(FilterSpec(), SortKey.DATE)
    return success_response(_payload(state))
