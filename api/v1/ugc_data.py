"""
Raw source endpoint mirroring the export envelope
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from services.dashboard_service import DashboardService, get_dashboard_service

router = APIRouter()


@router.get("")
async def get_ugc_data(
    service: DashboardService = Depends(get_dashboard_service),
) -> JSONResponse:
    """Rows as pulled from the configured source, before normalization"""
    result = await service.fetch_raw()
    return JSONResponse(
        status_code=200 if result.success else 500,
        content=result.model_dump(mode="json", exclude_none=True),
    )
