"""
API v1 module initialization
"""

from fastapi import APIRouter
from .dashboard import router as dashboard_router
from .ugc_data import router as ugc_data_router

# Create v1 API router
v1_router = APIRouter(prefix="/v1")

# Include all sub-routers
v1_router.include_router(ugc_data_router, prefix="/ugc-data", tags=["Data"])
v1_router.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])
