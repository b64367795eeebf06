"""
UGC Dashboard Backend API - normalized multi-platform post analytics
"""

import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
import sentry_sdk
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from api.v1 import v1_router
from schemas.responses import HealthResponse
from utils.config import get_config, validate_config_on_startup
from utils.error_codes import ErrorCode
from utils.error_handler import GlobalExceptionHandler
from utils.logging import setup_logging
from utils.metrics_collector import metrics
from utils.middleware import RequestContextMiddleware
from utils.response_envelope import error_response, http_exception_response, success_response
from utils.structured_logging import get_structured_logger

logger = get_structured_logger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan with fail-fast validation and logging setup"""
    config = validate_config_on_startup()

    setup_logging(config.log_level, config.log_format)

    if config.sentry_dsn:
        sentry_sdk.init(dsn=config.sentry_dsn, environment=config.environment)

    logger.info(
        "Starting UGC Dashboard API",
        data_source=config.data_source,
        environment=config.environment,
        options=config.pipeline_options().model_dump(mode="json"),
    )

    yield

    logger.info("Application shutting down")


app = FastAPI(
    title="UGC Dashboard API",
    description="Normalized YouTube / Instagram / Twitter post statistics, charts and rankings",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Data", "description": "Raw rows from the configured source"},
        {"name": "Dashboard", "description": "Filtered statistics, charts and post listings"},
        {"name": "Health", "description": "System health and monitoring"}
    ]
)

app.add_middleware(GlobalExceptionHandler)
app.add_middleware(RequestContextMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix="/api")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return http_exception_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed query parameters (bad enum values, dates) in the error envelope"""
    errors = [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()]
    return error_response(ErrorCode.VALIDATION_INVALID_INPUT, details={"errors": errors})


@app.get("/metrics", include_in_schema=False)
async def get_metrics():
    """Prometheus metrics endpoint"""
    return Response(
        generate_latest(metrics.registry),
        media_type=CONTENT_TYPE_LATEST
    )


@app.get("/health", tags=["Health"])
async def health_check() -> dict:
    """Health check with the configured data source"""
    config = get_config()
    health_data = HealthResponse(
        status="healthy",
        service="ugc-dashboard-backend",
        version=VERSION,
        timestamp=datetime.now(timezone.utc),
        dependencies={"data_source": config.data_source},
    )
    return success_response(health_data.model_dump(mode="json"))


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint with API information"""
    api_info = {
        "message": "UGC Dashboard API",
        "version": VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics",
        "api_base": "/api/v1"
    }

    return success_response(api_info)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=os.getenv("ENVIRONMENT") == "development"
    )
