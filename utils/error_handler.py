"""
Global error handler middleware
"""

import sentry_sdk
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from utils.error_codes import ErrorCode
from utils.exceptions import ConfigurationError, UgcDashboardException
from utils.metrics_collector import metrics
from utils.response_envelope import error_response
from utils.structured_logging import get_structured_logger

logger = get_structured_logger(__name__)


def classify_exception(exc: Exception) -> tuple:
    """Map an exception to (status_code, error_code, client-facing message)"""
    if isinstance(exc, ConfigurationError):
        return exc.status_code, exc.error_code, exc.error_code.message
    if isinstance(exc, UgcDashboardException):
        return exc.status_code, exc.error_code, exc.message
    return 500, ErrorCode.SYSTEM_INTERNAL_ERROR, "Internal server error"


class GlobalExceptionHandler(BaseHTTPMiddleware):
    """Turns unhandled exceptions into error envelopes and reports them to Sentry"""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except HTTPException:
            raise
        except Exception as e:
            return self._handle_exception(request, e)

    def _handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        request_id = getattr(request.state, "request_id", "unknown")

        with sentry_sdk.new_scope() as scope:
            scope.set_tag("request_id", request_id)
            scope.set_context("request", {
                "method": request.method,
                "url": str(request.url),
            })
            sentry_sdk.capture_exception(exc)

        status_code, code, message = classify_exception(exc)
        logger.error(
            f"Unhandled exception in {request.method} {request.url.path}",
            exc_info=True,
            error_code=code.value,
            exception_type=type(exc).__name__,
        )

        metrics.track_request(
            method=request.method,
            endpoint=request.url.path,
            status_code=status_code,
            duration=0
        )
        return error_response(code, message, details={"request_id": request_id}, status_code=status_code)
