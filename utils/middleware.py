"""
Request context and access logging middleware
"""

import time
import uuid
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from utils.metrics_collector import metrics
from utils.structured_logging import get_structured_logger, set_request_context

logger = get_structured_logger("api")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assigns a request id, logs the request and records request metrics"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        set_request_context(request_id, request.url.path)

        start_time = time.perf_counter()
        logger.info("API Request", method=request.method, endpoint=request.url.path)

        response = await call_next(request)

        duration = time.perf_counter() - start_time
        metrics.track_request(
            method=request.method,
            endpoint=request.url.path,
            status_code=response.status_code,
            duration=duration
        )
        logger.info(
            "API Response",
            method=request.method,
            endpoint=request.url.path,
            status_code=response.status_code,
            response_time_ms=int(duration * 1000),
        )
        response.headers["X-Request-ID"] = request_id
        return response
