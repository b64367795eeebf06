"""
Response envelope shared by every JSON endpoint: {success, data, error, meta}
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from utils.error_codes import ErrorCode


class ApiResponse(BaseModel):
    """Standard API response envelope"""
    success: bool
    data: Optional[Any] = None
    error: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None


def success_response(data: Any = None, meta: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """JSON-ready envelope for a successful payload"""
    return ApiResponse(success=True, data=data, meta=meta).model_dump(mode="json")


def error_body(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {"code": code, "message": message, "details": details or {}}


def _error_json(status_code: int, body: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ApiResponse(success=False, error=body).model_dump(mode="json"),
        headers=headers,
    )


def error_response(
    error_code: ErrorCode,
    message: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    status_code: Optional[int] = None,
) -> JSONResponse:
    """Error envelope; status and message default to the error code's own"""
    return _error_json(
        status_code or error_code.status_code,
        error_body(error_code.value, message or error_code.message, details),
    )


def http_exception_response(exc: StarletteHTTPException) -> JSONResponse:
    """Wrap an HTTPException in the envelope.

    Details raised through create_http_exception keep their code; anything
    else (404 for unknown routes, 405, ...) is reported as HTTP_<status>.
    """
    detail = exc.detail
    if isinstance(detail, dict) and "code" in detail:
        body = error_body(detail["code"], detail.get("message", ""), detail.get("details"))
    else:
        body = error_body(f"HTTP_{exc.status_code}", str(detail))
    return _error_json(exc.status_code, body, getattr(exc, "headers", None))
