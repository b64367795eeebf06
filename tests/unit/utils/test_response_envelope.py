"""
Unit tests for response envelope - critical for consistent API responses
"""

import json
import pytest
from fastapi import HTTPException

from utils.error_codes import ErrorCode
from utils.exceptions import create_http_exception
from utils.response_envelope import error_response, http_exception_response, success_response


class TestResponseEnvelope:
    """Test global response formatting"""

    def test_success_response_format(self):
        """
        Business Critical: Success responses must follow consistent envelope format
        """
        data = {"stats": {"total_posts": 3}}

        response = success_response(data)

        assert response == {"success": True, "data": data, "error": None, "meta": None}

    def test_success_response_includes_meta(self):
        response = success_response({"a": 1}, meta={"filters": {"platform": "YouTube"}})

        assert response["meta"] == {"filters": {"platform": "YouTube"}}

    def test_success_response_is_json_ready(self):
        response = success_response({"label": "3/14", "category": "天ぷら定期券"})

        parsed = json.loads(json.dumps(response, ensure_ascii=False))

        assert parsed["data"]["category"] == "天ぷら定期券"

    def test_error_response_defaults_to_code(self):
        """
        Business Critical: Error responses must include structured error codes
        """
        response = error_response(ErrorCode.SOURCE_UNAVAILABLE)

        body = json.loads(response.body)
        assert response.status_code == 502
        assert body["success"] is False
        assert body["data"] is None
        assert body["error"] == {
            "code": "SOURCE_UNAVAILABLE",
            "message": ErrorCode.SOURCE_UNAVAILABLE.message,
            "details": {},
        }

    def test_error_response_overrides(self):
        response = error_response(
            ErrorCode.SYSTEM_INTERNAL_ERROR, "Sheet timed out", {"sheet": "X投稿データ"}, status_code=504,
        )

        body = json.loads(response.body)
        assert response.status_code == 504
        assert body["error"]["message"] == "Sheet timed out"
        assert body["error"]["details"] == {"sheet": "X投稿データ"}

    def test_structured_http_exception_keeps_code(self):
        exc = create_http_exception(ErrorCode.VALIDATION_INVALID_DATE_RANGE, details={"errors": ["end before start"]})

        response = http_exception_response(exc)

        body = json.loads(response.body)
        assert response.status_code == 422
        assert body["error"]["code"] == "VALIDATION_INVALID_DATE_RANGE"
        assert body["error"]["details"] == {"errors": ["end before start"]}

    def test_plain_http_exception_uses_status_code(self):
        response = http_exception_response(HTTPException(status_code=404, detail="Not Found"))

        body = json.loads(response.body)
        assert response.status_code == 404
        assert body["error"]["code"] == "HTTP_404"
        assert body["error"]["message"] == "Not Found"
