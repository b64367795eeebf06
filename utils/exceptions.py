"""
Exception hierarchy; every exception knows the error code it is reported as
"""

from typing import Any, Dict, Optional
from fastapi import HTTPException

from utils.error_codes import ErrorCode


class UgcDashboardException(Exception):
    """Base exception for the UGC dashboard"""

    error_code: ErrorCode = ErrorCode.SYSTEM_INTERNAL_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.error_code.status_code


class ConfigurationError(UgcDashboardException):
    """Unsupported data source or missing credentials"""
    error_code = ErrorCode.SYSTEM_CONFIGURATION_ERROR


class DataSourceError(UgcDashboardException):
    """Spreadsheet export or table unreachable"""
    error_code = ErrorCode.SOURCE_UNAVAILABLE


def create_http_exception(
    error_code: ErrorCode,
    message: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> HTTPException:
    """HTTPException whose detail already has the error envelope shape"""
    return HTTPException(
        status_code=error_code.status_code,
        detail={
            "code": error_code.value,
            "message": message or error_code.message,
            "details": details or {},
        },
    )
