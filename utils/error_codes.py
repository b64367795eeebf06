"""
Standard error code taxonomy
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes"""

    # Data Validation
    VALIDATION_INVALID_INPUT = "VALIDATION_INVALID_INPUT"
    VALIDATION_INVALID_DATE_RANGE = "VALIDATION_INVALID_DATE_RANGE"
    VALIDATION_UNSUPPORTED_PLATFORM = "VALIDATION_UNSUPPORTED_PLATFORM"

    # Data Sources
    SOURCE_UNAVAILABLE = "SOURCE_UNAVAILABLE"

    # System Errors
    SYSTEM_CONFIGURATION_ERROR = "SYSTEM_CONFIGURATION_ERROR"
    SYSTEM_INTERNAL_ERROR = "SYSTEM_INTERNAL_ERROR"

    @property
    def code(self) -> str:
        return self.value

    @property
    def message(self) -> str:
        return ERROR_MESSAGES[self]

    @property
    def status_code(self) -> int:
        return ERROR_STATUS_CODES[self]


ERROR_MESSAGES = {
    ErrorCode.VALIDATION_INVALID_INPUT: "Input validation failed",
    ErrorCode.VALIDATION_INVALID_DATE_RANGE: "End date must not be before start date",
    ErrorCode.VALIDATION_UNSUPPORTED_PLATFORM: "Platform is not supported",

    ErrorCode.SOURCE_UNAVAILABLE: "Post data source is unavailable",

    ErrorCode.SYSTEM_CONFIGURATION_ERROR: "System configuration error",
    ErrorCode.SYSTEM_INTERNAL_ERROR: "Internal system error"
}

ERROR_STATUS_CODES = {
    ErrorCode.VALIDATION_INVALID_INPUT: 422,
    ErrorCode.VALIDATION_INVALID_DATE_RANGE: 422,
    ErrorCode.VALIDATION_UNSUPPORTED_PLATFORM: 422,

    ErrorCode.SOURCE_UNAVAILABLE: 502,

    ErrorCode.SYSTEM_CONFIGURATION_ERROR: 500,
    ErrorCode.SYSTEM_INTERNAL_ERROR: 500
}
