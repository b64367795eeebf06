"""
Structured JSON logging with per-request context
"""

import json
import logging
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

SERVICE_NAME = "ugc-dashboard"

# Third-party loggers kept at WARNING
NOISY_LOGGERS = ("httpx", "httpcore", "hpack", "uvicorn.access")

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
request_path_var: ContextVar[Optional[str]] = ContextVar("request_path", default=None)

_BASE_KEYS = frozenset({"timestamp", "level", "logger", "service", "message", "location"})


class StructuredFormatter(logging.Formatter):
    """One JSON object per record; keyword fields are merged at the top level"""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": SERVICE_NAME,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }

        request_id = request_id_var.get()
        if request_id:
            entry["request_id"] = request_id
            entry["path"] = request_path_var.get()

        for key, value in getattr(record, "fields", {}).items():
            entry[f"field_{key}" if key in _BASE_KEYS else key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


class StructuredLogger:
    """
    Logger taking keyword fields instead of formatted strings:

        logger.info("Loaded sheet", sheet=name, kept=len(rows))

    `bind` returns a child logger that adds the given fields to every record.
    """

    def __init__(self, name: str, **bound: Any):
        self.logger = logging.getLogger(name)
        self.bound = bound

    def bind(self, **fields: Any) -> "StructuredLogger":
        return StructuredLogger(self.logger.name, **{**self.bound, **fields})

    def debug(self, message: str, **fields: Any) -> None:
        self._log(logging.DEBUG, message, fields)

    def info(self, message: str, **fields: Any) -> None:
        self._log(logging.INFO, message, fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._log(logging.WARNING, message, fields)

    def error(self, message: str, exc_info: bool = False, **fields: Any) -> None:
        self._log(logging.ERROR, message, fields, exc_info)

    def _log(self, level: int, message: str, fields: Dict[str, Any], exc_info: bool = False) -> None:
        if not self.logger.isEnabledFor(level):
            return
        self.logger.log(level, message, extra={"fields": {**self.bound, **fields}}, exc_info=exc_info)


def set_request_context(request_id: str, path: Optional[str] = None) -> None:
    """Attach the current request to every record logged in this context"""
    request_id_var.set(request_id)
    request_path_var.set(path)


def get_structured_logger(name: str, **bound: Any) -> StructuredLogger:
    return StructuredLogger(name, **bound)
