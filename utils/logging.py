"""
Logging setup: JSON lines when deployed, readable key=value text locally
"""

import logging
import sys

from utils.structured_logging import NOISY_LOGGERS, StructuredFormatter


class PlainFormatter(logging.Formatter):
    """Classic text format with structured fields appended as key=value"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        fields = getattr(record, "fields", None)
        if fields:
            text += " " + " ".join(f"{key}={value}" for key, value in fields.items())
        return text


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Install a single stdout handler on the root logger"""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter() if log_format == "json" else PlainFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
