"""
Read-only post sources
"""

from .base import BaseDataSource, SourceResult
from .registry import get_data_source

__all__ = ["BaseDataSource", "SourceResult", "get_data_source"]
