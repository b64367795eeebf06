"""
Base data source interface with strict abstraction
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional
from pydantic import BaseModel, Field

from schemas.requests import FilterSpec


class SourceResult(BaseModel):
    """Envelope returned by every data source"""
    success: bool
    data: List[Dict[str, Any]] = Field(default_factory=list)
    count: int = 0
    error: Optional[str] = None
    limits: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def ok(cls, rows: List[Dict[str, Any]], limits: Optional[Dict[str, Any]] = None) -> "SourceResult":
        return cls(success=True, data=rows, count=len(rows), limits=limits or {})

    @classmethod
    def failed(cls, error: str) -> "SourceResult":
        return cls(success=False, data=[], count=0, error=error)


class BaseDataSource(ABC):
    """Abstract base class for read-only post sources"""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Source identifier"""
        pass

    @abstractmethod
    async def fetch_rows(self, filters: Optional[FilterSpec] = None) -> SourceResult:
        """
        Pull raw rows. Sources may push filters down as an optimization;
        callers always re-apply the query filter engine.
        Failures are reported in the result, never raised.
        """
        pass
