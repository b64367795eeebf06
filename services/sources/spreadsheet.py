"""
Spreadsheet (CSV export) data source: one sheet per platform
"""

import io
from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from urllib.parse import quote

import httpx
import pandas as pd

from schemas.canonical import Platform, RawRow, parse_post_date
from schemas.requests import FilterSpec
from services.sources.base import BaseDataSource, SourceResult
from utils.exceptions import DataSourceError
from utils.http_client import get_async_client
from utils.structured_logging import get_structured_logger

logger = get_structured_logger(__name__)

EXPORT_URL = "https://docs.google.com/spreadsheets/d/{spreadsheet_id}/gviz/tq?tqx=out:csv&sheet={sheet}"

# Candidate "recency" columns, highest priority first
DATE_COLUMNS = ("PublishedAt", "PostedAt", "CreatedAt", "Date", "Timestamp", "投稿日時")


def parse_csv(text: str) -> List[RawRow]:
    """Parse a CSV export with a header row; every cell stays a string"""
    if not text.strip():
        return []
    try:
        frame = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        return []
    frame.columns = [str(column).strip() for column in frame.columns]
    return frame.to_dict(orient="records")


def find_date_column(columns: Sequence[str]) -> Optional[str]:
    for candidate in DATE_COLUMNS:
        if candidate in columns:
            return candidate
    return None


def latest_rows(rows: List[RawRow], limit: int, timezone: str = "Asia/Tokyo") -> Tuple[List[RawRow], Optional[str]]:
    """Most recent `limit` rows by the first recognized date column.

    Without a date column the first `limit` rows are returned unsorted.
    """
    if not rows:
        return [], None
    date_column = find_date_column(list(rows[0].keys()))
    if date_column is None:
        return rows[:limit], None

    dated = [row for row in rows if str(row.get(date_column) or "").strip()]
    dated.sort(
        key=lambda row: parse_post_date(row[date_column], timezone) or datetime.min,
        reverse=True,
    )
    return dated[:limit], date_column


class SpreadsheetSource(BaseDataSource):
    """Google Sheets CSV export, concatenating the per-platform sheets"""

    def __init__(
        self,
        spreadsheet_id: str,
        sheets: Sequence[Tuple[str, Platform]],
        items_per_platform: int = 10,
        timezone: str = "Asia/Tokyo",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self.spreadsheet_id = spreadsheet_id
        self.sheets = list(sheets)
        self.items_per_platform = items_per_platform
        self.timezone = timezone
        self._client = client
        self._timeout = timeout

    @property
    def source_name(self) -> str:
        return "spreadsheet"

    def sheet_url(self, sheet_name: str) -> str:
        return EXPORT_URL.format(spreadsheet_id=self.spreadsheet_id, sheet=quote(sheet_name))

    async def fetch_rows(self, filters: Optional[FilterSpec] = None) -> SourceResult:
        """Fetch every sheet; a failing HTTP status skips only that sheet"""
        try:
            if self._client is not None:
                rows = await self._fetch_all(self._client)
            else:
                async with get_async_client(timeout=self._timeout) as client:
                    rows = await self._fetch_all(client)
        except DataSourceError as e:
            logger.error("Spreadsheet source unavailable", error=e.message, **e.details)
            return SourceResult.failed(e.message)
        except Exception as e:
            logger.error("Unexpected spreadsheet failure", error=str(e))
            return SourceResult.failed(str(e))

        logger.info("Fetched spreadsheet rows", total=len(rows))
        return SourceResult.ok(rows, limits={
            "items_per_platform": self.items_per_platform,
            "total_items": len(rows),
        })

    async def _fetch_all(self, client: httpx.AsyncClient) -> List[RawRow]:
        all_rows: List[RawRow] = []
        for sheet_name, platform in self.sheets:
            all_rows.extend(await self._fetch_sheet(client, sheet_name, platform))
        return all_rows

    async def _fetch_sheet(self, client: httpx.AsyncClient, sheet_name: str, platform: Platform) -> List[RawRow]:
        log = logger.bind(sheet=sheet_name)
        try:
            response = await client.get(self.sheet_url(sheet_name), headers={"Cache-Control": "no-store"})
        except httpx.HTTPError as e:
            raise DataSourceError(
                f"Failed to fetch sheet {sheet_name}: {e}",
                {"sheet": sheet_name},
            ) from e

        if not response.is_success:
            log.warning("Skipping sheet after HTTP error", status_code=response.status_code)
            return []

        parsed = parse_csv(response.text)
        rows, date_column = latest_rows(parsed, self.items_per_platform, self.timezone)
        if date_column is None and parsed:
            log.warning("No date column found, keeping first rows unsorted")

        log.info("Loaded sheet", total_rows=len(parsed), kept=len(rows), date_column=date_column)
        return [{**row, "platform": platform.value} for row in rows]


def default_sheets(youtube: str, twitter: str, instagram: str) -> List[Tuple[str, Platform]]:
    return [
        (youtube, Platform.YOUTUBE),
        (twitter, Platform.TWITTER),
        (instagram, Platform.INSTAGRAM),
    ]
