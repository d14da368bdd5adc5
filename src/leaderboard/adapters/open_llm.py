"""Hugging Face Open LLM Leaderboard adapter (dataset-server rows API)."""

import logging
from collections.abc import AsyncIterator, Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict

from leaderboard.adapters.base import BenchmarkRecord, BenchmarkSource, SourceResult
from leaderboard.coercion import first_present, to_number, utc_now_iso
from leaderboard.http.client import HttpClient

logger = logging.getLogger(__name__)


class RowsPage(BaseModel):
    """One page from the dataset-server /rows endpoint."""

    model_config = ConfigDict(extra="allow")

    rows: list[Any] | None = None
    num_rows_total: int | None = None


class OpenLLMLeaderboardAdapter(BenchmarkSource):
    """
    Adapter for the Open LLM Leaderboard results dataset.

    Reads per-task results rows (model, task, metric, metric_value) from
    the Hugging Face dataset server, one page at a time, up to a fixed
    row cap.
    """

    ROWS_URL = "https://datasets-server.huggingface.co/rows"
    DATASET = "open-llm-leaderboard/results"
    LEADERBOARD_URL = "https://huggingface.co/open-llm-leaderboard"

    MODEL_FIELDS = ["model_name", "model", "name"]

    def __init__(
        self,
        client: HttpClient,
        rows_url: str | None = None,
        dataset: str | None = None,
        page_size: int = 100,
        max_rows: int = 2000,
        log: logging.Logger | None = None,
    ) -> None:
        """
        Initialize the Open LLM Leaderboard adapter.

        Args:
            client: Shared HTTP client
            rows_url: Dataset-server rows endpoint
            dataset: Dataset id on the Hub
            page_size: Rows requested per page
            max_rows: Upper bound on rows fetched per run
            log: Logger for warnings
        """
        super().__init__(client, log or logger)
        self.rows_url = rows_url or self.ROWS_URL
        self.dataset = dataset or self.DATASET
        self.page_size = max(1, page_size)
        self.max_rows = max_rows

    @property
    def source_name(self) -> str:
        return "hf_oll_v2"

    async def fetch_page(self, offset: int, length: int) -> dict[str, Any]:
        """Fetch one page of rows."""
        params = {
            "dataset": self.dataset,
            "config": "default",
            "split": "train",
            "offset": offset,
            "length": length,
        }
        return await self._client.get_json(self.rows_url, params=params)

    async def iter_pages(self) -> AsyncIterator[RowsPage]:
        """
        Yield pages until a short page, the reported row total, or the row cap.

        Rows beyond the requested length are dropped, so the cap holds even
        when the server over-delivers.
        """
        offset = 0
        while offset < self.max_rows:
            length = min(self.page_size, self.max_rows - offset)
            page = RowsPage.model_validate(await self.fetch_page(offset, length))
            page.rows = (page.rows or [])[:length]
            yield page

            offset += len(page.rows)
            if len(page.rows) < length:
                break
            if page.num_rows_total is not None and offset >= page.num_rows_total:
                break

    async def fetch_data(self) -> RowsPage:
        """Fetch every page up to the row cap as a single page; any failure propagates."""
        rows: list[Any] = []
        async for page in self.iter_pages():
            rows.extend(page.rows)
        return RowsPage(rows=rows, num_rows_total=len(rows))

    async def collect(self) -> SourceResult:
        """
        Page through the rows endpoint, parsing each page as it arrives.

        A failing page ends the run; rows from earlier pages are kept.
        """
        result = SourceResult(source=self.source_name)
        fetched = 0
        self._logger.info(f"Fetching Open LLM Leaderboard rows from {self.rows_url}")

        try:
            async for page in self.iter_pages():
                for record in self.parse_response(page):
                    result.records.append(record)
                fetched += len(page.rows)
        except Exception as e:
            self._fail(result, f"{self.source_name} fetch failed at offset {fetched}: {e}")

        self._logger.info(f"Collected {len(result.records)} records from {self.source_name}")
        return result

    def parse_response(self, data: RowsPage | dict[str, Any]) -> Iterator[BenchmarkRecord]:
        """Parse one rows page into records."""
        page = data if isinstance(data, RowsPage) else RowsPage.model_validate(data)
        timestamp = utc_now_iso()

        for item in page.rows or []:
            row = (item.get("row") or item) if isinstance(item, dict) else None
            if not isinstance(row, dict):
                continue

            model = first_present(row, self.MODEL_FIELDS, skip_empty=True)
            if model is None:
                continue

            reported = row.get("timestamp")
            yield BenchmarkRecord(
                source=self.source_name,
                model=str(model),
                benchmark=str(row.get("task") or "").lower(),
                metric=str(row.get("metric") or "").lower(),
                value=to_number(row.get("metric_value")),
                url=self.LEADERBOARD_URL,
                last_updated=str(reported) if reported else timestamp,
            )
