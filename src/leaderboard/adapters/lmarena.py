"""LMArena (Chatbot Arena) CSV adapter for MT-Bench, MMLU and Elo scores."""

import csv
import io
import logging
from collections.abc import Iterator
from typing import Any

from leaderboard.adapters.base import BenchmarkRecord, BenchmarkSource, SourceResult
from leaderboard.coercion import first_present, to_number, utc_now_iso
from leaderboard.http.client import HttpClient

logger = logging.getLogger(__name__)


class LMArenaAdapter(BenchmarkSource):
    """
    Adapter for an LMArena leaderboard CSV export.

    Each CSV row can yield up to three records: MT-Bench score, MMLU
    accuracy and Arena Elo. A metric whose cell is absent or non-numeric
    yields nothing.
    """

    MODEL_COLUMNS = ["Model", "model", "name"]
    ORG_COLUMNS = ["Organization", "Org", "organization"]
    LICENSE_COLUMNS = ["License", "license"]

    # (column aliases, benchmark, metric)
    METRICS = [
        (["MT-bench (score)", "MT-Bench", "mtbench"], "MT-Bench", "score"),
        (["MMLU (5-shot)", "MMLU", "mmlu"], "mmlu", "acc"),
        (["Arena Elo", "Elo", "arena_elo"], "Arena Elo", "elo"),
    ]

    def __init__(
        self,
        client: HttpClient,
        csv_url: str | None,
        log: logging.Logger | None = None,
    ) -> None:
        """
        Initialize the LMArena adapter.

        Args:
            client: Shared HTTP client
            csv_url: URL of the leaderboard CSV; None disables the source
            log: Logger for warnings
        """
        super().__init__(client, log or logger)
        self.csv_url = csv_url

    @property
    def source_name(self) -> str:
        return "lmarena"

    async def collect(self) -> SourceResult:
        if not self.csv_url:
            self._logger.warning("No lmarena_csv_url configured; skipping LMArena")
            return SourceResult(source=self.source_name)
        return await super().collect()

    async def fetch_data(self) -> str:
        """Fetch the raw CSV text."""
        self._logger.info(f"Fetching LMArena leaderboard from {self.csv_url}")
        return await self._client.get_text(self.csv_url)

    def parse_response(self, data: str) -> Iterator[BenchmarkRecord]:
        """
        Parse CSV leaderboard text.

        Expected columns (aliases tolerated):
        - Model/model/name: model identifier (required)
        - Organization/License: optional provenance
        - MT-bench (score), MMLU (5-shot), Arena Elo: metric values
        """
        timestamp = utc_now_iso()
        # DictReader skips blank rows but not leading blank lines or a BOM
        reader = csv.DictReader(io.StringIO(data.lstrip("\ufeff\r\n")))

        for row in reader:
            yield from self._parse_row(row, timestamp)

    def _parse_row(self, row: dict[str, Any], timestamp: str) -> Iterator[BenchmarkRecord]:
        """Yield one record per numeric metric in a CSV row."""
        model = first_present(row, self.MODEL_COLUMNS, skip_empty=True)
        if model is None:
            return

        org = first_present(row, self.ORG_COLUMNS, skip_empty=True)
        license_ = first_present(row, self.LICENSE_COLUMNS, skip_empty=True)

        for columns, benchmark, metric in self.METRICS:
            value = to_number(first_present(row, columns))
            if value is None:
                continue
            yield BenchmarkRecord(
                source=self.source_name,
                model=model,
                org=org,
                license=license_,
                benchmark=benchmark,
                metric=metric,
                value=value,
                url=self.csv_url or "",
                last_updated=timestamp,
            )
