"""HELM-style adapter for arbitrary-shaped JSON leaderboard documents."""

import logging
from collections.abc import Iterator
from typing import Any

from leaderboard.adapters.base import BenchmarkRecord, BenchmarkSource, SourceResult
from leaderboard.coercion import first_present, to_number, utc_now_iso
from leaderboard.http.client import HttpClient

logger = logging.getLogger(__name__)


class HelmAdapter(BenchmarkSource):
    """
    Adapter for HELM-style JSON leaderboard files.

    Documents come in a few shapes, so every field is resolved through an
    ordered list of candidate keys and nested paths. Each configured URL
    is fetched on its own; one bad document does not affect the others.
    """

    LIST_KEYS = ["results", "leaderboard", "data"]
    MODEL_FIELDS = ["model", "name", "system.name"]
    METRIC_FIELDS = ["metric", "metrics.name"]
    VALUE_FIELDS = ["value", "score", "metrics.value"]
    BENCHMARK_FIELDS = ["metadata.scenario_name", "scenario"]
    TIMESTAMP_FIELDS = ["metadata.timestamp"]

    DEFAULT_METRIC = "score"
    DEFAULT_BENCHMARK = "HELM"

    def __init__(
        self,
        client: HttpClient,
        urls: list[str] | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        """
        Initialize the HELM adapter.

        Args:
            client: Shared HTTP client
            urls: JSON document URLs; an empty list contributes nothing
            log: Logger for warnings
        """
        super().__init__(client, log or logger)
        self.urls = list(urls or [])

    @property
    def source_name(self) -> str:
        return "helm"

    async def fetch_data(self) -> list[Any]:
        """
        Fetch every configured document in order.

        Unlike collect(), the first failing URL aborts the whole fetch.
        """
        return [await self.fetch_document(url) for url in self.urls]

    async def fetch_document(self, url: str) -> Any:
        """Fetch and decode one JSON document."""
        return await self._client.get_json(url)

    async def collect(self) -> SourceResult:
        """Fetch and parse each URL in turn, isolating failures per URL."""
        result = SourceResult(source=self.source_name)

        for url in self.urls:
            try:
                document = await self.fetch_document(url)
                for record in self.parse_document(document, url):
                    result.records.append(record)
            except Exception as e:
                self._fail(result, f"HELM fetch failed for {url}: {e}")

        self._logger.info(
            f"Collected {len(result.records)} records from {len(self.urls)} HELM documents"
        )
        return result

    def parse_response(self, data: list[Any]) -> Iterator[BenchmarkRecord]:
        """Parse documents fetched by fetch_data(), paired with their URLs."""
        for url, document in zip(self.urls, data):
            yield from self.parse_document(document, url)

    def parse_document(self, document: Any, url: str) -> Iterator[BenchmarkRecord]:
        """
        Parse one JSON document.

        The entry list is read from the first present of ``results``,
        ``leaderboard`` or ``data``. Benchmark name and timestamp are
        document-level and shared by every entry.
        """
        entries = first_present(document, self.LIST_KEYS, default=[])
        if not isinstance(entries, list):
            self._logger.warning(f"HELM document at {url} has no entry list; skipping")
            return

        timestamp = utc_now_iso()
        benchmark = first_present(
            document, self.BENCHMARK_FIELDS, default=self.DEFAULT_BENCHMARK, skip_empty=True
        )
        last_updated = first_present(
            document, self.TIMESTAMP_FIELDS, default=timestamp, skip_empty=True
        )

        for entry in entries:
            if not isinstance(entry, dict):
                continue

            model = first_present(entry, self.MODEL_FIELDS, skip_empty=True)
            if model is None:
                continue

            metric = first_present(
                entry, self.METRIC_FIELDS, default=self.DEFAULT_METRIC, skip_empty=True
            )
            yield BenchmarkRecord(
                source=self.source_name,
                model=str(model),
                benchmark=str(benchmark),
                metric=str(metric).lower(),
                value=to_number(first_present(entry, self.VALUE_FIELDS)),
                url=url,
                last_updated=str(last_updated),
            )
