"""Concurrent collection and merging of all leaderboard sources."""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum

from leaderboard.adapters import (
    BenchmarkRecord,
    BenchmarkSource,
    HelmAdapter,
    LMArenaAdapter,
    OpenLLMLeaderboardAdapter,
    SourceResult,
)
from leaderboard.config import Settings, SourceConfig
from leaderboard.http.client import HttpClient

logger = logging.getLogger(__name__)


class PipelineStatus(str, Enum):
    """Outcome of a pipeline run, for logs and callers. Never an exit code."""

    SUCCESS = "success"
    PARTIAL = "partial"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass
class PipelineResult:
    """Merged records plus per-source bookkeeping."""

    records: list[BenchmarkRecord] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)
    failures: list[str] = field(default_factory=list)
    dropped: int = 0
    fatal_error: str | None = None

    @property
    def status(self) -> PipelineStatus:
        if self.fatal_error is not None:
            return PipelineStatus.FAILED
        if self.failures:
            return PipelineStatus.PARTIAL
        if not self.records:
            return PipelineStatus.EMPTY
        return PipelineStatus.SUCCESS


def merge_results(results: list[SourceResult]) -> PipelineResult:
    """
    Concatenate source results in order and drop incomplete records.

    A record survives only with a non-null model and a non-null value.
    """
    merged = PipelineResult()
    for result in results:
        merged.counts[result.source] = len(result.records)
        merged.failures.extend(result.failures)
        for record in result.records:
            if record.is_complete:
                merged.records.append(record)
            else:
                merged.dropped += 1
    return merged


class Aggregator:
    """
    Runs every leaderboard source concurrently and merges the output.

    Sources are gathered in a fixed order (lmarena, hf_oll_v2, helm) so
    the merged list is deterministic for identical upstream data.
    """

    def __init__(
        self,
        config: SourceConfig,
        settings: Settings,
        client: HttpClient | None = None,
    ) -> None:
        """
        Initialize the aggregator.

        Args:
            config: Source configuration (CSV URL, HELM document URLs)
            settings: Application settings (timeouts, dataset-server paging)
            client: HTTP client to share; one is built from settings if omitted
        """
        self._config = config
        self._settings = settings
        self._client = client or HttpClient.from_timeouts(
            connect=settings.http_timeout_connect,
            read=settings.http_timeout_read,
        )

    def build_sources(self) -> list[BenchmarkSource]:
        """Instantiate the adapters in merge order."""
        return [
            LMArenaAdapter(self._client, csv_url=self._config.lmarena_csv_url),
            OpenLLMLeaderboardAdapter(
                self._client,
                rows_url=self._settings.hf_rows_url,
                dataset=self._settings.hf_dataset,
                page_size=self._settings.hf_page_size,
                max_rows=self._settings.hf_max_rows,
            ),
            HelmAdapter(self._client, urls=self._config.helm_json_urls),
        ]

    async def run(self) -> PipelineResult:
        """
        Collect from all sources concurrently and merge.

        Returns:
            PipelineResult with complete records in source order
        """
        sources = self.build_sources()
        try:
            results = await asyncio.gather(*(source.collect() for source in sources))
        finally:
            await self._client.close()

        merged = merge_results(list(results))
        logger.info(
            f"Merged {len(merged.records)} records "
            f"({merged.dropped} incomplete dropped, {len(merged.failures)} source failures)"
        )
        return merged
