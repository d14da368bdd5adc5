"""Abstract base class for leaderboard data sources."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from leaderboard.http.client import HttpClient

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkRecord:
    """
    One normalized benchmark measurement.

    Every source adapter maps its native rows onto this shape.
    """

    source: str
    """Producing adapter ('lmarena', 'hf_oll_v2' or 'helm')."""

    model: str | None
    """Model name as reported by the source."""

    benchmark: str
    """Benchmark name (e.g. 'mmlu', 'gsm8k', 'Arena Elo')."""

    metric: str
    """Lower-cased metric identifier (e.g. 'acc', 'score', 'elo')."""

    value: float | None
    """Coerced metric value; None when the source value was not numeric."""

    url: str
    """Provenance link back to the originating resource."""

    last_updated: str
    """ISO-8601 timestamp: source-reported, or the fetch time."""

    org: str | None = None
    license: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the output artifact, omitting absent optional fields."""
        data: dict[str, Any] = {"source": self.source, "model": self.model}
        if self.org is not None:
            data["org"] = self.org
        if self.license is not None:
            data["license"] = self.license
        data.update(
            benchmark=self.benchmark,
            metric=self.metric,
            value=self.value,
            url=self.url,
            last_updated=self.last_updated,
        )
        return data

    @property
    def is_complete(self) -> bool:
        """True when the record carries both a model and a value."""
        return self.model is not None and self.value is not None

    def __repr__(self) -> str:
        return f"BenchmarkRecord({self.source}:{self.model}, {self.benchmark}/{self.metric}={self.value})"


@dataclass
class SourceResult:
    """Records contributed by one adapter, plus the fetch units that failed."""

    source: str
    records: list[BenchmarkRecord] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class BenchmarkSource(ABC):
    """
    Abstract base class for leaderboard data sources.

    Subclasses fetch one upstream resource and yield BenchmarkRecords from
    it. ``collect()`` never raises: fetch and parse errors are logged as
    warnings and whatever was parsed before the failure is kept.
    """

    def __init__(self, client: HttpClient, log: logging.Logger | None = None) -> None:
        """
        Initialize the adapter.

        Args:
            client: Shared HTTP client
            log: Logger for warnings and progress messages
        """
        self._client = client
        self._logger = log or logger

    @property
    @abstractmethod
    def source_name(self) -> str:
        """
        Unique identifier for this source.

        Returns:
            Source name written into every record (e.g. 'lmarena')
        """
        ...

    @abstractmethod
    async def fetch_data(self) -> Any:
        """
        Fetch the raw upstream payload.

        Raises:
            Exception: On fetch failure
        """
        ...

    @abstractmethod
    def parse_response(self, data: Any) -> Iterator[BenchmarkRecord]:
        """
        Yield records parsed from a raw payload.

        Rows without a resolvable model are skipped silently.
        """
        ...

    async def collect(self) -> SourceResult:
        """
        Fetch and parse, isolating any failure to this source.

        Returns:
            SourceResult with the records parsed before any failure
        """
        result = SourceResult(source=self.source_name)
        try:
            data = await self.fetch_data()
            for record in self.parse_response(data):
                result.records.append(record)
        except Exception as e:
            self._fail(result, f"{self.source_name} fetch failed: {e}")
        self._logger.info(f"Collected {len(result.records)} records from {self.source_name}")
        return result

    def _fail(self, result: SourceResult, message: str) -> None:
        """Record and log a non-fatal fetch failure."""
        self._logger.warning(message)
        result.failures.append(message)
