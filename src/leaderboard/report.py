"""Read-side helpers for the published artifact: filtering and freshness."""

import json
import logging
from collections.abc import Collection, Iterable
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

ALL_SOURCES = ("lmarena", "hf_oll_v2", "helm")
DEFAULT_LIMIT = 200


def load_artifact(path: Path | str) -> list[dict[str, Any]]:
    """
    Load the aggregate artifact.

    A missing or malformed file reads as an empty list; non-object
    entries are dropped.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read artifact {path}: {e}")
        return []

    if not isinstance(data, list):
        logger.warning(f"Artifact {path} is not a JSON array")
        return []
    return [row for row in data if isinstance(row, dict)]


def latest_update(records: Iterable[dict[str, Any]]) -> str | None:
    """Most recent ``last_updated`` across records, or None."""
    stamps = [r.get("last_updated") for r in records]
    stamps = [s for s in stamps if isinstance(s, str) and s]
    return max(stamps) if stamps else None


def _benchmark_matches(record: dict[str, Any], benchmarks: Collection[str]) -> bool:
    if not benchmarks:
        return True
    name = record.get("benchmark") or ""
    return str(name).lower() in benchmarks or name in benchmarks


def _sort_value(record: dict[str, Any]) -> float:
    value = record.get("value")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def filter_records(
    records: Iterable[dict[str, Any]],
    sources: Collection[str] = ALL_SOURCES,
    benchmarks: Collection[str] = (),
    limit: int = DEFAULT_LIMIT,
) -> list[dict[str, Any]]:
    """
    Select rows for display.

    Args:
        records: Artifact rows
        sources: Sources to keep
        benchmarks: Benchmark names to keep; empty keeps all. A row matches
            on its lower-cased benchmark name or on the exact name.
        limit: Maximum rows returned

    Returns:
        Matching rows sorted by value, highest first
    """
    rows = [
        r for r in records
        if r.get("source") in sources and _benchmark_matches(r, benchmarks)
    ]
    rows.sort(key=_sort_value, reverse=True)
    return rows[:limit]
