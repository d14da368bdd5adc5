"""Leaderboard source adapters."""

from leaderboard.adapters.base import BenchmarkRecord, BenchmarkSource, SourceResult
from leaderboard.adapters.helm import HelmAdapter
from leaderboard.adapters.lmarena import LMArenaAdapter
from leaderboard.adapters.open_llm import OpenLLMLeaderboardAdapter

__all__ = [
    "BenchmarkRecord",
    "BenchmarkSource",
    "SourceResult",
    "LMArenaAdapter",
    "OpenLLMLeaderboardAdapter",
    "HelmAdapter",
]
