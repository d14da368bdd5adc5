"""Async HTTP client used by the source adapters."""

from leaderboard.http.client import HttpClient

__all__ = ["HttpClient"]
