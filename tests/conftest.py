"""Pytest configuration and fixtures."""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from leaderboard.config import Settings
from leaderboard.http.client import HttpClient

HF_ROWS_URL = "https://datasets-server.huggingface.co/rows"


def make_transport(routes: dict[str, Any]) -> httpx.MockTransport:
    """
    Build a MockTransport answering by URL (query string ignored).

    Route values: str -> text body, dict/list -> JSON body, int -> bare
    status code, Exception -> raised, callable -> called with the request.
    Unrouted URLs answer 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url).split("?")[0]
        if url not in routes:
            return httpx.Response(404, text="not found")
        value = routes[url]
        if callable(value) and not isinstance(value, type):
            value = value(request)
        if isinstance(value, Exception):
            raise value
        if isinstance(value, httpx.Response):
            return value
        if isinstance(value, int):
            return httpx.Response(value)
        if isinstance(value, str):
            return httpx.Response(200, text=value)
        return httpx.Response(200, json=value)

    return httpx.MockTransport(handler)


@pytest.fixture
def client_factory() -> Callable[[dict[str, Any]], HttpClient]:
    """Create HttpClients backed by a routed MockTransport."""

    def factory(routes: dict[str, Any]) -> HttpClient:
        return HttpClient(transport=make_transport(routes))

    return factory


@pytest.fixture
def mock_client() -> MagicMock:
    """HttpClient stand-in with async getters."""
    client = MagicMock(spec=HttpClient)
    client.get_text = AsyncMock()
    client.get_json = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def mock_logger() -> MagicMock:
    """Injectable logger to observe adapter warnings."""
    return MagicMock()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with small dataset-server pages."""
    return Settings(hf_rows_url=HF_ROWS_URL, hf_page_size=100, hf_max_rows=2000)


@pytest.fixture
def sample_lmarena_csv() -> str:
    """Sample LMArena CSV export."""
    return """Model,MT-bench (score),MMLU (5-shot),Arena Elo,Organization,License
GPT-4-Turbo,9.32,,1253,OpenAI,Proprietary
Claude-3-Opus,,86.8%,1246,Anthropic,Proprietary
Llama-3-70b-Instruct,-,82,1208,Meta,Llama 3 Community
,8.0,70.0,1100,Nobody,MIT
Vicuna-13B,6.57,55.8,n/a,LMSYS,
"""


@pytest.fixture
def sample_hf_page() -> dict:
    """Sample dataset-server rows page."""
    return {
        "features": [],
        "rows": [
            {
                "row_idx": 0,
                "row": {
                    "model_name": "meta-llama/Meta-Llama-3-70B",
                    "task": "GSM8K",
                    "metric": "ACC",
                    "metric_value": "78.5",
                    "timestamp": "2024-06-01T10:00:00Z",
                },
                "truncated_cells": [],
            },
            {
                "row_idx": 1,
                "row": {
                    "model": "mistralai/Mixtral-8x7B",
                    "task": "hellaswag",
                    "metric": "acc_norm",
                    "metric_value": 87.6,
                },
                "truncated_cells": [],
            },
            {
                "row_idx": 2,
                "row": {"task": "mmlu", "metric": "acc", "metric_value": 60},
                "truncated_cells": [],
            },
        ],
        "num_rows_total": 3,
        "num_rows_per_page": 100,
        "partial": False,
    }


@pytest.fixture
def sample_helm_document() -> dict:
    """Sample HELM-style JSON document."""
    return {
        "metadata": {
            "scenario_name": "mmlu",
            "timestamp": "2024-05-20T00:00:00Z",
        },
        "results": [
            {"model": "gpt-4", "metric": "EM", "value": 0.86},
            {"system": {"name": "claude-2"}, "metrics": {"name": "Exact_Match", "value": "78%"}},
            {"name": "llama-2-70b", "score": 0.69},
            {"metric": "em", "value": 0.5},
        ],
    }
