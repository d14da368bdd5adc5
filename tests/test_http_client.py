"""Tests for the async HTTP client."""

import httpx
import pytest

from leaderboard.http.client import HttpClient

URL = "https://example.com/data"


def client_for(handler) -> HttpClient:
    return HttpClient(transport=httpx.MockTransport(handler))


class TestHttpClient:
    """Tests for HttpClient."""

    def test_default_timeout(self) -> None:
        """Test requests are bounded by default."""
        client = HttpClient()
        assert client._timeout.connect == 10.0
        assert client._timeout.read == 30.0

    def test_from_timeouts(self) -> None:
        """Test timeouts built from settings values."""
        client = HttpClient.from_timeouts(connect=2.0, read=5.0)
        assert client._timeout.connect == 2.0
        assert client._timeout.read == 5.0

    @pytest.mark.asyncio
    async def test_get_json(self) -> None:
        """Test JSON bodies are decoded."""
        async with client_for(lambda request: httpx.Response(200, json={"ok": True})) as client:
            assert await client.get_json(URL) == {"ok": True}

    @pytest.mark.asyncio
    async def test_get_text_passes_params(self) -> None:
        """Test query parameters reach the server."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.params["offset"])
            return httpx.Response(200, text="a,b\n1,2\n")

        async with client_for(handler) as client:
            text = await client.get_text(URL, params={"offset": 100})

        assert text == "a,b\n1,2\n"
        assert seen == ["100"]

    @pytest.mark.asyncio
    async def test_error_status_raises(self) -> None:
        """Test non-success responses raise without retrying."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        async with client_for(handler) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.get_text(URL)

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_close_and_reopen(self) -> None:
        """Test the underlying client is recreated after close."""
        client = client_for(lambda request: httpx.Response(200, text="x"))
        assert await client.get_text(URL) == "x"
        await client.close()
        assert client._client is None
        assert await client.get_text(URL) == "x"
        await client.close()
