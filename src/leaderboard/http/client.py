"""Async HTTP client with bounded timeouts."""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class HttpClient:
    """
    Thin async HTTP client shared by the source adapters.

    Wraps a single httpx.AsyncClient. Every request is bounded by a
    timeout; nothing is retried, so a failed request surfaces to the
    caller immediately.
    """

    DEFAULT_TIMEOUT = httpx.Timeout(
        connect=10.0,
        read=30.0,
        write=10.0,
        pool=10.0,
    )

    def __init__(
        self,
        timeout: httpx.Timeout | None = None,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the HTTP client.

        Args:
            timeout: Request timeout configuration
            headers: Default headers for all requests
            transport: Optional httpx transport (e.g. a MockTransport in tests)
        """
        self._timeout = timeout or self.DEFAULT_TIMEOUT
        self._default_headers = headers or {}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_timeouts(cls, connect: float, read: float, **kwargs: Any) -> "HttpClient":
        """Build a client from connect/read timeouts in seconds."""
        timeout = httpx.Timeout(connect=connect, read=read, write=connect, pool=connect)
        return cls(timeout=timeout, **kwargs)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers=self._default_headers,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """
        Make a GET request and fail on non-success status.

        Raises:
            httpx.HTTPStatusError: For 4xx/5xx responses
            httpx.RequestError: For network failures and timeouts
        """
        client = await self._get_client()
        logger.debug(f"GET {url}")
        response = await client.get(url, **kwargs)
        response.raise_for_status()
        return response

    async def get_text(self, url: str, **kwargs: Any) -> str:
        """Make a GET request and return the decoded body."""
        response = await self.get(url, **kwargs)
        return response.text

    async def get_json(self, url: str, **kwargs: Any) -> Any:
        """Make a GET request and return the JSON body."""
        response = await self.get(url, **kwargs)
        return response.json()

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
            logger.debug("HTTP client closed")

    async def __aenter__(self) -> "HttpClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
