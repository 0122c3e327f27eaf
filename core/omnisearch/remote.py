"""HTTP-backed remote search function."""

from typing import Any, Callable, Optional

import httpx
import structlog

from omnisearch.exceptions import RemoteSearchError

logger = structlog.get_logger(__name__)


class HttpRemoteSearch:
    """
    Async remote search callback over a JSON HTTP endpoint.

    Usage:
        async with HttpRemoteSearch("https://api.example.com", path="/search") as remote:
            search = SearchFunction(remote, match)

    The endpoint is called as `GET <path>?<query_param>=<query>` and must
    answer with either a JSON list or an object holding the list under
    `results_key`.
    """

    def __init__(
        self,
        base_url: str,
        path: str = "/search",
        query_param: str = "q",
        results_key: Optional[str] = "results",
        parse_item: Optional[Callable[[Any], Any]] = None,
        timeout: float = 10.0,
        headers: Optional[dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.path = path
        self.query_param = query_param
        self.results_key = results_key
        self.parse_item = parse_item
        self.timeout = timeout
        self.headers = headers or {}
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self.headers,
            transport=self.transport,
        )
        return self

    async def __aexit__(self, *args):
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("HttpRemoteSearch must be used as async context manager")
        return self._client

    async def __call__(self, query: str) -> list:
        """Fetch the items matching `query`."""
        try:
            response = await self.client.get(self.path, params={self.query_param: query})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RemoteSearchError(
                f"Remote search failed with HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise RemoteSearchError(f"Remote search request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteSearchError("Remote search returned invalid JSON") from e

        if isinstance(data, dict) and self.results_key:
            data = data.get(self.results_key, [])
        if not isinstance(data, list):
            raise RemoteSearchError("Remote search response does not contain a list")

        logger.debug("Remote endpoint answered", query=query, count=len(data))

        if self.parse_item is None:
            return data
        return [self.parse_item(raw) for raw in data]
