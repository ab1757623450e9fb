"""Async HTTP fetcher for JSON APIs and RSS feeds.

One httpx.AsyncClient per worker run; every request carries its own
timeout. Anything short of a 2xx response with a decodable body is raised
as FetchError so callers handle timeouts, transport errors and bad
statuses the same way.
"""

import httpx

from watchtower.exceptions import FetchError
from watchtower.logging import get_logger

logger = get_logger(__name__)

_USER_AGENT = "watchtower/1.0"


class HttpFetcher:
    """Thin wrapper around httpx.AsyncClient with per-call timeouts.

    Args:
        timeout: Default per-call timeout in seconds.
        transport: Optional transport override (tests pass httpx.MockTransport).
    """

    def __init__(
        self,
        timeout: float = 8.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._client = httpx.AsyncClient(
            headers={"User-Agent": _USER_AGENT},
            follow_redirects=True,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def fetch_json(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> object:
        """GET ``url`` and decode the JSON body."""
        response = await self._get(url, headers, timeout)
        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(url, "invalid JSON body") from exc

    async def fetch_text(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> str:
        """GET ``url`` and return the raw body text."""
        response = await self._get(url, headers, timeout)
        return response.text

    async def _get(
        self,
        url: str,
        headers: dict[str, str] | None,
        timeout: float | None,
    ) -> httpx.Response:
        try:
            response = await self._client.get(
                url,
                headers=headers,
                timeout=timeout if timeout is not None else self._timeout,
            )
        except httpx.TimeoutException as exc:
            raise FetchError(url, "timeout") from exc
        except httpx.HTTPError as exc:
            raise FetchError(url, f"{type(exc).__name__}: {exc}") from exc

        if not response.is_success:
            raise FetchError(url, f"HTTP {response.status_code}")

        logger.debug("http_fetched", url=url, status=response.status_code)
        return response
