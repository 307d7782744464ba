"""Async HTTP fetcher built on httpx with retry on transient failures."""

from __future__ import annotations

import logging
from types import TracebackType

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from imgcache.config.defaults import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from imgcache.errors.exceptions import FetchError, TransientFetchError

logger = logging.getLogger(__name__)

# Status codes that warrant retry
_TRANSIENT_STATUS = {408, 425, 429, 500, 502, 503, 504}


class HttpFetcher:
    """Fetches image bytes with HTTP GET. Only 2xx responses succeed."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": user_agent},
        )

    @retry(
        retry=retry_if_exception_type(TransientFetchError),
        wait=wait_exponential(multiplier=1, min=1, max=30),
        stop=stop_after_attempt(3),
        reraise=True,
    )
    async def fetch(self, url: str) -> bytes:
        """GET url and return the response body."""
        try:
            response = await self._client.get(url)
        except (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError) as e:
            raise TransientFetchError(str(e) or type(e).__name__, url=url, original=e) from e
        except httpx.HTTPError as e:
            raise FetchError(str(e) or type(e).__name__, url=url, original=e) from e

        status = response.status_code
        if status in _TRANSIENT_STATUS:
            logger.debug("Transient HTTP %d for %s", status, url)
            raise TransientFetchError(f"HTTP {status}", url=url, http_status=status)
        if not response.is_success:
            raise FetchError(f"HTTP {status}", url=url, http_status=status)
        return response.content

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpFetcher:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
