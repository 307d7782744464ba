"""In-memory fetcher serving canned responses, for tests and offline use."""

from __future__ import annotations

from imgcache.errors.exceptions import FetchError

Response = bytes | int | Exception


class StaticFetcher:
    """Serves canned responses keyed by URL.

    A response is raw bytes (success), an int HTTP status (any status raises
    FetchError, mirroring a non-2xx reply) or an exception instance to raise.
    URLs without an entry get ``default``, which is a 404 unless overridden.
    """

    def __init__(
        self,
        responses: dict[str, Response] | None = None,
        default: Response = 404,
    ) -> None:
        self.responses: dict[str, Response] = dict(responses or {})
        self.default = default
        self.calls: list[str] = []

    def set(self, url: str, response: Response) -> None:
        self.responses[url] = response

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def fetch(self, url: str) -> bytes:
        self.calls.append(url)
        response = self.responses.get(url, self.default)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, int):
            raise FetchError(f"HTTP {response}", url=url, http_status=response)
        return response
