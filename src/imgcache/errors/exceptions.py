"""Custom exception hierarchy for imgcache."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class ImgCacheError(Exception):
    """Base exception for all imgcache errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class FetchError(ImgCacheError):
    """Fetching bytes for a URL failed.

    Examples: 404 not found, 403 forbidden, malformed URL.
    """

    def __init__(
        self,
        message: str = "",
        url: str | None = None,
        http_status: int | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.http_status = http_status
        self.original = original


class TransientFetchError(FetchError):
    """Transient fetch failure: safe to retry with backoff.

    Examples: 429 rate limit, 500/502/503 server error, timeout, connection error.
    """


class CacheDirectoryError(ImgCacheError):
    """The cache root could not be resolved or created."""

    def __init__(
        self,
        message: str = "",
        path: Path | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.original = original
