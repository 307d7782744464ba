"""Fetcher protocol: the network boundary of the image cache."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Fetcher(Protocol):
    """Retrieves raw bytes for a URL.

    Implementations raise FetchError (or any exception) on failure; the
    cache manager does not distinguish between kinds of failure.
    """

    async def fetch(self, url: str) -> bytes: ...
