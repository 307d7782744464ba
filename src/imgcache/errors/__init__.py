"""Error handling: exception hierarchy for fetch and storage failures."""

from imgcache.errors.exceptions import (
    CacheDirectoryError,
    FetchError,
    ImgCacheError,
    TransientFetchError,
)

__all__ = [
    "ImgCacheError",
    "FetchError",
    "TransientFetchError",
    "CacheDirectoryError",
]
