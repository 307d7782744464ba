"""Cache subsystem: URL-keyed image cache backed by a disk store."""

from imgcache.cache.disk import DiskStore
from imgcache.cache.keys import fnv1a_64, hash_key
from imgcache.cache.manager import ImageCacheManager
from imgcache.cache.stats import CacheStats, LoadOutcome, LoadResult

__all__ = [
    "DiskStore",
    "ImageCacheManager",
    "CacheStats",
    "LoadOutcome",
    "LoadResult",
    "fnv1a_64",
    "hash_key",
]
