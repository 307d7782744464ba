"""Image cache manager: serves images from disk, falling back to the network."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from types import TracebackType

from PIL import Image

from imgcache.cache.disk import DiskStore
from imgcache.cache.keys import hash_key
from imgcache.cache.stats import CacheStats, LoadOutcome, LoadResult
from imgcache.config.defaults import DEFAULT_MAX_CONCURRENCY
from imgcache.config.schema import CacheSettings
from imgcache.fetch.base import Fetcher
from imgcache.utils.image import decode_image

logger = logging.getLogger(__name__)


class ImageCacheManager:
    """Disk-backed image cache keyed by URL.

    Lookup order: disk entry for the URL's key, then the fetcher. Fetched
    bytes are persisted only after they decode successfully. Callers of
    ``load_image`` only ever see an image or None.
    """

    def __init__(
        self,
        store: DiskStore | None = None,
        fetcher: Fetcher | None = None,
        *,
        enabled: bool = True,
        coalesce: bool = False,
        refetch_on_corrupt: bool = False,
    ) -> None:
        if fetcher is None:
            from imgcache.fetch.http import HttpFetcher

            fetcher = HttpFetcher()
        self._store = store or DiskStore()
        self._fetcher = fetcher
        self._enabled = enabled
        self._coalesce = coalesce
        self._refetch_on_corrupt = refetch_on_corrupt
        self._inflight: dict[str, asyncio.Future[LoadResult]] = {}
        self._stats = CacheStats()

    @classmethod
    def from_config(
        cls, settings: CacheSettings, fetcher: Fetcher | None = None
    ) -> ImageCacheManager:
        """Build a manager from validated settings (see config.hierarchy)."""
        if fetcher is None:
            from imgcache.fetch.http import HttpFetcher

            fetcher = HttpFetcher(timeout=settings.timeout, user_agent=settings.user_agent)
        return cls(
            store=DiskStore(settings.cache_dir),
            fetcher=fetcher,
            enabled=not settings.cache_disabled,
            coalesce=settings.coalesce,
            refetch_on_corrupt=settings.refetch_on_corrupt,
        )

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def store(self) -> DiskStore:
        return self._store

    async def load_image(self, url: object) -> Image.Image | None:
        """Return the decoded image for url, or None if none is available."""
        result = await self.load(url)
        return result.image

    async def load(self, url: object) -> LoadResult:
        """Load url and report how the result was obtained."""
        url_str = str(url)
        key = hash_key(url_str)

        if self._enabled:
            data = await asyncio.to_thread(self._store.read, key)
            if data is not None:
                image = decode_image(data)
                if image is not None:
                    self._stats.hits += 1
                    logger.debug("Cache hit for %s (%s)", url_str, key)
                    return LoadResult(
                        url=url_str, key=key, outcome=LoadOutcome.HIT, image=image
                    )
                logger.warning("Cached entry %s for %s is not a valid image", key, url_str)
                if not self._refetch_on_corrupt:
                    self._stats.decode_errors += 1
                    return LoadResult(
                        url=url_str,
                        key=key,
                        outcome=LoadOutcome.CACHE_CORRUPT,
                        error="cached entry could not be decoded",
                    )

        self._stats.misses += 1
        logger.debug("Cache miss for %s (%s)", url_str, key)

        if not self._coalesce:
            return await self._fetch_and_store(url_str, key)

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch_and_store(url_str, key))
            self._inflight[key] = task
            task.add_done_callback(lambda _t, k=key: self._inflight.pop(k, None))
        else:
            logger.debug("Joining in-flight fetch for %s", url_str)
        return await asyncio.shield(task)

    async def load_all(
        self,
        urls: Iterable[object],
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> list[LoadResult]:
        """Load several URLs concurrently. Results are in input order."""
        semaphore = asyncio.Semaphore(max_concurrency)

        async def worker(url: object) -> LoadResult:
            async with semaphore:
                return await self.load(url)

        return list(await asyncio.gather(*[worker(u) for u in urls]))

    async def load_many(
        self,
        urls: Iterable[object],
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> list[Image.Image | None]:
        """Like load_all, but only the images (None where loading failed)."""
        results = await self.load_all(urls, max_concurrency=max_concurrency)
        return [r.image for r in results]

    def stats(self) -> CacheStats:
        """Return store size plus this manager's counters."""
        if not self._enabled:
            return self._stats.model_copy()
        return self._stats.model_copy(
            update={
                "entries": self._store.entry_count,
                "size_mb": self._store.size_mb,
            }
        )

    def clear(self) -> int:
        """Delete all disk entries and reset counters."""
        count = self._store.clear()
        self._stats = CacheStats()
        return count

    async def close(self) -> None:
        close = getattr(self._fetcher, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> ImageCacheManager:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def _fetch_and_store(self, url: str, key: str) -> LoadResult:
        try:
            data = await self._fetcher.fetch(url)
        except Exception as e:
            self._stats.fetch_errors += 1
            logger.warning("Fetch failed for %s: %s", url, e)
            return LoadResult(
                url=url, key=key, outcome=LoadOutcome.FETCH_ERROR, error=str(e) or type(e).__name__
            )

        image = decode_image(data)
        if image is None:
            self._stats.decode_errors += 1
            logger.warning("Fetched data for %s is not a valid image", url)
            return LoadResult(
                url=url,
                key=key,
                outcome=LoadOutcome.DECODE_ERROR,
                error="fetched data could not be decoded",
            )

        if self._enabled:
            if await asyncio.to_thread(self._store.write, key, data):
                self._stats.writes += 1
            else:
                self._stats.write_failures += 1

        return LoadResult(url=url, key=key, outcome=LoadOutcome.FETCHED, image=image)
