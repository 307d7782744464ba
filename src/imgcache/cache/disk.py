"""Disk store: one file of raw bytes per cache key under a cache root."""

from __future__ import annotations

import logging
import os
import sys
import tempfile
from pathlib import Path

from imgcache.errors.exceptions import CacheDirectoryError

logger = logging.getLogger(__name__)

_CACHE_DIR_NAME = "ImageCache"


def platform_cache_dir() -> Path:
    """Return the per-user cache directory for the current platform."""
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Caches"
    if sys.platform == "win32":
        local = os.environ.get("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    xdg = os.environ.get("XDG_CACHE_HOME")
    return Path(xdg) if xdg else Path.home() / ".cache"


class DiskStore:
    """Keyed byte blobs on disk. Never raises on read or write.

    The root directory is resolved and created lazily on first use. If that
    fails the store stays unavailable for its lifetime: reads report absence
    and writes are skipped.
    """

    def __init__(self, root: Path | str | None = None) -> None:
        self._configured_root = Path(root).expanduser() if root is not None else None
        self._root: Path | None = None
        self._resolved = False
        self.root_error: CacheDirectoryError | None = None

    def ensure_root(self) -> Path | None:
        """Resolve and create the cache root. Idempotent."""
        if self._resolved:
            return self._root
        try:
            self._root = self._create_root()
        except CacheDirectoryError as e:
            logger.warning("Image cache disabled, %s", e)
            self.root_error = e
            self._root = None
        self._resolved = True
        return self._root

    @property
    def available(self) -> bool:
        return self.ensure_root() is not None

    def path_for(self, key: str) -> Path | None:
        root = self.ensure_root()
        if root is None:
            return None
        return root / key

    def contains(self, key: str) -> bool:
        path = self.path_for(key)
        return path is not None and path.is_file()

    def read(self, key: str) -> bytes | None:
        path = self.path_for(key)
        if path is None:
            return None
        try:
            return path.read_bytes()
        except OSError:
            # Missing, unreadable, or deleted underneath us
            return None

    def write(self, key: str, data: bytes) -> bool:
        """Persist bytes under key, replacing any existing entry.

        Returns False if the write was skipped or failed.
        """
        path = self.path_for(key)
        if path is None:
            return False
        tmp_name: str | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp-")
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
            tmp_name = None
            return True
        except OSError as e:
            logger.warning("Failed to write cache entry %s: %s", key, e)
            return False
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)

    def remove(self, key: str) -> bool:
        path = self.path_for(key)
        if path is None:
            return False
        try:
            path.unlink()
            return True
        except OSError:
            return False

    def clear(self) -> int:
        """Delete every entry in the cache root. Returns count deleted."""
        count = 0
        for path in self._entries():
            try:
                path.unlink()
                count += 1
            except OSError as e:
                logger.debug("Could not remove %s: %s", path, e)
        return count

    @property
    def entry_count(self) -> int:
        return sum(1 for _ in self._entries())

    @property
    def size_mb(self) -> float:
        total = 0
        for path in self._entries():
            try:
                total += path.stat().st_size
            except OSError:
                continue
        return total / (1024 * 1024)

    def _entries(self) -> list[Path]:
        root = self.ensure_root()
        if root is None:
            return []
        try:
            return [p for p in root.iterdir() if p.is_file() and not p.name.startswith(".tmp-")]
        except OSError:
            return []

    def resolve_root(self) -> Path | None:
        """Where the cache root lives, without creating it.

        None when no platform cache directory can be determined.
        """
        if self._configured_root is not None:
            return self._configured_root
        try:
            return platform_cache_dir() / _CACHE_DIR_NAME
        except RuntimeError as e:
            logger.debug("No platform cache directory: %s", e)
            return None

    def _create_root(self) -> Path:
        root = self.resolve_root()
        if root is None:
            raise CacheDirectoryError("no platform cache directory")

        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheDirectoryError(
                f"cannot create {root}: {e}", path=root, original=e
            ) from e
        logger.debug("Image cache root: %s", root)
        return root
