"""Load result and statistics models."""

from __future__ import annotations

from enum import StrEnum

from PIL import Image
from pydantic import BaseModel, ConfigDict


class LoadOutcome(StrEnum):
    HIT = "hit"
    FETCHED = "fetched"
    FETCH_ERROR = "fetch_error"
    DECODE_ERROR = "decode_error"
    CACHE_CORRUPT = "cache_corrupt"


class LoadResult(BaseModel):
    """Outcome of a single image load."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    url: str
    key: str
    outcome: LoadOutcome
    image: Image.Image | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome in (LoadOutcome.HIT, LoadOutcome.FETCHED)


class CacheStats(BaseModel):
    """Aggregate cache statistics."""

    entries: int = 0
    size_mb: float = 0.0
    hits: int = 0
    misses: int = 0
    fetch_errors: int = 0
    decode_errors: int = 0
    writes: int = 0
    write_failures: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0
