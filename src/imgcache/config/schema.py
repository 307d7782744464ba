"""Pydantic model for image cache settings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, model_validator

from imgcache.config.defaults import (
    DEFAULT_CACHE_DISABLED,
    DEFAULT_COALESCE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_REFETCH_ON_CORRUPT,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class CacheSettings(BaseModel):
    """Resolved settings for a cache manager and its HTTP fetcher.

    Values arrive as strings from the environment or as YAML scalars. Any
    value that does not validate against its field is logged and replaced
    by the field default, so a bad setting never stops a load.
    """

    model_config = ConfigDict(extra="ignore")

    cache_dir: Path | None = None  # None = platform cache dir + /ImageCache
    cache_disabled: bool = DEFAULT_CACHE_DISABLED
    coalesce: bool = DEFAULT_COALESCE
    refetch_on_corrupt: bool = DEFAULT_REFETCH_ON_CORRUPT
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    max_concurrency: int = Field(default=DEFAULT_MAX_CONCURRENCY, gt=0)
    log_level: str = DEFAULT_LOG_LEVEL

    @model_validator(mode="before")
    @classmethod
    def _drop_invalid(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned: dict[str, Any] = {}
        for name, value in data.items():
            field = cls.model_fields.get(name)
            if field is None:
                continue
            if name == "log_level" and isinstance(value, str):
                value = value.strip().upper()
                if value not in _LOG_LEVELS:
                    logger.warning("Unknown log level %r, using %s", value, field.default)
                    continue
            if name == "cache_dir" and value == "":
                value = None
            target = (
                Annotated[(field.annotation, *field.metadata)]
                if field.metadata
                else field.annotation
            )
            adapter = TypeAdapter(target)
            try:
                cleaned[name] = adapter.validate_python(value)
            except ValidationError:
                logger.warning(
                    "Invalid value for '%s': %r, using default %r", name, value, field.default
                )
        return cleaned

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)
