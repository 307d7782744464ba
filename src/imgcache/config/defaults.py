"""Package-level default configuration values."""

# Default cache settings
DEFAULT_CACHE_DISABLED = False
DEFAULT_COALESCE = False
DEFAULT_REFETCH_ON_CORRUPT = False

# Default network settings
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "imgcache/0.1"
DEFAULT_MAX_CONCURRENCY = 8

# Log level
DEFAULT_LOG_LEVEL = "WARNING"
