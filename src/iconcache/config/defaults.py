"""Package-level default configuration values."""

from __future__ import annotations

from pathlib import Path
from typing import Any

# Expiry and capacity
DEFAULT_TTL_SECONDS = 7 * 24 * 3600  # 7 days
DEFAULT_MAX_ENTRIES = 50
DEFAULT_MAX_VECTOR_BYTES = 100_000
DEFAULT_EVICTION_BATCH_SIZE = 5
DEFAULT_CLEANUP_INTERVAL_SECONDS = 24 * 3600

# Storage keys
DEFAULT_KEY_PREFIX = "icon_cache_"
DEFAULT_METADATA_KEY = "icon_cache_metadata"
DEFAULT_STORE_PATH = Path.home() / ".iconcache" / "store.db"

# Fetching and concurrency
DEFAULT_FETCH_TIMEOUT = 10.0
DEFAULT_MAX_CONCURRENCY = 16
DEFAULT_SINGLE_FLIGHT = False
DEFAULT_STRICT_VECTOR = False

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "ttl_seconds": DEFAULT_TTL_SECONDS,
        "max_entries": DEFAULT_MAX_ENTRIES,
        "max_vector_bytes": DEFAULT_MAX_VECTOR_BYTES,
        "eviction_batch_size": DEFAULT_EVICTION_BATCH_SIZE,
        "cleanup_interval_seconds": DEFAULT_CLEANUP_INTERVAL_SECONDS,
        "key_prefix": DEFAULT_KEY_PREFIX,
        "metadata_key": DEFAULT_METADATA_KEY,
        "store_path": str(DEFAULT_STORE_PATH),
        "fetch_timeout": DEFAULT_FETCH_TIMEOUT,
        "max_concurrency": DEFAULT_MAX_CONCURRENCY,
        "single_flight": DEFAULT_SINGLE_FLIGHT,
        "strict_vector": DEFAULT_STRICT_VECTOR,
        "log_level": DEFAULT_LOG_LEVEL,
    }
