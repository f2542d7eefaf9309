"""iconcache — local icon/image asset cache with expiry and LRU eviction."""

from iconcache.cache.models import AssetKind, CacheEntry, CacheStats, PreloadOutcome
from iconcache.core import IconCache
from iconcache.storage import KeyValueStore, MemoryStore, SQLiteStore

__all__ = [
    "AssetKind",
    "CacheEntry",
    "CacheStats",
    "IconCache",
    "KeyValueStore",
    "MemoryStore",
    "PreloadOutcome",
    "SQLiteStore",
]
