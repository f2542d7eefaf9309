"""Storage backends — the key-value primitive the cache persists into."""

from iconcache.storage.base import KeyValueStore
from iconcache.storage.memory import MemoryStore
from iconcache.storage.sqlite import SQLiteStore

__all__ = ["KeyValueStore", "MemoryStore", "SQLiteStore"]
