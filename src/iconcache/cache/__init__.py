"""Cache subsystem — ledger, entry store and eviction over a key-value store."""

from iconcache.cache.entries import EntryStore
from iconcache.cache.eviction import EvictionPolicy
from iconcache.cache.keys import METADATA_KEY, hash_url, storage_key
from iconcache.cache.ledger import MetadataLedger
from iconcache.cache.models import (
    AssetKind,
    CacheEntry,
    CacheLedger,
    CacheStats,
    MetadataRecord,
    PreloadOutcome,
)

__all__ = [
    "AssetKind",
    "CacheEntry",
    "CacheLedger",
    "CacheStats",
    "EntryStore",
    "EvictionPolicy",
    "METADATA_KEY",
    "MetadataLedger",
    "MetadataRecord",
    "PreloadOutcome",
    "hash_url",
    "storage_key",
]
