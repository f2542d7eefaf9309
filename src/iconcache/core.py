"""Top-level entry point: IconCache."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from pathlib import Path
from types import TracebackType
from typing import Any

from iconcache.cache.entries import EntryStore
from iconcache.cache.eviction import EvictionPolicy
from iconcache.cache.ledger import MetadataLedger
from iconcache.cache.models import (
    CacheEntry,
    CacheLedger,
    CacheStats,
    MetadataRecord,
    PreloadOutcome,
)
from iconcache.concurrency.pool import PreloadPool
from iconcache.concurrency.single_flight import SingleFlight
from iconcache.config.schema import CacheConfig
from iconcache.errors.exceptions import ConsistencyDriftError, FetchError, StorageError
from iconcache.fetch.fetcher import ContentFetcher
from iconcache.storage.base import KeyValueStore
from iconcache.storage.sqlite import SQLiteStore

logger = logging.getLogger(__name__)


class IconCache:
    """Cache-first, fetch-on-miss icon cache over a key-value store.

    Every public coroutine degrades instead of raising: a fetch or storage
    failure shows up as ``None`` (or ``False`` for ``clear_all``).

    The ledger is not lock-protected. Concurrent calls each run
    load -> decide -> fetch -> evict -> save, and the last save wins. Pass
    ``single_flight=True`` to share one fetch between concurrent callers
    for the same URL.
    """

    def __init__(
        self,
        store: KeyValueStore,
        fetcher: ContentFetcher | None = None,
        config: CacheConfig | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config or CacheConfig()
        self._store = store
        self._fetcher = fetcher or ContentFetcher(
            max_vector_bytes=self._config.max_vector_bytes,
            timeout=self._config.fetch_timeout,
            strict_vector=self._config.strict_vector,
        )
        self._clock = clock
        self._entries = EntryStore(store, key_prefix=self._config.key_prefix)
        self._ledger = MetadataLedger(store, key=self._config.metadata_key, clock=clock)
        self._eviction = EvictionPolicy(
            self._entries,
            ttl_seconds=self._config.ttl_seconds,
            max_entries=self._config.max_entries,
            batch_size=self._config.eviction_batch_size,
            cleanup_interval_seconds=self._config.cleanup_interval_seconds,
            clock=clock,
        )
        self._pool = PreloadPool(max_concurrency=self._config.max_concurrency)
        self._single_flight: SingleFlight[CacheEntry | None] | None = (
            SingleFlight() if self._config.single_flight else None
        )

    @classmethod
    def from_config(
        cls,
        config: dict[str, Any] | CacheConfig,
        store: KeyValueStore | None = None,
        fetcher: ContentFetcher | None = None,
    ) -> IconCache:
        """Build a cache from a merged config dict (see ``load_config_hierarchy``)."""
        cfg = config if isinstance(config, CacheConfig) else CacheConfig.from_mapping(config)
        return cls(
            store=store or SQLiteStore(db_path=Path(cfg.store_path).expanduser()),
            fetcher=fetcher,
            config=cfg,
        )

    @property
    def config(self) -> CacheConfig:
        return self._config

    @property
    def store(self) -> KeyValueStore:
        return self._store

    @property
    def ledger(self) -> MetadataLedger:
        return self._ledger

    @property
    def eviction(self) -> EvictionPolicy:
        return self._eviction

    def key_for(self, url: str) -> str:
        return self._entries.key_for(url)

    async def get_or_fetch(self, url: str) -> CacheEntry | None:
        """Return the cached entry for ``url``, fetching it on a miss.

        Returns None when the asset is unavailable for any reason.
        """
        if not url or not isinstance(url, str):
            return None
        try:
            return await self._load(url)
        except FetchError:
            return None

    async def preload_many(self, urls: Iterable[str]) -> list[PreloadOutcome]:
        """Load many URLs concurrently. One outcome per URL, never raises.

        A failed outcome carries the fetch error message, e.g. ``HTTP 404 for ...``.
        """
        url_list = list(urls)
        logger.info("Preloading %d icons", len(url_list))
        return await self._pool.run(self._preload_one, url_list)

    async def clear_all(self) -> bool:
        """Delete every payload and the ledger. Returns False if storage failed."""
        ledger = await self._ledger.load()
        urls = list(ledger.entries)
        try:
            await self._entries.remove_many(urls)
            await self._ledger.delete()
        except StorageError as e:
            logger.error("Failed to clear icon cache: %s", e)
            return False
        logger.info("Cleared %d cached icons", len(urls))
        return True

    async def stats(self) -> CacheStats:
        """Return a snapshot of the ledger. Never writes."""
        ledger = await self._ledger.load()
        created = [r.created_at for r in ledger.entries.values()]
        return CacheStats(
            total_entries=len(ledger.entries),
            total_bytes=ledger.total_bytes,
            oldest_created_at=min(created) if created else None,
            newest_created_at=max(created) if created else None,
            last_cleanup_at=ledger.last_cleanup_at,
        )

    async def close(self) -> None:
        await self._fetcher.close()
        await self._store.close()

    async def __aenter__(self) -> IconCache:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def _preload_one(self, url: str) -> CacheEntry | None:
        if not url or not isinstance(url, str):
            raise ValueError(f"Invalid URL: {url!r}")
        return await self._load(url)

    async def _load(self, url: str) -> CacheEntry | None:
        """Like ``get_or_fetch`` but lets FetchError through."""
        if self._single_flight is not None:
            return await self._single_flight.do(url, lambda: self._get_or_fetch(url))
        return await self._get_or_fetch(url)

    async def _get_or_fetch(self, url: str) -> CacheEntry | None:
        ledger = await self._ledger.load()

        record = ledger.entries.get(url)
        if record is not None and self._ledger.is_fresh(record, self._config.ttl_seconds):
            entry = await self._read_hit(ledger, url)
            if entry is not None:
                return entry

        return await self._fetch_and_store(ledger, url)

    async def _read_hit(self, ledger: CacheLedger, url: str) -> CacheEntry | None:
        self._ledger.touch(ledger, url)
        await self._save_ledger(ledger)
        try:
            entry = await self._entries.read(url)
        except ConsistencyDriftError as e:
            logger.warning("Cache drift, refetching: %s", e)
            return None
        except StorageError as e:
            logger.warning("Payload read failed for %s: %s", url, e)
            return None
        logger.debug("Cache hit: %s", url)
        return entry

    async def _fetch_and_store(self, ledger: CacheLedger, url: str) -> CacheEntry | None:
        """Fetch, make room and persist. Raises FetchError; storage failures return None."""
        logger.debug("Cache miss: %s", url)
        if self._eviction.sweep_due(ledger):
            await self._eviction.sweep_expired(ledger)
            # Payloads are already gone; persist before the fetch can fail.
            await self._save_ledger(ledger)

        try:
            entry = await self._fetcher.fetch(url)
        except FetchError as e:
            logger.warning("Failed to fetch %s: %s", url, e)
            raise

        if self._eviction.needs_room(ledger, url):
            await self._eviction.evict_lru(ledger)

        try:
            await self._entries.write(url, entry)
        except StorageError as e:
            logger.warning("Failed to store payload for %s: %s", url, e)
            # Drop any stale record so the ledger never points at a missing payload.
            ledger.remove(url)
            await self._save_ledger(ledger)
            return None

        now = self._clock()
        ledger.add(
            url,
            MetadataRecord(
                created_at=now,
                last_accessed_at=now,
                byte_size=entry.byte_size,
                kind=entry.kind,
            ),
        )
        await self._save_ledger(ledger)
        logger.info("Cached %s icon: %s", entry.kind.value, url)
        return entry

    async def _save_ledger(self, ledger: CacheLedger) -> None:
        try:
            await self._ledger.save(ledger)
        except StorageError as e:
            logger.warning("Failed to save cache ledger: %s", e)
