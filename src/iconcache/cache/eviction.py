"""Eviction policy — age-based expiry sweep and count-based LRU eviction.

Both operate on the in-memory ledger before it is persisted. Payload deletion
failures are logged and swallowed: the records are dropped from the ledger
regardless, so capacity stays a best-effort bound rather than a hard one.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from iconcache.cache.entries import EntryStore
from iconcache.cache.ledger import DEFAULT_TTL_SECONDS
from iconcache.cache.models import CacheLedger
from iconcache.errors.exceptions import StorageError

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 50
DEFAULT_EVICTION_BATCH = 5
DEFAULT_CLEANUP_INTERVAL_SECONDS = 24 * 3600


class EvictionPolicy:
    def __init__(
        self,
        entries: EntryStore,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        batch_size: int = DEFAULT_EVICTION_BATCH,
        cleanup_interval_seconds: float = DEFAULT_CLEANUP_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._entries = entries
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._batch_size = batch_size
        self._cleanup_interval = cleanup_interval_seconds
        self._clock = clock

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def batch_size(self) -> int:
        return self._batch_size

    def sweep_due(self, ledger: CacheLedger) -> bool:
        return self._clock() - ledger.last_cleanup_at > self._cleanup_interval

    def expired_urls(self, ledger: CacheLedger) -> list[str]:
        now = self._clock()
        return [
            url for url, record in ledger.entries.items()
            if now - record.created_at >= self._ttl
        ]

    async def sweep_expired(self, ledger: CacheLedger) -> list[str]:
        """Remove every stale record and its payload. Returns removed URLs."""
        expired = self.expired_urls(ledger)
        for url in expired:
            ledger.remove(url)
        ledger.last_cleanup_at = self._clock()

        if expired:
            logger.info("Removing %d expired icons", len(expired))
            await self._remove_payloads(expired)
        return expired

    def needs_room(self, ledger: CacheLedger, url: str) -> bool:
        """True if inserting ``url`` would reach or pass the entry limit."""
        return url not in ledger.entries and len(ledger.entries) >= self._max_entries

    def select_lru(self, ledger: CacheLedger, count: int | None = None) -> list[str]:
        """Pick the least recently accessed URLs, oldest creation breaking ties."""
        count = self._batch_size if count is None else count
        ranked = sorted(
            ledger.entries.items(),
            key=lambda item: (item[1].last_accessed_at, item[1].created_at),
        )
        return [url for url, _ in ranked[:count]]

    async def evict_lru(self, ledger: CacheLedger) -> list[str]:
        """Evict a fixed batch of least recently used entries. Returns removed URLs."""
        victims = self.select_lru(ledger)
        for url in victims:
            ledger.remove(url)

        if victims:
            logger.info("Evicting %d LRU icons", len(victims))
            await self._remove_payloads(victims)
        return victims

    async def _remove_payloads(self, urls: list[str]) -> None:
        try:
            await self._entries.remove_many(urls)
        except StorageError as e:
            logger.warning("Failed to delete %d payloads: %s", len(urls), e)
