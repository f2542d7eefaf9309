"""Metadata ledger — the single durable record of what is cached."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from pydantic import ValidationError

from iconcache.cache.keys import METADATA_KEY
from iconcache.cache.models import CacheLedger, MetadataRecord
from iconcache.errors.exceptions import StorageError
from iconcache.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 7 * 24 * 3600


class MetadataLedger:
    """Loads, saves and queries the ``CacheLedger``.

    The ledger is read whole and written whole. There is no merge and no
    concurrency token: the last ``save`` wins.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = METADATA_KEY,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._key = key
        self._clock = clock

    @property
    def key(self) -> str:
        return self._key

    async def load(self) -> CacheLedger:
        """Read the ledger, falling back to an empty one on any failure."""
        try:
            raw = await self._store.get(self._key)
        except StorageError as e:
            logger.warning("Ledger read failed, starting cold: %s", e)
            return self._empty()

        if raw is None:
            return self._empty()

        try:
            ledger = CacheLedger.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Ledger is corrupt (%d errors), starting cold", e.error_count())
            return self._empty()

        if ledger.recompute_total():
            logger.debug("Ledger total_bytes drifted, recomputed to %d", ledger.total_bytes)
        return ledger

    async def save(self, ledger: CacheLedger) -> None:
        """Write the whole ledger back. Raises StorageError on failure."""
        await self._store.set(self._key, ledger.model_dump_json().encode("utf-8"))

    async def delete(self) -> None:
        await self._store.delete(self._key)

    def is_fresh(self, record: MetadataRecord, ttl: float = DEFAULT_TTL_SECONDS) -> bool:
        return self._clock() - record.created_at < ttl

    def touch(self, ledger: CacheLedger, url: str) -> None:
        record = ledger.entries.get(url)
        if record is not None:
            record.last_accessed_at = self._clock()

    def _empty(self) -> CacheLedger:
        return CacheLedger(last_cleanup_at=self._clock())
