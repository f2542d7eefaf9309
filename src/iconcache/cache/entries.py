"""Payload persistence keyed by derived storage keys."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import ValidationError

from iconcache.cache.keys import DEFAULT_KEY_PREFIX, storage_key
from iconcache.cache.models import CacheEntry
from iconcache.errors.exceptions import ConsistencyDriftError
from iconcache.storage.base import KeyValueStore

logger = logging.getLogger(__name__)


class EntryStore:
    """Reads and writes ``CacheEntry`` payloads through a ``KeyValueStore``."""

    def __init__(self, store: KeyValueStore, key_prefix: str = DEFAULT_KEY_PREFIX) -> None:
        self._store = store
        self._prefix = key_prefix

    def key_for(self, url: str) -> str:
        return storage_key(url, prefix=self._prefix)

    async def read(self, url: str) -> CacheEntry:
        """Return the payload for ``url``.

        Raises ConsistencyDriftError if the payload is missing or unreadable,
        StorageError if the backend fails.
        """
        key = self.key_for(url)
        raw = await self._store.get(key)
        if raw is None:
            raise ConsistencyDriftError(f"Payload missing for {url}", url=url, key=key)
        try:
            return CacheEntry.model_validate_json(raw)
        except ValidationError as e:
            raise ConsistencyDriftError(
                f"Payload for {url} is unreadable: {e.error_count()} errors", url=url, key=key
            ) from e

    async def write(self, url: str, entry: CacheEntry) -> None:
        await self._store.set(self.key_for(url), entry.model_dump_json().encode("utf-8"))

    async def remove_many(self, urls: Iterable[str]) -> None:
        keys = [self.key_for(u) for u in urls]
        if keys:
            await self._store.delete_many(keys)
