"""Cache entry, ledger and statistics models."""

from __future__ import annotations

import time
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class AssetKind(StrEnum):
    VECTOR = "vector"
    RASTER_REFERENCE = "raster_reference"


class CacheEntry(BaseModel):
    """A cached asset payload.

    ``content`` holds inline vector markup for ``VECTOR`` entries and the
    original URL for ``RASTER_REFERENCE`` entries.
    """

    model_config = ConfigDict(frozen=True)

    kind: AssetKind
    content: str
    byte_size: int = Field(ge=0)

    @property
    def is_vector(self) -> bool:
        return self.kind == AssetKind.VECTOR


class MetadataRecord(BaseModel):
    """Per-URL bookkeeping kept in the ledger."""

    created_at: float = Field(default_factory=time.time)
    last_accessed_at: float = Field(default_factory=time.time)
    byte_size: int = 0
    kind: AssetKind = AssetKind.RASTER_REFERENCE


class CacheLedger(BaseModel):
    """Singleton record tracking every cached URL."""

    entries: dict[str, MetadataRecord] = Field(default_factory=dict)
    total_bytes: int = 0
    last_cleanup_at: float = Field(default_factory=time.time)

    def __len__(self) -> int:
        return len(self.entries)

    def add(self, url: str, record: MetadataRecord) -> None:
        """Insert or replace the record for ``url``, keeping ``total_bytes`` in step."""
        previous = self.entries.get(url)
        if previous is not None:
            self.total_bytes -= previous.byte_size
        self.entries[url] = record
        self.total_bytes += record.byte_size

    def remove(self, url: str) -> MetadataRecord | None:
        record = self.entries.pop(url, None)
        if record is not None:
            self.total_bytes = max(0, self.total_bytes - record.byte_size)
        return record

    def recompute_total(self) -> bool:
        """Recompute ``total_bytes`` from the records. Returns True if it drifted."""
        actual = sum(r.byte_size for r in self.entries.values())
        drifted = actual != self.total_bytes
        self.total_bytes = actual
        return drifted


class CacheStats(BaseModel):
    """Observational snapshot of the ledger."""

    total_entries: int = 0
    total_bytes: int = 0
    oldest_created_at: float | None = None
    newest_created_at: float | None = None
    last_cleanup_at: float | None = None


class PreloadOutcome(BaseModel):
    """Result of preloading a single URL."""

    url: str
    entry: CacheEntry | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.entry is not None
