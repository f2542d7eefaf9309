"""Pydantic model for validated cache configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from iconcache.config import defaults


class CacheConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ttl_seconds: float = Field(default=defaults.DEFAULT_TTL_SECONDS, gt=0)
    max_entries: int = Field(default=defaults.DEFAULT_MAX_ENTRIES, ge=1)
    max_vector_bytes: int = Field(default=defaults.DEFAULT_MAX_VECTOR_BYTES, ge=1)
    eviction_batch_size: int = Field(default=defaults.DEFAULT_EVICTION_BATCH_SIZE, ge=1)
    cleanup_interval_seconds: float = Field(
        default=defaults.DEFAULT_CLEANUP_INTERVAL_SECONDS, ge=0
    )
    key_prefix: str = defaults.DEFAULT_KEY_PREFIX
    metadata_key: str = defaults.DEFAULT_METADATA_KEY
    store_path: Path = defaults.DEFAULT_STORE_PATH
    fetch_timeout: float = Field(default=defaults.DEFAULT_FETCH_TIMEOUT, gt=0)
    max_concurrency: int = Field(default=defaults.DEFAULT_MAX_CONCURRENCY, ge=1)
    single_flight: bool = defaults.DEFAULT_SINGLE_FLIGHT
    strict_vector: bool = defaults.DEFAULT_STRICT_VECTOR
    log_level: str = defaults.DEFAULT_LOG_LEVEL

    @model_validator(mode="after")
    def _metadata_key_outside_payload_space(self) -> CacheConfig:
        if self.metadata_key.startswith(self.key_prefix) and self._looks_like_payload_key():
            raise ValueError(
                f"metadata_key '{self.metadata_key}' collides with payload keys "
                f"under prefix '{self.key_prefix}'"
            )
        return self

    def _looks_like_payload_key(self) -> bool:
        suffix = self.metadata_key[len(self.key_prefix):]
        return bool(suffix) and all(c in "0123456789abcdef" for c in suffix)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> CacheConfig:
        return cls(**data)
