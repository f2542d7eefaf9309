"""Tests for the validated cache config model."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from iconcache.config.defaults import get_defaults
from iconcache.config.schema import CacheConfig


class TestCacheConfig:
    def test_from_defaults(self):
        cfg = CacheConfig.from_mapping(get_defaults())
        assert cfg.max_entries == 50
        assert isinstance(cfg.store_path, Path)

    def test_ignores_unknown_keys(self):
        cfg = CacheConfig.from_mapping({"max_entries": 3, "something_else": True})
        assert cfg.max_entries == 3

    def test_rejects_zero_entries(self):
        with pytest.raises(ValidationError):
            CacheConfig(max_entries=0)

    def test_rejects_non_positive_ttl(self):
        with pytest.raises(ValidationError):
            CacheConfig(ttl_seconds=0)

    def test_string_numbers_coerced(self):
        assert CacheConfig(max_entries="12").max_entries == 12

    def test_metadata_key_must_not_look_like_payload_key(self):
        with pytest.raises(ValidationError):
            CacheConfig(key_prefix="icon_", metadata_key="icon_abc123")

    def test_metadata_key_sharing_prefix_is_fine(self):
        cfg = CacheConfig(key_prefix="icon_cache_", metadata_key="icon_cache_metadata")
        assert cfg.metadata_key == "icon_cache_metadata"
