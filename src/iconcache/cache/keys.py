"""Derive short, deterministic storage keys from asset URLs."""

from __future__ import annotations

import hashlib

DEFAULT_KEY_PREFIX = "icon_cache_"
METADATA_KEY = "icon_cache_metadata"

_DIGEST_CHARS = 16


def hash_url(url: str) -> str:
    """Hash a URL to a fixed-length hex string.

    Truncated SHA256; collisions are tolerated because the ledger is keyed by
    the full URL.
    """
    return hashlib.sha256(url.encode("utf-8")).hexdigest()[:_DIGEST_CHARS]


def storage_key(url: str, prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """Return the payload key for ``url`` in the key-value store."""
    return f"{prefix}{hash_url(url)}"
