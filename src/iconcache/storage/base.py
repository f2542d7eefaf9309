"""Key-value storage protocol.

Any durable (or ephemeral) byte store with these four coroutines can back the
icon cache. Implementations raise ``StorageError`` for backend failures and
return ``None`` from ``get`` for a missing key.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for storage backends."""

    async def get(self, key: str) -> bytes | None:
        """Return the value for ``key``, or None if absent."""
        ...

    async def set(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    async def delete(self, key: str) -> None:
        """Delete ``key``. Deleting a missing key is not an error."""
        ...

    async def delete_many(self, keys: Iterable[str]) -> None:
        """Delete every key in ``keys``."""
        ...

    async def close(self) -> None:
        """Release any resources held by the backend."""
        ...
