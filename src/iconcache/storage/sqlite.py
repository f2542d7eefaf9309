"""Durable key-value store backed by SQLite."""

from __future__ import annotations

import asyncio
import logging
import sqlite3
import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TypeVar

from iconcache.config.defaults import DEFAULT_STORE_PATH
from iconcache.errors.exceptions import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SQLiteStore:
    """Single-table SQLite store.

    Queries run in a worker thread so the event loop never blocks on disk I/O.
    A lock serializes access to the shared connection.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self._db_path = db_path or DEFAULT_STORE_PATH
        self._lock = threading.Lock()
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
            self._create_table()
        except (OSError, sqlite3.Error) as e:
            raise StorageError(
                f"Cannot open store at {self._db_path}: {e}", operation="open", original=e
            ) from e

    @property
    def path(self) -> Path:
        return self._db_path

    async def get(self, key: str) -> bytes | None:
        def _get() -> bytes | None:
            row = self._conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return bytes(row[0]) if row is not None else None

        return await self._run(_get, "get", key)

    async def set(self, key: str, value: bytes) -> None:
        def _set() -> None:
            self._conn.execute(
                "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)",
                (key, sqlite3.Binary(value)),
            )
            self._conn.commit()

        await self._run(_set, "set", key)

    async def delete(self, key: str) -> None:
        def _delete() -> None:
            self._conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            self._conn.commit()

        await self._run(_delete, "delete", key)

    async def delete_many(self, keys: Iterable[str]) -> None:
        params = [(k,) for k in keys]
        if not params:
            return

        def _delete_many() -> None:
            self._conn.executemany("DELETE FROM kv WHERE key = ?", params)
            self._conn.commit()

        await self._run(_delete_many, "delete_many")

    async def close(self) -> None:
        with self._lock:
            self._conn.close()

    def key_count(self) -> int:
        with self._lock:
            row = self._conn.execute("SELECT COUNT(*) FROM kv").fetchone()
        return row[0]

    def _create_table(self) -> None:
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value BLOB NOT NULL
            )
        """)
        self._conn.commit()

    async def _run(self, fn: Callable[[], T], operation: str, key: str | None = None) -> T:
        def _locked() -> T:
            with self._lock:
                return fn()

        try:
            return await asyncio.to_thread(_locked)
        except sqlite3.Error as e:
            logger.debug("SQLite %s failed for key %s: %s", operation, key, e)
            raise StorageError(
                f"SQLite {operation} failed: {e}", operation=operation, key=key, original=e
            ) from e
