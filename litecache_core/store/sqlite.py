"""LiteCache SQLite Store - Embedded Relational Storage Backend.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import contextlib
import logging
import os
import sqlite3
from typing import Any, Iterator, List, Optional, Tuple, Union

from litecache_core.cache.entry import CacheRow
from litecache_core.errors import ConfigurationError
from litecache_core.eviction.policy import BeyondCapacity, Expired, Live, Predicate
from litecache_core.store.backend import StorageBackend, TABLE_NAME

logger = logging.getLogger(__name__)

MEMORY = ":memory:"

# Largest value an INTEGER column (and a bound parameter) can hold.
MAX_INTEGER = 2**63 - 1

# Ties on created_at fall back to insertion order; REPLACE re-inserts, so
# an upserted row always gets the highest rowid.
RECENCY_ORDER = "created_at DESC, rowid DESC"

SCHEMA = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    key TEXT PRIMARY KEY,
    value TEXT,
    expires INTEGER,
    created_at INTEGER
);
CREATE INDEX IF NOT EXISTS idx_{TABLE_NAME}_expires ON {TABLE_NAME} (expires);
CREATE INDEX IF NOT EXISTS idx_{TABLE_NAME}_created_at ON {TABLE_NAME} (created_at);
"""


class SQLiteStore(StorageBackend):
    """SQLite storage backend.

    Persists rows in a single ``cache`` table of an embedded SQLite
    database, either a file or the ``:memory:`` sentinel.

    The connection runs in autocommit mode: each statement is durable as
    soon as it returns and no transaction spans more than one call unless
    the caller opens one with ``atomic()``. The handle is created with
    ``check_same_thread=False`` but has no internal lock, so callers
    sharing it across threads must serialize access themselves.

    Example:
        store = SQLiteStore("/var/cache/myapp.db")
        store.upsert(CacheRow("key", '{"a":1}', expires, created_at))
        row = store.get("key")
    """

    def __init__(self, path: Union[str, "os.PathLike[str]"] = MEMORY):
        """Open (and create if absent) the database and its table.

        Args:
            path: Database file path or ``:memory:``

        Raises:
            ConfigurationError: If the location cannot be opened
        """
        super().__init__()
        self.path = os.fspath(path)
        self._conn: Optional[sqlite3.Connection] = None

        try:
            conn = sqlite3.connect(
                self.path,
                isolation_level=None,
                check_same_thread=False,
            )
        except sqlite3.Error as e:
            raise ConfigurationError(f"Failed to connect to database {self.path!r}: {e}") from e

        try:
            conn.row_factory = sqlite3.Row
            conn.executescript(SCHEMA)
        except sqlite3.Error as e:
            conn.close()
            raise ConfigurationError(f"Failed to create cache table in {self.path!r}: {e}") from e

        self._conn = conn
        logger.debug(f"SQLite store opened at {self.path} (sqlite {sqlite3.sqlite_version})")

    @property
    def closed(self) -> bool:
        return self._conn is None

    @property
    def in_memory(self) -> bool:
        """Whether the database lives only in this process."""
        return self.path == MEMORY

    def upsert(self, row: CacheRow) -> None:
        self._execute(
            f"INSERT OR REPLACE INTO {TABLE_NAME} (key, value, expires, created_at) "
            f"VALUES (?, ?, ?, ?)",
            (row.key, row.value, row.expires, row.created_at),
        )
        self._stats.writes += 1

    def get(self, key: str) -> Optional[CacheRow]:
        cursor = self._execute(
            f"SELECT key, value, expires, created_at FROM {TABLE_NAME} WHERE key = ?",
            (key,),
        )
        self._stats.reads += 1
        result = cursor.fetchone()
        if result is None:
            return None
        return CacheRow.from_dict(result)

    def delete(self, key: str) -> int:
        cursor = self._execute(f"DELETE FROM {TABLE_NAME} WHERE key = ?", (key,))
        self._stats.deletes += cursor.rowcount
        return cursor.rowcount

    def delete_where(self, predicate: Predicate) -> int:
        where, params = self._where(predicate)
        cursor = self._execute(f"DELETE FROM {TABLE_NAME}{where}", params)
        self._stats.deletes += cursor.rowcount
        return cursor.rowcount

    def count_where(self, predicate: Predicate) -> int:
        where, params = self._where(predicate)
        cursor = self._execute(f"SELECT COUNT(*) AS count FROM {TABLE_NAME}{where}", params)
        self._stats.reads += 1
        return cursor.fetchone()["count"]

    def scan(self, predicate: Predicate) -> List[CacheRow]:
        where, params = self._where(predicate)
        cursor = self._execute(
            f"SELECT key, value, expires, created_at FROM {TABLE_NAME}{where} "
            f"ORDER BY {RECENCY_ORDER}",
            params,
        )
        self._stats.reads += 1
        return [CacheRow.from_dict(result) for result in cursor.fetchall()]

    @contextlib.contextmanager
    def atomic(self) -> Iterator[None]:
        """Run the block inside one ``BEGIN IMMEDIATE`` transaction."""
        conn = self._connection()
        if conn.in_transaction:
            yield
            return

        conn.execute("BEGIN IMMEDIATE")
        try:
            yield
        except BaseException:
            conn.execute("ROLLBACK")
            raise
        conn.execute("COMMIT")

    def close(self) -> None:
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None
        logger.debug(f"SQLite store closed at {self.path}")

    def _where(self, predicate: Predicate) -> Tuple[str, Tuple[Any, ...]]:
        """Translate a predicate into a WHERE clause and parameters."""
        if predicate is None:
            return "", ()
        if isinstance(predicate, Expired):
            return " WHERE expires <= ?", (predicate.now,)
        if isinstance(predicate, Live):
            return " WHERE expires > ?", (predicate.now,)
        if isinstance(predicate, BeyondCapacity):
            return (
                f" WHERE key NOT IN (SELECT key FROM {TABLE_NAME} "
                f"ORDER BY {RECENCY_ORDER} LIMIT ?)",
                (predicate.limit,),
            )
        raise TypeError(f"Unsupported predicate: {predicate!r}")

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise sqlite3.ProgrammingError("Cannot operate on a closed store")
        return self._conn

    def _execute(self, sql: str, params: Tuple[Any, ...] = ()) -> sqlite3.Cursor:
        try:
            return self._connection().execute(sql, params)
        except sqlite3.Error as e:
            self._stats.record_error(str(e))
            logger.error(f"SQLite statement failed: {e}")
            raise

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"SQLiteStore(path={self.path!r}, {state})"


__all__ = ["SQLiteStore", "MEMORY", "MAX_INTEGER"]
