"""LiteCache Memory Store - In-Memory Storage Backend.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from litecache_core.cache.entry import CacheRow
from litecache_core.eviction.policy import (
    BeyondCapacity,
    Expired,
    Live,
    Predicate,
    recency_order,
)
from litecache_core.store.backend import StorageBackend

logger = logging.getLogger(__name__)


class MemoryStore(StorageBackend):
    """In-memory storage backend.

    Keeps rows in a dictionary for the lifetime of the process. Satisfies
    the same contract as SQLiteStore, including the recency tie-break: an
    upsert moves the row to the end of insertion order, like a REPLACE
    re-insert.

    Example:
        store = MemoryStore()
        store.upsert(CacheRow("key", '{"a":1}', expires, created_at))
        row = store.get("key")
    """

    def __init__(self):
        super().__init__()
        self._data: Optional[Dict[str, CacheRow]] = {}

    @property
    def closed(self) -> bool:
        return self._data is None

    def upsert(self, row: CacheRow) -> None:
        data = self._rows()
        data.pop(row.key, None)
        data[row.key] = row
        self._stats.writes += 1

    def get(self, key: str) -> Optional[CacheRow]:
        self._stats.reads += 1
        return self._rows().get(key)

    def delete(self, key: str) -> int:
        if self._rows().pop(key, None) is None:
            return 0
        self._stats.deletes += 1
        return 1

    def delete_where(self, predicate: Predicate) -> int:
        data = self._rows()
        keys = [row.key for row in self._match(predicate)]
        for key in keys:
            del data[key]
        self._stats.deletes += len(keys)
        return len(keys)

    def count_where(self, predicate: Predicate) -> int:
        self._stats.reads += 1
        return len(self._match(predicate))

    def scan(self, predicate: Predicate) -> List[CacheRow]:
        self._stats.reads += 1
        return recency_order(self._match(predicate))

    def close(self) -> None:
        if self._data is None:
            return
        self._data = None
        logger.debug("Memory store closed")

    def _rows(self) -> Dict[str, CacheRow]:
        if self._data is None:
            raise RuntimeError("Cannot operate on a closed store")
        return self._data

    def _match(self, predicate: Predicate) -> List[CacheRow]:
        """Rows matching a predicate, in insertion order."""
        rows = list(self._rows().values())
        if predicate is None:
            return rows
        if isinstance(predicate, Expired):
            return [row for row in rows if row.expires <= predicate.now]
        if isinstance(predicate, Live):
            return [row for row in rows if row.expires > predicate.now]
        if isinstance(predicate, BeyondCapacity):
            keep = {row.key for row in recency_order(rows)[: predicate.limit]}
            return [row for row in rows if row.key not in keep]
        raise TypeError(f"Unsupported predicate: {predicate!r}")

    def __repr__(self) -> str:
        if self._data is None:
            return "MemoryStore(closed)"
        return f"MemoryStore(entries={len(self._data)})"


__all__ = ["MemoryStore"]
