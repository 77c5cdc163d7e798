"""LiteCache Storage Backend - Abstract Storage Interface.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import contextlib
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, List, Optional

from litecache_core.cache.entry import CacheRow
from litecache_core.eviction.policy import Predicate

logger = logging.getLogger(__name__)

TABLE_NAME = "cache"


@dataclass
class StorageStats:
    """Storage backend statistics.

    Attributes:
        reads: Number of read operations
        writes: Number of write operations
        deletes: Number of rows deleted
        errors: Number of errors
    """

    reads: int = 0
    writes: int = 0
    deletes: int = 0
    errors: int = 0
    last_error: Optional[str] = None
    last_error_at: Optional[datetime] = None

    def record_error(self, error: str) -> None:
        """Record an error."""
        self.errors += 1
        self.last_error = error
        self.last_error_at = datetime.now()


class StorageBackend(ABC):
    """Abstract storage backend for cache rows.

    A backend owns a single logical table
    ``(key PRIMARY KEY, value, expires, created_at)`` and knows nothing
    about expiry or capacity: it only translates predicates handed to it
    by the eviction policies.

    Implementations:
    - SQLiteStore: embedded SQLite file or ``:memory:`` database
    - MemoryStore: in-process dictionary

    Every operation is synchronous and takes effect before it returns.
    """

    def __init__(self):
        self._stats = StorageStats()

    @abstractmethod
    def upsert(self, row: CacheRow) -> None:
        """Insert or fully replace the row for ``row.key``.

        Args:
            row: Row to store
        """
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[CacheRow]:
        """Point lookup, no expiry filtering.

        Args:
            key: Cache key

        Returns:
            CacheRow or None
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> int:
        """Delete row by key.

        Args:
            key: Cache key

        Returns:
            Rows affected
        """
        pass

    @abstractmethod
    def delete_where(self, predicate: Predicate) -> int:
        """Bulk delete rows matching a predicate.

        Args:
            predicate: Row predicate, None for all rows

        Returns:
            Rows affected
        """
        pass

    @abstractmethod
    def count_where(self, predicate: Predicate) -> int:
        """Count rows matching a predicate.

        Args:
            predicate: Row predicate, None for all rows

        Returns:
            Row count
        """
        pass

    @abstractmethod
    def scan(self, predicate: Predicate) -> List[CacheRow]:
        """Materialize matching rows, newest ``created_at`` first.

        Args:
            predicate: Row predicate, None for all rows

        Returns:
            List of rows
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the underlying handle. Idempotent."""
        pass

    @property
    @abstractmethod
    def closed(self) -> bool:
        """Whether the backend has been closed."""
        pass

    def clear(self) -> int:
        """Delete every row.

        Returns:
            Number cleared
        """
        return self.delete_where(None)

    @contextlib.contextmanager
    def atomic(self) -> Iterator[None]:
        """Scope in which statements commit or roll back together.

        Backends without transactions run the block as-is.
        """
        yield

    def get_stats(self) -> StorageStats:
        """Get storage statistics.

        Returns:
            StorageStats instance
        """
        return self._stats

    def reset_stats(self) -> None:
        """Reset statistics."""
        self._stats = StorageStats()

    def __len__(self) -> int:
        """Get physical row count, expired rows included."""
        return self.count_where(None)

    def __enter__(self) -> "StorageBackend":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = ["StorageBackend", "StorageStats", "TABLE_NAME"]
