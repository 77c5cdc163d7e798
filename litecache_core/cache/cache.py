"""LiteCache Cache - Persistent Cache Engine.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import contextlib
import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, ContextManager, Dict, Iterator, List, Optional, Tuple, Union

from litecache_core.cache.entry import CacheRow, now_ms
from litecache_core.errors import CacheError, ConfigurationError, ValidationError
from litecache_core.eviction.recency import DEFAULT_MAX_ENTRIES, RecencyPolicy
from litecache_core.eviction.ttl import DEFAULT_TTL_MS, TTLPolicy
from litecache_core.log import LogConfig, configure_logger, release_logger
from litecache_core.protocol.codec import ValueCodec, compile_schema
from litecache_core.store.backend import StorageBackend
from litecache_core.store.sqlite import MAX_INTEGER, MEMORY, SQLiteStore

_MISSING = object()


@dataclass
class CacheConfig:
    """Cache configuration, consumed once at construction.

    Attributes:
        path: Database file path, or ``:memory:`` for an ephemeral store
        schema: JSON Schema every value must satisfy
        ttl: Time to live in milliseconds
        max_entries: Maximum entries kept after a write
        log: False, True, or a LogConfig
        atomic_writes: Run each ``set`` inside one transaction
    """

    path: Union[str, "os.PathLike[str]", None] = MEMORY
    schema: Optional[Mapping] = None
    ttl: Optional[int] = DEFAULT_TTL_MS
    max_entries: Optional[int] = DEFAULT_MAX_ENTRIES
    log: Union[bool, LogConfig] = False
    atomic_writes: bool = False


@dataclass
class CacheStats:
    """Cache statistics.

    Attributes:
        hits: Number of cache hits
        misses: Number of cache misses
        sets: Number of set operations
        deletes: Number of rows removed by ``delete``
        evictions: Rows removed by the capacity trim
        expirations: Expired rows removed (sweeps and lazy ``get``)
        started_at: When cache started
    """

    hits: int = 0
    misses: int = 0
    sets: int = 0
    deletes: int = 0
    evictions: int = 0
    expirations: int = 0
    started_at: Optional[datetime] = None

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def reset(self) -> None:
        """Reset statistics."""
        self.hits = 0
        self.misses = 0
        self.sets = 0
        self.deletes = 0
        self.evictions = 0
        self.expirations = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "sets": self.sets,
            "deletes": self.deletes,
            "evictions": self.evictions,
            "expirations": self.expirations,
            "hit_rate": self.hit_rate,
        }


def _check_limit(name: str, value: Any, default: int, upper: int = MAX_INTEGER) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"Cache {name} must be a positive integer, got {value!r}")
    # Stored and bound as SQLite INTEGER
    if value > upper:
        raise ConfigurationError(f"Cache {name} must be at most {upper}, got {value!r}")
    return value


class Cache:
    """Persistent, size- and time-bounded key/value cache.

    Values are documents validated against a JSON Schema and stored as
    canonical JSON in a single SQLite table. Entries expire ``ttl``
    milliseconds after they are written, and after every write the cache
    is trimmed to the ``max_entries`` most recently written keys.

    Behaviour worth knowing:
    - Expired entries are invisible to every read. They are physically
      removed by the sweep that follows each ``set`` or when ``get`` meets
      one; there is no background thread.
    - Enumeration (``keys``, ``values``, ``entries``, ``for_each``,
      ``iter(cache)``) materializes a snapshot at call time, newest first,
      and never mutates storage.
    - After ``close()`` the cache is inert: every call returns its empty
      default instead of raising.
    - ``set`` issues upsert, expiry sweep and capacity trim as separate
      statements. Concurrent writers sharing one cache need external
      locking; set ``atomic_writes`` to run the three in one transaction.

    Example:
        cache = Cache(CacheConfig(path="users.db", schema=USER_SCHEMA, max_entries=500))

        cache.set("user:1", {"id": 1, "name": "Ada"})
        user = cache.get("user:1")

        for key, value in cache:
            print(key, value)

        cache.close()
    """

    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        store: Optional[StorageBackend] = None,
        codec: Optional[ValueCodec] = None,
        clock: Callable[[], int] = now_ms,
    ):
        """Initialize cache.

        Args:
            config: Cache configuration
            store: Storage backend (SQLiteStore at ``config.path`` by default)
            codec: Value codec (compiled from ``config.schema`` by default)
            clock: Source of the current time in epoch milliseconds

        Raises:
            ConfigurationError: If the cache cannot be built
        """
        if config is None:
            raise ConfigurationError("Cache options are required")

        self.config = config
        self.log = configure_logger(config.log)
        self.log.debug("Starting cache initialization...")

        try:
            # expires = now + ttl must stay a valid INTEGER
            self._ttl_policy = TTLPolicy(
                _check_limit("ttl", config.ttl, DEFAULT_TTL_MS, MAX_INTEGER - clock())
            )
            self._recency_policy = RecencyPolicy(
                _check_limit("max_entries", config.max_entries, DEFAULT_MAX_ENTRIES)
            )
            self._codec = codec if codec is not None else compile_schema(config.schema)
            if store is None:
                store = SQLiteStore(self._check_path(config.path))
        except ConfigurationError as e:
            self.log.error(str(e))
            release_logger(self.log)
            raise

        self.log.info(f"Cache configuration - TTL: {self.ttl}ms, Max entries: {self.max_entries}")
        self.log.debug(f"Value codec: {self._codec!r}")

        self._store: Optional[StorageBackend] = store
        self._clock = clock
        self._stats = CacheStats(started_at=datetime.now())
        self.log.info(f"Storage ready: {store!r}")

    @property
    def ttl(self) -> int:
        """Time to live in milliseconds."""
        return self._ttl_policy.ttl

    @property
    def max_entries(self) -> int:
        """Maximum entries kept after a write."""
        return self._recency_policy.max_entries

    @property
    def closed(self) -> bool:
        """Whether ``close()`` has been called."""
        return self._store is None

    def set(self, key: str, value: Mapping) -> "Cache":
        """Store a value.

        Args:
            key: Non-empty string key
            value: Document matching the schema

        Returns:
            Self for chaining

        Raises:
            ValidationError: If the key or value is rejected
        """
        if self._store is None:
            return self
        self._check_key(key)
        if not isinstance(value, Mapping):
            raise self._fail(ValidationError("Cache value must be a valid object"))
        if not self._codec.validate(value):
            errors = self._codec.errors(value)
            raise self._fail(
                ValidationError(f"Data does not match schema for key: {key}", errors)
            )

        try:
            text = self._codec.encode(value)
        except ValidationError as e:
            self._fail(e)
            raise

        now = self._clock()
        row = CacheRow(
            key=key,
            value=text,
            expires=self._ttl_policy.expires_at(now),
            created_at=now,
        )

        with self._write_scope():
            self._store.upsert(row)
            expired = self._store.delete_where(self._ttl_policy.sweep_predicate(now))
            evicted = self._store.delete_where(self._recency_policy.sweep_predicate(now))

        self._ttl_policy.record_sweep(expired)
        self._recency_policy.record_sweep(evicted)
        self._stats.sets += 1
        self._stats.expirations += expired
        self._stats.evictions += evicted

        self.log.debug(f"Set cache key: {key}")
        return self

    def get(self, key: str, default: Any = None) -> Any:
        """Get value from cache.

        An expired row met here is deleted before reporting the miss.

        Args:
            key: Non-empty string key
            default: Value returned on a miss

        Returns:
            Cached value or default
        """
        if self._store is None:
            return default
        self._check_key(key)

        row = self._store.get(key)
        if row is None:
            self._stats.misses += 1
            self.log.debug(f"Cache miss for key: {key}")
            return default

        if self._ttl_policy.is_expired(row.expires, self._clock()):
            self._store.delete(key)
            self._stats.misses += 1
            self._stats.expirations += 1
            self.log.debug(f"Cache key expired: {key}")
            return default

        self._stats.hits += 1
        self.log.debug(f"Cache hit for key: {key}")
        return self._codec.decode(row.value)

    def has(self, key: str) -> bool:
        """Check if a live entry exists, without side effects.

        Args:
            key: Non-empty string key

        Returns:
            True if present and not expired
        """
        if self._store is None:
            return False
        self._check_key(key)

        row = self._store.get(key)
        return row is not None and not self._ttl_policy.is_expired(row.expires, self._clock())

    def delete(self, key: str) -> bool:
        """Delete key from cache.

        Args:
            key: Non-empty string key

        Returns:
            True if a row was removed
        """
        if self._store is None:
            return False
        self._check_key(key)

        removed = self._store.delete(key)
        self._stats.deletes += removed
        self.log.debug(f"Deleted cache key: {key}")
        return removed > 0

    def clear(self) -> None:
        """Remove every entry."""
        if self._store is None:
            return
        self._store.clear()
        self.log.info("Cleared all cache entries")

    @property
    def size(self) -> int:
        """Number of live entries."""
        if self._store is None:
            return 0
        return self._store.count_where(self._ttl_policy.live(self._clock()))

    def keys(self) -> Iterator[str]:
        """Iterate over a snapshot of live keys, newest first."""
        return iter([row.key for row in self._snapshot()])

    def values(self) -> Iterator[Any]:
        """Iterate over a snapshot of live values, newest first."""
        return iter([self._codec.decode(row.value) for row in self._snapshot()])

    def entries(self) -> Iterator[Tuple[str, Any]]:
        """Iterate over a snapshot of live (key, value) pairs, newest first."""
        return iter([(row.key, self._codec.decode(row.value)) for row in self._snapshot()])

    items = entries

    def for_each(self, callback: Callable[[Any, str, "Cache"], None]) -> None:
        """Call ``callback(value, key, cache)`` for each live entry.

        Args:
            callback: Function(value, key, cache)
        """
        for key, value in self.entries():
            callback(value, key, self)

    def get_stats(self) -> CacheStats:
        """Get cache statistics.

        Returns:
            CacheStats instance
        """
        return self._stats

    def reset_stats(self) -> None:
        """Reset statistics."""
        self._stats.reset()

    def close(self) -> None:
        """Release the storage handle. Further calls are no-ops."""
        if self._store is None:
            return
        self._store.close()
        self._store = None
        self.log.info("Database connection closed")
        release_logger(self.log)

    def _snapshot(self) -> List[CacheRow]:
        if self._store is None:
            return []
        return self._store.scan(self._ttl_policy.live(self._clock()))

    def _write_scope(self) -> ContextManager[None]:
        if self.config.atomic_writes:
            return self._store.atomic()
        return contextlib.nullcontext()

    def _check_key(self, key: Any) -> None:
        if not key or not isinstance(key, str):
            raise self._fail(ValidationError("Cache key must be a valid string"))

    def _fail(self, error: CacheError) -> CacheError:
        """Log an error about to be raised."""
        self.log.error(str(error))
        return error

    @staticmethod
    def _check_path(path: Any) -> str:
        if isinstance(path, os.PathLike):
            path = os.fspath(path)
        if not path or not isinstance(path, str):
            raise ConfigurationError("Cache path must be a valid string")
        return path

    def __contains__(self, key: str) -> bool:
        """Check if key in cache."""
        return self.has(key)

    def __len__(self) -> int:
        """Get live entry count."""
        return self.size

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        """Iterate over (key, value) entries."""
        return self.entries()

    def __getitem__(self, key: str) -> Any:
        """Get item by key."""
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: Mapping) -> None:
        """Set item by key."""
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        """Delete item by key."""
        if not self.delete(key):
            raise KeyError(key)

    def __enter__(self) -> "Cache":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    def __repr__(self) -> str:
        if self._store is None:
            return "Cache(closed)"
        return f"Cache(store={self._store!r}, ttl={self.ttl}ms, max={self.max_entries})"


__all__ = ["Cache", "CacheConfig", "CacheStats"]
