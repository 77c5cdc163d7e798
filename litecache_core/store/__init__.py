"""Store module - Storage backends for cache rows."""

from litecache_core.store.backend import (
    StorageBackend,
    StorageStats,
    TABLE_NAME,
)
from litecache_core.store.sqlite import SQLiteStore, MEMORY
from litecache_core.store.memory import MemoryStore

__all__ = [
    "StorageBackend",
    "StorageStats",
    "TABLE_NAME",
    "SQLiteStore",
    "MEMORY",
    "MemoryStore",
]
