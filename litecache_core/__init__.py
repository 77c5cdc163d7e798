"""LiteCache - Persistent Schema-Validated Cache.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

A key/value cache persisted in an embedded SQLite table with:
- JSON Schema validation of every stored value
- TTL expiry (expired entries never returned)
- Capacity-bounded eviction by write recency
- Map-like snapshot enumeration, newest first
- Null-object behaviour after close

Architecture:
    ┌─────────────────────────────────────────────────────────────────┐
    │                        LiteCache System                         │
    ├─────────────────────────────────────────────────────────────────┤
    │  ┌─────────────────────────────────────────────┐               │
    │  │   Cache: set/get/has/delete/clear/size      │   CACHE       │
    │  │          keys/values/entries/for_each       │   LAYER       │
    │  └──────┬───────────────┬───────────────┬──────┘               │
    │         │               │               │                       │
    │  ┌──────┴──────┐ ┌──────┴──────┐ ┌──────┴──────┐               │
    │  │   Codec     │ │  Eviction   │ │   Storage   │               │
    │  │ jsonschema  │ │ TTL/Recency │ │ SQLite/Mem  │               │
    │  │  + orjson   │ │ predicates  │ │  one table  │               │
    │  └─────────────┘ └─────────────┘ └─────────────┘               │
    └─────────────────────────────────────────────────────────────────┘

Example Usage:
    from litecache_core import Cache, CacheConfig

    schema = {
        "type": "object",
        "properties": {"id": {"type": "integer"}, "name": {"type": "string"}},
        "required": ["id", "name"],
    }

    cache = Cache(CacheConfig(path="users.db", schema=schema, ttl=60_000, max_entries=100))
    cache.set("user:1", {"id": 1, "name": "Ada"}).set("user:2", {"id": 2, "name": "Alan"})
    user = cache.get("user:1")

    for key, value in cache:
        print(key, value)

    cache.close()
"""

__version__ = "1.0.0"
__author__ = "BlackRoad OS"

from litecache_core.errors import (
    CacheError,
    ConfigurationError,
    ValidationError,
)
from litecache_core.cache.entry import CacheRow
from litecache_core.cache.cache import (
    Cache,
    CacheConfig,
    CacheStats,
)
from litecache_core.store.backend import (
    StorageBackend,
    StorageStats,
)
from litecache_core.store.sqlite import SQLiteStore, MEMORY
from litecache_core.store.memory import MemoryStore
from litecache_core.eviction.policy import (
    EvictionPolicy,
    EvictionStats,
)
from litecache_core.eviction.ttl import TTLPolicy
from litecache_core.eviction.recency import RecencyPolicy
from litecache_core.protocol.serializer import (
    Serializer,
    JSONSerializer,
)
from litecache_core.protocol.codec import (
    ValueCodec,
    SchemaCodec,
    compile_schema,
)
from litecache_core.log import LogConfig

__all__ = [
    # Errors
    "CacheError",
    "ConfigurationError",
    "ValidationError",
    # Cache
    "Cache",
    "CacheConfig",
    "CacheStats",
    "CacheRow",
    # Storage
    "StorageBackend",
    "StorageStats",
    "SQLiteStore",
    "MemoryStore",
    "MEMORY",
    # Eviction
    "EvictionPolicy",
    "EvictionStats",
    "TTLPolicy",
    "RecencyPolicy",
    # Protocol
    "Serializer",
    "JSONSerializer",
    "ValueCodec",
    "SchemaCodec",
    "compile_schema",
    # Logging
    "LogConfig",
]
