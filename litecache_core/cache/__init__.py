"""Cache module - Cache engine and persisted rows.

This module provides the main cache interface and the row it stores.
"""

from litecache_core.cache.entry import (
    CacheRow,
    now_ms,
)
from litecache_core.cache.cache import (
    Cache,
    CacheConfig,
    CacheStats,
)

__all__ = [
    "CacheRow",
    "now_ms",
    "Cache",
    "CacheConfig",
    "CacheStats",
]
