"""Eviction module - Expiry and capacity policies."""

from litecache_core.eviction.policy import (
    EvictionPolicy,
    EvictionStats,
    Expired,
    Live,
    BeyondCapacity,
    Predicate,
    recency_order,
)
from litecache_core.eviction.ttl import TTLPolicy, DEFAULT_TTL_MS
from litecache_core.eviction.recency import RecencyPolicy, DEFAULT_MAX_ENTRIES

__all__ = [
    "EvictionPolicy",
    "EvictionStats",
    "Expired",
    "Live",
    "BeyondCapacity",
    "Predicate",
    "recency_order",
    "TTLPolicy",
    "DEFAULT_TTL_MS",
    "RecencyPolicy",
    "DEFAULT_MAX_ENTRIES",
]
