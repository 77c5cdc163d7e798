"""LiteCache TTL Policy - Time-Based Expiry.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import List, Sequence

from litecache_core.cache.entry import CacheRow
from litecache_core.eviction.policy import EvictionPolicy, Expired, Live

DEFAULT_TTL_MS = 60_000


class TTLPolicy(EvictionPolicy):
    """Expiry policy.

    A row written at ``t`` expires at ``t + ttl`` and is logically absent
    from every read from that instant on (``expires <= now``). Physical
    removal happens on the next write sweep or lazily on ``get``.

    Example:
        policy = TTLPolicy(ttl=50)
        expires = policy.expires_at(now)
        policy.is_expired(expires, now + 50)  # True
    """

    name = "ttl"

    def __init__(self, ttl: int = DEFAULT_TTL_MS):
        """Initialize TTL policy.

        Args:
            ttl: Time to live in milliseconds
        """
        super().__init__()
        self.ttl = ttl

    def expires_at(self, now: int) -> int:
        """Expiry timestamp for a row written at ``now``."""
        return now + self.ttl

    def is_expired(self, expires: int, now: int) -> bool:
        """Check an expiry timestamp against ``now``."""
        return expires <= now

    def expired(self, now: int) -> Expired:
        """Predicate for rows that have expired."""
        return Expired(now)

    def live(self, now: int) -> Live:
        """Predicate for rows still visible to reads."""
        return Live(now)

    def sweep_predicate(self, now: int) -> Expired:
        return self.expired(now)

    def select(self, rows: Sequence[CacheRow], now: int) -> List[str]:
        return [row.key for row in rows if self.is_expired(row.expires, now)]

    def __repr__(self) -> str:
        return f"TTLPolicy(ttl={self.ttl}ms)"


__all__ = ["TTLPolicy", "DEFAULT_TTL_MS"]
