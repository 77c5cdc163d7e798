"""LiteCache Recency Policy - Capacity-Bounded Eviction.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import List, Sequence

from litecache_core.cache.entry import CacheRow
from litecache_core.eviction.policy import (
    BeyondCapacity,
    EvictionPolicy,
    recency_order,
)

DEFAULT_MAX_ENTRIES = 100


class RecencyPolicy(EvictionPolicy):
    """Capacity policy ordered by write recency.

    Rows are ranked by ``created_at`` descending; anything past rank
    ``max_entries`` is evicted, expired or not. Recency is refreshed only
    by writes: an upsert resets ``created_at``, a read does not.

    Example:
        policy = RecencyPolicy(max_entries=2)
        policy.select(rows, now)  # keys of all but the two newest rows
    """

    name = "recency"

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        """Initialize recency policy.

        Args:
            max_entries: Maximum rows kept after a write
        """
        super().__init__()
        self.max_entries = max_entries

    def sweep_predicate(self, now: int) -> BeyondCapacity:
        return BeyondCapacity(self.max_entries)

    def select(self, rows: Sequence[CacheRow], now: int) -> List[str]:
        return [row.key for row in recency_order(rows)[self.max_entries:]]

    def __repr__(self) -> str:
        return f"RecencyPolicy(max={self.max_entries})"


__all__ = ["RecencyPolicy", "DEFAULT_MAX_ENTRIES"]
