"""LiteCache Eviction Policy - Abstract Eviction Interface.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from litecache_core.cache.entry import CacheRow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Expired:
    """Rows with ``expires <= now``."""

    now: int


@dataclass(frozen=True)
class Live:
    """Rows with ``expires > now``."""

    now: int


@dataclass(frozen=True)
class BeyondCapacity:
    """Rows ranked past ``limit`` in recency order (newest first)."""

    limit: int


# None selects every row
Predicate = Optional[Union[Expired, Live, BeyondCapacity]]


def recency_order(rows: Sequence[CacheRow]) -> List[CacheRow]:
    """Order rows newest first.

    ``sorted`` is stable, so rows sharing a ``created_at`` keep their
    relative position reversed: later in ``rows`` means newer.
    """
    return list(reversed(sorted(rows, key=lambda row: row.created_at)))


@dataclass
class EvictionStats:
    """Eviction policy statistics.

    Attributes:
        sweeps: Number of sweeps requested
        removed: Rows removed by those sweeps
    """

    sweeps: int = 0
    removed: int = 0

    @property
    def removal_rate(self) -> float:
        """Average rows removed per sweep."""
        return self.removed / self.sweeps if self.sweeps > 0 else 0.0

    def record(self, removed: int) -> None:
        """Record the outcome of a sweep."""
        self.sweeps += 1
        self.removed += removed


class EvictionPolicy(ABC):
    """Abstract base for eviction policies.

    A policy is pure decision logic: given ``now`` it describes which rows
    are eligible for removal, either as a storage predicate or by picking
    keys out of an in-memory row list. It never touches storage itself.

    Implementations:
    - TTLPolicy: rows whose expiry has passed
    - RecencyPolicy: rows beyond the capacity bound, oldest first

    Example:
        policy = TTLPolicy(ttl=60_000)
        removed = store.delete_where(policy.sweep_predicate(now))
        policy.record_sweep(removed)
    """

    name = "policy"

    def __init__(self):
        self._stats = EvictionStats()

    @abstractmethod
    def sweep_predicate(self, now: int) -> Predicate:
        """Predicate selecting rows to remove.

        Args:
            now: Reference time in ms

        Returns:
            Storage predicate
        """
        pass

    @abstractmethod
    def select(self, rows: Sequence[CacheRow], now: int) -> List[str]:
        """Choose keys to remove from a set of rows.

        Args:
            rows: Candidate rows
            now: Reference time in ms

        Returns:
            Keys eligible for removal
        """
        pass

    def record_sweep(self, removed: int) -> None:
        """Record rows removed by a sweep."""
        self._stats.record(removed)
        if removed:
            logger.debug(f"{self.name} sweep removed {removed} row(s)")

    def get_stats(self) -> EvictionStats:
        """Get eviction statistics."""
        return self._stats

    def reset_stats(self) -> None:
        """Reset statistics."""
        self._stats = EvictionStats()


__all__ = [
    "EvictionPolicy",
    "EvictionStats",
    "Expired",
    "Live",
    "BeyondCapacity",
    "Predicate",
    "recency_order",
]
