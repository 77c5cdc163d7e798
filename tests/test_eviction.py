"""Tests for eviction policies.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import pytest

from litecache_core.cache.entry import CacheRow
from litecache_core.eviction.policy import BeyondCapacity, Expired, Live, recency_order
from litecache_core.eviction.recency import RecencyPolicy
from litecache_core.eviction.ttl import TTLPolicy


def row(key, created_at, expires=None):
    if expires is None:
        expires = created_at + 1000
    return CacheRow(key=key, value="{}", expires=expires, created_at=created_at)


class TestTTLPolicy:
    """Tests for TTL expiry policy."""

    def test_expires_at(self):
        """Test expiry is write time plus TTL."""
        policy = TTLPolicy(ttl=50)

        assert policy.expires_at(1000) == 1050

    def test_default_ttl(self):
        """Test default TTL of one minute."""
        assert TTLPolicy().ttl == 60_000

    def test_boundary(self):
        """Test expires <= now counts as expired."""
        policy = TTLPolicy(ttl=50)

        assert not policy.is_expired(1050, 1049)
        assert policy.is_expired(1050, 1050)
        assert policy.is_expired(1050, 2000)

    def test_predicates(self):
        """Test predicates carry the reference time."""
        policy = TTLPolicy()

        assert policy.expired(5) == Expired(5)
        assert policy.live(5) == Live(5)
        assert policy.sweep_predicate(5) == Expired(5)

    def test_select(self):
        """Test selection of expired rows only."""
        policy = TTLPolicy()
        rows = [row("a", 0, expires=10), row("b", 0, expires=20), row("c", 0, expires=30)]

        assert policy.select(rows, 20) == ["a", "b"]


class TestRecencyPolicy:
    """Tests for capacity policy."""

    def test_select_oldest(self):
        """Test rows beyond capacity are the oldest."""
        policy = RecencyPolicy(max_entries=2)
        rows = [row("user1", 1), row("user2", 2), row("user3", 3)]

        assert policy.select(rows, 0) == ["user1"]

    def test_ignores_expiry(self):
        """Test capacity applies to expired and live rows alike."""
        policy = RecencyPolicy(max_entries=1)
        rows = [row("old", 1, expires=2), row("new", 5, expires=3)]

        assert policy.select(rows, 10) == ["old"]

    def test_ties_follow_row_order(self):
        """Test later rows win ties on created_at."""
        policy = RecencyPolicy(max_entries=2)
        rows = [row("a", 7), row("b", 7), row("c", 7)]

        assert policy.select(rows, 0) == ["a"]

    def test_under_capacity(self):
        """Test nothing is selected below the bound."""
        policy = RecencyPolicy(max_entries=5)

        assert policy.select([row("a", 1)], 0) == []

    def test_sweep_predicate(self):
        """Test predicate carries the bound."""
        assert RecencyPolicy(max_entries=3).sweep_predicate(0) == BeyondCapacity(3)

    def test_default_max(self):
        """Test default capacity of 100."""
        assert RecencyPolicy().max_entries == 100


class TestRecencyOrder:
    """Tests for recency ordering helper."""

    def test_newest_first(self):
        """Test ordering by created_at descending."""
        rows = [row("b", 2), row("c", 3), row("a", 1)]

        assert [r.key for r in recency_order(rows)] == ["c", "b", "a"]

    def test_empty(self):
        """Test empty input."""
        assert recency_order([]) == []


class TestEvictionStats:
    """Tests for sweep statistics."""

    def test_record_sweep(self):
        """Test sweeps and removals are counted."""
        policy = TTLPolicy()

        policy.record_sweep(0)
        policy.record_sweep(4)

        stats = policy.get_stats()
        assert stats.sweeps == 2
        assert stats.removed == 4
        assert stats.removal_rate == pytest.approx(2.0)

    def test_reset(self):
        """Test statistics reset."""
        policy = RecencyPolicy()
        policy.record_sweep(3)

        policy.reset_stats()
        assert policy.get_stats().removed == 0
        assert policy.get_stats().removal_rate == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
