"""Shared fixtures for cache tests.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import pytest

from litecache_core.cache.cache import Cache, CacheConfig
from litecache_core.store.memory import MemoryStore
from litecache_core.store.sqlite import MEMORY, SQLiteStore

USER_SCHEMA = {
    "type": "object",
    "properties": {
        "id": {"type": "integer"},
        "name": {"type": "string"},
        "email": {"type": "string"},
        "active": {"type": "boolean"},
        "metadata": {
            "type": "object",
            "properties": {
                "lastLogin": {"type": "string"},
                "preferences": {"type": "object"},
            },
            "required": ["lastLogin", "preferences"],
        },
    },
    "required": ["id", "name", "email", "active"],
}


def make_user(n, **extra):
    user = {
        "id": n,
        "name": f"User {n}",
        "email": f"user{n}@example.com",
        "active": True,
    }
    user.update(extra)
    return user


class FakeClock:
    """Manually advanced epoch-millisecond clock."""

    def __init__(self, start=1_700_000_000_000):
        self.now = start

    def advance(self, ms):
        self.now += ms

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "test-cache.db"


@pytest.fixture
def cache(db_path):
    """File-backed cache with a 1s TTL and room for 5 entries."""
    cache = Cache(CacheConfig(path=db_path, schema=USER_SCHEMA, ttl=1000, max_entries=5))
    yield cache
    cache.close()


@pytest.fixture(params=["sqlite", "memory"])
def store(request):
    """Each storage backend in turn."""
    if request.param == "sqlite":
        backend = SQLiteStore(MEMORY)
    else:
        backend = MemoryStore()
    yield backend
    backend.close()


@pytest.fixture
def clocked(store, clock):
    """Factory for caches on the parametrized store driven by the fake clock."""

    def factory(**options):
        options.setdefault("schema", USER_SCHEMA)
        return Cache(CacheConfig(**options), store=store, clock=clock)

    return factory
