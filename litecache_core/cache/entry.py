"""LiteCache Entry - Persisted Cache Row.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Dict


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class CacheRow:
    """A single row of the ``cache`` table.

    Attributes:
        key: Cache key (primary key)
        value: Canonical encoded document
        expires: Absolute expiry, epoch milliseconds
        created_at: Write time, epoch milliseconds (recency key)
    """

    key: str
    value: str
    expires: int
    created_at: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CacheRow":
        """Create from dictionary.

        Args:
            data: Dictionary data (e.g. a ``sqlite3.Row``)

        Returns:
            CacheRow instance
        """
        return cls(
            key=data["key"],
            value=data["value"],
            expires=int(data["expires"]),
            created_at=int(data["created_at"]),
        )

    def __repr__(self) -> str:
        return (
            f"CacheRow(key={self.key!r}, expires={self.expires}, "
            f"created_at={self.created_at})"
        )


__all__ = ["CacheRow", "now_ms"]
