"""LiteCache Serializer - Value Serialization.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import orjson

logger = logging.getLogger(__name__)


class Serializer(ABC):
    """Abstract serializer for cache values.

    Implementations handle different serialization formats.
    """

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Get format name."""
        pass

    @abstractmethod
    def serialize(self, value: Any) -> bytes:
        """Serialize value to bytes.

        Args:
            value: Value to serialize

        Returns:
            Serialized bytes
        """
        pass

    @abstractmethod
    def deserialize(self, data: bytes) -> Any:
        """Deserialize bytes to value.

        Args:
            data: Serialized bytes

        Returns:
            Deserialized value
        """
        pass


class JSONSerializer(Serializer):
    """Canonical JSON serializer backed by orjson.

    Object keys are sorted so equal documents always encode to the same
    text. Limited to JSON-compatible types with string keys; anything else
    raises ``orjson.JSONEncodeError`` (a ``TypeError``).
    """

    def __init__(self, sort_keys: bool = True):
        """Initialize JSON serializer.

        Args:
            sort_keys: Emit object keys in sorted order
        """
        self.sort_keys = sort_keys
        self._option = orjson.OPT_SORT_KEYS if sort_keys else 0

    @property
    def format_name(self) -> str:
        return "json"

    def serialize(self, value: Any) -> bytes:
        """Serialize to JSON bytes.

        Args:
            value: Value to serialize

        Returns:
            UTF-8 JSON bytes
        """
        return orjson.dumps(value, option=self._option)

    def deserialize(self, data: bytes) -> Any:
        """Deserialize from JSON bytes or text.

        Args:
            data: JSON bytes or str

        Returns:
            Deserialized value
        """
        return orjson.loads(data)


__all__ = ["Serializer", "JSONSerializer"]
