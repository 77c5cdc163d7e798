"""LiteCache Errors - Exception Hierarchy.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""


class CacheError(Exception):
    """Base exception for all cache errors."""


class ConfigurationError(CacheError):
    """Cache cannot be constructed from the given configuration.

    Raised for a missing or invalid path, a missing or malformed schema,
    non-positive limits, an incompatible SQLite runtime or an unopenable
    storage location. Always fatal: no cache instance is returned.
    """


class ValidationError(CacheError, ValueError):
    """A key or value was rejected before reaching storage."""

    def __init__(self, message: str, errors=None):
        self.errors = list(errors or [])
        super().__init__(message)


__all__ = ["CacheError", "ConfigurationError", "ValidationError"]
