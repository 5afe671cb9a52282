"""RedisCache Errors - Exception Hierarchy.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Store failures are not wrapped here: anything raised by redis-py
(``redis.exceptions.RedisError`` and subclasses) reaches the caller as is.
"""

from __future__ import annotations


class CacheError(Exception):
    """Base class for errors raised by the cache layer."""


class InvalidKeyError(CacheError, ValueError):
    """A key or key collection was rejected before reaching the store."""


class InvalidTtlError(CacheError, TypeError):
    """A TTL value of an unsupported type was given."""


__all__ = ["CacheError", "InvalidKeyError", "InvalidTtlError"]
