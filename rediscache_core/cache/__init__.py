"""Cache module - Cache facade, key validation and TTL handling."""

from rediscache_core.cache.keys import KeyValidator, RESERVED_CHARACTERS
from rediscache_core.cache.ttl import NormalizedTtl, TtlKind, TtlNormalizer
from rediscache_core.cache.cache import RedisCache, CacheConfig

__all__ = [
    "KeyValidator",
    "RESERVED_CHARACTERS",
    "NormalizedTtl",
    "TtlKind",
    "TtlNormalizer",
    "RedisCache",
    "CacheConfig",
]
