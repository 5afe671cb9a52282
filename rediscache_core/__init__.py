"""RedisCache - Redis Cache Client.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

A cache facade over Redis and Redis Cluster with:
- Key validation (no hash-tag or pattern characters)
- TTL normalization (seconds, numeric strings, calendar intervals)
- Pluggable value serialization (pickle, JSON, MessagePack)
- Batched reads and writes, transactional on a single node
- Cluster detection with per-node fan-out for clear

Architecture:
    ┌───────────────────────────────────────────────────────────┐
    │                       RedisCache                          │
    ├───────────────────────────────────────────────────────────┤
    │  ┌──────────────┐  ┌──────────────┐  ┌──────────────┐     │
    │  │ KeyValidator │  │ TtlNormalizer│  │  ValueCodec  │     │
    │  └──────┬───────┘  └──────┬───────┘  └──────┬───────┘     │
    │         └─────────────────┼─────────────────┘             │
    │                    ┌──────┴───────┐                       │
    │                    │ RedisCache   │  get/set/delete/has   │
    │                    │   facade     │  clear + batch ops    │
    │                    └──────┬───────┘                       │
    │            ┌──────────────┴──────────────┐                │
    │     ┌──────┴───────┐              ┌──────┴───────┐        │
    │     │  redis-py    │              │ClusterTopology│       │
    │     │   client     │              │ probe/fan-out │       │
    │     └──────────────┘              └──────────────┘        │
    └───────────────────────────────────────────────────────────┘

Example Usage:
    from dateutil.relativedelta import relativedelta
    from rediscache_core import RedisCache, CacheConfig

    cache = RedisCache.from_config(CacheConfig(nodes=["redis://localhost:6379/0"]))
    cache.set("user.1", {"name": "John"}, ttl=300)
    user = cache.get("user.1")

    # Batch write, atomic on a single node
    cache.set_multiple({"a": 1, "b": 2}, ttl=relativedelta(days=1))
    cache.get_multiple(["a", "b"])

    # Redis Cluster
    cluster = RedisCache.from_config(CacheConfig(
        nodes=["redis://node1:7000", "redis://node2:7001"],
        cluster=True,
    ))
    cluster.clear()  # flushes every node
"""

__version__ = "1.0.0"
__author__ = "BlackRoad OS"

from rediscache_core.errors import (
    CacheError,
    InvalidKeyError,
    InvalidTtlError,
)
from rediscache_core.cache.keys import KeyValidator, RESERVED_CHARACTERS
from rediscache_core.cache.ttl import NormalizedTtl, TtlKind, TtlNormalizer
from rediscache_core.cache.cache import RedisCache, CacheConfig
from rediscache_core.cluster.node import NodeInfo
from rediscache_core.cluster.topology import ClusterTopology, Topology
from rediscache_core.protocol.serializer import (
    Serializer,
    JSONSerializer,
    PickleSerializer,
    MsgPackSerializer,
    ValueCodec,
    get_serializer,
)

__all__ = [
    # Cache
    "RedisCache",
    "CacheConfig",
    "KeyValidator",
    "RESERVED_CHARACTERS",
    "NormalizedTtl",
    "TtlKind",
    "TtlNormalizer",
    # Errors
    "CacheError",
    "InvalidKeyError",
    "InvalidTtlError",
    # Cluster
    "NodeInfo",
    "ClusterTopology",
    "Topology",
    # Protocol
    "Serializer",
    "JSONSerializer",
    "PickleSerializer",
    "MsgPackSerializer",
    "ValueCodec",
    "get_serializer",
]
