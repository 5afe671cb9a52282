"""RedisCache Cache - Redis Cache Facade.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Union

from redis.cluster import ClusterNode, RedisCluster

from rediscache_core.cache.keys import KeyValidator, default_validator
from rediscache_core.cache.ttl import (
    NormalizedTtl,
    RawTtl,
    TtlNormalizer,
    default_normalizer,
)
from rediscache_core.cluster.node import NodeInfo
from rediscache_core.cluster.topology import ClusterTopology, Topology, make_node_client
from rediscache_core.protocol.serializer import ValueCodec, get_serializer

logger = logging.getLogger(__name__)


@dataclass
class CacheConfig:
    """Cache configuration.

    Attributes:
        nodes: Node descriptors or URLs (``redis://host:port/db``)
        cluster: Connect through a cluster-aware client
        db: Database number for nodes whose URL names none
        username: ACL username applied to every node
        password: Password applied to every node
        socket_timeout: Socket timeout
        socket_connect_timeout: Connection timeout
        max_connections: Connection pool size per node
        serializer: Serializer format name
        prefix: Prefix prepended to every key in the store
    """

    nodes: List[Union[NodeInfo, str]] = field(default_factory=lambda: ["localhost:6379"])
    cluster: bool = False
    db: int = 0
    username: Optional[str] = None
    password: Optional[str] = None
    socket_timeout: float = 5.0
    socket_connect_timeout: float = 5.0
    max_connections: int = 10
    serializer: str = "pickle"
    prefix: str = ""

    def node_infos(self) -> List[NodeInfo]:
        """Resolve ``nodes`` to descriptors, applying shared settings."""
        resolved = []
        for node in self.nodes:
            info = NodeInfo.coerce(node)
            resolved.append(
                replace(
                    info,
                    db=self.db if info.db is None else info.db,
                    username=info.username or self.username,
                    password=info.password or self.password,
                )
            )
        return resolved


class RedisCache:
    """Cache facade over a Redis server or Redis Cluster.

    Keys are validated and TTLs normalized before anything is sent to the
    store. Store errors (``redis.exceptions.RedisError``) are not caught.

    TTLs may be None (no expiry), seconds as int or numeric string, or a
    ``timedelta``/``relativedelta``. A TTL of zero or less deletes the key.

    Example:
        cache = RedisCache.from_config(CacheConfig(nodes=["redis://cache:6379/0"]))

        cache.set("user.1", {"name": "alice"}, ttl=300)
        user = cache.get("user.1")

        cache.set_multiple({"a": 1, "b": 2}, ttl=relativedelta(hours=1))
        cache.get_multiple(["a", "b", "c"], default=0)  # {"a": 1, "b": 2, "c": 0}
    """

    def __init__(
        self,
        client: Any,
        topology: Optional[ClusterTopology] = None,
        codec: Optional[ValueCodec] = None,
        validator: Optional[KeyValidator] = None,
        normalizer: Optional[TtlNormalizer] = None,
        prefix: str = "",
    ):
        """Initialize cache.

        Args:
            client: redis-py client (``redis.Redis`` or ``RedisCluster``)
            topology: Node topology to probe; None means a single node
            codec: Value codec, pickle when omitted
            validator: Key validator
            normalizer: TTL normalizer
            prefix: Prefix prepended to every key in the store
        """
        self._client = client
        self.topology = topology
        self.codec = codec or ValueCodec()
        self.validator = validator or default_validator
        self.normalizer = normalizer or default_normalizer
        self.prefix = prefix

    @classmethod
    def from_config(cls, config: Optional[CacheConfig] = None) -> "RedisCache":
        """Build a cache and its clients from configuration.

        Args:
            config: Cache configuration

        Returns:
            RedisCache instance
        """
        config = config or CacheConfig()
        nodes = config.node_infos()
        options = {
            "socket_timeout": config.socket_timeout,
            "socket_connect_timeout": config.socket_connect_timeout,
        }

        if config.cluster:
            client = RedisCluster(
                startup_nodes=[ClusterNode(n.host, n.port) for n in nodes],
                username=nodes[0].username,
                password=nodes[0].password,
                ssl=any(n.ssl for n in nodes),
                **options,
            )
        else:
            client = make_node_client(
                nodes[0], max_connections=config.max_connections, **options
            )

        topology = ClusterTopology(
            nodes,
            client_factory=lambda node: make_node_client(
                node, max_connections=config.max_connections, **options
            ),
        )
        logger.info(
            f"Redis cache configured for {len(nodes)} node(s), cluster client={config.cluster}"
        )

        return cls(
            client,
            topology=topology,
            codec=ValueCodec(get_serializer(config.serializer)),
            prefix=config.prefix,
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Get value from cache.

        Args:
            key: Cache key
            default: Value returned on a miss

        Returns:
            Decoded value or default
        """
        self.validator.validate(key)
        data = self._client.get(self._make_key(key))
        return default if data is None else self.codec.decode(data)

    def set(self, key: str, value: Any, ttl: RawTtl = None) -> bool:
        """Set value in cache.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Raw TTL

        Returns:
            True if the store acknowledged the write
        """
        self.validator.validate(key)
        normalized = self.normalizer.normalize(ttl)

        if normalized.is_expired:
            return self.delete(key)

        return self._write(key, self.codec.encode(value), normalized)

    def delete(self, key: str) -> bool:
        """Delete key from cache.

        Args:
            key: Cache key

        Returns:
            True if the key is gone, including when it never existed
        """
        return not self.has(key) or self._client.delete(self._make_key(key)) == 1

    def has(self, key: str) -> bool:
        """Check if key exists.

        Args:
            key: Cache key

        Returns:
            True if the key exists
        """
        self.validator.validate(key)
        ttl = self._client.ttl(self._make_key(key))
        # -1: exists without expiry, -2: missing
        return ttl > 0 or ttl == -1

    def clear(self) -> bool:
        """Clear all entries.

        In cluster mode every node is flushed separately.

        Returns:
            True if every flush succeeded
        """
        if self._detect().is_cluster:
            clients = self.topology.fan_out()
            logger.info(f"Flushing {len(clients)} cluster node(s)")
            results = [client.flushdb() for client in clients]
            return all(results)

        return bool(self._client.flushdb())

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> Dict[str, Any]:
        """Get multiple values.

        Args:
            keys: Cache keys
            default: Value used for misses

        Returns:
            Dict of key -> value, in input order
        """
        keys = self.validator.validate_all(keys)
        values: Dict[str, Any] = dict.fromkeys(keys, default)

        if self._detect().is_cluster:
            logger.debug(f"Cluster mode, reading {len(values)} key(s) one by one")
            for key in values:
                data = self._client.get(self._make_key(key))
                if data is not None:
                    values[key] = self.codec.decode(data)
            return values

        results = self._client.mget([self._make_key(k) for k in keys])
        for key, data in zip(keys, results):
            if data is not None:
                values[key] = self.codec.decode(data)

        return values

    def set_multiple(self, values: Any, ttl: RawTtl = None) -> bool:
        """Set multiple values.

        On a single node a finite TTL is applied inside one MULTI/EXEC
        transaction. In cluster mode keys are written one by one and a
        failure can leave some keys updated.

        Args:
            values: Mapping or iterable of (key, value) pairs
            ttl: Raw TTL applied to every key

        Returns:
            True if every write succeeded
        """
        items = self.validator.pairs(values)
        normalized = self.normalizer.normalize(ttl)

        if normalized.is_expired:
            return self.delete_multiple([key for key, _ in items])

        encoded = {key: self.codec.encode(value) for key, value in items}

        if self._detect().is_cluster:
            logger.debug(f"Cluster mode, writing {len(encoded)} key(s) one by one")
            results = [self._write(key, data, normalized) for key, data in encoded.items()]
            return all(results)

        mapping = {self._make_key(key): data for key, data in encoded.items()}

        if normalized.is_infinite:
            return bool(self._client.mset(mapping))

        with self._client.pipeline(transaction=True) as pipe:
            pipe.mset(mapping)
            for store_key in mapping:
                pipe.expire(store_key, normalized.seconds)
            results = pipe.execute(raise_on_error=False)

        failed = [r for r in results if self._is_failure(r)]
        if failed:
            logger.warning(
                f"Transaction for {len(mapping)} key(s) reported {len(failed)} failed command(s)"
            )
        return not failed

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Delete multiple keys.

        Args:
            keys: Cache keys

        Returns:
            True if every existing key was removed
        """
        keys = self.validator.validate_all(keys)
        present = [key for key in dict.fromkeys(keys) if self.has(key)]

        if not present:
            return True

        removed = self._client.delete(*[self._make_key(k) for k in present])
        return removed == len(present)

    def close(self) -> None:
        """Close the client and any node clients."""
        self._client.close()
        if self.topology is not None:
            self.topology.close()

    def _detect(self) -> Topology:
        if self.topology is None:
            return Topology()
        return self.topology.detect()

    def _make_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def _write(self, key: str, data: bytes, ttl: NormalizedTtl) -> bool:
        store_key = self._make_key(key)
        if ttl.is_infinite:
            result = self._client.set(store_key, data)
        else:
            result = self._client.set(store_key, data, ex=ttl.seconds)
        return result is not None

    @staticmethod
    def _is_failure(result: Any) -> bool:
        return result is None or result is False or isinstance(result, Exception)

    def __contains__(self, key: str) -> bool:
        """Check if key in cache."""
        return self.has(key)

    def __enter__(self) -> "RedisCache":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"RedisCache(client={self._client!r}, codec={self.codec!r})"


__all__ = ["RedisCache", "CacheConfig"]
