"""RedisCache Topology - Cluster Mode Detection.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Whether the store is sharded decides how batch operations and ``clear``
behave. The answer is re-read from the nodes on every call because a
deployment can be switched to cluster mode while clients stay connected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Tuple, Union

import redis

from rediscache_core.cluster.node import NodeInfo

logger = logging.getLogger(__name__)

ClientFactory = Callable[[NodeInfo], Any]


@dataclass(frozen=True)
class Topology:
    """Result of one detection pass.

    Attributes:
        nodes: Probed node descriptors
        is_cluster: Whether any reachable node runs in cluster mode
    """

    nodes: Tuple[NodeInfo, ...] = ()
    is_cluster: bool = False


def make_node_client(node: NodeInfo, **options: Any) -> redis.Redis:
    """Create a standalone client for one node.

    Settings carried by the node (including URL query options) take
    precedence over ``options``.

    Args:
        node: Node descriptor
        **options: Extra ``redis.Redis`` keyword arguments

    Returns:
        Redis client (connects lazily)
    """
    options.update(node.connection_kwargs())
    return redis.Redis(**options)


class ClusterTopology:
    """Probes configured nodes for cluster mode and exposes per-node clients.

    Example:
        topology = ClusterTopology(["redis://node1:7000", "redis://node2:7001"])
        if topology.detect().is_cluster:
            for client in topology.fan_out():
                client.flushdb()
    """

    def __init__(
        self,
        nodes: Iterable[Union[NodeInfo, str]],
        client_factory: Optional[ClientFactory] = None,
    ):
        """Initialize topology.

        Args:
            nodes: Node descriptors or URLs
            client_factory: Builds the client for a node, defaults to
                ``make_node_client``
        """
        self.nodes: Tuple[NodeInfo, ...] = tuple(NodeInfo.coerce(n) for n in nodes)
        factory = client_factory or make_node_client
        self._clients: Tuple[Any, ...] = tuple(factory(n) for n in self.nodes)

    def probe(self, node: NodeInfo, client: Any) -> bool:
        """Ask one node whether cluster mode is enabled.

        A node that cannot be queried counts as not in cluster mode.

        Args:
            node: Node descriptor, for logging
            client: Client connected to that node

        Returns:
            True if the node reports ``cluster_enabled:1``
        """
        try:
            info = client.info("cluster")
        except redis.exceptions.RedisError as e:
            logger.warning(f"Cluster probe failed for {node.address}: {e}")
            return False

        try:
            return int(info.get("cluster_enabled", 0)) == 1
        except (TypeError, ValueError):
            return False

    def detect(self) -> Topology:
        """Probe all nodes.

        Returns:
            Topology for this call
        """
        is_cluster = False
        for node, client in zip(self.nodes, self._clients):
            if self.probe(node, client):
                is_cluster = True
                break

        return Topology(nodes=self.nodes, is_cluster=is_cluster)

    def fan_out(self) -> List[Any]:
        """Get one client per configured node.

        Returns:
            List of node clients, in node order
        """
        return list(self._clients)

    def close(self) -> None:
        """Close all node clients."""
        for client in self._clients:
            client.close()

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        addresses = ", ".join(n.address for n in self.nodes)
        return f"ClusterTopology(nodes=[{addresses}])"


__all__ = ["ClusterTopology", "Topology", "ClientFactory", "make_node_client"]
