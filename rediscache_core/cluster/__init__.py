"""Cluster module - Node descriptors and topology detection."""

from rediscache_core.cluster.node import NodeInfo
from rediscache_core.cluster.topology import ClusterTopology, Topology

__all__ = [
    "NodeInfo",
    "ClusterTopology",
    "Topology",
]
