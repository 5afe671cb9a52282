"""RedisCache Node - Store Node Descriptor.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from redis.connection import SSLConnection, UnixDomainSocketConnection, parse_url

DEFAULT_PORT = 6379


@dataclass(frozen=True)
class NodeInfo:
    """Connection details for one Redis node.

    Attributes:
        host: Node hostname or IP
        port: Node port
        db: Database number, None when not given
        username: ACL username
        password: Password
        ssl: Connect over TLS
        options: Extra ``redis.Redis`` arguments from the URL query
    """

    host: str = "localhost"
    port: int = DEFAULT_PORT
    db: Optional[int] = None
    username: Optional[str] = None
    password: Optional[str] = None
    ssl: bool = False
    options: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_url(cls, url: str) -> "NodeInfo":
        """Parse a node address.

        Accepts anything ``redis.from_url`` accepts (``redis://``,
        ``rediss://``, ``unix://``, query options such as ``?db=3``) as
        well as a bare ``host[:port]``.

        Args:
            url: Node address

        Returns:
            NodeInfo instance

        Raises:
            ValueError: If the URL cannot be parsed
        """
        if "://" not in url:
            url = f"redis://{url}"

        kwargs = parse_url(url)
        connection_class = kwargs.pop("connection_class", None)
        if connection_class is UnixDomainSocketConnection:
            kwargs["unix_socket_path"] = kwargs.pop("path", None)

        return cls(
            host=kwargs.pop("host", "localhost"),
            port=kwargs.pop("port", DEFAULT_PORT),
            db=kwargs.pop("db", None),
            username=kwargs.pop("username", None),
            password=kwargs.pop("password", None),
            ssl=connection_class is SSLConnection,
            options=kwargs,
        )

    @classmethod
    def coerce(cls, node: Union["NodeInfo", str]) -> "NodeInfo":
        """Return ``node`` as a NodeInfo, parsing strings."""
        if isinstance(node, NodeInfo):
            return node
        return cls.from_url(node)

    @property
    def address(self) -> str:
        return self.options.get("unix_socket_path") or f"{self.host}:{self.port}"

    def connection_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``redis.Redis``."""
        kwargs = dict(self.options)
        kwargs.update(
            host=self.host,
            port=self.port,
            db=self.db or 0,
            username=self.username,
            password=self.password,
        )
        if self.ssl:
            kwargs["ssl"] = True
        return kwargs

    def __repr__(self) -> str:
        return f"NodeInfo({self.address}, db={self.db or 0})"


__all__ = ["NodeInfo", "DEFAULT_PORT"]
