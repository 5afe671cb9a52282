"""RedisCache Serializer - Value Encoding.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import pickle
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import msgpack


class Serializer(ABC):
    """Abstract serializer for cache values.

    Implementations turn values into the byte strings stored in Redis and
    back. ``deserialize`` must build a new object graph on every call.
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


class PickleSerializer(Serializer):
    """Pickle serializer.

    Handles any picklable object, including class instances, and keeps
    int/float/bool/None distinct. Not safe for untrusted data.
    """

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL):
        """Initialize pickle serializer.

        Args:
            protocol: Pickle protocol version
        """
        self.protocol = protocol

    @property
    def format_name(self) -> str:
        return "pickle"

    def serialize(self, value: Any) -> bytes:
        return pickle.dumps(value, protocol=self.protocol)

    def deserialize(self, data: bytes) -> Any:
        return pickle.loads(data)


class JSONSerializer(Serializer):
    """JSON serializer.

    Readable from other languages. Limited to JSON-compatible types:
    tuples come back as lists and dict keys as strings.
    """

    @property
    def format_name(self) -> str:
        return "json"

    def serialize(self, value: Any) -> bytes:
        return json.dumps(value, separators=(",", ":")).encode("utf-8")

    def deserialize(self, data: bytes) -> Any:
        return json.loads(data.decode("utf-8"))


class MsgPackSerializer(Serializer):
    """MessagePack serializer.

    Compact binary format, faster than JSON, same type limits.
    """

    @property
    def format_name(self) -> str:
        return "msgpack"

    def serialize(self, value: Any) -> bytes:
        return msgpack.packb(value, use_bin_type=True)

    def deserialize(self, data: bytes) -> Any:
        return msgpack.unpackb(data, raw=False)


_SERIALIZERS: Dict[str, type] = {
    "pickle": PickleSerializer,
    "json": JSONSerializer,
    "msgpack": MsgPackSerializer,
}


def get_serializer(format_name: Optional[str] = None) -> Serializer:
    """Get serializer by format.

    Args:
        format_name: Format name or None for pickle

    Returns:
        Serializer instance

    Raises:
        KeyError: If format not found
    """
    name = format_name or "pickle"
    if name not in _SERIALIZERS:
        raise KeyError(f"Unknown serializer format: {name}")
    return _SERIALIZERS[name]()


def list_formats() -> List[str]:
    """List available serializer formats."""
    return list(_SERIALIZERS)


class ValueCodec:
    """Encodes values for storage and decodes them on the way back.

    Example:
        codec = ValueCodec(JSONSerializer())
        data = codec.encode({"name": "alice"})
        codec.decode(data)  # {"name": "alice"}, a fresh dict every call
    """

    def __init__(self, serializer: Optional[Serializer] = None):
        """Initialize codec.

        Args:
            serializer: Serializer to use, pickle when omitted
        """
        self.serializer = serializer or PickleSerializer()

    def encode(self, value: Any) -> bytes:
        """Encode a value to bytes."""
        return self.serializer.serialize(value)

    def decode(self, data: bytes) -> Any:
        """Decode bytes produced by ``encode``."""
        return self.serializer.deserialize(data)

    def __repr__(self) -> str:
        return f"ValueCodec(format={self.serializer.format_name!r})"


__all__ = [
    "Serializer",
    "PickleSerializer",
    "JSONSerializer",
    "MsgPackSerializer",
    "ValueCodec",
    "get_serializer",
    "list_formats",
]
