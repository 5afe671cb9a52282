"""Protocol module - Value serialization."""

from rediscache_core.protocol.serializer import (
    Serializer,
    JSONSerializer,
    PickleSerializer,
    MsgPackSerializer,
    ValueCodec,
    get_serializer,
    list_formats,
)

__all__ = [
    "Serializer",
    "JSONSerializer",
    "PickleSerializer",
    "MsgPackSerializer",
    "ValueCodec",
    "get_serializer",
    "list_formats",
]
