"""Protocol module - Value validation and serialization."""

from litecache_core.protocol.serializer import (
    Serializer,
    JSONSerializer,
)
from litecache_core.protocol.codec import (
    ValueCodec,
    SchemaCodec,
    compile_schema,
)

__all__ = [
    "Serializer",
    "JSONSerializer",
    "ValueCodec",
    "SchemaCodec",
    "compile_schema",
]
