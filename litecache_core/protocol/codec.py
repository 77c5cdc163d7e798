"""LiteCache Codec - Shape Validation and Encoding.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

A codec is what the cache knows about its values: whether a value has the
configured shape, and how to turn it into the text stored in the ``value``
column and back. ``compile_schema`` builds one from a JSON Schema.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, List, Optional

from jsonschema.exceptions import SchemaError
from jsonschema.validators import Draft202012Validator, validator_for

from litecache_core.errors import ConfigurationError, ValidationError
from litecache_core.protocol.serializer import JSONSerializer, Serializer

logger = logging.getLogger(__name__)


class ValueCodec(ABC):
    """Validate-and-serialize capability consumed by the cache."""

    @abstractmethod
    def errors(self, value: Any) -> List[str]:
        """List structural problems with a value.

        Args:
            value: Candidate value

        Returns:
            Error messages, empty if the value conforms
        """
        pass

    @abstractmethod
    def encode(self, value: Any) -> str:
        """Encode a conforming value to its stored text form.

        Raises:
            ValidationError: If the value cannot be encoded
        """
        pass

    @abstractmethod
    def decode(self, text: str) -> Any:
        """Decode stored text back into a value."""
        pass

    def validate(self, value: Any) -> bool:
        """Check a value without mutating it."""
        return not self.errors(value)


class SchemaCodec(ValueCodec):
    """JSON Schema validator paired with the canonical JSON serializer.

    The schema draft follows its ``$schema`` keyword and defaults to
    2020-12. Required properties must be present, declared types must
    match, and properties outside ``required`` may be absent.

    Example:
        codec = SchemaCodec({
            "type": "object",
            "properties": {"id": {"type": "integer"}},
            "required": ["id"],
        })
        codec.validate({"id": 1})   # True
        codec.encode({"id": 1})     # '{"id":1}'
    """

    def __init__(self, schema: Mapping, serializer: Optional[Serializer] = None):
        """Compile a schema.

        Args:
            schema: JSON Schema document
            serializer: Serializer for stored text (canonical JSON by default)

        Raises:
            ConfigurationError: If the schema is not a valid JSON Schema
        """
        if not isinstance(schema, Mapping):
            raise ConfigurationError("Cache schema must be a valid JSON schema object")

        schema = dict(schema)
        validator_cls = validator_for(schema, default=Draft202012Validator)
        try:
            validator_cls.check_schema(schema)
        except SchemaError as e:
            raise ConfigurationError(f"Invalid cache schema: {e.message}") from e

        self.schema = schema
        self.serializer = serializer or JSONSerializer()
        self._validator = validator_cls(schema)

    @property
    def properties(self) -> List[str]:
        """Top-level property names declared by the schema."""
        return list(self.schema.get("properties", {}))

    def errors(self, value: Any) -> List[str]:
        errors = sorted(
            self._validator.iter_errors(value),
            key=lambda error: [str(part) for part in error.path],
        )
        return [f"{error.json_path}: {error.message}" for error in errors]

    def validate(self, value: Any) -> bool:
        return self._validator.is_valid(value)

    def encode(self, value: Any) -> str:
        path = _non_finite(value, "$")
        if path is not None:
            raise ValidationError(f"Value cannot be serialized: non-finite number at {path}")
        try:
            return self.serializer.serialize(value).decode("utf-8")
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Value cannot be serialized: {e}") from e

    def decode(self, text: str) -> Any:
        return self.serializer.deserialize(text)

    def __repr__(self) -> str:
        return f"SchemaCodec(properties={self.properties!r})"


def _non_finite(value: Any, path: str) -> Optional[str]:
    """Path of the first NaN or infinity in a document, if any.

    JSON has no literal for these and the serializer writes them as null,
    so they would not read back as written.
    """
    if isinstance(value, float):
        return None if math.isfinite(value) else path
    if isinstance(value, Mapping):
        for key, item in value.items():
            found = _non_finite(item, f"{path}.{key}")
            if found is not None:
                return found
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            found = _non_finite(item, f"{path}[{index}]")
            if found is not None:
                return found
    return None


def compile_schema(schema: Any) -> SchemaCodec:
    """Compile a JSON Schema into a codec.

    Args:
        schema: JSON Schema document

    Returns:
        SchemaCodec for the schema

    Raises:
        ConfigurationError: If the schema is missing or malformed
    """
    if schema is None:
        raise ConfigurationError("Cache schema is required")
    return SchemaCodec(schema)


__all__ = ["ValueCodec", "SchemaCodec", "compile_schema"]
