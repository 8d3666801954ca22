"""Type definitions for shapeguard.

This module re-exports the Pydantic models from models.py for public API and
defines the marker used for absent values.
"""

from typing import Any, Literal

from .models import (
    ArrayNode,
    BooleanNode,
    DateNode,
    NumberNode,
    ObjectNode,
    Schema,
    SchemaMapping,
    SchemaNode,
    StringNode,
    TypeSpec,
    ValidateOptions,
)

# Type aliases for better readability
NodeKind = Literal["string", "number", "boolean", "date", "object", "array"]
PathKey = str | int


class _Absent:
    """Marker for a declared key that is missing from the data.

    Distinct from ``None``, which is an observed null. A single instance
    exists and survives copying.
    """

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Absent":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "_Absent":
        return self

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()

__all__ = [
    "ABSENT",
    "ArrayNode",
    "BooleanNode",
    "DateNode",
    "NodeKind",
    "NumberNode",
    "ObjectNode",
    "PathKey",
    "Schema",
    "SchemaMapping",
    "SchemaNode",
    "StringNode",
    "TypeSpec",
    "ValidateOptions",
]
