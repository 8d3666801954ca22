"""Schema location and union resolution.

``locate`` finds the single node that governs a path of traversal keys;
``resolve_union`` picks which member of a field union a value looks like.
Both are pure functions over parsed schemas.
"""

from collections.abc import Sequence
from typing import Any

from ._types import ABSENT
from .dates import is_date_like
from .models import ArrayNode, ObjectNode, is_node, is_type_union
from .paths import is_index
from .rules import kind_of


def matches(candidate: Any, value: Any) -> bool:
    """Return True when *value* structurally fits the kind of *candidate*."""
    if value is None:
        return bool(candidate.nullable)
    if candidate.type == "date":
        return isinstance(value, str) or is_date_like(value)
    if candidate.type == "array":
        return isinstance(value, list)
    if candidate.type == "object":
        return isinstance(value, dict)
    return kind_of(value) == candidate.type


def resolve_union(candidates: Sequence[Any], value: Any = ABSENT) -> Any:
    """Pick the first candidate *value* structurally fits, else the first candidate.

    An absent value resolves to the first candidate. This is a single
    structural pass; rules beyond the kind are not consulted.
    """
    if value is ABSENT:
        return candidates[0]
    for candidate in candidates:
        if matches(candidate, value):
            return candidate
    return candidates[0]


def resolve_type(type_spec: Any, value: Any = ABSENT) -> Any:
    """Resolve a located type to a single node (``None`` if it is not a type)."""
    if isinstance(type_spec, list):
        return resolve_union(type_spec, value)
    if is_node(type_spec):
        return type_spec
    return None


def locate_type(schema: Any, path: Sequence[Any]) -> Any:
    """Return the type governing *path*, without resolving a final union.

    Returns ``None`` when no declared type governs the path.
    """
    if not path:
        if is_type_union(schema) or is_node(schema):
            return schema
        return None

    key, rest = path[0], path[1:]

    if isinstance(schema, list):
        for member in schema:
            found = locate_type(member, path)
            if found is not None:
                return found
        return None

    if isinstance(schema, ObjectNode):
        return locate_type(schema.properties, path)

    if isinstance(schema, ArrayNode):
        if is_index(key):
            return locate_type(schema.items, rest)
        return None

    if isinstance(schema, dict) and key in schema:
        return locate_type(schema[key], rest)

    return None


def locate(schema: Any, path: Sequence[Any], value: Any = ABSENT) -> Any:
    """Return the single node governing *path*, or ``None``.

    A union at the end of the path is resolved against *value* (the value
    found at the path), or to its first member when *value* is absent.
    Unions met along the way are searched member by member, first match wins.

    Example:
        >>> schema = parse_schema({"tags": {"type": "array", "items": {"type": "string"}}})
        >>> locate(schema, ["tags", 0]).type
        'string'
    """
    return resolve_type(locate_type(schema, path), value)
