"""Export shapeguard schemas as JSON-Schema documents.

The export is a structural mapping for interoperability; normalization rules
(trim, casing) have no JSON-Schema equivalent and are left out.
"""

from typing import Any

from .models import (
    ArrayNode,
    BooleanNode,
    DateNode,
    NumberNode,
    ObjectNode,
    StringNode,
    ValidateOptions,
    is_schema_union,
)


def _with_default(result: dict[str, Any], node: Any) -> dict[str, Any]:
    if node.has_default:
        result["default"] = node.default
    return result


def _node_to_json_schema(node: Any, options: ValidateOptions) -> dict[str, Any]:
    result: dict[str, Any]
    if isinstance(node, StringNode):
        result = {"type": "string"}
        if node.enum is not None:
            result["enum"] = list(node.enum)
        if node.min is not None:
            result["minLength"] = node.min
        if node.max is not None:
            result["maxLength"] = node.max
        if node.pattern is not None:
            result["pattern"] = node.pattern
    elif isinstance(node, NumberNode):
        result = {"type": "integer" if node.integer else "number"}
        if node.enum is not None:
            result["enum"] = list(node.enum)
        if node.min is not None:
            result["minimum"] = node.min
        elif node.positive:
            result["minimum"] = 0
        if node.max is not None:
            result["maximum"] = node.max
        elif node.negative:
            result["exclusiveMaximum"] = 0
    elif isinstance(node, BooleanNode):
        result = {"type": "boolean"}
    elif isinstance(node, DateNode):
        result = {"type": "string", "format": "date-time"}
        if node.min is not None:
            result["formatMinimum"] = node.min
        if node.max is not None:
            result["formatMaximum"] = node.max
    elif isinstance(node, ObjectNode):
        result = _schema_to_json_schema(node.properties, options)
    elif isinstance(node, ArrayNode):
        result = {"type": "array", "items": _type_to_json_schema(node.items, options)}
        if node.min is not None:
            result["minItems"] = node.min
        if node.max is not None:
            result["maxItems"] = node.max
    else:
        raise ValueError(f"Unsupported schema node: {node!r}")

    result = _with_default(result, node)
    if node.accepts_null:
        result = {"anyOf": [result, {"type": "null"}]}
    return result


def _type_to_json_schema(type_spec: Any, options: ValidateOptions) -> dict[str, Any]:
    if isinstance(type_spec, list):
        return {"anyOf": [_node_to_json_schema(node, options) for node in type_spec]}
    return _node_to_json_schema(type_spec, options)


def _is_required(type_spec: Any) -> bool:
    """A field union is required unless every member is optional."""
    if isinstance(type_spec, list):
        return any(node.required for node in type_spec)
    return bool(type_spec.required)


def _mapping_to_json_schema(mapping: dict[str, Any], options: ValidateOptions) -> dict[str, Any]:
    result: dict[str, Any] = {
        "type": "object",
        "properties": {key: _type_to_json_schema(spec, options) for key, spec in mapping.items()},
        "additionalProperties": not options.strip_unknown,
    }
    required = [key for key, spec in mapping.items() if _is_required(spec)]
    if required:
        result["required"] = required
    return result


def _schema_to_json_schema(schema: Any, options: ValidateOptions) -> dict[str, Any]:
    if is_schema_union(schema):
        return {"anyOf": [_mapping_to_json_schema(member, options) for member in schema]}
    return _mapping_to_json_schema(schema, options)


def to_json_schema(schema: Any, options: ValidateOptions | None = None) -> dict[str, Any]:
    """Map a parsed schema to a JSON-Schema document.

    Args:
        schema: A parsed schema (see :func:`shapeguard.models.parse_schema`).
        options: Only ``strip_unknown`` is used: it turns
            ``additionalProperties`` off.

    Example:
        >>> to_json_schema(parse_schema({"age": {"type": "number", "integer": True}}))
        {'type': 'object', 'properties': {'age': {'type': 'integer'}}, 'additionalProperties': True, 'required': ['age']}
    """
    return _schema_to_json_schema(schema, options or ValidateOptions())
