"""Tests for the schema and option models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from shapeguard.models import (
    ArrayNode,
    DateNode,
    ObjectNode,
    StringNode,
    ValidateOptions,
    is_schema_union,
    is_type_union,
    parse_schema,
)


class TestNodes:
    def test_defaults(self):
        node = StringNode(type="string")

        assert node.required is True
        assert node.nullable is False
        assert node.trim is True
        assert node.has_default is False

    def test_has_default_tracks_explicit_null(self):
        node = StringNode(type="string", default=None)

        assert node.has_default is True
        assert node.accepts_null is True

    def test_instances_are_frozen(self):
        node = StringNode(type="string")

        with pytest.raises(PydanticValidationError):
            node.trim = False

    def test_invalid_pattern(self):
        with pytest.raises(PydanticValidationError, match="Invalid pattern"):
            StringNode(type="string", pattern="(")

    def test_invalid_date_bound(self):
        with pytest.raises(PydanticValidationError):
            DateNode(type="date", min="not a date")

    def test_negative_length_rejected(self):
        with pytest.raises(PydanticValidationError):
            StringNode(type="string", min=-1)


class TestParseSchema:
    def test_mapping(self):
        schema = parse_schema(
            {
                "name": {"type": "string"},
                "address": {"type": "object", "properties": {"city": {"type": "string"}}},
                "tags": {"type": "array", "items": [{"type": "string"}, {"type": "number"}]},
            }
        )

        assert isinstance(schema["name"], StringNode)
        assert isinstance(schema["address"], ObjectNode)
        assert isinstance(schema["address"].properties["city"], StringNode)
        assert isinstance(schema["tags"], ArrayNode)
        assert is_type_union(schema["tags"].items)

    def test_schema_union(self):
        schema = parse_schema([{"a": {"type": "string"}}, {"b": {"type": "number"}}])

        assert is_schema_union(schema)
        assert not is_type_union(schema)

    def test_single_member_field_union_rejected(self):
        with pytest.raises(PydanticValidationError):
            parse_schema({"a": [{"type": "string"}]})

    def test_unknown_type_rejected(self):
        with pytest.raises(PydanticValidationError):
            parse_schema({"a": {"type": "uuid"}})

    def test_parsed_schema_passes_through(self):
        schema = parse_schema({"a": {"type": "string"}})

        assert parse_schema(schema) == schema


class TestValidateOptions:
    def test_defaults(self):
        options = ValidateOptions()

        assert options.abort_early is True
        assert options.strip_unknown is False
        assert options.sort_keys is False
        assert options.error_messages == {}

    def test_nested_messages_are_flattened(self):
        options = ValidateOptions(
            error_messages={"string": {"min": "too short"}, "base.required": "missing"}
        )

        assert options.error_messages == {"string.min": "too short", "base.required": "missing"}

    def test_merged_ignores_none(self):
        options = ValidateOptions(strip_unknown=True)

        assert options.merged(strip_unknown=None) is options
        assert options.merged(sort_keys=True).strip_unknown is True
        assert options.merged(sort_keys=True).sort_keys is True

    def test_unknown_option_rejected(self):
        with pytest.raises(PydanticValidationError):
            ValidateOptions(stop_early=True)
