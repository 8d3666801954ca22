"""Tests for the JSON-Schema export."""

from shapeguard import SchemaValidator, ValidateOptions, parse_schema, to_json_schema


class TestNodes:
    def test_string(self):
        result = to_json_schema(
            parse_schema({"code": {"type": "string", "min": 2, "max": 4, "pattern": "^[A-Z]+$"}})
        )

        assert result["properties"]["code"] == {
            "type": "string",
            "minLength": 2,
            "maxLength": 4,
            "pattern": "^[A-Z]+$",
        }

    def test_numbers(self):
        result = to_json_schema(
            parse_schema(
                {
                    "count": {"type": "number", "integer": True, "positive": True},
                    "delta": {"type": "number", "negative": True},
                    "ratio": {"type": "number", "min": 0, "max": 1},
                }
            )
        )
        properties = result["properties"]

        assert properties["count"] == {"type": "integer", "minimum": 0}
        assert properties["delta"] == {"type": "number", "exclusiveMaximum": 0}
        assert properties["ratio"] == {"type": "number", "minimum": 0, "maximum": 1}

    def test_date(self):
        result = to_json_schema(parse_schema({"at": {"type": "date", "min": "2024-01-01"}}))

        assert result["properties"]["at"] == {
            "type": "string",
            "format": "date-time",
            "formatMinimum": "2024-01-01",
        }

    def test_nullable_and_default(self):
        result = to_json_schema(
            parse_schema({"note": {"type": "string", "nullable": True, "default": "n/a"}})
        )

        assert result["properties"]["note"] == {
            "anyOf": [{"type": "string", "default": "n/a"}, {"type": "null"}]
        }

    def test_array_and_object(self):
        result = to_json_schema(
            parse_schema(
                {
                    "tags": {"type": "array", "items": {"type": "string"}, "max": 3},
                    "address": {"type": "object", "properties": {"city": {"type": "string"}}},
                }
            )
        )
        properties = result["properties"]

        assert properties["tags"] == {"type": "array", "items": {"type": "string"}, "maxItems": 3}
        assert properties["address"]["properties"] == {"city": {"type": "string"}}
        assert properties["address"]["required"] == ["city"]


class TestObjects:
    def test_required_keys(self):
        result = to_json_schema(
            parse_schema(
                {
                    "id": {"type": "number"},
                    "nickname": {"type": "string", "required": False},
                    "contact": [
                        {"type": "string", "required": False},
                        {"type": "number", "required": False},
                    ],
                }
            )
        )

        assert result["required"] == ["id"]
        assert result["properties"]["contact"] == {"anyOf": [{"type": "string"}, {"type": "number"}]}

    def test_strip_unknown_closes_objects(self):
        schema = parse_schema({"id": {"type": "number"}})

        assert to_json_schema(schema)["additionalProperties"] is True
        assert to_json_schema(schema, ValidateOptions(strip_unknown=True))["additionalProperties"] is False

    def test_schema_union(self):
        result = SchemaValidator([{"a": {"type": "string"}}, {"b": {"type": "number"}}]).to_json_schema()

        assert len(result["anyOf"]) == 2
        assert result["anyOf"][1]["required"] == ["b"]
