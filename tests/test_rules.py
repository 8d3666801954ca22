"""Tests for the per-kind field rules."""

from datetime import date, datetime, timezone

import pytest

from shapeguard.errors import SchemaEngineError, ViolationCode, ViolationFound
from shapeguard.messages import MessageCatalog
from shapeguard.models import (
    ArrayNode,
    BooleanNode,
    DateNode,
    NumberNode,
    ObjectNode,
    StringNode,
)
from shapeguard.rules import FieldRules, kind_of


@pytest.fixture
def rules() -> FieldRules:
    return FieldRules()


class TestKindOf:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, "null"),
            (True, "boolean"),
            (1, "number"),
            (1.5, "number"),
            ("x", "string"),
            ([], "array"),
            ({}, "object"),
            (date(2024, 1, 1), "date"),
        ],
    )
    def test_kinds(self, value, expected):
        assert kind_of(value) == expected


class TestStringRules:
    def test_normalization_order(self, rules):
        node = StringNode(type="string", lowercase=True, uppercase=True)

        assert rules.check(node, "  mixed Case ", "field") == "MIXED CASE"

    def test_pattern_is_searched(self, rules):
        node = StringNode(type="string", pattern="b")

        assert rules.check(node, "abc", "field") == "abc"

    def test_type_mismatch(self, rules):
        with pytest.raises(ViolationFound) as exc_info:
            rules.check(StringNode(type="string"), 12, "field")

        assert exc_info.value.violation.code == ViolationCode.TYPE_MISMATCH
        assert exc_info.value.violation.rule == "string.type"

    def test_single_character_message(self, rules):
        with pytest.raises(ViolationFound) as exc_info:
            rules.check(StringNode(type="string", max=1), "ab", "initial")

        assert exc_info.value.violation.message == "initial must be at most 1 character long"

    def test_enum_checked_before_length(self, rules):
        node = StringNode(type="string", enum=["abc"], min=5)

        with pytest.raises(ViolationFound) as exc_info:
            rules.check(node, "xy", "field")

        assert exc_info.value.violation.code == ViolationCode.ENUM_MISMATCH


class TestNumberRules:
    def test_integer(self, rules):
        node = NumberNode(type="number", integer=True)

        assert rules.check(node, 2.0, "n") == 2.0
        with pytest.raises(ViolationFound) as exc_info:
            rules.check(node, 2.5, "n")
        assert exc_info.value.violation.code == ViolationCode.NOT_INTEGER

    def test_integer_beyond_float_range(self, rules):
        node = NumberNode(type="number", integer=True, positive=True)

        assert rules.check(node, 10**400, "n") == 10**400

    def test_whole_float_bounds_render_without_fraction(self, rules):
        with pytest.raises(ViolationFound) as exc_info:
            rules.check(NumberNode(type="number", min=1.0), 0, "n")

        assert exc_info.value.violation.parts == {"path": "n", "min": "1"}
        assert exc_info.value.violation.message == "n must be greater than or equal to 1"

    def test_max(self, rules):
        with pytest.raises(ViolationFound) as exc_info:
            rules.check(NumberNode(type="number", max=2.5), 3, "n")

        assert exc_info.value.violation.parts["max"] == "2.5"

    def test_enum(self, rules):
        node = NumberNode(type="number", enum=[1, 2])

        assert rules.check(node, 2, "n") == 2
        with pytest.raises(ViolationFound):
            rules.check(node, 3, "n")

    def test_positive_rejects_negative(self, rules):
        with pytest.raises(ViolationFound) as exc_info:
            rules.check(NumberNode(type="number", positive=True), -1, "n")

        assert exc_info.value.violation.code == ViolationCode.NOT_POSITIVE


class TestOtherRules:
    def test_boolean(self, rules):
        assert rules.check(BooleanNode(type="boolean"), False, "flag") is False
        with pytest.raises(ViolationFound):
            rules.check(BooleanNode(type="boolean"), 0, "flag")

    def test_date_returns_instant(self, rules):
        result = rules.check(DateNode(type="date"), "2024-03-01T00:00:00Z", "at")

        assert result == datetime(2024, 3, 1, tzinfo=timezone.utc)

    def test_native_date_is_accepted(self, rules):
        result = rules.check(DateNode(type="date"), date(2024, 3, 1), "at")

        assert result == datetime(2024, 3, 1, tzinfo=timezone.utc)

    def test_date_rejects_numbers(self, rules):
        with pytest.raises(ViolationFound) as exc_info:
            rules.check(DateNode(type="date"), 1700000000, "at")

        assert exc_info.value.violation.rule == "date.type"

    def test_object_rejects_list(self, rules):
        node = ObjectNode(type="object", properties={})

        with pytest.raises(ViolationFound) as exc_info:
            rules.check(node, [], "settings")

        assert exc_info.value.violation.rule == "object.type"

    def test_array_min(self, rules):
        node = ArrayNode(type="array", items={"type": "string"}, min=2)

        with pytest.raises(ViolationFound) as exc_info:
            rules.check(node, ["a"], "tags")

        assert exc_info.value.violation.message == "tags must contain at least 2 items"

    def test_unsupported_node(self, rules):
        with pytest.raises(SchemaEngineError):
            rules.check(object(), 1, "x")


class TestViolation:
    def test_root_path_is_named_in_message(self, rules):
        found = rules.violation(ViolationCode.TYPE_MISMATCH, "object.type", "")

        assert found.violation.message == "root must be an object"
        assert found.violation.path == ""
        assert found.violation.parts == {"path": ""}

    def test_custom_catalog(self):
        rules = FieldRules(MessageCatalog({"base.required": "{path}: required"}))

        found = rules.violation(ViolationCode.REQUIRED_MISSING, "base.required", "a.b")

        assert found.violation.message == "a.b: required"

    def test_unknown_rule_uses_fallback(self, rules):
        found = rules.violation(ViolationCode.TYPE_MISMATCH, "custom.rule", "x")

        assert found.violation.message == "x is invalid"
