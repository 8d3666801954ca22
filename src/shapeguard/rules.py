"""Per-kind field rules for shapeguard.

Each rule set checks one present, non-null value against a single node and
returns the value in normalized form, or raises :class:`ViolationFound` for
the first rule that fails. Null and absent handling happens in the engine
before a rule set is called, and recursion into object properties and array
elements is the engine's job too.
"""

from typing import Any

from .dates import is_date_like, to_instant
from .errors import SchemaEngineError, Violation, ViolationCode, ViolationFound
from .messages import MessageCatalog, plural_suffix
from .models import ArrayNode, BooleanNode, DateNode, NumberNode, ObjectNode, StringNode
from .patterns import pattern_cache


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def kind_of(value: Any) -> str:
    """Name the primitive kind of *value* using schema vocabulary."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    if is_date_like(value):
        return "date"
    return type(value).__name__


def _number_text(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class FieldRules:
    """Applies the rules of a single node to a value."""

    def __init__(self, messages: MessageCatalog | None = None):
        self.messages = messages or MessageCatalog()

    def violation(
        self, code: ViolationCode, rule: str, path: str, **extra: str
    ) -> ViolationFound:
        """Build the exception reporting *rule* at *path*."""
        parts = {"path": path, **extra}
        message = self.messages.format(rule, {**parts, "path": path or "root"})
        return ViolationFound(
            Violation(code=code, rule=rule, path=path, message=message, parts=parts)
        )

    def check(self, node: Any, value: Any, path: str) -> Any:
        """Dispatch to the rule set for the node's kind."""
        if isinstance(node, StringNode):
            return self.check_string(node, value, path)
        elif isinstance(node, NumberNode):
            return self.check_number(node, value, path)
        elif isinstance(node, BooleanNode):
            return self.check_boolean(node, value, path)
        elif isinstance(node, DateNode):
            return self.check_date(node, value, path)
        elif isinstance(node, ObjectNode):
            return self.check_object(node, value, path)
        elif isinstance(node, ArrayNode):
            return self.check_array(node, value, path)
        raise SchemaEngineError(f"Unsupported schema node at {path or 'root'}: {node!r}")

    @staticmethod
    def normalize_string(node: StringNode, value: str) -> str:
        if node.trim:
            value = value.strip()
        if node.lowercase:
            value = value.lower()
        if node.uppercase:
            value = value.upper()
        return value

    def check_string(self, node: StringNode, value: Any, path: str) -> str:
        if not isinstance(value, str):
            raise self.violation(ViolationCode.TYPE_MISMATCH, "string.type", path)

        value = self.normalize_string(node, value)

        if node.enum is not None:
            allowed = [self.normalize_string(node, item) for item in node.enum]
            if value not in allowed:
                raise self.violation(ViolationCode.ENUM_MISMATCH, "string.enum", path)

        if node.pattern is not None and not pattern_cache.get(node.pattern).search(value):
            raise self.violation(
                ViolationCode.PATTERN_MISMATCH, "string.pattern", path, pattern=node.pattern
            )

        if node.min is not None and len(value) < node.min:
            raise self.violation(
                ViolationCode.LENGTH_OUT_OF_RANGE,
                "string.min",
                path,
                min=str(node.min),
                plural_suffix=plural_suffix(node.min),
            )
        if node.max is not None and len(value) > node.max:
            raise self.violation(
                ViolationCode.LENGTH_OUT_OF_RANGE,
                "string.max",
                path,
                max=str(node.max),
                plural_suffix=plural_suffix(node.max),
            )
        return value

    def check_number(self, node: NumberNode, value: Any, path: str) -> int | float:
        if not is_number(value):
            raise self.violation(ViolationCode.TYPE_MISMATCH, "number.type", path)

        if node.enum is not None and value not in node.enum:
            raise self.violation(ViolationCode.ENUM_MISMATCH, "number.enum", path)

        if node.min is not None and value < node.min:
            raise self.violation(
                ViolationCode.RANGE_OUT_OF_BOUNDS, "number.min", path, min=_number_text(node.min)
            )
        if node.max is not None and value > node.max:
            raise self.violation(
                ViolationCode.RANGE_OUT_OF_BOUNDS, "number.max", path, max=_number_text(node.max)
            )

        if node.integer and isinstance(value, float) and not value.is_integer():
            raise self.violation(ViolationCode.NOT_INTEGER, "number.integer", path)
        # Zero is positive but not negative.
        if node.positive and value < 0:
            raise self.violation(ViolationCode.NOT_POSITIVE, "number.positive", path)
        if node.negative and value >= 0:
            raise self.violation(ViolationCode.NOT_NEGATIVE, "number.negative", path)
        return value

    def check_boolean(self, node: BooleanNode, value: Any, path: str) -> bool:
        if not isinstance(value, bool):
            raise self.violation(ViolationCode.TYPE_MISMATCH, "boolean.type", path)
        return value

    def check_date(self, node: DateNode, value: Any, path: str) -> Any:
        if not (isinstance(value, str) or is_date_like(value)):
            raise self.violation(ViolationCode.TYPE_MISMATCH, "date.type", path)
        try:
            instant = to_instant(value)
        except ValueError:
            raise self.violation(ViolationCode.TYPE_MISMATCH, "date.type", path) from None

        if node.min is not None and instant < to_instant(node.min):
            raise self.violation(ViolationCode.RANGE_OUT_OF_BOUNDS, "date.min", path, min=node.min)
        if node.max is not None and instant > to_instant(node.max):
            raise self.violation(ViolationCode.RANGE_OUT_OF_BOUNDS, "date.max", path, max=node.max)
        return instant

    def check_object(self, node: ObjectNode, value: Any, path: str) -> dict[str, Any]:
        if not isinstance(value, dict):
            raise self.violation(ViolationCode.TYPE_MISMATCH, "object.type", path)
        return value

    def check_array(self, node: ArrayNode, value: Any, path: str) -> list[Any]:
        if not isinstance(value, list):
            raise self.violation(ViolationCode.TYPE_MISMATCH, "array.type", path)

        if node.min is not None and len(value) < node.min:
            raise self.violation(
                ViolationCode.LENGTH_OUT_OF_RANGE,
                "array.min",
                path,
                min=str(node.min),
                plural_suffix=plural_suffix(node.min),
            )
        if node.max is not None and len(value) > node.max:
            raise self.violation(
                ViolationCode.LENGTH_OUT_OF_RANGE,
                "array.max",
                path,
                max=str(node.max),
                plural_suffix=plural_suffix(node.max),
            )
        return value
