"""Generate Python ``TypedDict`` declarations from a shapeguard schema.

The generated module describes the *normalized* output of validation: dates
are ``datetime`` values and fields with a default are always present.
"""

import keyword
import logging
import re
from pathlib import Path
from typing import Any

from .models import (
    ArrayNode,
    BooleanNode,
    DateNode,
    NumberNode,
    ObjectNode,
    StringNode,
    is_schema_union,
)

logger = logging.getLogger(__name__)

HEADER = '''"""Type declarations generated by shapeguard. Do not edit."""

from datetime import datetime
from typing import Literal, NotRequired, TypedDict
'''


def _pascal(key: str) -> str:
    words = re.split(r"[^0-9a-zA-Z]+", key)
    return "".join(word[:1].upper() + word[1:] for word in words if word)


def _snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def _is_optional(type_spec: Any) -> bool:
    nodes = type_spec if isinstance(type_spec, list) else [type_spec]
    return all(not node.required and not node.has_default for node in nodes)


class _Renderer:
    def __init__(self) -> None:
        self.blocks: list[str] = []
        self.names: set[str] = set()

    def _claim(self, name: str) -> str:
        candidate, counter = name, 2
        while candidate in self.names:
            candidate = f"{name}{counter}"
            counter += 1
        self.names.add(candidate)
        return candidate

    def schema(self, schema: Any, name: str) -> str:
        if is_schema_union(schema):
            alias = self._claim(name)
            variants = [self.mapping(member, f"{name}{index}") for index, member in enumerate(schema)]
            self.blocks.append(f"{alias} = {' | '.join(variants)}")
            return alias
        return self.mapping(schema, name)

    def mapping(self, mapping: dict[str, Any], name: str) -> str:
        class_name = self._claim(name)
        fields = []
        for key, type_spec in mapping.items():
            annotation = self.annotation(type_spec, f"{class_name}{_pascal(key)}")
            if _is_optional(type_spec):
                annotation = f"NotRequired[{annotation}]"
            fields.append((key, annotation))

        if all(key.isidentifier() and not keyword.iskeyword(key) for key, _ in fields):
            body = "\n".join(f"    {key}: {annotation}" for key, annotation in fields) or "    pass"
            self.blocks.append(f"class {class_name}(TypedDict):\n{body}")
        else:
            entries = ", ".join(f"{key!r}: {annotation}" for key, annotation in fields)
            self.blocks.append(f"{class_name} = TypedDict({class_name!r}, {{{entries}}})")
        return class_name

    def annotation(self, type_spec: Any, hint: str) -> str:
        if isinstance(type_spec, list):
            rendered: list[str] = []
            nullable = False
            for index, node in enumerate(type_spec):
                part = self.node_annotation(node, f"{hint}{index}")
                if part.endswith(" | None"):
                    part, nullable = part.removesuffix(" | None"), True
                if part not in rendered:
                    rendered.append(part)
            if nullable:
                rendered.append("None")
            return " | ".join(rendered)
        return self.node_annotation(type_spec, hint)

    def node_annotation(self, node: Any, hint: str) -> str:
        if isinstance(node, StringNode):
            annotation = f"Literal[{', '.join(repr(v) for v in node.enum)}]" if node.enum else "str"
        elif isinstance(node, NumberNode):
            if node.enum:
                annotation = f"Literal[{', '.join(repr(v) for v in node.enum)}]"
            else:
                annotation = "int" if node.integer else "float"
        elif isinstance(node, BooleanNode):
            annotation = "bool"
        elif isinstance(node, DateNode):
            annotation = "datetime"
        elif isinstance(node, ObjectNode):
            annotation = self.schema(node.properties, hint)
        elif isinstance(node, ArrayNode):
            annotation = f"list[{self.annotation(node.items, f'{hint}Item')}]"
        else:
            raise ValueError(f"Unsupported schema node: {node!r}")

        if node.accepts_null:
            annotation = f"{annotation} | None"
        return annotation


def render_typed_dict(schema: Any, name: str) -> str:
    """Render Python source declaring the normalized shape of *schema* as *name*.

    Example:
        >>> print(render_typed_dict(parse_schema({"id": {"type": "number", "integer": True}}), "User"))
        ...
        class User(TypedDict):
            id: int
    """
    if not name.isidentifier() or keyword.iskeyword(name):
        raise ValueError(f"Declaration name must be a Python identifier: {name!r}")
    renderer = _Renderer()
    renderer.schema(schema, name)
    return HEADER + "\n\n" + "\n\n\n".join(renderer.blocks) + "\n"


def declare(schema: Any, name: str, output_dir: str | Path = ".") -> Path:
    """Write the declarations for *schema* to ``<output_dir>/<name_snake>.py``.

    Returns:
        The path of the written module.
    """
    source = render_typed_dict(schema, name)
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{_snake(name)}.py"
    path.write_text(source, encoding="utf-8")
    logger.info(f"Wrote type declarations for {name} to {path}")
    return path
