"""Human-readable paths for traversal keys."""

from collections.abc import Iterable
from typing import Any


def is_index(key: Any) -> bool:
    """Return True for list indices: non-negative ints and digit-only strings."""
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return key >= 0
    return isinstance(key, str) and key.isascii() and key.isdigit()


def format_path(keys: Iterable[Any]) -> str:
    """Join traversal keys into a dotted path with bracketed indices.

    Example:
        >>> format_path(["address", "tags", 0])
        'address.tags[0]'
        >>> format_path([2, "name"])
        '[2].name'
    """
    path = ""
    for key in keys:
        if is_index(key):
            path = f"{path}[{key}]"
        elif not path:
            path = str(key)
        else:
            path = f"{path}.{key}"
    return path
