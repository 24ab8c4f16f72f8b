"""Typed prop readers used by the per-kind converters."""

from typing import Any

from ..node import Node, value_type_name
from .errors import InvalidPropType, MessageRequired, MissingProp

_MISSING = object()


def _check(node: Node, key: str, value: Any, expected: str, types: tuple[type, ...]) -> Any:
    # bool is an int subclass; never accept it for numeric props
    if isinstance(value, bool) and bool not in types:
        raise InvalidPropType(node.kind, key, expected, value_type_name(value))
    if not isinstance(value, types):
        raise InvalidPropType(node.kind, key, expected, value_type_name(value))
    return value


def get_int(node: Node, key: str, default: int | None = None) -> int | None:
    value = node.props.get(key, _MISSING)
    if value is _MISSING or value is None:
        return default
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return _check(node, key, value, "int", (int,))


def get_bool(node: Node, key: str, default: bool = False) -> bool:
    value = node.props.get(key, _MISSING)
    if value is _MISSING or value is None:
        return default
    return _check(node, key, value, "bool", (bool,))


def get_str(node: Node, key: str, default: str | None = None) -> str | None:
    value = node.props.get(key, _MISSING)
    if value is _MISSING or value is None:
        return default
    return _check(node, key, value, "str", (str,))


def get_str_list(node: Node, key: str) -> list[str]:
    value = node.props.get(key, _MISSING)
    if value is _MISSING or value is None:
        return []
    _check(node, key, value, "array", (list, tuple))
    for item in value:
        if not isinstance(item, str):
            raise InvalidPropType(node.kind, key, "array of str", f"array of {value_type_name(item)}")
    return list(value)


def get_message(node: Node, key: str, *, required: bool = False) -> str | None:
    """Read a message-bearing prop; messages are string identifiers."""
    value = node.props.get(key, _MISSING)
    if value is _MISSING or value is None:
        if required:
            raise MissingProp(node.kind, key)
        return None
    if not isinstance(value, str):
        raise MessageRequired(node.kind, key)
    return value


def main_text(node: Node, default: str = "") -> str:
    """First positional argument rendered as display text."""
    value = node.main_arg()
    if value is None:
        return default
    if isinstance(value, Node):
        raise InvalidPropType(node.kind, "arg0", "str", "node")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
