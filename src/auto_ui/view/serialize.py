"""View tree export for backend adapters and the CLI."""

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from .items import AccordionItem, NavItem
from .view import View


def view_to_dict(view: View[Any]) -> dict[str, Any]:
    """
    Serialize a View tree to a JSON-compatible dictionary.

    Each variant becomes ``{"type": <variant name>, ...fields}``. Message
    closures are rendered by their qualified name since they cannot be encoded.

    Args:
        view: Root of the tree

    Returns:
        Nested dictionary
    """
    data: dict[str, Any] = {"type": type(view).__name__}
    for f in fields(view):  # type: ignore[arg-type]
        data[f.name] = _encode(getattr(view, f.name))
    return data


def _encode(value: Any) -> Any:
    if isinstance(value, View):
        return view_to_dict(value)
    if isinstance(value, (AccordionItem, NavItem)):
        return {f.name: _encode(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_encode(v) for v in value]
    if is_dataclass(value):
        return {f.name: _encode(getattr(value, f.name)) for f in fields(value)}
    if callable(value):
        return f"<fn {getattr(value, '__qualname__', repr(value))}>"
    return value
