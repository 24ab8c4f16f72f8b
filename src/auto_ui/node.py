"""Node IR - weakly-typed runtime tree produced by evaluating a view() body."""

from dataclasses import dataclass, field
from typing import Any

# Runtime value: None (nil) | bool | int | float | str | list | dict | Node
Value = Any


@dataclass(eq=False)
class Node:
    """
    A named widget kind with positional args, named props and child nodes.

    Examples:
        >>> node = Node("button").with_arg("+").with_prop("onclick", "Counter.Inc")
        >>> node.main_arg()
        '+'
    """

    kind: str
    args: list[Value] = field(default_factory=list)
    props: dict[str, Value] = field(default_factory=dict)
    children: list["Node"] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.kind:
            raise ValueError("Node kind must not be empty")

    def with_arg(self, value: Value) -> "Node":
        self.args.append(value)
        return self

    def with_prop(self, key: str, value: Value) -> "Node":
        self.props[key] = value
        return self

    def with_child(self, child: "Node") -> "Node":
        self.children.append(child)
        return self

    def main_arg(self) -> Value:
        """First positional argument, or None."""
        return self.args[0] if self.args else None

    def get_prop(self, key: str) -> Value:
        return self.props.get(key)

    def children_of_kind(self, kind: str) -> list["Node"]:
        return [child for child in self.children if child.kind == kind]

    def depth(self) -> int:
        """Nesting depth (a leaf has depth 1)."""
        return 1 + max((child.depth() for child in self.children), default=0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.args == other.args
            and self.props == other.props
            and self.children == other.children
        )

    def to_dict(self) -> dict[str, Any]:
        """Export as JSON-compatible dictionary."""
        return {
            "kind": self.kind,
            "args": [_value_to_json(v) for v in self.args],
            "props": {k: _value_to_json(v) for k, v in self.props.items()},
            "children": [child.to_dict() for child in self.children],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Node":
        """Rebuild a Node from `to_dict` output."""
        if not isinstance(data, dict) or not data.get("kind"):
            raise ValueError("Node dictionary requires a non-empty 'kind'")
        return cls(
            kind=data["kind"],
            args=[_value_from_json(v) for v in data.get("args", [])],
            props={k: _value_from_json(v) for k, v in data.get("props", {}).items()},
            children=[cls.from_dict(child) for child in data.get("children", [])],
        )


PLACEHOLDER_KIND = "view"


def placeholder_node() -> Node:
    """Empty stand-in used when a view cannot be produced."""
    return Node(PLACEHOLDER_KIND)


def value_type_name(value: Value) -> str:
    """Auto-level type name of a runtime value, used in error messages."""
    match value:
        case None:
            return "nil"
        case bool():
            return "bool"
        case int():
            return "int"
        case float():
            return "float"
        case str():
            return "str"
        case list() | tuple():
            return "array"
        case dict():
            return "object"
        case Node():
            return "node"
        case _:
            return type(value).__name__


def _value_to_json(value: Value) -> Any:
    if isinstance(value, Node):
        return {"$node": value.to_dict()}
    if isinstance(value, (list, tuple)):
        return [_value_to_json(v) for v in value]
    if isinstance(value, dict):
        return {k: _value_to_json(v) for k, v in value.items()}
    return value


def _value_from_json(value: Any) -> Value:
    if isinstance(value, dict):
        if set(value) == {"$node"}:
            return Node.from_dict(value["$node"])
        return {k: _value_from_json(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_value_from_json(v) for v in value]
    return value
