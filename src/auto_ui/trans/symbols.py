"""First generator pass: message variants referenced by a view tree."""

from dataclasses import dataclass, field

from ..lang.ast import Ident, Literal, Member
from ..node import Node


@dataclass
class CollectedSymbols:
    """Symbols gathered before emission starts."""

    variants: set[str] = field(default_factory=set)
    kinds: set[str] = field(default_factory=set)

    def sorted_variants(self) -> list[str]:
        return sorted(self.variants)


def is_message_prop(key: str) -> bool:
    """Event props are `onclick`, `on_change`, `on_toggle`, `on_select`, ..."""
    return key.startswith("on")


def message_variant(value: object) -> str | None:
    """
    Variant name referenced by a message prop value, if it names one.

    `Msg.Inc` expressions, ``"Counter.Inc"`` and ``"Inc"`` all name ``Inc``.
    """
    if isinstance(value, Member) and isinstance(value.obj, Ident) and value.obj.name != "self":
        return value.name
    if isinstance(value, Literal):
        value = value.value
    if isinstance(value, str):
        name = value.rpartition(".")[2]
        if name.isidentifier():
            return name
    return None


def collect_symbols(root: Node, symbols: CollectedSymbols | None = None) -> CollectedSymbols:
    symbols = symbols or CollectedSymbols()
    symbols.kinds.add(root.kind)
    for key, value in root.props.items():
        if is_message_prop(key):
            variant = message_variant(value)
            if variant is not None:
                symbols.variants.add(variant)
    for child in root.children:
        collect_symbols(child, symbols)
    return symbols
