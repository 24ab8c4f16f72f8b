"""Dynamic messages routed from backends into interpreted widgets."""

from dataclasses import dataclass, field

from ..node import Value


@dataclass(frozen=True)
class StringMessage:
    """
    A plain event identifier, usually the string a View carries.

    ``"Counter.Inc"`` targets widget ``Counter``; an identifier without a
    dot targets the main widget.
    """

    event: str

    def split(self) -> tuple[str | None, str]:
        widget, dot, event = self.event.partition(".")
        if not dot:
            return None, self.event
        return widget, event


@dataclass(frozen=True)
class TypedMessage:
    """An event addressed to a named widget, with arguments."""

    widget_name: str
    event_name: str
    args: tuple[Value, ...] = field(default_factory=tuple)


DynamicMessage = StringMessage | TypedMessage
