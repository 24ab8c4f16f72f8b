"""Interface the bridge needs from a language runtime."""

from typing import Protocol, runtime_checkable

from ..node import Value


@runtime_checkable
class InterpreterRuntime(Protocol):
    """
    Language runtime plugged into the Interpreter Bridge.

    Implementations raise `auto_ui.lang.AutoError` subclasses on failure and
    keep their previous program when `interpret` fails.
    """

    def interpret(self, code: str) -> Value:
        """Run a whole program; returns its result value."""
        ...

    def widget_defaults(self) -> dict[str, dict[str, Value]]:
        """Initial field values of every widget type in the loaded program."""
        ...

    def main_widget(self) -> str | None:
        """Name of the widget to render first, if any."""
        ...

    def invoke_method(
        self,
        widget_name: str,
        method: str,
        args: list[Value],
        *,
        fields: dict[str, Value],
    ) -> Value:
        """Run a widget method against `fields`, mutating it in place."""
        ...
