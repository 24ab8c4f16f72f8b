"""Component model shared by hand-written and generated widgets."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .view import View

M = TypeVar("M")


class Component(ABC, Generic[M]):
    """
    A stateful widget: applies messages to itself and renders a View.

    Backend adapters drive the loop: render with `view()`, feed every
    emitted message back through `on()`, render again.
    """

    @abstractmethod
    def on(self, msg: M) -> None:
        """Apply a message to the component's state."""

    @abstractmethod
    def view(self) -> View[M]:
        """Render the current state."""
