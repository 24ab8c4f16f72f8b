"""View IR - message-parameterized UI tree consumed by backend adapters.

`View[str]` is what the runtime interpreter path produces (messages are string
identifiers such as ``"Counter.Inc"``); generated components produce
`View[Msg]` with their own enum. Both are the same generic tree.

Only `Button.onclick` and `Slider.on_change` are required. The message
props of inputs, checkboxes, radios and selects default to None, which
means the element is display-only and emits nothing; the converter accepts
such nodes without the prop.

Examples:
    >>> view = View.col().spacing(10).child(View.text("Hello")).build()
    >>> len(view.children)
    1
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Generic, TypeVar

from .items import AccordionItem, NavItem, SidebarPosition, TabsPosition

M = TypeVar("M")


def message_for(handler: Any, *args: Any) -> Any:
    """Resolve an event handler to a message: call closures, return plain messages."""
    if callable(handler) and not isinstance(handler, type):
        return handler(*args)
    return handler


class View(Generic[M]):
    """Base class of every view variant; factories build variants and builders."""

    @staticmethod
    def empty() -> "Empty[Any]":
        return Empty()

    @staticmethod
    def text(content: Any, style: str | None = None) -> "Text[Any]":
        return Text(content=str(content), style=style)

    @staticmethod
    def button(label: Any, onclick: M, style: str | None = None) -> "Button[M]":
        return Button(label=str(label), onclick=onclick, style=style)

    @staticmethod
    def input(placeholder: Any = "") -> "InputBuilder[Any]":
        return InputBuilder(str(placeholder))

    @staticmethod
    def checkbox(is_checked: bool, label: Any) -> "Checkbox[Any]":
        return Checkbox(is_checked=is_checked, label=str(label))

    @staticmethod
    def radio(is_selected: bool, label: Any) -> "Radio[Any]":
        return Radio(is_selected=is_selected, label=str(label))

    @staticmethod
    def select(options: Sequence[Any]) -> "Select[Any]":
        return Select(options=tuple(str(o) for o in options))

    @staticmethod
    def slider(
        min: float, max: float, value: float, on_change: Callable[[float], M] | M
    ) -> "Slider[M]":
        return Slider(min=min, max=max, value=value, on_change=on_change)

    @staticmethod
    def progress_bar(progress: float) -> "ProgressBar[Any]":
        return ProgressBar(progress=max(0.0, min(1.0, progress)))

    @staticmethod
    def col() -> "LayoutBuilder[Any]":
        return LayoutBuilder(Column)

    @staticmethod
    def column() -> "LayoutBuilder[Any]":
        return LayoutBuilder(Column)

    @staticmethod
    def row() -> "LayoutBuilder[Any]":
        return LayoutBuilder(Row)

    @staticmethod
    def container(child: "View[M]") -> "ContainerBuilder[M]":
        return ContainerBuilder(child)

    @staticmethod
    def scrollable(child: "View[M]") -> "ScrollableBuilder[M]":
        return ScrollableBuilder(child)

    @staticmethod
    def list(items: Sequence["View[M]"]) -> "ListBuilder[M]":
        return ListBuilder(items)

    @staticmethod
    def table(
        headers: Sequence["View[M]"], rows: Sequence[Sequence["View[M]"]]
    ) -> "TableBuilder[M]":
        return TableBuilder(headers, rows)

    @staticmethod
    def tabs(labels: Sequence[str], contents: Sequence["View[M]"]) -> "Tabs[M]":
        return Tabs(labels=tuple(labels), contents=tuple(contents))

    @staticmethod
    def accordion(items: Sequence[AccordionItem]) -> "Accordion[M]":
        return Accordion(items=tuple(items))

    @staticmethod
    def navigation_rail(items: Sequence[NavItem]) -> "NavigationRail[M]":
        return NavigationRail(items=tuple(items))

    @staticmethod
    def sidebar(content: "View[M]", width: float = 250.0) -> "Sidebar[M]":
        return Sidebar(content=content, width=width)


# ============================================================================
# Leaf variants
# ============================================================================


@dataclass(frozen=True)
class Empty(View[M]):
    pass


@dataclass(frozen=True)
class Text(View[M]):
    content: str
    style: str | None = None


@dataclass(frozen=True)
class Button(View[M]):
    label: str
    onclick: M
    style: str | None = None


@dataclass(frozen=True)
class Input(View[M]):
    placeholder: str = ""
    value: str = ""
    on_change: Callable[[str], M] | M | None = None
    width: int | None = None
    password: bool = False
    style: str | None = None


@dataclass(frozen=True)
class Checkbox(View[M]):
    is_checked: bool
    label: str
    on_toggle: Callable[[bool], M] | M | None = None
    style: str | None = None

    def with_toggle(self, msg: Callable[[bool], M] | M) -> "Checkbox[M]":
        return replace(self, on_toggle=msg)

    def with_style(self, style: str) -> "Checkbox[M]":
        return replace(self, style=style)


@dataclass(frozen=True)
class Radio(View[M]):
    is_selected: bool
    label: str
    on_select: M | None = None
    style: str | None = None

    def with_select(self, msg: M) -> "Radio[M]":
        return replace(self, on_select=msg)

    def with_style(self, style: str) -> "Radio[M]":
        return replace(self, style=style)


@dataclass(frozen=True)
class Select(View[M]):
    options: tuple[str, ...]
    selected_index: int | None = None
    on_select: Callable[[int, str], M] | M | None = None
    style: str | None = None

    def selected(self, index: int) -> "Select[M]":
        return replace(self, selected_index=index)

    def on_choose(self, msg: Callable[[int, str], M] | M) -> "Select[M]":
        return replace(self, on_select=msg)

    def with_style(self, style: str) -> "Select[M]":
        return replace(self, style=style)


@dataclass(frozen=True)
class Slider(View[M]):
    min: float
    max: float
    value: float
    on_change: Callable[[float], M] | M
    step: float | None = None
    style: str | None = None

    def with_step(self, step: float) -> "Slider[M]":
        return replace(self, step=step)


@dataclass(frozen=True)
class ProgressBar(View[M]):
    progress: float
    style: str | None = None


# ============================================================================
# Container variants (children owned as tuples)
# ============================================================================


@dataclass(frozen=True)
class Row(View[M]):
    children: tuple[View[M], ...] = ()
    spacing: int = 0
    padding: int = 0
    style: str | None = None


@dataclass(frozen=True)
class Column(View[M]):
    children: tuple[View[M], ...] = ()
    spacing: int = 0
    padding: int = 0
    style: str | None = None


@dataclass(frozen=True)
class Container(View[M]):
    child: View[M] = field(default_factory=Empty)
    padding: int = 0
    width: int | None = None
    height: int | None = None
    center_x: bool = False
    center_y: bool = False
    style: str | None = None


@dataclass(frozen=True)
class Scrollable(View[M]):
    child: View[M] = field(default_factory=Empty)
    width: int | None = None
    height: int | None = None
    style: str | None = None


@dataclass(frozen=True)
class List(View[M]):
    items: tuple[View[M], ...] = ()
    spacing: int = 0
    style: str | None = None


@dataclass(frozen=True)
class Table(View[M]):
    headers: tuple[View[M], ...] = ()
    rows: tuple[tuple[View[M], ...], ...] = ()
    spacing: int = 0
    col_spacing: int = 0
    style: str | None = None


# ============================================================================
# Composite navigation variants
# ============================================================================


@dataclass(frozen=True)
class Tabs(View[M]):
    labels: tuple[str, ...] = ()
    contents: tuple[View[M], ...] = ()
    selected: int = 0
    position: TabsPosition = TabsPosition.TOP
    on_select: Callable[[int], M] | M | None = None
    style: str | None = None

    def with_selected(self, index: int) -> "Tabs[M]":
        return replace(self, selected=index)

    def with_select(self, msg: Callable[[int], M] | M) -> "Tabs[M]":
        return replace(self, on_select=msg)


@dataclass(frozen=True)
class Accordion(View[M]):
    items: tuple[AccordionItem, ...] = ()
    allow_multiple: bool = False
    on_toggle: Callable[[int, bool], M] | M | None = None
    style: str | None = None

    def with_toggle(self, msg: Callable[[int, bool], M] | M) -> "Accordion[M]":
        return replace(self, on_toggle=msg)


@dataclass(frozen=True)
class NavigationRail(View[M]):
    items: tuple[NavItem, ...] = ()
    selected: int = 0
    width: float = 72.0
    show_labels: bool = True
    on_select: Callable[[int], M] | M | None = None
    style: str | None = None

    def with_select(self, msg: Callable[[int], M] | M) -> "NavigationRail[M]":
        return replace(self, on_select=msg)


@dataclass(frozen=True)
class Sidebar(View[M]):
    content: View[M] = field(default_factory=Empty)
    width: float = 250.0
    collapsible: bool = False
    position: SidebarPosition = SidebarPosition.LEFT
    on_toggle: M | None = None
    style: str | None = None

    def with_toggle(self, msg: M) -> "Sidebar[M]":
        return replace(self, collapsible=True, on_toggle=msg)


# ============================================================================
# Builders
# ============================================================================


class LayoutBuilder(Generic[M]):
    """Builds Row or Column."""

    def __init__(self, variant: type) -> None:
        self._variant = variant
        self._children: list[View[M]] = []
        self._spacing = 0
        self._padding = 0
        self._style: str | None = None

    def spacing(self, spacing: int) -> "LayoutBuilder[M]":
        self._spacing = spacing
        return self

    def padding(self, padding: int) -> "LayoutBuilder[M]":
        self._padding = padding
        return self

    def style(self, style: str) -> "LayoutBuilder[M]":
        self._style = style
        return self

    def child(self, child: View[M]) -> "LayoutBuilder[M]":
        self._children.append(child)
        return self

    def children(self, children: Sequence[View[M]]) -> "LayoutBuilder[M]":
        self._children.extend(children)
        return self

    def build(self) -> View[M]:
        return self._variant(
            children=tuple(self._children),
            spacing=self._spacing,
            padding=self._padding,
            style=self._style,
        )


class ContainerBuilder(Generic[M]):
    def __init__(self, child: View[M]) -> None:
        self._child = child
        self._padding = 0
        self._width: int | None = None
        self._height: int | None = None
        self._center_x = False
        self._center_y = False
        self._style: str | None = None

    def padding(self, padding: int) -> "ContainerBuilder[M]":
        self._padding = padding
        return self

    def width(self, width: int) -> "ContainerBuilder[M]":
        self._width = width
        return self

    def height(self, height: int) -> "ContainerBuilder[M]":
        self._height = height
        return self

    def center_x(self) -> "ContainerBuilder[M]":
        self._center_x = True
        return self

    def center_y(self) -> "ContainerBuilder[M]":
        self._center_y = True
        return self

    def center(self) -> "ContainerBuilder[M]":
        return self.center_x().center_y()

    def style(self, style: str) -> "ContainerBuilder[M]":
        self._style = style
        return self

    def build(self) -> Container[M]:
        return Container(
            child=self._child,
            padding=self._padding,
            width=self._width,
            height=self._height,
            center_x=self._center_x,
            center_y=self._center_y,
            style=self._style,
        )


class ScrollableBuilder(Generic[M]):
    def __init__(self, child: View[M]) -> None:
        self._child = child
        self._width: int | None = None
        self._height: int | None = None
        self._style: str | None = None

    def width(self, width: int) -> "ScrollableBuilder[M]":
        self._width = width
        return self

    def height(self, height: int) -> "ScrollableBuilder[M]":
        self._height = height
        return self

    def style(self, style: str) -> "ScrollableBuilder[M]":
        self._style = style
        return self

    def build(self) -> Scrollable[M]:
        return Scrollable(
            child=self._child, width=self._width, height=self._height, style=self._style
        )


class InputBuilder(Generic[M]):
    def __init__(self, placeholder: str) -> None:
        self._placeholder = placeholder
        self._value = ""
        self._on_change: Callable[[str], M] | M | None = None
        self._width: int | None = None
        self._password = False
        self._style: str | None = None

    def value(self, value: Any) -> "InputBuilder[M]":
        self._value = str(value)
        return self

    def on_change(self, msg: Callable[[str], M] | M) -> "InputBuilder[M]":
        self._on_change = msg
        return self

    def width(self, width: int) -> "InputBuilder[M]":
        self._width = width
        return self

    def password(self) -> "InputBuilder[M]":
        self._password = True
        return self

    def style(self, style: str) -> "InputBuilder[M]":
        self._style = style
        return self

    def build(self) -> Input[M]:
        return Input(
            placeholder=self._placeholder,
            value=self._value,
            on_change=self._on_change,
            width=self._width,
            password=self._password,
            style=self._style,
        )


class ListBuilder(Generic[M]):
    def __init__(self, items: Sequence[View[M]]) -> None:
        self._items = tuple(items)
        self._spacing = 0
        self._style: str | None = None

    def spacing(self, spacing: int) -> "ListBuilder[M]":
        self._spacing = spacing
        return self

    def style(self, style: str) -> "ListBuilder[M]":
        self._style = style
        return self

    def build(self) -> List[M]:
        return List(items=self._items, spacing=self._spacing, style=self._style)


class TableBuilder(Generic[M]):
    def __init__(
        self, headers: Sequence[View[M]], rows: Sequence[Sequence[View[M]]]
    ) -> None:
        self._headers = tuple(headers)
        self._rows = tuple(tuple(row) for row in rows)
        self._spacing = 0
        self._col_spacing = 0
        self._style: str | None = None

    def spacing(self, spacing: int) -> "TableBuilder[M]":
        self._spacing = spacing
        return self

    def col_spacing(self, col_spacing: int) -> "TableBuilder[M]":
        self._col_spacing = col_spacing
        return self

    def style(self, style: str) -> "TableBuilder[M]":
        self._style = style
        return self

    def build(self) -> Table[M]:
        return Table(
            headers=self._headers,
            rows=self._rows,
            spacing=self._spacing,
            col_spacing=self._col_spacing,
            style=self._style,
        )


INTERACTIVE_VARIANTS: tuple[type, ...] = (
    Button,
    Checkbox,
    Radio,
    Select,
    Slider,
    Tabs,
    Accordion,
    NavigationRail,
    Sidebar,
)
