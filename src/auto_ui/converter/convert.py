"""Node→View Converter - validates runtime Nodes and maps them onto View[str]."""

from collections.abc import Callable

from returns.result import Failure, Result, Success

from ..core.config import Policy, get_settings
from ..core.logging_config import get_logger
from ..node import Node
from ..view import View
from .errors import ConversionError, InvalidPropType, UnknownKind
from .props import get_bool, get_int, get_message, get_str, get_str_list, main_text

logger = get_logger(__name__)


class _Converter:
    """One conversion request: carries policy and depth limit down the tree."""

    def __init__(self, policy: Policy, max_depth: int) -> None:
        self.policy = policy
        self.max_depth = max_depth

    def convert(self, node: Node, depth: int = 1) -> View[str]:
        if depth > self.max_depth:
            raise InvalidPropType(
                node.kind, "children", f"depth <= {self.max_depth}", f"depth {depth}"
            )

        handler = _DISPATCH.get(node.kind)
        if handler is None:
            if self.policy == Policy.PERMISSIVE:
                logger.warning("unknown_node_kind", kind=node.kind)
                return View.empty()
            raise UnknownKind(node.kind)
        return handler(self, node, depth)

    def children(self, node: Node, depth: int) -> list[View[str]]:
        # Fail-fast: the first failing child aborts the whole conversion
        return [self.convert(child, depth + 1) for child in node.children]

    def first_child(self, node: Node, depth: int) -> View[str]:
        if not node.children:
            return View.empty()
        return self.convert(node.children[0], depth + 1)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def center(self, node: Node, depth: int) -> View[str]:
        return View.container(self.first_child(node, depth)).center().build()

    def column(self, node: Node, depth: int) -> View[str]:
        return self._layout(View.col(), node, depth)

    def row(self, node: Node, depth: int) -> View[str]:
        return self._layout(View.row(), node, depth)

    def _layout(self, builder, node: Node, depth: int) -> View[str]:
        builder.spacing(get_int(node, "spacing", 0)).padding(get_int(node, "padding", 0))
        style = get_str(node, "style")
        if style is not None:
            builder.style(style)
        return builder.children(self.children(node, depth)).build()

    def container(self, node: Node, depth: int) -> View[str]:
        builder = View.container(self.first_child(node, depth)).padding(
            get_int(node, "padding", 0)
        )
        width = get_int(node, "width")
        if width is not None:
            builder.width(width)
        height = get_int(node, "height")
        if height is not None:
            builder.height(height)
        if get_bool(node, "center_x"):
            builder.center_x()
        if get_bool(node, "center_y"):
            builder.center_y()
        style = get_str(node, "style")
        if style is not None:
            builder.style(style)
        return builder.build()

    def scrollable(self, node: Node, depth: int) -> View[str]:
        builder = View.scrollable(self.first_child(node, depth))
        width = get_int(node, "width")
        if width is not None:
            builder.width(width)
        height = get_int(node, "height")
        if height is not None:
            builder.height(height)
        style = get_str(node, "style")
        if style is not None:
            builder.style(style)
        return builder.build()

    # ------------------------------------------------------------------
    # Elements
    # ------------------------------------------------------------------

    def text(self, node: Node, depth: int) -> View[str]:
        return View.text(main_text(node), style=get_str(node, "style"))

    def button(self, node: Node, depth: int) -> View[str]:
        onclick = get_message(node, "onclick", required=True)
        return View.button(main_text(node), onclick, style=get_str(node, "style"))

    def input(self, node: Node, depth: int) -> View[str]:
        builder = View.input(main_text(node)).value(get_str(node, "value", ""))
        on_change = get_message(node, "on_change")
        if on_change is not None:
            builder.on_change(on_change)
        width = get_int(node, "width")
        if width is not None:
            builder.width(width)
        if get_bool(node, "password"):
            builder.password()
        style = get_str(node, "style")
        if style is not None:
            builder.style(style)
        return builder.build()

    def checkbox(self, node: Node, depth: int) -> View[str]:
        view = View.checkbox(get_bool(node, "is_checked"), main_text(node))
        on_toggle = get_message(node, "on_toggle")
        if on_toggle is not None:
            view = view.with_toggle(on_toggle)
        style = get_str(node, "style")
        return view.with_style(style) if style is not None else view

    def radio(self, node: Node, depth: int) -> View[str]:
        view = View.radio(get_bool(node, "is_selected"), main_text(node))
        on_select = get_message(node, "on_select")
        if on_select is not None:
            view = view.with_select(on_select)
        style = get_str(node, "style")
        return view.with_style(style) if style is not None else view

    def select(self, node: Node, depth: int) -> View[str]:
        view = View.select(get_str_list(node, "options"))
        selected = get_int(node, "selected_index")
        if selected is not None:
            view = view.selected(selected)
        on_select = get_message(node, "on_select")
        if on_select is not None:
            view = view.on_choose(on_select)
        style = get_str(node, "style")
        return view.with_style(style) if style is not None else view

    def list(self, node: Node, depth: int) -> View[str]:
        builder = View.list(self.children(node, depth)).spacing(get_int(node, "spacing", 0))
        style = get_str(node, "style")
        if style is not None:
            builder.style(style)
        return builder.build()

    def table(self, node: Node, depth: int) -> View[str]:
        headers = [self._header(header, depth + 1) for header in node.children_of_kind("header")]
        rows = [self.children(row, depth + 1) for row in node.children_of_kind("row")]
        builder = (
            View.table(headers, rows)
            .spacing(get_int(node, "spacing", 0))
            .col_spacing(get_int(node, "col_spacing", 0))
        )
        style = get_str(node, "style")
        if style is not None:
            builder.style(style)
        return builder.build()

    def _header(self, node: Node, depth: int) -> View[str]:
        # header "Name" {} or header { text("Name") {} }
        if node.children:
            return self.first_child(node, depth)
        return View.text(main_text(node), style=get_str(node, "style"))


_DISPATCH: dict[str, Callable[[_Converter, Node, int], View[str]]] = {
    # Layout
    "center": _Converter.center,
    "col": _Converter.column,
    "column": _Converter.column,
    "row": _Converter.row,
    "container": _Converter.container,
    "scrollable": _Converter.scrollable,
    # Elements
    "text": _Converter.text,
    "label": _Converter.text,
    "button": _Converter.button,
    "input": _Converter.input,
    "checkbox": _Converter.checkbox,
    "radio": _Converter.radio,
    "select": _Converter.select,
    "list": _Converter.list,
    "table": _Converter.table,
}

KNOWN_KINDS: frozenset[str] = frozenset(_DISPATCH)


def convert_node(
    node: Node, *, policy: Policy | None = None, max_depth: int | None = None
) -> View[str]:
    """
    Convert a runtime Node tree into a View with string messages.

    Args:
        node: Root node produced by a view() evaluation
        policy: STRICT raises on unknown kinds, PERMISSIVE renders them empty
            (defaults to ``Settings.converter_policy``)
        max_depth: Maximum nesting depth (defaults to ``Settings.max_view_depth``)

    Returns:
        Equivalent View[str]

    Raises:
        ConversionError: On the first node that cannot be converted
    """
    settings = get_settings()
    converter = _Converter(
        policy or settings.converter_policy,
        settings.max_view_depth if max_depth is None else max_depth,
    )
    return converter.convert(node)


def convert_node_result(
    node: Node, *, policy: Policy | None = None, max_depth: int | None = None
) -> Result[View[str], ConversionError]:
    """Result-returning variant of `convert_node` for callers that branch on failure."""
    try:
        return Success(convert_node(node, policy=policy, max_depth=max_depth))
    except ConversionError as e:
        logger.debug("conversion_failed", kind=e.kind, error=str(e))
        return Failure(e)
