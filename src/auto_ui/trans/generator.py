"""Code Generator - WidgetInfo → Python component source.

Generation runs in two passes. The first walks the view tree and collects
the message variants its event props reference (`CollectedSymbols`); the
second emits, in order, the `Msg` enum, the widget class with annotated
fields, its constructor and `default()`, then `on()` and `view()`.
"""

import keyword

from ..core.json import safe_json_dumps
from ..core.logging_config import get_logger
from ..lang.ast import (
    ArrayLit,
    Assign,
    Binary,
    Call,
    Expr,
    ExprStmt,
    FnDecl,
    ForStmt,
    Ident,
    IsStmt,
    Let,
    Literal,
    Member,
    NodeExpr,
    Stmt,
    Unary,
)
from ..lang.evaluator import zero_value
from ..node import Node, Value
from .errors import GenerationError, GenerationErrorKind
from .extractor import WILDCARD
from .model import GeneratedSource, WidgetInfo
from .sink import CodeSink
from .symbols import collect_symbols, message_variant
from .typemap import TypeMap

logger = get_logger(__name__)

HEADER = "# Generated by auto-ui. Do not edit by hand."

COMPONENT_IMPORT = "auto_ui.component.Component"
VIEW_IMPORT = "auto_ui.view.View"

_BINARY_OPS = {"&&": "and", "||": "or"}


def py_literal(value: Value) -> str:
    """Python source for a plain runtime value."""
    match value:
        case None:
            return "None"
        case bool():
            return "True" if value else "False"
        case int() | float():
            return repr(value)
        case str():
            return safe_json_dumps(value)
        case list() | tuple():
            return "[" + ", ".join(py_literal(v) for v in value) + "]"
        case dict():
            return "{" + ", ".join(f"{py_literal(k)}: {py_literal(v)}" for k, v in value.items()) + "}"
    raise GenerationError(
        GenerationErrorKind.CODEGEN, f"Cannot emit literal of type {type(value).__name__}"
    )


class WidgetGenerator:
    """Emits one widget into a shared sink."""

    def __init__(
        self,
        info: WidgetInfo,
        sink: CodeSink,
        type_map: TypeMap,
        msg_name: str = "Msg",
    ) -> None:
        self.info = info
        self.sink = sink
        self.type_map = type_map
        self.msg_name = msg_name
        self.fields = set(info.model.names())
        self.methods = set(info.methods)

    def generate(self) -> list[str]:
        """Emit the widget; returns its message variants."""
        self._validate()

        # Pass 1
        symbols = collect_symbols(self.info.view.root)
        variants = symbols.sorted_variants()
        for variant in variants:
            if not variant.isidentifier() or keyword.iskeyword(variant):
                raise GenerationError(
                    GenerationErrorKind.CODEGEN,
                    f"message variant '{variant}' in widget '{self.info.name}' "
                    "is not a valid Python identifier",
                )

        # Pass 2
        self.sink.add_import("enum.Enum")
        self.sink.add_import(COMPONENT_IMPORT)
        self.sink.add_import(VIEW_IMPORT)
        self._emit_msg(variants)
        self.sink.blank(2)
        self._emit_class(variants)
        logger.debug(
            "widget_generated",
            widget=self.info.name,
            variants=variants,
            kinds=sorted(symbols.kinds),
        )
        return variants

    def _validate(self) -> None:
        names = [self.info.name, *self.fields]
        for fn in self.info.helpers:
            names += [fn.name, *(param.name for param in fn.params)]
        for name in names:
            if not name.isidentifier() or keyword.iskeyword(name):
                raise GenerationError(
                    GenerationErrorKind.CODEGEN,
                    f"'{name}' in widget '{self.info.name}' is not a valid Python identifier",
                )

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _emit_msg(self, variants: list[str]) -> None:
        sink = self.sink
        sink.line(f"class {self.msg_name}(Enum):")
        sink.indent()
        if not variants:
            sink.line("pass")
        for variant in variants:
            sink.line(f"{variant} = {py_literal(variant)}")
        sink.dedent()

    def _emit_class(self, variants: list[str]) -> None:
        sink = self.sink
        info = self.info
        sink.line(f"class {info.name}(Component[{self.msg_name}]):")
        sink.indent()

        annotations = []
        for field in info.model.fields:
            annotation = self.type_map.annotation(field.type_name)
            if "Any" in annotation:
                sink.add_import("typing.Any")
            annotations.append((field.name, annotation))
            sink.line(f"{field.name}: {annotation}")
        if annotations:
            sink.blank()

        params = "".join(f", {name}: {annotation}" for name, annotation in annotations)
        sink.line(f"def __init__(self{params}) -> None:")
        sink.indent()
        for name, _ in annotations:
            sink.line(f"self.{name} = {name}")
        if not annotations:
            sink.line("pass")
        sink.dedent()
        sink.blank()

        defaults = []
        for field in info.model.fields:
            value = field.default if field.default is not None else zero_value(field.type_name)
            defaults.append(py_literal(value))
        sink.line("@classmethod")
        sink.line(f'def default(cls) -> "{info.name}":')
        sink.indent()
        sink.line(f"return cls({', '.join(defaults)})")
        sink.dedent()
        sink.blank()

        for fn in info.helpers:
            self._emit_helper(fn)
            sink.blank()

        self._emit_on(variants)
        sink.blank()
        self._emit_view()
        sink.dedent()

    def _emit_on(self, variants: list[str]) -> None:
        sink = self.sink
        param = self.info.on_param or "msg"
        handlers = self.info.handlers
        sink.line(f"def on(self, {param}: {self.msg_name}) -> None:")
        sink.indent()

        unreferenced = sorted(k for k in handlers if k != WILDCARD and k not in variants)
        for variant in unreferenced:
            sink.line(f"# no view event references {self.msg_name}.{variant}")

        if not variants and WILDCARD not in handlers:
            sink.line("pass")
        else:
            sink.line(f"match {param}:")
            sink.indent()
            locals_ = {param}
            for variant in variants:
                sink.line(f"case {self.msg_name}.{variant}:")
                self._emit_block(handlers.get(variant, []), set(locals_))
            if WILDCARD in handlers:
                sink.line("case _:")
                self._emit_block(handlers[WILDCARD], set(locals_))
            sink.dedent()
        sink.dedent()

    def _emit_helper(self, fn: FnDecl) -> None:
        sink = self.sink
        params = [param.name for param in fn.params]
        sink.line(f"def {fn.name}(self{''.join(f', {p}' for p in params)}):")
        locals_ = set(params)
        sink.indent()
        if not fn.body:
            sink.line("pass")
        for stmt in fn.body[:-1]:
            self.emit_stmt(stmt, locals_)
        if fn.body:
            last = fn.body[-1]
            # The last expression is the helper's value
            if isinstance(last, ExprStmt):
                sink.line(f"return {self.expr(last.expr, locals_)}")
            else:
                self.emit_stmt(last, locals_)
        sink.dedent()

    def _emit_view(self) -> None:
        sink = self.sink
        sink.line(f"def view(self) -> View[{self.msg_name}]:")
        sink.indent()
        self.emit_node(self.info.view.root, prefix="return ")
        sink.dedent()

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _emit_block(self, stmts: list[Stmt], locals_: set[str]) -> None:
        self.sink.indent()
        if not stmts:
            self.sink.line("pass")
        for stmt in stmts:
            self.emit_stmt(stmt, locals_)
        self.sink.dedent()

    def emit_stmt(self, stmt: Stmt, locals_: set[str]) -> None:
        sink = self.sink
        match stmt:
            case ExprStmt(expr=expr):
                sink.line(self.expr(expr, locals_))
            case Let(name=name, value=value):
                sink.line(f"{name} = {self.expr(value, locals_)}")
                locals_.add(name)
            case Assign(target=target, op=op, value=value):
                sink.line(f"{self.expr(target, locals_)} {op} {self.expr(value, locals_)}")
            case IsStmt(subject=subject, arms=arms):
                sink.line(f"match {self.expr(subject, locals_)}:")
                sink.indent()
                for arm in arms:
                    pattern = "_" if arm.pattern is None else self.expr(arm.pattern, locals_)
                    sink.line(f"case {pattern}:")
                    self._emit_block(arm.body, set(locals_))
                sink.dedent()
            case ForStmt(var=var, iterable=iterable, body=body):
                sink.line(f"for {var} in {self.expr(iterable, locals_)}:")
                self._emit_block(body, locals_ | {var})
            case _:
                sink.line(f"pass  # unsupported statement: {type(stmt).__name__}")

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def value(self, value: Value, locals_: set[str] | None = None) -> str:
        """Python source for a static node value (AST or evaluated literal)."""
        if isinstance(value, Expr):
            return self.expr(value, locals_ or set())
        if isinstance(value, Node):
            return "View.empty()"
        return py_literal(value)

    def message(self, value: Value) -> str:
        variant = message_variant(value)
        if variant is not None:
            return f"{self.msg_name}.{variant}"
        return self.value(value)

    def expr(self, expr: Expr, locals_: set[str]) -> str:
        match expr:
            case Literal(value=value):
                return py_literal(value)
            case ArrayLit(items=items):
                return "[" + ", ".join(self.expr(item, locals_) for item in items) + "]"
            case Ident(name=name):
                if name in locals_ or name == "self":
                    return name
                if name in self.fields:
                    return f"self.{name}"
                return name
            case Unary(op="!", operand=operand):
                return f"not {self._operand(operand, locals_)}"
            case Unary(op=op, operand=operand):
                return f"{op}{self._operand(operand, locals_)}"
            case Binary(op=op, left=left, right=right):
                lhs = self._operand(left, locals_)
                rhs = self._operand(right, locals_)
                if op == "+" and _is_str_literal(left) and not _is_str_literal(right):
                    rhs = f"str({self.expr(right, locals_)})"
                elif op == "+" and _is_str_literal(right) and not _is_str_literal(left):
                    lhs = f"str({self.expr(left, locals_)})"
                return f"{lhs} {_BINARY_OPS.get(op, op)} {rhs}"
            case Member(obj=Ident(name="Msg"), name=name) if "Msg" not in locals_:
                return f"{self.msg_name}.{name}"
            case Member(obj=obj, name=name):
                return f"{self.expr(obj, locals_)}.{name}"
            case Call(callee=Ident(name=name), args=args):
                rendered = ", ".join(self.expr(arg, locals_) for arg in args)
                if name in self.methods and name not in locals_:
                    return f"self.{name}({rendered})"
                return f"{name}({rendered})"
            case Call(callee=callee, args=args):
                rendered = ", ".join(self.expr(arg, locals_) for arg in args)
                return f"{self.expr(callee, locals_)}({rendered})"
            case NodeExpr(kind=kind):
                return f"View.empty()  # nested node: {kind}"
        raise GenerationError(
            GenerationErrorKind.CODEGEN,
            f"Cannot emit expression {type(expr).__name__}",
            line=getattr(expr, "line", None),
        )

    def _operand(self, expr: Expr, locals_: set[str]) -> str:
        text = self.expr(expr, locals_)
        return f"({text})" if isinstance(expr, Binary) else text

    # ------------------------------------------------------------------
    # View tree
    # ------------------------------------------------------------------

    def emit_node(self, node: Node, prefix: str = "", suffix: str = "") -> None:
        """
        Emit one builder-chain expression for `node`.

        Containers indent before visiting their children and dedent after.
        Unknown kinds render as an empty view with a marker comment.
        """
        match node.kind:
            case "col" | "column" | "row":
                self._emit_layout(node, prefix, suffix)
            case "center":
                self._emit_single(node, "View.container", ".center().build()", prefix, suffix)
            case "container":
                tail = self._chain(
                    node,
                    [("padding", "padding"), ("width", "width"), ("height", "height")],
                    flags=["center_x", "center_y"],
                )
                tail += self._chain(node, [("style", "style")])
                self._emit_single(node, "View.container", f"{tail}.build()", prefix, suffix)
            case "scrollable":
                tail = self._chain(
                    node, [("width", "width"), ("height", "height"), ("style", "style")]
                )
                self._emit_single(node, "View.scrollable", f"{tail}.build()", prefix, suffix)
            case "text" | "label":
                self.sink.line(f"{prefix}{self._text_call(node)}{suffix}")
            case "button":
                self.sink.line(f"{prefix}{self._button_call(node)}{suffix}")
            case "input":
                tail = self._chain(
                    node,
                    [("value", "value"), ("width", "width")],
                    messages=[("on_change", "on_change")],
                    flags=["password"],
                )
                tail += self._chain(node, [("style", "style")])
                self.sink.line(f"{prefix}View.input({self._main_arg(node)}){tail}.build(){suffix}")
            case "checkbox":
                head = f"View.checkbox({self._prop(node, 'is_checked', 'False')}, {self._main_arg(node)})"
                tail = self._chain(
                    node, [("style", "with_style")], messages=[("on_toggle", "with_toggle")]
                )
                self.sink.line(f"{prefix}{head}{tail}{suffix}")
            case "radio":
                head = f"View.radio({self._prop(node, 'is_selected', 'False')}, {self._main_arg(node)})"
                tail = self._chain(
                    node, [("style", "with_style")], messages=[("on_select", "with_select")]
                )
                self.sink.line(f"{prefix}{head}{tail}{suffix}")
            case "select":
                head = f"View.select({self._prop(node, 'options', '[]')})"
                tail = self._chain(
                    node,
                    [("selected_index", "selected"), ("style", "with_style")],
                    messages=[("on_select", "on_choose")],
                )
                self.sink.line(f"{prefix}{head}{tail}{suffix}")
            case "list":
                self._emit_list(node, prefix, suffix)
            case "table":
                self._emit_table(node, prefix, suffix)
            case kind:
                self.sink.line(f"{prefix}View.empty(){suffix}  # unknown call: {kind}")

    def _emit_layout(self, node: Node, prefix: str, suffix: str) -> None:
        head = "View.row()" if node.kind == "row" else "View.col()"
        head += self._chain(
            node, [("spacing", "spacing"), ("padding", "padding"), ("style", "style")]
        )
        if not node.children:
            self.sink.line(f"{prefix}{head}.build(){suffix}")
            return
        self.sink.line(f"{prefix}{head}.children([")
        self._emit_children(node.children)
        self.sink.line(f"]).build(){suffix}")

    def _emit_single(self, node: Node, call: str, tail: str, prefix: str, suffix: str) -> None:
        if not node.children:
            self.sink.line(f"{prefix}{call}(View.empty()){tail}{suffix}")
            return
        self.sink.line(f"{prefix}{call}(")
        self.sink.indent()
        self.emit_node(node.children[0])
        self.sink.dedent()
        self.sink.line(f"){tail}{suffix}")

    def _emit_list(self, node: Node, prefix: str, suffix: str) -> None:
        tail = self._chain(node, [("spacing", "spacing"), ("style", "style")])
        if not node.children:
            self.sink.line(f"{prefix}View.list([]){tail}.build(){suffix}")
            return
        self.sink.line(f"{prefix}View.list([")
        self._emit_children(node.children)
        self.sink.line(f"]){tail}.build(){suffix}")

    def _emit_table(self, node: Node, prefix: str, suffix: str) -> None:
        sink = self.sink
        tail = self._chain(
            node, [("spacing", "spacing"), ("col_spacing", "col_spacing"), ("style", "style")]
        )
        sink.line(f"{prefix}View.table(")
        sink.indent()

        sink.line("[")
        sink.indent()
        for header in node.children_of_kind("header"):
            if header.children:
                self.emit_node(header.children[0], suffix=",")
            else:
                sink.line(f"{self._text_call(header)},")
        sink.dedent()
        sink.line("],")

        sink.line("[")
        sink.indent()
        for row in node.children_of_kind("row"):
            sink.line("[")
            self._emit_children(row.children)
            sink.line("],")
        sink.dedent()
        sink.line("],")

        sink.dedent()
        sink.line(f"){tail}.build(){suffix}")

    def _emit_children(self, children: list[Node]) -> None:
        self.sink.indent()
        for child in children:
            self.emit_node(child, suffix=",")
        self.sink.dedent()

    def _text_call(self, node: Node) -> str:
        style = node.get_prop("style")
        extra = f", style={self.value(style)}" if style is not None else ""
        return f"View.text({self._main_arg(node)}{extra})"

    def _button_call(self, node: Node) -> str:
        onclick = node.get_prop("onclick")
        msg = self.message(onclick) if onclick is not None else "None"
        style = node.get_prop("style")
        extra = f", style={self.value(style)}" if style is not None else ""
        return f"View.button({self._main_arg(node)}, {msg}{extra})"

    def _main_arg(self, node: Node) -> str:
        return self.value(node.args[0]) if node.args else '""'

    def _prop(self, node: Node, key: str, default: str) -> str:
        return self.value(node.props[key]) if key in node.props else default

    def _chain(
        self,
        node: Node,
        options: list[tuple[str, str]],
        messages: list[tuple[str, str]] | None = None,
        flags: list[str] | None = None,
    ) -> str:
        """Builder calls for the props present on `node`."""
        parts = []
        for prop, method in options:
            if node.props.get(prop) is not None:
                parts.append(f".{method}({self.value(node.props[prop])})")
        for prop, method in messages or []:
            if node.props.get(prop) is not None:
                parts.append(f".{method}({self.message(node.props[prop])})")
        for flag in flags or []:
            if node.props.get(flag) is True:
                parts.append(f".{flag}()")
        return "".join(parts)


def _is_str_literal(expr: Expr) -> bool:
    return isinstance(expr, Literal) and isinstance(expr.value, str)


def emit_widget(
    info: WidgetInfo,
    sink: CodeSink,
    *,
    type_map: TypeMap | None = None,
    msg_name: str = "Msg",
) -> list[str]:
    """Emit `info` into a shared sink without closing it; returns the variants."""
    return WidgetGenerator(info, sink, type_map or TypeMap(), msg_name).generate()


def generate_widget(
    info: WidgetInfo,
    *,
    type_map: TypeMap | None = None,
    indent_width: int = 4,
) -> GeneratedSource:
    """
    Generate a standalone Python module for one widget.

    Args:
        info: Extracted widget
        type_map: Field type mapping (defaults to `TypeMap()`)
        indent_width: Spaces per indentation level

    Returns:
        Generated source with the widget name and its message variants
    """
    sink = CodeSink(indent_width=indent_width, header=[HEADER])
    variants = emit_widget(info, sink, type_map=type_map)
    return GeneratedSource(
        text=sink.done(), widgets=[info.name], variants={info.name: variants}
    )
