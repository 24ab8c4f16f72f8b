"""Widget Extractor - type declaration → WidgetInfo."""

from ..core.config import Policy, get_settings
from ..core.logging_config import get_logger
from ..lang.ast import Call, Expr, ExprStmt, Ident, IsStmt, NodeExpr, TypeDecl
from ..lang.evaluator import eval_basic_expr, is_basic_expr
from ..lang.interpreter import BUILTINS
from ..node import Node, Value, placeholder_node
from .errors import GenerationError, GenerationErrorKind
from .model import WidgetField, WidgetInfo, WidgetModel, WidgetView
from .symbols import message_variant

logger = get_logger(__name__)

WILDCARD = "_"
RESERVED_METHODS = ("view", "on")


def extract_widget(
    decl: TypeDecl, *, policy: Policy | None = None, file: str | None = None
) -> WidgetInfo:
    """
    Build the generator's view of a widget declaration.

    Field defaults are evaluated with the basic evaluator (non-literal
    defaults become None). The view tree comes from the last statement of
    `view()`; when there is no usable view a placeholder node is used,
    or `GenerationError` is raised under STRICT policy.

    Args:
        decl: Widget type declaration
        policy: Fallback policy (defaults to ``Settings.extractor_policy``)
        file: Source path for error locations

    Returns:
        Extracted widget description
    """
    policy = policy or get_settings().extractor_policy
    fields = [
        WidgetField(name=m.name, type_name=m.type_name, default=eval_basic_expr(m.default))
        for m in decl.members
    ]
    on_param, handlers = extract_handlers(decl)
    return WidgetInfo(
        name=decl.name,
        model=WidgetModel(fields=fields),
        view=WidgetView(root=_extract_view(decl, policy, file)),
        handlers=handlers,
        on_param=on_param,
        methods=[fn.name for fn in decl.methods],
        helpers=[fn for fn in decl.methods if fn.name not in RESERVED_METHODS],
    )


def _extract_view(decl: TypeDecl, policy: Policy, file: str | None) -> Node:
    fn = decl.method("view")
    if fn is None:
        reason = "no view() method"
    elif not fn.body:
        reason = "view() body is empty"
    else:
        last = fn.body[-1]
        node = node_from_expr(last.expr) if isinstance(last, ExprStmt) else None
        if node is not None:
            return node
        reason = "last statement of view() is not a node"

    if policy == Policy.STRICT:
        raise GenerationError(
            GenerationErrorKind.CODEGEN,
            f"Widget '{decl.name}': {reason}",
            file=file,
            line=fn.line if fn else decl.line,
        )
    logger.warning("view_placeholder", widget=decl.name, reason=reason)
    return placeholder_node()


def node_from_expr(expr: Expr) -> Node | None:
    """Convert a node-producing expression into a static Node, or None."""
    match expr:
        case NodeExpr(kind=kind, args=args, props=props, body=body):
            node = Node(
                kind,
                args=[static_value(arg) for arg in args],
                props={prop.name: static_value(prop.value) for prop in props},
            )
            for stmt in body:
                child = node_from_expr(stmt.expr) if isinstance(stmt, ExprStmt) else None
                if child is None:
                    logger.debug("view_statement_skipped", kind=kind, statement=type(stmt).__name__)
                    continue
                node.children.append(child)
            return node
        case Call(callee=Ident(name=name), args=args) if name not in BUILTINS:
            return Node(name, args=[static_value(arg) for arg in args])
    return None


def static_value(expr: Expr) -> Value:
    """Literal-only expressions are evaluated; everything else stays AST."""
    return eval_basic_expr(expr) if is_basic_expr(expr) else expr


def extract_handlers(decl: TypeDecl) -> tuple[str | None, dict[str, list]]:
    """
    Collect the arms of `on(ev) { is ev { Msg.X => ... } }` keyed by variant.

    Returns:
        The event parameter name and the arms; a wildcard arm is keyed ``"_"``
    """
    fn = decl.method("on")
    if fn is None:
        return None, {}
    param = fn.params[0].name if fn.params else None

    handlers: dict[str, list] = {}
    for stmt in fn.body:
        if not isinstance(stmt, IsStmt):
            continue
        if not (isinstance(stmt.subject, Ident) and stmt.subject.name == param):
            continue
        for arm in stmt.arms:
            key = WILDCARD if arm.pattern is None else message_variant(arm.pattern)
            if key is None:
                logger.debug("handler_pattern_skipped", widget=decl.name, line=arm.line)
                continue
            handlers.setdefault(key, arm.body)
    return param, handlers
