"""Tree-walking interpreter for Auto UI programs.

`AutoInterpreter` is the reference `InterpreterRuntime` used by the bridge:
it runs a whole program, exposes per-widget field defaults and executes
widget methods against a caller-owned field table.
"""

import copy
from dataclasses import dataclass, field

from ..core.logging_config import get_logger
from ..node import Node, Value, value_type_name
from .ast import (
    ArrayLit,
    Assign,
    Binary,
    Call,
    Code,
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
    TypeDecl,
    Unary,
    is_widget_type,
)
from .errors import EvalError
from .evaluator import apply_binary, apply_unary, format_value, truthy, zero_value
from .parser import parse

logger = get_logger(__name__)

BUILTINS = frozenset({"str", "len", "print"})


class _Scope:
    def __init__(self, values: dict[str, Value] | None = None) -> None:
        # `values` may be a caller-owned dict (widget fields), written in place
        self.values = values if values is not None else {}
        self.consts: set[str] = set()


@dataclass
class _Frame:
    scopes: list[_Scope]
    widget: str | None = None
    fields: dict[str, Value] | None = None
    children: list[Node] | None = None

    def child(self, collect: list[Node] | None = None) -> "_Frame":
        return _Frame(
            scopes=[*self.scopes, _Scope()],
            widget=self.widget,
            fields=self.fields,
            children=collect if collect is not None else self.children,
        )


@dataclass
class _Program:
    code: Code
    types: dict[str, TypeDecl] = field(default_factory=dict)
    functions: dict[str, FnDecl] = field(default_factory=dict)
    globals: _Scope = field(default_factory=_Scope)
    widgets: list[str] = field(default_factory=list)
    defaults: dict[str, dict[str, Value]] = field(default_factory=dict)
    result: Value = None


class AutoInterpreter:
    """
    Runs Auto UI source and widget methods.

    `interpret` is atomic: the new program replaces the previous one only
    after parsing and top-level evaluation both succeed.

    Examples:
        >>> runtime = AutoInterpreter()
        >>> runtime.interpret("1 + 2")
        3
    """

    def __init__(self) -> None:
        self._program: _Program | None = None
        self.output: list[str] = []

    # ------------------------------------------------------------------
    # InterpreterRuntime
    # ------------------------------------------------------------------

    def interpret(self, code: str, file: str | None = None) -> Value:
        """
        Parse and run a program.

        Args:
            code: Program text
            file: Optional path for error locations

        Returns:
            Result of `main()` when declared, otherwise the last top-level expression

        Raises:
            ParseError: Source does not parse
            EvalError: Evaluation failed; the previous program stays active
        """
        program = _Program(code=parse(code, file))
        try:
            self._load(program)
        except RecursionError as e:
            raise EvalError("Maximum recursion depth exceeded", file=file) from e
        except EvalError as e:
            e.file = e.file or file
            raise

        self._program = program
        logger.debug(
            "program_loaded",
            file=file,
            widgets=program.widgets,
            functions=sorted(program.functions),
        )
        return program.result

    def widget_defaults(self) -> dict[str, dict[str, Value]]:
        if self._program is None:
            return {}
        return copy.deepcopy(self._program.defaults)

    def main_widget(self) -> str | None:
        """Last widget type declared in the program."""
        if self._program is None or not self._program.widgets:
            return None
        return self._program.widgets[-1]

    def invoke_method(
        self,
        widget_name: str,
        method: str,
        args: list[Value],
        *,
        fields: dict[str, Value],
    ) -> Value:
        """
        Run a widget method with `fields` bound as the widget's state.

        Assignments to fields (bare or through `self.`) write into `fields`.
        """
        program = self._require_program()
        decl = program.types.get(widget_name)
        if decl is None:
            raise EvalError(f"Unknown widget '{widget_name}'")
        fn = decl.method(method)
        if fn is None:
            raise EvalError(f"Widget '{widget_name}' has no method '{method}'", decl.line)

        if method == "on" and args and isinstance(args[0], str) and "." not in args[0]:
            args = [f"{widget_name}.{args[0]}", *args[1:]]

        frame = _Frame(scopes=[program.globals], widget=widget_name, fields=fields)
        executor = _Executor(program, self.output)
        try:
            return executor.call(fn, list(args), frame, method=True)
        except RecursionError as e:
            raise EvalError("Maximum recursion depth exceeded", fn.line) from e

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _require_program(self) -> _Program:
        if self._program is None:
            raise EvalError("No program loaded")
        return self._program

    def _load(self, program: _Program) -> None:
        # Declarations are hoisted
        for stmt in program.code.stmts:
            if isinstance(stmt, TypeDecl):
                program.types[stmt.name] = stmt
                if is_widget_type(stmt):
                    program.widgets.append(stmt.name)
            elif isinstance(stmt, FnDecl):
                program.functions[stmt.name] = stmt

        executor = _Executor(program, self.output)
        frame = _Frame(scopes=[program.globals])
        result: Value = None
        for stmt in program.code.stmts:
            if isinstance(stmt, (TypeDecl, FnDecl)):
                continue
            value = executor.exec_stmt(stmt, frame)
            if isinstance(stmt, ExprStmt):
                result = value

        for name in program.widgets:
            decl = program.types[name]
            widget_frame = _Frame(scopes=[program.globals], widget=name)
            program.defaults[name] = {
                member.name: (
                    executor.eval(member.default, widget_frame)
                    if member.default is not None
                    else zero_value(member.type_name)
                )
                for member in decl.members
            }

        main = program.functions.get("main")
        program.result = executor.call(main, [], frame) if main else result


class _Executor:
    """Evaluates statements and expressions against one loaded program."""

    def __init__(self, program: _Program, output: list[str]) -> None:
        self.program = program
        self.output = output

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def call(
        self, fn: FnDecl, args: list[Value], frame: _Frame, *, method: bool = False
    ) -> Value:
        scope = _Scope()
        for index, param in enumerate(fn.params):
            scope.values[param.name] = args[index] if index < len(args) else None

        if method and frame.fields is not None:
            fn_frame = _Frame(
                scopes=[self.program.globals, _Scope(frame.fields), scope],
                widget=frame.widget,
                fields=frame.fields,
            )
        else:
            fn_frame = _Frame(
                scopes=[self.program.globals, scope],
                widget=frame.widget if method else None,
            )
        return self.exec_block(fn.body, fn_frame)

    def exec_block(self, stmts: list[Stmt], frame: _Frame) -> Value:
        result: Value = None
        for stmt in stmts:
            result = self.exec_stmt(stmt, frame)
        return result

    def exec_stmt(self, stmt: Stmt, frame: _Frame) -> Value:
        match stmt:
            case ExprStmt(expr=expr):
                value = self.eval(expr, frame)
                if frame.children is not None and isinstance(value, Node):
                    frame.children.append(value)
                return value
            case Let(name=name, value=expr, mutable=mutable):
                scope = frame.scopes[-1]
                scope.values[name] = self.eval(expr, frame)
                if mutable:
                    scope.consts.discard(name)
                else:
                    scope.consts.add(name)
                return None
            case Assign():
                self._assign(stmt, frame)
                return None
            case IsStmt(subject=subject, arms=arms):
                value = self.eval(subject, frame)
                for arm in arms:
                    if arm.pattern is None or self.eval(arm.pattern, frame) == value:
                        return self.exec_block(arm.body, frame.child())
                return None
            case ForStmt(var=var, iterable=iterable, body=body, line=line):
                items = self.eval(iterable, frame)
                if isinstance(items, str):
                    items = list(items)
                if not isinstance(items, (list, tuple)):
                    raise EvalError(f"Cannot iterate over {value_type_name(items)}", line)
                for item in items:
                    inner = frame.child()
                    inner.scopes[-1].values[var] = item
                    self.exec_block(body, inner)
                return None
            case TypeDecl() | FnDecl():
                raise EvalError("Declarations are only allowed at the top level", stmt.line)
        raise EvalError(f"Unsupported statement {type(stmt).__name__}")

    def _assign(self, stmt: Assign, frame: _Frame) -> None:
        target = stmt.target
        if isinstance(target, Member):
            if not (isinstance(target.obj, Ident) and target.obj.name == "self"):
                raise EvalError("Only self fields can be assigned", stmt.line)
            if frame.fields is None or target.name not in frame.fields:
                raise EvalError(f"Unknown field '{target.name}'", stmt.line)
            values = frame.fields
            name = target.name
        else:
            name = target.name
            scope = self._find_scope(name, frame)
            if scope is None:
                raise EvalError(f"Undefined name '{name}'", stmt.line)
            if name in scope.consts:
                raise EvalError(f"Cannot assign to immutable '{name}'", stmt.line)
            values = scope.values

        value = self.eval(stmt.value, frame)
        if stmt.op != "=":
            value = apply_binary(stmt.op[0], values[name], value, stmt.line)
        values[name] = value

    @staticmethod
    def _find_scope(name: str, frame: _Frame) -> _Scope | None:
        for scope in reversed(frame.scopes):
            if name in scope.values:
                return scope
        return None

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def eval(self, expr: Expr, frame: _Frame) -> Value:
        match expr:
            case Literal(value=value):
                return value
            case ArrayLit(items=items):
                return [self.eval(item, frame) for item in items]
            case Ident(name=name, line=line):
                if name == "self" and frame.fields is not None:
                    return frame.fields
                scope = self._find_scope(name, frame)
                if scope is None:
                    raise EvalError(f"Undefined name '{name}'", line)
                return scope.values[name]
            case Unary(op=op, operand=operand, line=line):
                return apply_unary(op, self.eval(operand, frame), line)
            case Binary(op="&&", left=left, right=right):
                return truthy(self.eval(left, frame)) and truthy(self.eval(right, frame))
            case Binary(op="||", left=left, right=right):
                return truthy(self.eval(left, frame)) or truthy(self.eval(right, frame))
            case Binary(op=op, left=left, right=right, line=line):
                return apply_binary(op, self.eval(left, frame), self.eval(right, frame), line)
            case Member():
                return self._member(expr, frame)
            case Call():
                return self._call_expr(expr, frame)
            case NodeExpr():
                return self._node(expr, frame)
        raise EvalError(f"Unsupported expression {type(expr).__name__}")

    def _member(self, expr: Member, frame: _Frame) -> Value:
        obj = expr.obj
        if isinstance(obj, Ident) and obj.name == "Msg" and self._find_scope("Msg", frame) is None:
            return f"{frame.widget or 'Msg'}.{expr.name}"

        value = self.eval(obj, frame)
        if isinstance(value, dict):
            if expr.name not in value:
                raise EvalError(f"Unknown field '{expr.name}'", expr.line)
            return value[expr.name]
        if isinstance(value, Node):
            return value.get_prop(expr.name)
        if expr.name == "len" and isinstance(value, (str, list)):
            return len(value)
        raise EvalError(f"{value_type_name(value)} has no member '{expr.name}'", expr.line)

    def _call_expr(self, expr: Call, frame: _Frame) -> Value:
        callee = expr.callee
        if isinstance(callee, Member) and isinstance(callee.obj, Ident) and callee.obj.name == "self":
            return self._call_method(callee.name, expr, frame)
        if not isinstance(callee, Ident):
            raise EvalError("Only named functions can be called", expr.line)

        name = callee.name
        args = [self.eval(arg, frame) for arg in expr.args]
        if name in BUILTINS:
            return self._builtin(name, args, expr.line)
        if name in self.program.functions:
            return self.call(self.program.functions[name], args, frame)
        if frame.widget and self.program.types[frame.widget].method(name):
            return self._call_method(name, expr, frame, args)
        # Unknown callee: a widget node without a body
        return Node(name, args=args)

    def _call_method(
        self, name: str, expr: Call, frame: _Frame, args: list[Value] | None = None
    ) -> Value:
        decl = self.program.types.get(frame.widget or "")
        fn = decl.method(name) if decl else None
        if fn is None:
            raise EvalError(f"Unknown method '{name}'", expr.line)
        if args is None:
            args = [self.eval(arg, frame) for arg in expr.args]
        return self.call(fn, args, frame, method=True)

    def _builtin(self, name: str, args: list[Value], line: int) -> Value:
        match name:
            case "str":
                return format_value(args[0]) if args else ""
            case "len":
                if len(args) != 1:
                    raise EvalError("len() takes exactly one argument", line)
                value = args[0]
                if isinstance(value, Node):
                    return len(value.children)
                if isinstance(value, (str, list, dict)):
                    return len(value)
                raise EvalError(f"len() of {value_type_name(value)}", line)
            case "print":
                text = " ".join(format_value(arg) for arg in args)
                self.output.append(text)
                logger.info("program_output", text=text)
                return None
        raise EvalError(f"Unknown builtin '{name}'", line)

    def _node(self, expr: NodeExpr, frame: _Frame) -> Node:
        node = Node(
            expr.kind,
            args=[self.eval(arg, frame) for arg in expr.args],
            props={prop.name: self.eval(prop.value, frame) for prop in expr.props},
        )
        if expr.body:
            self.exec_block(expr.body, frame.child(collect=node.children))
        return node

