"""Syntax tree for the Auto UI language subset.

Expressions and statements are plain dataclasses. Every node carries the
source line it started on so later stages can report locations.
"""

from dataclasses import dataclass, field
from typing import Any


# ============================================================================
# Expressions
# ============================================================================


@dataclass
class Expr:
    pass


@dataclass
class Literal(Expr):
    value: Any  # None | bool | int | float | str
    line: int = 0


@dataclass
class Ident(Expr):
    name: str
    line: int = 0


@dataclass
class ArrayLit(Expr):
    items: list[Expr] = field(default_factory=list)
    line: int = 0


@dataclass
class Unary(Expr):
    op: str  # "-" | "!"
    operand: Expr
    line: int = 0


@dataclass
class Binary(Expr):
    op: str
    left: Expr
    right: Expr
    line: int = 0


@dataclass
class Member(Expr):
    """`obj.name`, e.g. `self.count` or `Msg.Inc`."""

    obj: Expr
    name: str
    line: int = 0


@dataclass
class Call(Expr):
    callee: Expr
    args: list[Expr] = field(default_factory=list)
    line: int = 0


@dataclass
class Prop:
    name: str
    value: Expr
    line: int = 0


@dataclass
class NodeExpr(Expr):
    """`kind(args) { prop: value  child... }`"""

    kind: str
    args: list[Expr] = field(default_factory=list)
    props: list[Prop] = field(default_factory=list)
    body: list["Stmt"] = field(default_factory=list)
    line: int = 0


# ============================================================================
# Statements
# ============================================================================


@dataclass
class Stmt:
    pass


@dataclass
class ExprStmt(Stmt):
    expr: Expr
    line: int = 0


@dataclass
class Let(Stmt):
    name: str
    value: Expr
    type_name: str | None = None
    mutable: bool = False
    line: int = 0


@dataclass
class Assign(Stmt):
    target: Expr  # Ident | Member
    op: str  # "=" | "+=" | "-=" | "*=" | "/="
    value: Expr
    line: int = 0


@dataclass
class IsArm:
    pattern: Expr | None  # None matches anything (`else` / `_`)
    body: list[Stmt] = field(default_factory=list)
    line: int = 0


@dataclass
class IsStmt(Stmt):
    subject: Expr
    arms: list[IsArm] = field(default_factory=list)
    line: int = 0


@dataclass
class ForStmt(Stmt):
    var: str
    iterable: Expr
    body: list[Stmt] = field(default_factory=list)
    line: int = 0


# ============================================================================
# Declarations
# ============================================================================


@dataclass
class Param:
    name: str
    type_name: str | None = None


@dataclass
class FnDecl(Stmt):
    name: str
    params: list[Param] = field(default_factory=list)
    body: list[Stmt] = field(default_factory=list)
    return_type: str | None = None
    line: int = 0


@dataclass
class FieldDecl:
    name: str
    type_name: str
    default: Expr | None = None
    line: int = 0


@dataclass
class TypeDecl(Stmt):
    name: str
    specs: list[str] = field(default_factory=list)
    members: list[FieldDecl] = field(default_factory=list)
    methods: list[FnDecl] = field(default_factory=list)
    line: int = 0

    def method(self, name: str) -> FnDecl | None:
        for fn in self.methods:
            if fn.name == name:
                return fn
        return None


@dataclass
class Code:
    """A parsed source unit."""

    stmts: list[Stmt] = field(default_factory=list)
    file: str | None = None

    def types(self) -> list[TypeDecl]:
        return [s for s in self.stmts if isinstance(s, TypeDecl)]

    def functions(self) -> list[FnDecl]:
        return [s for s in self.stmts if isinstance(s, FnDecl)]


def is_widget_type(decl: TypeDecl) -> bool:
    """A type is a widget when it is declared `is Widget` or defines view()."""
    return "Widget" in decl.specs or decl.method("view") is not None
