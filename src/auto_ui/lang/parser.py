"""Recursive-descent parser producing `auto_ui.lang.ast` trees."""

from .ast import (
    ArrayLit,
    Assign,
    Binary,
    Call,
    Code,
    Expr,
    ExprStmt,
    FieldDecl,
    FnDecl,
    ForStmt,
    Ident,
    IsArm,
    IsStmt,
    Let,
    Literal,
    Member,
    NodeExpr,
    Param,
    Prop,
    Stmt,
    TypeDecl,
    Unary,
)
from .errors import ParseError
from .lexer import Token, TokenKind, tokenize

ASSIGN_OPS = ("=", "+=", "-=", "*=", "/=")

# Binary operator precedence, loosest first
PRECEDENCE = (
    ("||",),
    ("&&",),
    ("==", "!="),
    ("<", "<=", ">", ">="),
    ("+", "-"),
    ("*", "/", "%"),
)


class Parser:
    """
    Parses a token stream into a `Code` unit.

    Node expressions (`col { ... }`) are recognised wherever an identifier is
    followed by a brace, except in `is` subjects and `for` iterables where
    the brace opens the statement body.
    """

    def __init__(self, source: str, file: str | None = None) -> None:
        self.file = file
        self.tokens = tokenize(source, file)
        self.pos = 0
        self.allow_brace = True

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    def peek(self, offset: int = 0) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def advance(self) -> Token:
        token = self.peek()
        if token.kind != TokenKind.EOF:
            self.pos += 1
        return token

    def at_end(self) -> bool:
        return self.peek().kind == TokenKind.EOF

    def error(self, message: str, token: Token | None = None) -> ParseError:
        token = token or self.peek()
        return ParseError(message, token.line, token.column, self.file)

    def expect_op(self, op: str) -> Token:
        token = self.peek()
        if not token.is_op(op):
            raise self.error(f"Expected '{op}', found {self._describe(token)}")
        return self.advance()

    def expect_keyword(self, word: str) -> Token:
        token = self.peek()
        if not token.is_keyword(word):
            raise self.error(f"Expected '{word}', found {self._describe(token)}")
        return self.advance()

    def expect_ident(self) -> Token:
        token = self.peek()
        if token.kind != TokenKind.IDENT:
            raise self.error(f"Expected identifier, found {self._describe(token)}")
        return self.advance()

    def skip_separators(self) -> None:
        while self.peek().is_op(",", ";"):
            self.advance()

    @staticmethod
    def _describe(token: Token) -> str:
        if token.kind == TokenKind.EOF:
            return "end of input"
        return f"'{token.value}'"

    # ------------------------------------------------------------------
    # Top level
    # ------------------------------------------------------------------

    def parse(self) -> Code:
        stmts: list[Stmt] = []
        self.skip_separators()
        while not self.at_end():
            stmts.append(self.statement())
            self.skip_separators()
        return Code(stmts=stmts, file=self.file)

    def type_name(self) -> str:
        if self.peek().is_op("["):
            self.advance()
            self.expect_op("]")
            return "[]" + self.type_name()
        return self.expect_ident().value

    def _at_type(self) -> bool:
        return self.peek().kind == TokenKind.IDENT or self.peek().is_op("[")

    def type_decl(self) -> TypeDecl:
        start = self.expect_keyword("type")
        decl = TypeDecl(name=self.expect_ident().value, line=start.line)
        if self.peek().is_keyword("is"):
            self.advance()
            decl.specs.append(self.expect_ident().value)
            while self.peek().is_op(","):
                self.advance()
                decl.specs.append(self.expect_ident().value)

        self.expect_op("{")
        self.skip_separators()
        while not self.peek().is_op("}"):
            if self.at_end():
                raise self.error(f"Unterminated type '{decl.name}'")
            if self.peek().is_keyword("fn"):
                decl.methods.append(self.fn_decl())
            else:
                decl.members.append(self.field_decl())
            self.skip_separators()
        self.expect_op("}")
        return decl

    def field_decl(self) -> FieldDecl:
        name = self.expect_ident()
        field = FieldDecl(name=name.value, type_name=self.type_name(), line=name.line)
        if self.peek().is_op("="):
            self.advance()
            field.default = self.expression()
        return field

    def fn_decl(self) -> FnDecl:
        start = self.expect_keyword("fn")
        fn = FnDecl(name=self.expect_ident().value, line=start.line)
        self.expect_op("(")
        while not self.peek().is_op(")"):
            param = Param(self.expect_ident().value)
            if self._at_type():
                param.type_name = self.type_name()
            fn.params.append(param)
            if not self.peek().is_op(")"):
                self.expect_op(",")
        self.expect_op(")")
        if self._at_type():
            fn.return_type = self.type_name()
        fn.body = self.block()
        return fn

    def block(self) -> list[Stmt]:
        self.expect_op("{")
        saved, self.allow_brace = self.allow_brace, True
        stmts: list[Stmt] = []
        self.skip_separators()
        while not self.peek().is_op("}"):
            if self.at_end():
                raise self.error("Unterminated block")
            stmts.append(self.statement())
            self.skip_separators()
        self.expect_op("}")
        self.allow_brace = saved
        return stmts

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def statement(self) -> Stmt:
        token = self.peek()
        if token.is_keyword("type"):
            return self.type_decl()
        if token.is_keyword("fn"):
            return self.fn_decl()
        if token.is_keyword("let", "var"):
            return self.let_stmt()
        if token.is_keyword("is"):
            return self.is_stmt()
        if token.is_keyword("for"):
            return self.for_stmt()

        expr = self.expression()
        if self.peek().is_op(*ASSIGN_OPS):
            op = self.advance().value
            if not isinstance(expr, (Ident, Member)):
                raise self.error("Invalid assignment target", token)
            return Assign(target=expr, op=op, value=self.expression(), line=token.line)
        return ExprStmt(expr=expr, line=token.line)

    def let_stmt(self) -> Let:
        start = self.advance()
        mutable = start.value == "var"
        if self.peek().is_keyword("mut"):
            self.advance()
            mutable = True
        name = self.expect_ident().value
        type_name = None
        if not self.peek().is_op("="):
            type_name = self.type_name()
        self.expect_op("=")
        return Let(
            name=name,
            value=self.expression(),
            type_name=type_name,
            mutable=mutable,
            line=start.line,
        )

    def is_stmt(self) -> IsStmt:
        start = self.expect_keyword("is")
        stmt = IsStmt(subject=self._no_brace_expression(), line=start.line)
        self.expect_op("{")
        self.skip_separators()
        while not self.peek().is_op("}"):
            if self.at_end():
                raise self.error("Unterminated 'is' statement")
            stmt.arms.append(self.is_arm())
            self.skip_separators()
        self.expect_op("}")
        return stmt

    def is_arm(self) -> IsArm:
        token = self.peek()
        pattern: Expr | None
        if token.is_keyword("else") or (token.kind == TokenKind.IDENT and token.value == "_"):
            self.advance()
            pattern = None
        else:
            pattern = self._no_brace_expression()
        self.expect_op("=>")
        if self.peek().is_op("{"):
            body = self.block()
        else:
            body = [self.statement()]
        return IsArm(pattern=pattern, body=body, line=token.line)

    def for_stmt(self) -> ForStmt:
        start = self.expect_keyword("for")
        var = self.expect_ident().value
        self.expect_keyword("in")
        iterable = self._no_brace_expression()
        return ForStmt(var=var, iterable=iterable, body=self.block(), line=start.line)

    def _no_brace_expression(self) -> Expr:
        saved, self.allow_brace = self.allow_brace, False
        try:
            return self.expression()
        finally:
            self.allow_brace = saved

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def expression(self) -> Expr:
        return self.binary(0)

    def binary(self, level: int) -> Expr:
        if level == len(PRECEDENCE):
            return self.unary()
        left = self.binary(level + 1)
        while self.peek().is_op(*PRECEDENCE[level]):
            op = self.advance()
            right = self.binary(level + 1)
            left = Binary(op=op.value, left=left, right=right, line=op.line)
        return left

    def unary(self) -> Expr:
        if self.peek().is_op("-", "!"):
            op = self.advance()
            return Unary(op=op.value, operand=self.unary(), line=op.line)
        return self.postfix()

    def postfix(self) -> Expr:
        expr = self.primary()
        while True:
            if self.peek().is_op("."):
                self.advance()
                name = self.expect_ident()
                expr = Member(obj=expr, name=name.value, line=name.line)
            elif self.peek().is_op("(") and not isinstance(expr, NodeExpr):
                expr = Call(callee=expr, args=self.call_args(), line=self.peek().line)
            else:
                return expr

    def call_args(self) -> list[Expr]:
        self.expect_op("(")
        saved, self.allow_brace = self.allow_brace, True
        args: list[Expr] = []
        while not self.peek().is_op(")"):
            args.append(self.expression())
            if not self.peek().is_op(")"):
                self.expect_op(",")
        self.expect_op(")")
        self.allow_brace = saved
        return args

    def primary(self) -> Expr:
        token = self.peek()
        match token.kind:
            case TokenKind.INT:
                self.advance()
                return Literal(int(token.value), line=token.line)
            case TokenKind.FLOAT:
                self.advance()
                return Literal(float(token.value), line=token.line)
            case TokenKind.STR:
                self.advance()
                return Literal(token.value, line=token.line)
            case TokenKind.KEYWORD if token.value in ("true", "false"):
                self.advance()
                return Literal(token.value == "true", line=token.line)
            case TokenKind.KEYWORD if token.value == "nil":
                self.advance()
                return Literal(None, line=token.line)
            case TokenKind.IDENT:
                return self.ident_or_node()
            case TokenKind.OP if token.value == "(":
                self.advance()
                saved, self.allow_brace = self.allow_brace, True
                expr = self.expression()
                self.allow_brace = saved
                self.expect_op(")")
                return expr
            case TokenKind.OP if token.value == "[":
                return self.array()
        raise self.error(f"Unexpected {self._describe(token)}")

    def array(self) -> ArrayLit:
        start = self.expect_op("[")
        items: list[Expr] = []
        while not self.peek().is_op("]"):
            items.append(self.expression())
            if not self.peek().is_op("]"):
                self.expect_op(",")
        self.expect_op("]")
        return ArrayLit(items=items, line=start.line)

    def ident_or_node(self) -> Expr:
        name = self.advance()
        nxt = self.peek()

        # kind "arg" [{ ... }]
        if nxt.kind == TokenKind.STR and nxt.line == name.line:
            self.advance()
            node = NodeExpr(kind=name.value, args=[Literal(nxt.value, line=nxt.line)], line=name.line)
            if self.allow_brace and self.peek().is_op("{"):
                self.node_body(node)
            return node

        # kind(args) { ... }  -- without a body this stays a call
        if nxt.is_op("("):
            args = self.call_args()
            if self.allow_brace and self.peek().is_op("{"):
                node = NodeExpr(kind=name.value, args=args, line=name.line)
                self.node_body(node)
                return node
            return Call(callee=Ident(name.value, line=name.line), args=args, line=name.line)

        # kind { ... }
        if nxt.is_op("{") and self.allow_brace:
            node = NodeExpr(kind=name.value, line=name.line)
            self.node_body(node)
            return node

        return Ident(name.value, line=name.line)

    def node_body(self, node: NodeExpr) -> None:
        self.expect_op("{")
        saved, self.allow_brace = self.allow_brace, True
        self.skip_separators()
        while not self.peek().is_op("}"):
            if self.at_end():
                raise self.error(f"Unterminated '{node.kind}' body")
            token = self.peek()
            if token.kind == TokenKind.IDENT and self.peek(1).is_op(":"):
                self.advance()
                self.advance()
                node.props.append(Prop(name=token.value, value=self.expression(), line=token.line))
            else:
                node.body.append(self.statement())
            self.skip_separators()
        self.expect_op("}")
        self.allow_brace = saved


def parse(source: str, file: str | None = None) -> Code:
    """
    Parse Auto UI source text.

    Args:
        source: Program text
        file: Optional path used in error locations

    Returns:
        Parsed code unit

    Raises:
        ParseError: With line and column of the offending token
    """
    try:
        return Parser(source, file).parse()
    except RecursionError as e:
        raise ParseError("Maximum nesting depth exceeded", file=file) from e
