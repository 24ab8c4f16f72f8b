"""Tests for the Auto UI lexer and parser."""

import pytest

from auto_ui.lang import ParseError, is_widget_type, parse
from auto_ui.lang.ast import (
    ArrayLit,
    Assign,
    Binary,
    Call,
    ExprStmt,
    ForStmt,
    Ident,
    IsStmt,
    Let,
    Literal,
    Member,
    NodeExpr,
)
from auto_ui.lang.lexer import TokenKind, tokenize


# ============================================================================
# Lexer
# ============================================================================

@pytest.mark.unit
def test_tokenize_operators_and_literals():
    """Compound operators win over single characters."""
    tokens = tokenize('x += 1.5 => "a\\n" // trailing')
    assert [t.value for t in tokens] == ["x", "+=", "1.5", "=>", "a\n", ""]
    assert tokens[2].kind == TokenKind.FLOAT
    assert tokens[-1].kind == TokenKind.EOF


@pytest.mark.unit
def test_tokenize_positions_and_block_comments():
    """Line and column are tracked across comments."""
    tokens = tokenize("/* one\n two */ type")
    assert tokens[0].is_keyword("type")
    assert (tokens[0].line, tokens[0].column) == (2, 9)


@pytest.mark.unit
def test_unterminated_string_reports_location():
    """Errors carry line and column."""
    with pytest.raises(ParseError) as exc:
        tokenize('\n  "open')
    assert exc.value.line == 2
    assert exc.value.column == 3


@pytest.mark.unit
def test_unexpected_character():
    """Unknown characters are rejected."""
    with pytest.raises(ParseError):
        tokenize("a @ b")


# ============================================================================
# Parser
# ============================================================================

@pytest.mark.unit
def test_parse_counter(counter_source):
    """The counter declaration parses into fields and methods."""
    code = parse(counter_source)
    (decl,) = code.types()
    assert decl.name == "Counter"
    assert decl.specs == ["Widget"]
    assert is_widget_type(decl)

    (count,) = decl.members
    assert (count.name, count.type_name) == ("count", "int")
    assert count.default == Literal(0, line=count.default.line)

    view = decl.method("view")
    (stmt,) = view.body
    col = stmt.expr
    assert isinstance(col, NodeExpr) and col.kind == "col"
    assert [p.name for p in col.props] == ["spacing"]
    kinds = [s.expr.kind if isinstance(s.expr, NodeExpr) else s.expr.callee.name for s in col.body]
    assert kinds == ["button", "text", "button"]

    on = decl.method("on")
    assert on.params[0].name == "ev" and on.params[0].type_name == "Msg"
    is_stmt = on.body[0]
    assert isinstance(is_stmt, IsStmt)
    assert [arm.pattern.name for arm in is_stmt.arms] == ["Inc", "Dec"]
    assert isinstance(is_stmt.arms[0].body[0], Assign)
    assert is_stmt.arms[0].body[0].op == "+="


@pytest.mark.unit
def test_node_forms():
    """Node bodies, string shorthand and bare calls."""
    code = parse('button "+" { onclick: Msg.Inc }\ntext(count)\ncol {}')
    button, text, col = (s.expr for s in code.stmts)
    assert isinstance(button, NodeExpr)
    assert button.args == [Literal("+", line=1)]
    assert isinstance(button.props[0].value, Member)
    assert isinstance(text, Call)
    assert isinstance(col, NodeExpr) and col.body == []


@pytest.mark.unit
def test_operator_precedence():
    """Multiplication binds tighter than addition, comparison looser."""
    (stmt,) = parse("1 + 2 * 3 == 7").stmts
    expr = stmt.expr
    assert isinstance(expr, Binary) and expr.op == "=="
    assert expr.left.op == "+"
    assert expr.left.right.op == "*"


@pytest.mark.unit
def test_statements():
    """let/var, for and wildcard arms."""
    code = parse(
        """
        let a = 1
        var b int = 2
        for x in [1, 2] { b += x }
        is a { 1 => b = 0, else => { b = 1 } }
        """
    )
    let_a, var_b, loop, is_stmt = code.stmts
    assert isinstance(let_a, Let) and not let_a.mutable
    assert isinstance(var_b, Let) and var_b.mutable and var_b.type_name == "int"
    assert isinstance(loop, ForStmt) and isinstance(loop.iterable, ArrayLit)
    assert isinstance(is_stmt, IsStmt)
    assert is_stmt.arms[1].pattern is None


@pytest.mark.unit
def test_is_subject_does_not_open_node():
    """`is x {` keeps x as a plain name."""
    (stmt,) = parse("is ev { _ => print(ev) }").stmts
    assert isinstance(stmt.subject, Ident)
    assert isinstance(stmt.arms[0].body[0], ExprStmt)


@pytest.mark.unit
def test_array_field_type():
    """Array types keep their [] prefix."""
    (decl,) = parse("type Todo is Widget { items []str = [] }").types()
    assert decl.members[0].type_name == "[]str"


@pytest.mark.unit
def test_type_without_widget_spec_but_view():
    """A view() method makes a widget."""
    (decl,) = parse('type Hello { fn view() { text("hi") } }').types()
    assert decl.specs == []
    assert is_widget_type(decl)
    (plain,) = parse("type Point { x int  y int }").types()
    assert not is_widget_type(plain)


@pytest.mark.unit
@pytest.mark.parametrize(
    "source",
    [
        "type { }",
        "type A { count int = }",
        "fn f( { }",
        "col { spacing: }",
        "1 +",
        "3 = 4",
    ],
)
def test_parse_errors(source):
    """Malformed sources raise ParseError with a location."""
    with pytest.raises(ParseError) as exc:
        parse(source, "broken.at")
    assert exc.value.file == "broken.at"
    assert exc.value.line is not None


@pytest.mark.unit
def test_deep_nesting_is_a_parse_error():
    """Nesting past the interpreter stack is reported, not crashed on."""
    source = "col {" * 3000 + "}" * 3000
    with pytest.raises(ParseError) as exc:
        parse(source, "deep.at")
    assert exc.value.file == "deep.at"
    assert "nesting" in exc.value.message
