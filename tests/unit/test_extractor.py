"""Tests for widget extraction and the symbol pass."""

import pytest

from auto_ui.core import Policy
from auto_ui.lang import parse
from auto_ui.lang.ast import Ident, Literal, Member
from auto_ui.node import PLACEHOLDER_KIND
from auto_ui.trans import GenerationError, GenerationErrorKind, extract_widget
from auto_ui.trans.symbols import collect_symbols, is_message_prop, message_variant


def decl_of(source):
    (decl,) = parse(source).types()
    return decl


# ============================================================================
# Extraction
# ============================================================================

@pytest.mark.unit
def test_extract_counter(counter_source):
    """Fields, view tree and handlers."""
    info = extract_widget(decl_of(counter_source))

    assert info.name == "Counter"
    assert info.model.names() == ["count"]
    assert info.model.fields[0].type_name == "int"
    assert info.model.fields[0].default == 0
    assert info.methods == ["view", "on"]
    assert info.on_param == "ev"
    assert sorted(info.handlers) == ["Dec", "Inc"]

    root = info.view.root
    assert root.kind == "col"
    assert root.props == {"spacing": 10}
    assert [child.kind for child in root.children] == ["button", "text", "button"]
    assert root.children[0].args == ["+"]
    assert isinstance(root.children[0].props["onclick"], Member)


@pytest.mark.unit
def test_non_literal_values_stay_ast():
    """Names are kept as expressions for the generator."""
    info = extract_widget(
        decl_of(
            """
            type Form is Widget {
                base int = 1
                total int = base + 1
                fn view() { text(total) }
            }
            """
        )
    )
    assert info.model.fields[1].default is None
    (arg,) = info.view.root.args
    assert arg == Ident("total", line=arg.line)


@pytest.mark.unit
def test_literal_expressions_are_folded():
    """Literal-only arithmetic is evaluated."""
    info = extract_widget(
        decl_of('type A is Widget { n int = 2 * 3  fn view() { col { spacing: 4 + 4 } } }')
    )
    assert info.model.fields[0].default == 6
    assert info.view.root.props == {"spacing": 8}


@pytest.mark.unit
def test_non_node_statements_are_skipped():
    """Only node-producing statements become children."""
    info = extract_widget(
        decl_of(
            """
            type A is Widget {
                fn view() {
                    col {
                        let x = 1
                        text("a")
                        print("side effect")
                    }
                }
            }
            """
        )
    )
    assert [child.kind for child in info.view.root.children] == ["text"]


@pytest.mark.unit
def test_missing_view_permissive():
    """Without a usable view a placeholder is used."""
    info = extract_widget(decl_of("type A is Widget { n int = 0 }"), policy=Policy.PERMISSIVE)
    assert info.view.root.kind == PLACEHOLDER_KIND
    assert info.handlers == {}
    assert info.on_param is None


@pytest.mark.unit
@pytest.mark.parametrize(
    "source",
    [
        "type A is Widget { n int = 0 }",
        "type A is Widget { fn view() { } }",
        "type A is Widget { fn view() { 1 + 2 } }",
    ],
)
def test_missing_view_strict(source):
    """STRICT policy refuses widgets without a view node."""
    with pytest.raises(GenerationError) as exc:
        extract_widget(decl_of(source), policy=Policy.STRICT, file="a.at")
    assert exc.value.kind == GenerationErrorKind.CODEGEN
    assert exc.value.file == "a.at"
    assert "'A'" in exc.value.message


@pytest.mark.unit
def test_wildcard_handler():
    """`_` and else arms are keyed by the wildcard."""
    info = extract_widget(
        decl_of(
            """
            type A is Widget {
                n int = 0
                fn view() { button "x" { onclick: Msg.Click } }
                fn on(m Msg) {
                    is m {
                        Msg.Click => n += 1
                        _ => n = 0
                    }
                }
            }
            """
        )
    )
    assert sorted(info.handlers) == ["Click", "_"]
    assert info.on_param == "m"


# ============================================================================
# Symbols
# ============================================================================

@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [
        (Member(Ident("Msg"), "Inc"), "Inc"),
        ("Counter.Inc", "Inc"),
        ("Inc", "Inc"),
        (Literal("Counter.Dec"), "Dec"),
        (Member(Ident("self"), "handler"), None),
        ("not a name", None),
        (3, None),
    ],
)
def test_message_variant(value, expected):
    """Variant names from message prop values."""
    assert message_variant(value) == expected


@pytest.mark.unit
def test_is_message_prop():
    """Event props start with "on"."""
    assert is_message_prop("onclick")
    assert is_message_prop("on_change")
    assert not is_message_prop("spacing")


@pytest.mark.unit
def test_collect_symbols(counter_node):
    """Variants and kinds across the whole tree."""
    symbols = collect_symbols(counter_node)
    assert symbols.sorted_variants() == ["Dec", "Inc"]
    assert symbols.kinds == {"col", "button", "text"}
