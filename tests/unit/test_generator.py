"""Tests for Python code generation."""

import pytest

from auto_ui.lang import parse
from auto_ui.node import Node
from auto_ui.trans import (
    GenerationError,
    GenerationErrorKind,
    TypeMap,
    WidgetInfo,
    WidgetView,
    extract_widget,
    generate_widget,
    py_literal,
)
from auto_ui.view import Button, Column, Text


def generate(source, **kwargs):
    (decl,) = parse(source).types()
    return generate_widget(extract_widget(decl), **kwargs)


def load(text):
    namespace = {}
    exec(compile(text, "<generated>", "exec"), namespace)
    return namespace


# ============================================================================
# Helpers
# ============================================================================

@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [
        (None, "None"),
        (True, "True"),
        (3, "3"),
        (1.5, "1.5"),
        ('say "hi"', '"say \\"hi\\""'),
        ([1, "a"], '[1, "a"]'),
        ({"k": False}, '{"k": False}'),
    ],
)
def test_py_literal(value, expected):
    """Runtime values as Python source."""
    assert py_literal(value) == expected


@pytest.mark.unit
def test_type_map():
    """Scalars, arrays, user types and the Any fallback."""
    types = TypeMap({"Color": "str"})
    assert types.annotation("i64") == "int"
    assert types.annotation("[][]f32") == "list[list[float]]"
    assert types.annotation("Color") == "str"
    assert types.annotation("Point") == "Point"
    assert types.annotation("weird") == "Any"
    types.register("weird", "bytes")
    assert types.annotation("weird") == "bytes"


# ============================================================================
# Counter
# ============================================================================

@pytest.mark.unit
def test_counter_source_shape(counter_source):
    """Msg enum first, then the class with its members."""
    result = generate(counter_source)
    text = result.text

    assert text.startswith("# Generated by auto-ui.")
    assert result.widgets == ["Counter"]
    assert result.variants == {"Counter": ["Dec", "Inc"]}
    assert text.index("class Msg(Enum):") < text.index("class Counter(Component[Msg]):")
    assert "from enum import Enum" in text
    assert "from auto_ui.view import View" in text
    assert "    count: int" in text
    assert "def __init__(self, count: int) -> None:" in text
    assert "return cls(0)" in text
    assert "case Msg.Inc:" in text
    assert "self.count += 1" in text
    assert "View.button(\"+\", Msg.Inc)" in text
    assert "View.text(self.count)," in text


@pytest.mark.unit
def test_counter_generated_code_runs(counter_source):
    """The generated component behaves like the source widget."""
    namespace = load(generate(counter_source).text)
    Msg, Counter = namespace["Msg"], namespace["Counter"]

    counter = Counter.default()
    assert counter.view() == Column(
        children=(Button("+", Msg.Inc), Text("0"), Button("-", Msg.Dec)),
        spacing=10,
    )

    counter.on(Msg.Inc)
    counter.on(Msg.Inc)
    counter.on(Msg.Dec)
    assert counter.count == 1
    assert counter.view().children[1] == Text("1")


@pytest.mark.unit
def test_greeter_generated_code_runs(greeter_source):
    """String concatenation and bare field assignment."""
    text = generate(greeter_source).text
    assert 'View.text("Hello, " + str(self.name))' in text
    assert "self.visits += 1" in text

    namespace = load(text)
    greeter = namespace["Greeter"].default()
    greeter.on(namespace["Msg"].Visit)
    assert greeter.visits == 1
    assert greeter.view().children[0] == Text("Hello, World")


# ============================================================================
# Edge cases
# ============================================================================

@pytest.mark.unit
def test_unknown_kind_comment():
    """Unknown kinds become an empty view with a marker."""
    text = generate('type A is Widget { fn view() { col { sparkline(3) } } }').text
    assert "View.empty(),  # unknown call: sparkline" in text
    load(text)


@pytest.mark.unit
def test_unreferenced_handler_comment():
    """Arms no view event references are noted, not emitted."""
    text = generate(
        """
        type A is Widget {
            n int = 0
            fn view() { button "x" { onclick: Msg.Add } }
            fn on(ev Msg) {
                is ev {
                    Msg.Add => n += 1
                    Msg.Reset => n = 0
                }
            }
        }
        """
    ).text
    assert "# no view event references Msg.Reset" in text
    assert "case Msg.Reset" not in text
    assert "case Msg.Add:" in text


@pytest.mark.unit
def test_widget_without_events():
    """No variants: empty enum and a no-op handler."""
    result = generate('type Hello is Widget { fn view() { text("hi") } }')
    assert result.variants == {"Hello": []}
    namespace = load(result.text)
    hello = namespace["Hello"].default()
    hello.on(None)
    assert hello.view() == Text("hi")


@pytest.mark.unit
def test_field_zero_defaults_and_any_import():
    """Missing defaults use zero values; unknown types import Any."""
    text = generate(
        'type A is Widget { tags []str  blob thing  fn view() { text("x") } }'
    ).text
    assert "tags: list[str]" in text
    assert "blob: Any" in text
    assert "from typing import Any" in text
    assert "return cls([], None)" in text


@pytest.mark.unit
def test_custom_indent_width(counter_source):
    """Indentation follows the requested width."""
    text = generate(counter_source, indent_width=2).text
    assert "\n  count: int\n" in text


@pytest.mark.unit
def test_generate_from_built_info():
    """WidgetInfo can be constructed directly."""
    info = WidgetInfo(
        name="Banner",
        view=WidgetView(root=Node("row").with_child(Node("text").with_arg("hello"))),
    )
    namespace = load(generate_widget(info).text)
    view = namespace["Banner"]().view()
    assert view.children == (Text("hello"),)


@pytest.mark.unit
def test_helper_methods_are_emitted():
    """Helpers called from handlers become methods of the component."""
    text = generate(
        """
        type Tally is Widget {
            count int = 0
            fn reset() { count = 0 }
            fn bump(by int) {
                count += by
                count
            }
            fn view() {
                row {
                    button "+" { onclick: Msg.Add }
                    button "x" { onclick: Msg.Reset }
                }
            }
            fn on(ev Msg) {
                is ev {
                    Msg.Add => bump(2)
                    Msg.Reset => reset()
                }
            }
        }
        """
    ).text
    assert "def reset(self):" in text
    assert "def bump(self, by):" in text
    assert "return self.count" in text

    namespace = load(text)
    Msg = namespace["Msg"]
    tally = namespace["Tally"].default()
    tally.on(Msg.Add)
    tally.on(Msg.Add)
    assert tally.count == 4
    assert tally.bump(1) == 5
    tally.on(Msg.Reset)
    assert tally.count == 0


@pytest.mark.unit
def test_keyword_variant_is_rejected():
    """A message variant that is a Python keyword cannot be emitted."""
    with pytest.raises(GenerationError) as exc:
        generate('type W is Widget { fn view() { button "x" { onclick: "W.class" } } }')
    assert exc.value.kind == GenerationErrorKind.CODEGEN
    assert "class" in str(exc.value)
