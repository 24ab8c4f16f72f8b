"""Tests for the reference Auto UI interpreter."""

import pytest
from hypothesis import given, strategies as st

from auto_ui.lang import AutoInterpreter, EvalError, ParseError, eval_basic_expr
from auto_ui.lang.evaluator import apply_binary, format_value, truthy, zero_value
from auto_ui.lang.parser import Parser
from auto_ui.node import Node


# ============================================================================
# Evaluator
# ============================================================================

@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [(None, "nil"), (True, "true"), (False, "false"), (3, "3"), ("x", "x"), ([1, "a"], "[1, a]")],
)
def test_format_value(value, expected):
    """str() formatting."""
    assert format_value(value) == expected


@pytest.mark.unit
def test_truthy():
    """Zero, empty and nil are falsy."""
    assert not any(truthy(v) for v in (None, 0, "", [], False))
    assert all(truthy(v) for v in (1, "a", [0], True))


@pytest.mark.unit
def test_zero_values():
    """Fields without a default get a zero value by type."""
    assert zero_value("int") == 0
    assert zero_value("str") == ""
    assert zero_value("bool") is False
    assert zero_value("[]int") == []
    assert zero_value("Custom") is None


@pytest.mark.unit
def test_int_division_truncates():
    """Integer division rounds toward zero."""
    assert apply_binary("/", 7, 2) == 3
    assert apply_binary("/", -7, 2) == -3
    assert apply_binary("%", -7, 2) == -1
    assert apply_binary("/", 7.0, 2) == 3.5


@pytest.mark.unit
def test_division_by_zero():
    """Division by zero is an evaluation error."""
    with pytest.raises(EvalError, match="Division by zero"):
        apply_binary("/", 1, 0, line=4)


@pytest.mark.unit
def test_string_concatenation_formats_other_side():
    """`+` with a string formats the other operand."""
    assert apply_binary("+", "n=", 3) == "n=3"
    assert apply_binary("+", True, "!") == "true!"


@pytest.mark.unit
def test_type_mismatch():
    """Arithmetic on incompatible values fails."""
    with pytest.raises(EvalError):
        apply_binary("-", "a", 1)


@pytest.mark.unit
def test_eval_basic_expr():
    """Literal arithmetic folds; names do not."""
    assert eval_basic_expr(Parser("1 + 2 * 3").expression()) == 7
    assert eval_basic_expr(Parser("[1, -2]").expression()) == [1, -2]
    assert eval_basic_expr(Parser("count + 1").expression()) is None
    assert eval_basic_expr(None) is None


@pytest.mark.unit
@given(st.integers(min_value=-1000, max_value=1000), st.integers(min_value=1, max_value=50))
def test_division_identity(a, b):
    """(a / b) * b + a % b == a for ints."""
    assert apply_binary("/", a, b) * b + apply_binary("%", a, b) == a


# ============================================================================
# Programs
# ============================================================================

@pytest.mark.unit
def test_expression_result(runtime):
    """Without main() the last expression is the result."""
    assert runtime.interpret("let a = 2\na * 21") == 42


@pytest.mark.unit
def test_main_result(runtime):
    """main() is called when declared."""
    source = """
    fn double(x int) int { x * 2 }
    fn main() { double(21) }
    """
    assert runtime.interpret(source) == 42


@pytest.mark.unit
def test_builtins(runtime):
    """str, len and print."""
    result = runtime.interpret('print("n", len([1, 2, 3]))\nstr(true) + str(nil)')
    assert result == "truenil"
    assert runtime.output == ["n 3"]


@pytest.mark.unit
def test_control_flow(runtime):
    """for loops and is arms."""
    source = """
    var total = 0
    for x in [1, 2, 3, 4] {
        is x % 2 {
            0 => total += x
            _ => total += 0
        }
    }
    total
    """
    assert runtime.interpret(source) == 6


@pytest.mark.unit
def test_immutable_let(runtime):
    """let bindings cannot be reassigned."""
    with pytest.raises(EvalError, match="immutable"):
        runtime.interpret("let a = 1\na = 2")


@pytest.mark.unit
def test_undefined_name(runtime):
    """Undefined names report the line."""
    with pytest.raises(EvalError) as exc:
        runtime.interpret("\n\nmissing + 1", "prog.at")
    assert exc.value.line == 3
    assert exc.value.file == "prog.at"


@pytest.mark.unit
def test_unknown_call_builds_node(runtime):
    """Calls to unknown functions are nodes."""
    node = runtime.interpret('label("hi", 2)')
    assert node == Node("label", args=["hi", 2])


# ============================================================================
# Widgets
# ============================================================================

@pytest.mark.unit
def test_counter_defaults(runtime, counter_source):
    """Field defaults are evaluated per widget."""
    runtime.interpret(counter_source)
    assert runtime.main_widget() == "Counter"
    assert runtime.widget_defaults() == {"Counter": {"count": 0}}


@pytest.mark.unit
def test_defaults_are_copies(runtime, counter_source):
    """Mutating returned defaults does not affect the program."""
    runtime.interpret(counter_source)
    runtime.widget_defaults()["Counter"]["count"] = 99
    assert runtime.widget_defaults()["Counter"]["count"] == 0


@pytest.mark.unit
def test_field_without_default(runtime):
    """Missing initializers use zero values."""
    runtime.interpret("type Form is Widget { name str  tags []str  ok bool }")
    assert runtime.widget_defaults() == {"Form": {"name": "", "tags": [], "ok": False}}


@pytest.mark.unit
def test_main_widget_is_last_declared(runtime, counter_source, greeter_source):
    """With several widgets the last one is the main widget."""
    runtime.interpret(counter_source + greeter_source)
    assert runtime.main_widget() == "Greeter"


@pytest.mark.unit
def test_view_builds_node(runtime, counter_source, counter_node):
    """view() produces the node tree."""
    runtime.interpret(counter_source)
    fields = {"count": 0}
    assert runtime.invoke_method("Counter", "view", [], fields=fields) == counter_node


@pytest.mark.unit
@pytest.mark.parametrize("event", ["Counter.Inc", "Inc"])
def test_on_updates_fields(runtime, counter_source, event):
    """Event names are qualified with the widget name."""
    runtime.interpret(counter_source)
    fields = {"count": 5}
    runtime.invoke_method("Counter", "on", [event], fields=fields)
    assert fields == {"count": 6}


@pytest.mark.unit
def test_bare_field_assignment(runtime, greeter_source):
    """Fields can be assigned without self."""
    runtime.interpret(greeter_source)
    fields = runtime.widget_defaults()["Greeter"]
    runtime.invoke_method("Greeter", "on", ["Visit"], fields=fields)
    assert fields["visits"] == 1
    view = runtime.invoke_method("Greeter", "view", [], fields=fields)
    assert view.children[0] == Node("text", args=["Hello, World"])


@pytest.mark.unit
def test_unmatched_event_is_ignored(runtime, counter_source):
    """An event without an arm leaves fields unchanged."""
    runtime.interpret(counter_source)
    fields = {"count": 1}
    runtime.invoke_method("Counter", "on", ["Reset"], fields=fields)
    assert fields == {"count": 1}


@pytest.mark.unit
def test_unknown_widget_or_method(runtime, counter_source):
    """Invoking something that does not exist fails."""
    runtime.interpret(counter_source)
    with pytest.raises(EvalError, match="Unknown widget"):
        runtime.invoke_method("Nope", "view", [], fields={})
    with pytest.raises(EvalError, match="no method"):
        runtime.invoke_method("Counter", "reset", [], fields={"count": 0})


@pytest.mark.unit
def test_no_program_loaded(runtime):
    """Methods need a loaded program."""
    assert runtime.main_widget() is None
    assert runtime.widget_defaults() == {}
    with pytest.raises(EvalError, match="No program"):
        runtime.invoke_method("Counter", "view", [], fields={})


@pytest.mark.unit
def test_failed_interpret_keeps_previous_program(runtime, counter_source):
    """interpret is atomic."""
    runtime.interpret(counter_source)
    with pytest.raises(EvalError):
        runtime.interpret("type Broken is Widget { n int = 1 / 0 }")
    with pytest.raises(ParseError):
        runtime.interpret("type {")
    assert runtime.main_widget() == "Counter"


@pytest.mark.unit
def test_runaway_recursion(runtime):
    """Unbounded recursion surfaces as EvalError."""
    with pytest.raises(EvalError, match="recursion"):
        runtime.interpret("fn f(n) { f(n + 1) }\nfn main() { f(0) }")
