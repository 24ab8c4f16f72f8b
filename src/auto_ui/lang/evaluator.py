"""Value operations shared by the interpreter and the static extractor."""

from typing import Any

from ..node import Value, value_type_name
from .ast import ArrayLit, Binary, Expr, Literal, Unary
from .errors import EvalError

_ARITHMETIC = ("+", "-", "*", "/", "%")
_COMPARISON = ("==", "!=", "<", "<=", ">", ">=")


def format_value(value: Value) -> str:
    """Render a value the way Auto's `str()` does."""
    match value:
        case None:
            return "nil"
        case bool():
            return "true" if value else "false"
        case list() | tuple():
            return "[" + ", ".join(format_value(v) for v in value) + "]"
        case _:
            return str(value)


def truthy(value: Value) -> bool:
    if isinstance(value, bool):
        return value
    return value is not None and value != 0 and value != "" and value != []


def zero_value(type_name: str | None) -> Value:
    """Default for a field declared without an initializer."""
    if not type_name:
        return None
    if type_name.startswith("[]"):
        return []
    return {
        "int": 0,
        "i32": 0,
        "i64": 0,
        "u32": 0,
        "u64": 0,
        "uint": 0,
        "float": 0.0,
        "f32": 0.0,
        "f64": 0.0,
        "double": 0.0,
        "bool": False,
        "str": "",
        "string": "",
    }.get(type_name)


def apply_unary(op: str, operand: Value, line: int | None = None) -> Value:
    if op == "!":
        return not truthy(operand)
    if op == "-" and isinstance(operand, (int, float)) and not isinstance(operand, bool):
        return -operand
    raise EvalError(f"Cannot apply '{op}' to {value_type_name(operand)}", line)


def apply_binary(op: str, left: Value, right: Value, line: int | None = None) -> Value:
    """
    Evaluate a binary operator over two runtime values.

    Args:
        op: Operator token
        left: Left operand
        right: Right operand
        line: Source line for error reporting

    Returns:
        Resulting value

    Raises:
        EvalError: On operand type mismatch or division by zero
    """
    if op == "&&":
        return truthy(left) and truthy(right)
    if op == "||":
        return truthy(left) or truthy(right)
    if op == "==":
        return left == right
    if op == "!=":
        return left != right

    # String concatenation formats the other side
    if op == "+" and (isinstance(left, str) or isinstance(right, str)):
        return format_value(left) + format_value(right)
    if op == "+" and isinstance(left, list) and isinstance(right, list):
        return left + right

    if not (_is_number(left) and _is_number(right)):
        raise EvalError(
            f"Cannot apply '{op}' to {value_type_name(left)} and {value_type_name(right)}",
            line,
        )

    match op:
        case "+":
            return left + right
        case "-":
            return left - right
        case "*":
            return left * right
        case "/" | "%":
            if right == 0:
                raise EvalError("Division by zero", line)
            if isinstance(left, int) and isinstance(right, int):
                quotient = abs(left) // abs(right)
                if (left < 0) != (right < 0):
                    quotient = -quotient
                return quotient if op == "/" else left - quotient * right
            return left / right if op == "/" else left % right
        case "<":
            return left < right
        case "<=":
            return left <= right
        case ">":
            return left > right
        case ">=":
            return left >= right
    raise EvalError(f"Unknown operator '{op}'", line)


def _is_number(value: Value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class _NotBasic(Exception):
    pass


def eval_basic_expr(expr: Expr | None) -> Value:
    """
    Evaluate an expression without any environment.

    Handles literals, unary minus/not, arithmetic and comparisons over
    literals and arrays of literals. Anything else (names, calls, nodes)
    evaluates to None.

    Examples:
        >>> from auto_ui.lang.parser import Parser
        >>> eval_basic_expr(Parser("1 + 2 * 3").expression())
        7
    """
    if expr is None:
        return None
    try:
        return _basic(expr)
    except (_NotBasic, EvalError):
        return None


def is_basic_expr(expr: Expr) -> bool:
    """True when `eval_basic_expr` can fully evaluate the expression."""
    try:
        _basic(expr)
    except (_NotBasic, EvalError):
        return False
    return True


def _basic(expr: Expr) -> Any:
    match expr:
        case Literal(value=value):
            return value
        case ArrayLit(items=items):
            return [_basic(item) for item in items]
        case Unary(op=op, operand=operand, line=line):
            return apply_unary(op, _basic(operand), line)
        case Binary(op=op, left=left, right=right, line=line) if op in _ARITHMETIC + _COMPARISON:
            return apply_binary(op, _basic(left), _basic(right), line)
    raise _NotBasic()
