"""Reference front end for the Auto UI language."""

from .ast import Code, TypeDecl, is_widget_type
from .errors import AutoError, EvalError, ParseError
from .evaluator import eval_basic_expr
from .interpreter import AutoInterpreter
from .parser import parse

__all__ = [
    "parse",
    "Code",
    "TypeDecl",
    "is_widget_type",
    "eval_basic_expr",
    "AutoInterpreter",
    "AutoError",
    "ParseError",
    "EvalError",
]
