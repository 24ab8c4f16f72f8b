"""Ahead-of-time transpiler: widget declarations → Python components."""

from .api import transpile_ast, transpile_file, transpile_source
from .errors import GenerationError, GenerationErrorKind
from .extractor import extract_handlers, extract_widget, node_from_expr
from .generator import WidgetGenerator, emit_widget, generate_widget, py_literal
from .model import GeneratedSource, WidgetField, WidgetInfo, WidgetModel, WidgetView
from .sink import CodeSink
from .symbols import CollectedSymbols, collect_symbols, message_variant
from .typemap import TypeMap

__all__ = [
    # Entry points
    "transpile_ast",
    "transpile_source",
    "transpile_file",
    # Stages
    "extract_widget",
    "extract_handlers",
    "node_from_expr",
    "generate_widget",
    "emit_widget",
    "WidgetGenerator",
    "py_literal",
    "collect_symbols",
    "message_variant",
    "CollectedSymbols",
    "CodeSink",
    "TypeMap",
    # Models
    "WidgetInfo",
    "WidgetModel",
    "WidgetField",
    "WidgetView",
    "GeneratedSource",
    # Errors
    "GenerationError",
    "GenerationErrorKind",
]
