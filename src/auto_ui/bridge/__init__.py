"""Interpreter Bridge: runtime ownership, event routing and hot reload."""

from .bridge import BridgeState, InterpreterBridge, read_source
from .errors import (
    AutoLangError,
    BridgeError,
    ComponentNotFound,
    FieldNotFound,
    InterpreterError,
    IoError,
    LockError,
    TypeMismatch,
    UnknownError,
)
from .messages import DynamicMessage, StringMessage, TypedMessage
from .runtime import InterpreterRuntime
from .state import StateTable, WidgetState, migrate_states, states_from_defaults

__all__ = [
    "InterpreterBridge",
    "BridgeState",
    "InterpreterRuntime",
    "read_source",
    # Messages
    "DynamicMessage",
    "StringMessage",
    "TypedMessage",
    # State
    "WidgetState",
    "StateTable",
    "migrate_states",
    "states_from_defaults",
    # Errors
    "BridgeError",
    "InterpreterError",
    "IoError",
    "AutoLangError",
    "LockError",
    "ComponentNotFound",
    "FieldNotFound",
    "TypeMismatch",
    "UnknownError",
]
