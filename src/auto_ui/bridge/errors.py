"""Interpreter Bridge errors."""


class BridgeError(Exception):
    """Base class for every failure surfaced by the Interpreter Bridge."""


# Name used by runtime-facing callers
InterpreterError = BridgeError


class IoError(BridgeError):
    """Source file could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class AutoLangError(BridgeError):
    """The language runtime rejected the program or failed while running it."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


class LockError(BridgeError):
    """The bridge is already handling a request."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Bridge is busy; cannot {operation} re-entrantly")
        self.operation = operation


class ComponentNotFound(BridgeError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Component not found: {name}")
        self.name = name


class FieldNotFound(BridgeError):
    def __init__(self, widget: str, field: str) -> None:
        super().__init__(f"Field '{field}' not found on {widget}")
        self.widget = widget
        self.field = field


class TypeMismatch(BridgeError):
    def __init__(self, expected: str, found: str) -> None:
        super().__init__(f"Type mismatch: expected {expected}, found {found}")
        self.expected = expected
        self.found = found


class UnknownError(BridgeError):
    pass
