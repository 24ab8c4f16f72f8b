"""Node→View conversion errors."""


class ConversionError(Exception):
    """Node could not be converted to a View."""

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class UnknownKind(ConversionError):
    def __init__(self, kind: str) -> None:
        super().__init__(kind, f"Unknown node kind: {kind}")


class MissingProp(ConversionError):
    def __init__(self, kind: str, prop: str) -> None:
        super().__init__(kind, f"Node '{kind}' is missing required prop '{prop}'")
        self.prop = prop


class InvalidPropType(ConversionError):
    def __init__(self, kind: str, prop: str, expected: str, got: str) -> None:
        super().__init__(
            kind, f"Node '{kind}' prop '{prop}' expected {expected}, got {got}"
        )
        self.prop = prop
        self.expected = expected
        self.got = got


class MessageRequired(ConversionError):
    def __init__(self, kind: str, prop: str | None = None) -> None:
        where = f" in '{prop}'" if prop else ""
        super().__init__(kind, f"Node '{kind}' requires a message identifier{where}")
        self.prop = prop
