"""Transpiler errors."""

from enum import Enum

from ..lang import AutoError


class GenerationErrorKind(str, Enum):
    IO = "io"
    PARSE = "parse"
    CODEGEN = "codegen"


class GenerationError(Exception):
    """Code generation failed; carries the source location when known."""

    def __init__(
        self,
        kind: GenerationErrorKind,
        message: str,
        file: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.file = file
        self.line = line
        self.column = column

    @classmethod
    def from_auto_error(cls, error: AutoError, file: str | None = None) -> "GenerationError":
        return cls(
            GenerationErrorKind.PARSE,
            error.message,
            file=error.file or file,
            line=error.line,
            column=error.column,
        )

    def __str__(self) -> str:
        parts = [str(p) for p in (self.file, self.line, self.column) if p is not None]
        where = ":".join(parts)
        prefix = f"{self.kind.value} error"
        return f"{prefix} at {where}: {self.message}" if where else f"{prefix}: {self.message}"
