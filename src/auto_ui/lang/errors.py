"""Front-end errors for the Auto UI language."""


class AutoError(Exception):
    """Base error raised by the lexer, parser and interpreter."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        file: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.file = file

    def location(self) -> str:
        parts = [p for p in (self.file, self.line, self.column) if p is not None]
        return ":".join(str(p) for p in parts)

    def __str__(self) -> str:
        where = self.location()
        return f"{where}: {self.message}" if where else self.message


class ParseError(AutoError):
    """Source text is not valid Auto UI."""


class EvalError(AutoError):
    """Runtime failure while interpreting a program."""
