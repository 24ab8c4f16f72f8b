"""Output buffer for generated source: imports, body text and indentation."""


class CodeSink:
    """
    Accumulates one generated unit.

    Imports are dotted paths collected into a set: ``"a.b.C"`` becomes
    ``from a.b import C`` (names from one module share a line) and an
    undotted ``"a"`` becomes ``import a``. `done()` assembles the unit once.

    Examples:
        >>> sink = CodeSink()
        >>> sink.add_import("enum.Enum")
        >>> sink.line("class Msg(Enum):")
        >>> print(sink.done(), end="")
        from enum import Enum
        <BLANKLINE>
        <BLANKLINE>
        class Msg(Enum):
    """

    def __init__(self, indent_width: int = 4, header: list[str] | None = None) -> None:
        self.imports: set[str] = set()
        self.body: list[str] = []
        self.indent_level = 0
        self.indent_width = indent_width
        self.header = header or []
        self._done = False

    def add_import(self, path: str) -> None:
        self.imports.add(path)

    def indent(self) -> None:
        self.indent_level += 1

    def dedent(self) -> None:
        if self.indent_level > 0:
            self.indent_level -= 1

    def line(self, text: str = "") -> None:
        """Append one line at the current indentation (blank lines stay empty)."""
        self._check_open()
        if text:
            self.body.append(" " * (self.indent_level * self.indent_width) + text)
        else:
            self.body.append("")

    def blank(self, count: int = 1) -> None:
        for _ in range(count):
            self.line()

    def import_lines(self) -> list[str]:
        plain: set[str] = set()
        from_imports: dict[str, set[str]] = {}
        for path in self.imports:
            module, dot, name = path.rpartition(".")
            if dot:
                from_imports.setdefault(module, set()).add(name)
            else:
                plain.add(path)

        lines = [(module, f"import {module}") for module in plain]
        lines += [
            (module, f"from {module} import {', '.join(sorted(names))}")
            for module, names in from_imports.items()
        ]
        return [text for _, text in sorted(lines)]

    def done(self) -> str:
        """Prepend header and sorted imports to the body; the sink is closed afterwards."""
        self._check_open()
        self._done = True

        parts = list(self.header)
        imports = self.import_lines()
        if imports:
            if parts:
                parts.append("")
            parts.extend(imports)

        body = list(self.body)
        while body and not body[0]:
            body.pop(0)
        while body and not body[-1]:
            body.pop()
        if body:
            if parts:
                parts.extend(["", ""])
            parts.extend(body)
        return "\n".join(parts) + "\n"

    def _check_open(self) -> None:
        if self._done:
            raise RuntimeError("CodeSink is closed; done() was already called")
