"""Tokenizer for Auto UI source text."""

from dataclasses import dataclass
from enum import Enum

from .errors import ParseError


class TokenKind(str, Enum):
    IDENT = "ident"
    KEYWORD = "keyword"
    INT = "int"
    FLOAT = "float"
    STR = "str"
    OP = "op"
    EOF = "eof"


KEYWORDS = frozenset(
    {"type", "is", "fn", "let", "var", "mut", "for", "in", "true", "false", "nil", "else"}
)

# Longest first so "+=" wins over "+"
OPERATORS = (
    "=>", "==", "!=", "<=", ">=", "&&", "||", "+=", "-=", "*=", "/=",
    "+", "-", "*", "/", "%", "<", ">", "!", "=", ".", ",", ":", ";",
    "(", ")", "{", "}", "[", "]",
)

ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"', "'": "'", "0": "\0"}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    line: int
    column: int

    def is_op(self, *ops: str) -> bool:
        return self.kind == TokenKind.OP and self.value in ops

    def is_keyword(self, *words: str) -> bool:
        return self.kind == TokenKind.KEYWORD and self.value in words


class Lexer:
    """
    Converts source text into a flat token list.

    Examples:
        >>> [t.value for t in Lexer("count int = 0").tokenize()]
        ['count', 'int', '=', '0', '']
    """

    def __init__(self, source: str, file: str | None = None) -> None:
        self.source = source
        self.file = file
        self.pos = 0
        self.line = 1
        self.column = 1

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            self._skip_trivia()
            if self.pos >= len(self.source):
                tokens.append(Token(TokenKind.EOF, "", self.line, self.column))
                return tokens
            tokens.append(self._next_token())

    def _error(self, message: str, line: int | None = None, column: int | None = None) -> ParseError:
        return ParseError(message, line or self.line, column or self.column, self.file)

    def _peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.source[index] if index < len(self.source) else ""

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def _skip_trivia(self) -> None:
        while self.pos < len(self.source):
            ch = self._peek()
            if ch in " \t\r\n":
                self._advance()
            elif ch == "/" and self._peek(1) == "/":
                while self.pos < len(self.source) and self._peek() != "\n":
                    self._advance()
            elif ch == "/" and self._peek(1) == "*":
                line, column = self.line, self.column
                self._advance()
                self._advance()
                while not (self._peek() == "*" and self._peek(1) == "/"):
                    if self.pos >= len(self.source):
                        raise self._error("Unterminated block comment", line, column)
                    self._advance()
                self._advance()
                self._advance()
            else:
                return

    def _next_token(self) -> Token:
        line, column = self.line, self.column
        ch = self._peek()

        if ch.isalpha() or ch == "_":
            start = self.pos
            while self._peek().isalnum() or self._peek() == "_":
                self._advance()
            word = self.source[start : self.pos]
            kind = TokenKind.KEYWORD if word in KEYWORDS else TokenKind.IDENT
            return Token(kind, word, line, column)

        if ch.isdigit():
            return self._number(line, column)

        if ch in "\"'":
            return self._string(line, column)

        for op in OPERATORS:
            if self.source.startswith(op, self.pos):
                for _ in op:
                    self._advance()
                return Token(TokenKind.OP, op, line, column)

        raise self._error(f"Unexpected character {ch!r}")

    def _number(self, line: int, column: int) -> Token:
        start = self.pos
        while self._peek().isdigit() or self._peek() == "_":
            self._advance()
        is_float = False
        if self._peek() == "." and self._peek(1).isdigit():
            is_float = True
            self._advance()
            while self._peek().isdigit() or self._peek() == "_":
                self._advance()
        text = self.source[start : self.pos].replace("_", "")
        return Token(TokenKind.FLOAT if is_float else TokenKind.INT, text, line, column)

    def _string(self, line: int, column: int) -> Token:
        quote = self._advance()
        chars: list[str] = []
        while True:
            if self.pos >= len(self.source) or self._peek() == "\n":
                raise self._error("Unterminated string literal", line, column)
            ch = self._advance()
            if ch == quote:
                return Token(TokenKind.STR, "".join(chars), line, column)
            if ch == "\\":
                if self.pos >= len(self.source):
                    raise self._error("Unterminated string literal", line, column)
                esc = self._advance()
                if esc not in ESCAPES:
                    raise self._error(f"Unknown escape sequence \\{esc}")
                chars.append(ESCAPES[esc])
            else:
                chars.append(ch)


def tokenize(source: str, file: str | None = None) -> list[Token]:
    return Lexer(source, file).tokenize()
