"""
Error types raised by the Alpha scanner and parser.

Every error is a `SyntaxError` subclass carrying the source file name and the
1-based line/column of the offending input, and renders as a single-line
diagnostic of the form::

    <file>:<line>:<col>: <message>

Classes:
    AlphaSyntaxError: Base class for all scanner and parser failures.
    LexError: No scanner rule could produce a token.
    UnterminatedStringError: A string literal has no matching closing quote.
    UnexpectedCharacterError: No rule matches at the current character.
    InvalidLiteralError: A numeric literal cannot be converted to a value.
    ParseError: The current token does not fit the production being parsed.
    NestingTooDeepError: The input nests deeper than the parser can recurse.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from alpha.alpha_constants import TokenKind

if TYPE_CHECKING:
    from alpha.alpha_lexer import Token


class AlphaSyntaxError(SyntaxError):
    """Base class for Alpha lex and parse errors.

    Attributes:
        file_name (str): Base name of the source file, or `<stdin>`.
        line (int): 1-based line of the offending input.
        column (int): 1-based column of the offending input.
        message (str): Diagnostic text without the location prefix.
    """

    def __init__(self, file_name: str, line: int, column: int, message: str) -> None:
        self.file_name = file_name
        self.line = line
        self.column = column
        self.message = message
        super().__init__(f"{file_name}:{line}:{column}: {message}")

    def __str__(self) -> str:
        return f"{self.file_name}:{self.line}:{self.column}: {self.message}"


class LexError(AlphaSyntaxError):
    pass


class UnterminatedStringError(LexError):
    def __init__(self, file_name: str, line: int, column: int) -> None:
        super().__init__(
            file_name, line, column, "syntax error: missing string closing quote"
        )


class UnexpectedCharacterError(LexError):
    def __init__(self, file_name: str, line: int, column: int, char: str) -> None:
        self.char = char
        super().__init__(
            file_name, line, column, f"syntax error: unexpected character {char!r}"
        )


class InvalidLiteralError(LexError):
    """A literal matched its rule but cannot be converted to a value.

    Integer text longer than the interpreter's digit limit for `int()` lands here.
    """

    def __init__(self, file_name: str, token: Token) -> None:
        self.token = token
        super().__init__(
            file_name,
            token.line,
            token.column,
            f"syntax error: {token.kind} literal too long",
        )


class ParseError(AlphaSyntaxError):
    """Raised on the first token that does not fit the grammar.

    Attributes:
        token (Token): The offending token (possibly the end-of-input token).
        expected (tuple[TokenKind, ...]): Kinds that would have been accepted,
            in the order the production lists them.
    """

    def __init__(
        self, file_name: str, token: Token, expected: tuple[TokenKind, ...]
    ) -> None:
        if not expected:
            raise ValueError("ParseError needs at least one expected kind")
        self.token = token
        self.expected = expected
        if len(expected) == 1:
            wanted = f"expected '{expected[0]}'"
        else:
            wanted = "expected one of " + ", ".join(f"'{kind}'" for kind in expected)
        super().__init__(
            file_name,
            token.line,
            token.column,
            f"unexpected token '{token.kind}' {wanted}",
        )

    @property
    def unexpected(self) -> TokenKind:
        return self.token.kind


class NestingTooDeepError(ParseError):
    """Parentheses or commands nest deeper than the interpreter's recursion limit.

    `expected` is empty; `token` is where the parser gave up.
    """

    def __init__(self, file_name: str, token: Token) -> None:
        self.token = token
        self.expected = ()
        AlphaSyntaxError.__init__(
            self, file_name, token.line, token.column, "syntax error: nesting too deep"
        )


__all__ = [
    "AlphaSyntaxError",
    "InvalidLiteralError",
    "LexError",
    "NestingTooDeepError",
    "ParseError",
    "UnexpectedCharacterError",
    "UnterminatedStringError",
]
