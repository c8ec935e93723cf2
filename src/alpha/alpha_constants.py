"""
Token kinds and the ordered scanner rule table for the Alpha language.

Exports:
    - TokenKind: closed enumeration of every token kind; the enum value is the
      textual kind name used in diagnostics.
    - RULES: ordered list of (kind, compiled pattern) pairs, matched top to bottom.
    - SKIPPED: pseudo-kinds that are consumed by the scanner but never emitted.
    - COMMAND_STARTERS, DECLARATION_STARTERS, PRIMARY_STARTERS, OPERATORS:
      lookahead sets used by the parser, kept as ordered tuples so error
      messages list expected kinds in a stable order.
"""

import re
from enum import Enum


class TokenKind(Enum):
    EOF = "EOF"
    IDENTIFIER = "identifier"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"

    IF = "if"
    THEN = "then"
    ELSE = "else"
    WHILE = "while"
    DO = "do"
    LET = "let"
    IN = "in"
    BEGIN = "begin"
    END = "end"
    CONST = "const"
    VAR = "var"

    TILDE = "~"
    COLON = ":"
    SEMICOLON = ";"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"

    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    EQUALS = "="
    COMPARISON = "comparison"
    LESS_THAN = "<"
    GREATER_THAN = ">"
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="

    def __str__(self) -> str:
        return self.value


class Skip(Enum):
    """Rule kinds the scanner consumes without emitting a token."""

    NEWLINE = "newline"
    BLANK = "whitespace"
    COMMENT = "comment"


SKIPPED = frozenset(Skip)

# Opening quote of a string literal; the closing quote is checked by the scanner.
STRING_OPENERS = {'"': r'"[^"]*', "'": r"'[^']*"}


def _keyword(word: str) -> str:
    return re.escape(word) + r"\b"


# NOTE: order matters. Floats before integers, `==` before `=`, `<=`/`>=`
# before `<`/`>`, keywords before identifiers.
_RULE_SOURCE: list[tuple[TokenKind | Skip, str]] = [
    (Skip.NEWLINE, r"\r\n|\r|\n"),
    (Skip.BLANK, r"[ \t]+"),
    (Skip.COMMENT, r"//[^\r\n]*"),
    (TokenKind.STRING, STRING_OPENERS['"']),
    (TokenKind.STRING, STRING_OPENERS["'"]),
    (TokenKind.IF, _keyword("if")),
    (TokenKind.END, _keyword("end")),
    (TokenKind.TILDE, r"~"),
    (TokenKind.COLON, r":"),
    (TokenKind.SEMICOLON, r";"),
    (TokenKind.THEN, _keyword("then")),
    (TokenKind.ELSE, _keyword("else")),
    (TokenKind.FLOAT, r"[0-9]+\.[0-9]+"),
    (TokenKind.INTEGER, r"[0-9]+"),
    (TokenKind.PLUS, r"\+"),
    (TokenKind.MINUS, r"-"),
    (TokenKind.SLASH, r"/"),
    (TokenKind.STAR, r"\*"),
    (TokenKind.LEFT_PAREN, r"\("),
    (TokenKind.RIGHT_PAREN, r"\)"),
    (TokenKind.COMPARISON, r"=="),
    (TokenKind.EQUALS, r"="),
    (TokenKind.LESS_EQUAL, r"<="),
    (TokenKind.GREATER_EQUAL, r">="),
    (TokenKind.LESS_THAN, r"<"),
    (TokenKind.GREATER_THAN, r">"),
    (TokenKind.WHILE, _keyword("while")),
    (TokenKind.DO, _keyword("do")),
    (TokenKind.LET, _keyword("let")),
    (TokenKind.VAR, _keyword("var")),
    (TokenKind.CONST, _keyword("const")),
    (TokenKind.IN, _keyword("in")),
    (TokenKind.BEGIN, _keyword("begin")),
    (TokenKind.IDENTIFIER, r"[_a-zA-Z][_a-zA-Z0-9]*"),
]

RULES: list[tuple[TokenKind | Skip, re.Pattern[str]]] = [
    (kind, re.compile(pattern, re.ASCII)) for kind, pattern in _RULE_SOURCE
]

KEYWORDS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.IF,
        TokenKind.THEN,
        TokenKind.ELSE,
        TokenKind.WHILE,
        TokenKind.DO,
        TokenKind.LET,
        TokenKind.IN,
        TokenKind.BEGIN,
        TokenKind.END,
        TokenKind.CONST,
        TokenKind.VAR,
    }
)

# Parser lookahead sets
COMMAND_STARTERS: tuple[TokenKind, ...] = (
    TokenKind.IDENTIFIER,
    TokenKind.IF,
    TokenKind.WHILE,
    TokenKind.LET,
    TokenKind.BEGIN,
)

DECLARATION_STARTERS: tuple[TokenKind, ...] = (TokenKind.CONST, TokenKind.VAR)

PRIMARY_STARTERS: tuple[TokenKind, ...] = (
    TokenKind.INTEGER,
    TokenKind.FLOAT,
    TokenKind.STRING,
    TokenKind.IDENTIFIER,
    TokenKind.LEFT_PAREN,
)

OPERATORS: tuple[TokenKind, ...] = (
    TokenKind.PLUS,
    TokenKind.MINUS,
    TokenKind.STAR,
    TokenKind.SLASH,
    TokenKind.EQUALS,
    TokenKind.COMPARISON,
    TokenKind.LESS_THAN,
    TokenKind.GREATER_THAN,
    TokenKind.LESS_EQUAL,
    TokenKind.GREATER_EQUAL,
)

OPERATOR_SYMBOLS: dict[TokenKind, str] = {
    kind: ("==" if kind is TokenKind.COMPARISON else kind.value) for kind in OPERATORS
}

__all__ = [
    "COMMAND_STARTERS",
    "DECLARATION_STARTERS",
    "KEYWORDS",
    "OPERATORS",
    "OPERATOR_SYMBOLS",
    "PRIMARY_STARTERS",
    "RULES",
    "SKIPPED",
    "STRING_OPENERS",
    "Skip",
    "TokenKind",
]
