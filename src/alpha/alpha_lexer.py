"""
Lexical scanner for the Alpha language.

This module converts raw source text into position-tagged tokens:

Classes:
    CharacterStream: Source buffer with a monotonically advancing cursor and
        line/column tracking of the next unconsumed character.
    Token: An immutable, classified lexeme with its 1-based source position.
    Scanner: Produces tokens one at a time by trying the ordered rule table
        from `alpha_constants.RULES` against the remaining input.

Features:
    - First-match over an ordered rule table (`==` before `=`, floats before
      integers, keywords guarded by a word boundary so `ifx` is an identifier)
    - Skips blanks, newlines and `//` line comments
    - Single- and double-quoted strings; the matching closing quote is required
    - Returns an end-of-input token (repeatedly) once the source is exhausted

Raises:
    UnterminatedStringError: A string literal is missing its closing quote.
    UnexpectedCharacterError: No rule matches at the current position.

Example:
    >>> scanner = Scanner("x = 42")
    >>> [tok.kind.value for tok in scanner.get_all_tokens()]
    ['identifier', '=', 'integer', 'EOF']
"""

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass

from alpha.alpha_constants import RULES, SKIPPED, TokenKind
from alpha.alpha_errors import UnexpectedCharacterError, UnterminatedStringError

logger = logging.getLogger(__name__)

STDIN_NAME = "<stdin>"


class CharacterStream:
    """
    Source text with a read cursor and line/column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Offset of the next unconsumed character.
        line (int): Line of the next unconsumed character (1-indexed).
        column (int): Column of the next unconsumed character (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def remaining(self) -> str:
        """Returns the unconsumed part of the source."""
        return self.source[self.position :]

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset from the cursor without advancing.

        Returns:
            str: The character, or an empty string if out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def consume(self, text: str) -> None:
        """Advances past `text`, which must be the prefix of the remaining input.

        Line and column are recomputed from the consumed text, so a lexeme
        spanning several lines leaves the position exact.
        """
        if not self.source.startswith(text, self.position):
            raise ValueError(
                f"CharacterStreamError: {text!r} is not next in source at position=<{self.position}>"
            )
        self.position += len(text)
        breaks = text.count("\n") + text.count("\r") - text.count("\r\n")
        if breaks:
            self.line += breaks
            last = max(text.rfind("\n"), text.rfind("\r"))
            self.column = len(text) - last
        else:
            self.column += len(text)

    def end_of_file(self) -> bool:
        """
        Returns:
            bool: True once every character has been consumed.
        """
        return self.position >= len(self.source)


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Attributes:
        kind (TokenKind): The token's classification.
        text (str): The matched lexeme; empty only for the end-of-input token.
        line (int): 1-based line of the token's first character.
        column (int): 1-based column of the token's first character.
    """

    kind: TokenKind
    text: str
    line: int = 0
    column: int = 0

    @property
    def position(self) -> tuple[int, int]:
        return self.line, self.column

    def __repr__(self) -> str:
        return f"[<{self.kind}>@{self.line}:{self.column} {self.text}]"


class Scanner:
    """Tokenizer for Alpha source text.

    Each call to `next_token` tries every rule of `RULES` in declared order and
    accepts the first one that matches a prefix of the remaining input.

    Attributes:
        stream (CharacterStream): Cursor over the source being scanned.
        file_name (str): Name reported in diagnostics.
    """

    def __init__(self, source: str, file_name: str = STDIN_NAME) -> None:
        self.stream = CharacterStream(source)
        self.file_name = file_name

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> "Scanner":
        """Reads `path` as UTF-8; diagnostics report the file's base name."""
        with open(path, encoding="utf-8") as f:
            source = f.read()
        return cls(source, os.path.basename(os.fspath(path)))

    def next_token(self) -> Token:
        """Consumes and returns the next token.

        Returns:
            Token: The next token, or an end-of-input token once the source is exhausted.

        Raises:
            UnterminatedStringError: If a string literal lacks its closing quote.
            UnexpectedCharacterError: If no rule matches at the cursor.
        """
        stream = self.stream
        while not stream.end_of_file():
            line, column = stream.line, stream.column
            for kind, pattern in RULES:
                match = pattern.match(stream.source, stream.position)
                if match is None or not match.group():
                    continue
                text = match.group()
                stream.consume(text)
                break
            else:
                raise UnexpectedCharacterError(
                    self.file_name, line, column, stream.peek()
                )

            if kind in SKIPPED:
                continue

            if kind is TokenKind.STRING:
                quote = text[0]
                if stream.peek() != quote:
                    raise UnterminatedStringError(self.file_name, line, column)
                stream.consume(quote)
                text += quote

            assert isinstance(kind, TokenKind)
            return Token(kind, text, line, column)

        return Token(TokenKind.EOF, "", stream.line, stream.column)

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind is TokenKind.EOF:
                return

    def get_all_tokens(self) -> list[Token]:
        """Drains the scanner, stopping after (and including) the first end-of-input token."""
        tokens = list(self)
        logger.debug("scanned %d tokens from %s", len(tokens), self.file_name)
        return tokens


__all__ = ["CharacterStream", "STDIN_NAME", "Scanner", "Token"]
