"""
Alpha Language Parser

Recursive-descent parser turning the token list produced by `Scanner` into a
typed AST (`alpha_ast`).

Grammar
-------
    program            ::= singleCommand EOF
    command            ::= singleCommand (';' singleCommand)*
    singleCommand      ::= Identifier ('=' expression | '(' expression? ')')
                         | 'if' expression 'then' singleCommand 'else' singleCommand
                         | 'while' expression 'do' singleCommand
                         | 'let' declaration 'in' singleCommand
                         | 'begin' command 'end'
    declaration        ::= singleDeclaration (';' singleDeclaration)*
    singleDeclaration  ::= 'const' Identifier '~' expression
                         | 'var' Identifier ':' typeDenoter
    typeDenoter        ::= Identifier
    expression         ::= primaryExpression (operator primaryExpression)*
    primaryExpression  ::= Integer | Float | String | Identifier | '(' expression ')'
    operator           ::= '+' | '-' | '*' | '/' | '=' | '==' | '<' | '>' | '<=' | '>='

Parser Behavior
---------------
- One method per production; alternatives are chosen by looking at the kind of
  the current token only (LL(1), no backtracking).
- Expressions are a flat left-to-right chain with no operator precedence:
  `a + b * c` is `[a, +, b, *, c]`. Parentheses are the only grouping.
- End of input is an ordinary token kind. The cursor never reads past it.
- Fail-fast: the first unexpected token raises `ParseError`; there is no
  recovery.
- Nesting is bounded by the interpreter recursion limit (a few hundred levels
  of parentheses or commands by default); deeper input raises
  `NestingTooDeepError` instead of `RecursionError`.

Entry Points
------------
- `Parser(tokens, file_name).parse_program()`: parse a token list.
- `parse_source(source, file_name)`: scan and parse a string.
- `parse_file(path)`: scan and parse a file.

Raises
------
ParseError
    When a token does not fit the production in progress.
LexError
    From the scanner, when using `parse_source` or `parse_file`, and
    `InvalidLiteralError` for integer text too long to convert.
"""

from __future__ import annotations

import logging
import os

from alpha.alpha_ast import (
    Assignment,
    BeginBlock,
    Command,
    ConstDecl,
    Declaration,
    Expression,
    FloatLiteral,
    FunctionCall,
    IdentifierRef,
    IfBlock,
    IntegerLiteral,
    LetBlock,
    Operator,
    Primary,
    Program,
    SingleCommand,
    SingleDeclaration,
    StringLiteral,
    TypeDenoter,
    VarDecl,
    WhileBlock,
)
from alpha.alpha_constants import (
    COMMAND_STARTERS,
    DECLARATION_STARTERS,
    OPERATORS,
    PRIMARY_STARTERS,
    TokenKind,
)
from alpha.alpha_errors import InvalidLiteralError, NestingTooDeepError, ParseError
from alpha.alpha_lexer import STDIN_NAME, Scanner, Token

logger = logging.getLogger(__name__)


class Parser:
    """
    Alpha Parser Class

    Attributes
    ----------
    tokens : list[Token]
        The token stream, always terminated by an end-of-input token.
    position : int
        Index of the current token. Only ever increases.
    file_name : str
        Name reported in diagnostics.
    """

    def __init__(self, tokens: list[Token], file_name: str = STDIN_NAME) -> None:
        self.tokens: list[Token] = list(tokens)
        self.position: int = 0
        self.file_name = file_name

        if not self.tokens:
            self.tokens.append(Token(TokenKind.EOF, "", 1, 1))
        elif self.tokens[-1].kind is not TokenKind.EOF:
            last = self.tokens[-1]
            self.tokens.append(
                Token(TokenKind.EOF, "", last.line, last.column + len(last.text))
            )

    # Cursor helpers

    def current(self) -> Token:
        """
        Returns the token under the cursor.

        Returns:
            Token: The current token, or the end-of-input token once past the end.
        """
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return self.tokens[-1]

    def at(self, *kinds: TokenKind) -> bool:
        return self.current().kind in kinds

    def accept(self) -> Token:
        """Consumes the current token unconditionally and returns it."""
        tok = self.current()
        self.position += 1
        return tok

    def expect(self, kind: TokenKind) -> Token:
        """
        Consumes the current token if it has the given kind.

        Args:
            kind (TokenKind): The only acceptable kind.

        Returns:
            Token: The consumed token.

        Raises:
            ParseError: If the current token has another kind. The cursor does not move.
        """
        if not self.at(kind):
            raise self.error(kind)
        return self.accept()

    def error(self, *expected: TokenKind) -> ParseError:
        return ParseError(self.file_name, self.current(), expected)

    # Productions

    def parse_program(self) -> Program:
        """Parse a complete program: one single command followed by end of input."""
        try:
            command = self.parse_single_command()
        except RecursionError:
            raise NestingTooDeepError(self.file_name, self.current()) from None
        self.expect(TokenKind.EOF)
        logger.debug("parsed program from %s", self.file_name)
        return Program(command)

    def parse_command(self) -> Command:
        """Parse one or more single commands separated by `;`."""
        commands = [self.parse_single_command()]
        while self.at(TokenKind.SEMICOLON):
            self.accept()
            commands.append(self.parse_single_command())
        return Command(tuple(commands))

    def parse_single_command(self) -> SingleCommand:
        """Parse an assignment, call, `if`, `while`, `let` or `begin` block."""
        tok = self.current()
        match tok.kind:
            case TokenKind.IDENTIFIER:
                return self.parse_identifier_command()
            case TokenKind.IF:
                self.accept()
                condition = self.parse_expression()
                self.expect(TokenKind.THEN)
                then_branch = self.parse_single_command()
                self.expect(TokenKind.ELSE)
                else_branch = self.parse_single_command()
                return IfBlock(condition, then_branch, else_branch)
            case TokenKind.WHILE:
                self.accept()
                condition = self.parse_expression()
                self.expect(TokenKind.DO)
                return WhileBlock(condition, self.parse_single_command())
            case TokenKind.LET:
                self.accept()
                declaration = self.parse_declaration()
                self.expect(TokenKind.IN)
                return LetBlock(declaration, self.parse_single_command())
            case TokenKind.BEGIN:
                self.accept()
                body = self.parse_command()
                self.expect(TokenKind.END)
                return BeginBlock(body)
        raise self.error(*COMMAND_STARTERS)

    def parse_identifier_command(self) -> Assignment | FunctionCall:
        """Assignment `x = e` or call `f(e?)`, told apart by the token after the name."""
        identifier = self.expect(TokenKind.IDENTIFIER)
        if self.at(TokenKind.EQUALS):
            self.accept()
            return Assignment(identifier, self.parse_expression())
        if not self.at(TokenKind.LEFT_PAREN):
            raise self.error(TokenKind.EQUALS, TokenKind.LEFT_PAREN)

        self.accept()
        if self.at(TokenKind.RIGHT_PAREN):
            self.accept()
            return FunctionCall(identifier)
        if not self.at(*PRIMARY_STARTERS):
            raise self.error(TokenKind.RIGHT_PAREN, *PRIMARY_STARTERS)
        argument = self.parse_expression()
        self.expect(TokenKind.RIGHT_PAREN)
        return FunctionCall(identifier, argument)

    def parse_declaration(self) -> Declaration:
        """Parse one or more `const`/`var` declarations separated by `;`."""
        declarations = [self.parse_single_declaration()]
        while self.at(TokenKind.SEMICOLON):
            self.accept()
            declarations.append(self.parse_single_declaration())
        return Declaration(tuple(declarations))

    def parse_single_declaration(self) -> SingleDeclaration:
        """Parse `const name ~ expression` or `var name : Type`."""
        if self.at(TokenKind.CONST):
            self.accept()
            identifier = self.expect(TokenKind.IDENTIFIER)
            self.expect(TokenKind.TILDE)
            return ConstDecl(identifier, self.parse_expression())
        if self.at(TokenKind.VAR):
            self.accept()
            identifier = self.expect(TokenKind.IDENTIFIER)
            self.expect(TokenKind.COLON)
            return VarDecl(identifier, self.parse_type_denoter())
        raise self.error(*DECLARATION_STARTERS)

    def parse_type_denoter(self) -> TypeDenoter:
        """Parse a type name."""
        return TypeDenoter(self.expect(TokenKind.IDENTIFIER))

    def parse_expression(self) -> Expression:
        """Parse a flat chain of primaries joined by operators, left to right."""
        items: list[Primary | Operator] = [self.parse_primary_expression()]
        while self.at(*OPERATORS):
            items.append(self.parse_operator())
            items.append(self.parse_primary_expression())
        return Expression(tuple(items))

    def parse_primary_expression(self) -> Primary:
        """
        Parse a literal, an identifier reference or a parenthesised expression.

        Returns:
            Primary: The literal node with its converted value, an `IdentifierRef`,
                or the nested `Expression`.

        Raises:
            InvalidLiteralError: If integer text exceeds the `int()` digit limit.
            ParseError: If the current token cannot start a primary.
        """
        tok = self.current()
        match tok.kind:
            case TokenKind.INTEGER:
                try:
                    value = int(tok.text)
                except ValueError:
                    raise InvalidLiteralError(self.file_name, tok) from None
                self.accept()
                return IntegerLiteral(value)
            case TokenKind.FLOAT:
                self.accept()
                return FloatLiteral(float(tok.text))
            case TokenKind.STRING:
                self.accept()
                return StringLiteral(tok.text[1:-1])
            case TokenKind.IDENTIFIER:
                self.accept()
                return IdentifierRef(tok)
            case TokenKind.LEFT_PAREN:
                self.accept()
                inner = self.parse_expression()
                self.expect(TokenKind.RIGHT_PAREN)
                return inner
        raise self.error(*PRIMARY_STARTERS)

    def parse_operator(self) -> Operator:
        """Parse one binary operator token."""
        if not self.at(*OPERATORS):
            raise self.error(*OPERATORS)
        return Operator(self.accept().kind)


def parse_source(source: str, file_name: str = STDIN_NAME) -> Program:
    """Scan and parse `source`; errors report `file_name`."""
    tokens = Scanner(source, file_name).get_all_tokens()
    return Parser(tokens, file_name).parse_program()


def parse_file(path: str | os.PathLike[str]) -> Program:
    """Scan and parse the file at `path`; errors report its base name."""
    scanner = Scanner.from_file(path)
    return Parser(scanner.get_all_tokens(), scanner.file_name).parse_program()


__all__ = ["Parser", "parse_file", "parse_source"]
