"""
Abstract syntax tree (AST) node family for the Alpha language.

Each grammar construct is one frozen dataclass; `Node` is the closed union of
all of them. Nodes are built once by the parser and never mutated afterwards;
sequences of children are stored as tuples.

Functions:
    children(node): Child nodes in source order.
    render(node): Indented S-expression text, used for debugging and tests.
    to_dict(node): JSON-compatible dictionary encoding of a tree.

Rendering:
    Every node renders as its construct name followed by `(`, its children on
    their own lines indented by four spaces per level, then `)`. Leaf values
    (identifier text, operator symbol, literal value) render as one indented
    line. For example `x = 1` renders as::

        Program (
            Assignment (
                x
                Expression (
                    IntegerLiteral (
                        1))))
"""

from dataclasses import dataclass
from typing import Any, Union

from alpha.alpha_constants import OPERATOR_SYMBOLS, TokenKind
from alpha.alpha_lexer import Token

INDENT = "    "


class _Renderable:
    __slots__ = ()

    def __str__(self) -> str:
        return render(self)  # type: ignore[arg-type]


@dataclass(frozen=True)
class IntegerLiteral(_Renderable):
    value: int


@dataclass(frozen=True)
class FloatLiteral(_Renderable):
    value: float


@dataclass(frozen=True)
class StringLiteral(_Renderable):
    value: str


@dataclass(frozen=True)
class IdentifierRef(_Renderable):
    identifier: Token


@dataclass(frozen=True)
class Operator(_Renderable):
    kind: TokenKind

    @property
    def symbol(self) -> str:
        return OPERATOR_SYMBOLS[self.kind]


@dataclass(frozen=True)
class Expression(_Renderable):
    """Flat chain `primary (operator primary)*`, no precedence grouping.

    A parenthesised primary is itself an `Expression` inside the chain.
    """

    items: tuple["Primary | Operator", ...]

    @property
    def primaries(self) -> tuple["Primary", ...]:
        return self.items[::2]  # type: ignore[return-value]

    @property
    def operators(self) -> tuple[Operator, ...]:
        return self.items[1::2]  # type: ignore[return-value]


@dataclass(frozen=True)
class TypeDenoter(_Renderable):
    identifier: Token


@dataclass(frozen=True)
class ConstDecl(_Renderable):
    identifier: Token
    initializer: Expression


@dataclass(frozen=True)
class VarDecl(_Renderable):
    identifier: Token
    type_denoter: TypeDenoter


@dataclass(frozen=True)
class Declaration(_Renderable):
    declarations: tuple["ConstDecl | VarDecl", ...]


@dataclass(frozen=True)
class Assignment(_Renderable):
    identifier: Token
    expression: Expression


@dataclass(frozen=True)
class FunctionCall(_Renderable):
    identifier: Token
    argument: Expression | None = None


@dataclass(frozen=True)
class IfBlock(_Renderable):
    condition: Expression
    then_branch: "SingleCommand"
    else_branch: "SingleCommand"


@dataclass(frozen=True)
class WhileBlock(_Renderable):
    condition: Expression
    body: "SingleCommand"


@dataclass(frozen=True)
class LetBlock(_Renderable):
    declaration: Declaration
    body: "SingleCommand"


@dataclass(frozen=True)
class Command(_Renderable):
    commands: tuple["SingleCommand", ...]


@dataclass(frozen=True)
class BeginBlock(_Renderable):
    body: Command


@dataclass(frozen=True)
class Program(_Renderable):
    command: "SingleCommand"


Literal = Union[IntegerLiteral, FloatLiteral, StringLiteral]
Primary = Union[IntegerLiteral, FloatLiteral, StringLiteral, IdentifierRef, Expression]
SingleCommand = Union[
    Assignment, FunctionCall, IfBlock, WhileBlock, LetBlock, BeginBlock
]
SingleDeclaration = Union[ConstDecl, VarDecl]

Node = Union[
    Program,
    Assignment,
    FunctionCall,
    IfBlock,
    WhileBlock,
    LetBlock,
    BeginBlock,
    Command,
    Declaration,
    ConstDecl,
    VarDecl,
    TypeDenoter,
    Expression,
    Operator,
    IntegerLiteral,
    FloatLiteral,
    StringLiteral,
    IdentifierRef,
]


def children(node: Node) -> tuple[Node, ...]:
    """Returns the direct child nodes of `node` in source order."""
    match node:
        case Program(command=command):
            return (command,)
        case Assignment(expression=expression):
            return (expression,)
        case FunctionCall(argument=argument):
            return () if argument is None else (argument,)
        case IfBlock(condition=condition, then_branch=then, else_branch=orelse):
            return (condition, then, orelse)
        case WhileBlock(condition=condition, body=body):
            return (condition, body)
        case LetBlock(declaration=declaration, body=body):
            return (declaration, body)
        case BeginBlock(body=body):
            return (body,)
        case Command(commands=commands):
            return commands
        case Declaration(declarations=declarations):
            return declarations
        case ConstDecl(initializer=initializer):
            return (initializer,)
        case VarDecl(type_denoter=type_denoter):
            return (type_denoter,)
        case Expression(items=items):
            return items
        case (
            TypeDenoter()
            | Operator()
            | IntegerLiteral()
            | FloatLiteral()
            | StringLiteral()
            | IdentifierRef()
        ):
            return ()
    raise TypeError(f"Not an AST node: {node!r}")


def _leaves(node: Node) -> list[str]:
    """Leaf value lines printed before a node's child nodes."""
    match node:
        case Assignment(identifier=tok) | FunctionCall(identifier=tok):
            return [tok.text]
        case ConstDecl(identifier=tok) | VarDecl(identifier=tok):
            return [tok.text]
        case TypeDenoter(identifier=tok) | IdentifierRef(identifier=tok):
            return [tok.text]
        case Operator():
            return [node.symbol]
        case IntegerLiteral(value=value):
            return [str(value)]
        case FloatLiteral(value=value):
            return [repr(value)]
        case StringLiteral(value=value):
            return [f"'{value}'"]
    return []


def _build(node: Node, level: int, out: list[str]) -> None:
    indent = INDENT * level
    inner = INDENT * (level + 1)
    out.append(f"{indent}{type(node).__name__} (")
    for leaf in _leaves(node):
        out.append(f"\n{inner}{leaf}")
    for child in children(node):
        out.append("\n")
        _build(child, level + 1, out)
    out.append(")")


def render(node: Node) -> str:
    """Renders `node` and its subtree as indented S-expression text."""
    out: list[str] = []
    _build(node, 0, out)
    return "".join(out)


def _token_fields(tok: Token) -> dict[str, Any]:
    return {"name": tok.text, "line": tok.line, "col": tok.column}


def to_dict(node: Node) -> dict[str, Any]:
    """Encodes a tree as nested dictionaries suitable for `json.dumps`.

    Every dictionary has a `kind` key naming the construct; identifier-bearing
    nodes add `name`, `line` and `col`.
    """
    kind = type(node).__name__
    match node:
        case Program(command=command):
            return {"kind": kind, "command": to_dict(command)}
        case Assignment(identifier=tok, expression=expression):
            return {
                "kind": kind,
                **_token_fields(tok),
                "expression": to_dict(expression),
            }
        case FunctionCall(identifier=tok, argument=argument):
            return {
                "kind": kind,
                **_token_fields(tok),
                "expression": None if argument is None else to_dict(argument),
            }
        case IfBlock(condition=condition, then_branch=then, else_branch=orelse):
            return {
                "kind": kind,
                "condition": to_dict(condition),
                "then": to_dict(then),
                "else": to_dict(orelse),
            }
        case WhileBlock(condition=condition, body=body):
            return {
                "kind": kind,
                "condition": to_dict(condition),
                "body": to_dict(body),
            }
        case LetBlock(declaration=declaration, body=body):
            return {
                "kind": kind,
                "declaration": to_dict(declaration),
                "body": to_dict(body),
            }
        case BeginBlock(body=body):
            return {"kind": kind, "body": to_dict(body)}
        case Command() | Declaration() | Expression():
            return {"kind": kind, "children": [to_dict(c) for c in children(node)]}
        case ConstDecl(identifier=tok, initializer=initializer):
            return {
                "kind": kind,
                **_token_fields(tok),
                "expression": to_dict(initializer),
            }
        case VarDecl(identifier=tok, type_denoter=type_denoter):
            return {"kind": kind, **_token_fields(tok), "type": to_dict(type_denoter)}
        case TypeDenoter(identifier=tok) | IdentifierRef(identifier=tok):
            return {"kind": kind, **_token_fields(tok)}
        case Operator():
            return {"kind": kind, "operator": node.symbol}
        case (
            IntegerLiteral(value=value)
            | FloatLiteral(value=value)
            | StringLiteral(value=value)
        ):
            return {"kind": kind, "value": value}
    raise TypeError(f"Not an AST node: {node!r}")


__all__ = [
    "Assignment",
    "BeginBlock",
    "Command",
    "ConstDecl",
    "Declaration",
    "Expression",
    "FloatLiteral",
    "FunctionCall",
    "IdentifierRef",
    "IfBlock",
    "IntegerLiteral",
    "LetBlock",
    "Literal",
    "Node",
    "Operator",
    "Primary",
    "Program",
    "SingleCommand",
    "SingleDeclaration",
    "StringLiteral",
    "TypeDenoter",
    "VarDecl",
    "WhileBlock",
    "children",
    "render",
    "to_dict",
]
