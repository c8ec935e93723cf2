import dataclasses
import json
from textwrap import dedent

import hypothesis.strategies as st
import pytest
from hypothesis import given

from alpha.alpha_ast import (
    Assignment,
    Command,
    Expression,
    FunctionCall,
    IdentifierRef,
    IntegerLiteral,
    Node,
    Operator,
    Program,
    children,
    render,
    to_dict,
)
from alpha.alpha_constants import TokenKind
from alpha.alpha_lexer import Token
from alpha.alpha_parser import parse_source

KEYWORD_WORDS = {
    "if",
    "then",
    "else",
    "while",
    "do",
    "let",
    "in",
    "begin",
    "end",
    "const",
    "var",
}


def ident(name: str) -> Token:
    return Token(TokenKind.IDENTIFIER, name, 1, 1)


def walk(node: Node) -> list[Node]:
    nodes = [node]
    for child in children(node):
        nodes.extend(walk(child))
    return nodes


@pytest.mark.parametrize(
    "source,expected",
    [
        (
            "x = 1",
            """\
            Program (
                Assignment (
                    x
                    Expression (
                        IntegerLiteral (
                            1))))""",
        ),
        (
            "if c then x() else y()",
            """\
            Program (
                IfBlock (
                    Expression (
                        IdentifierRef (
                            c))
                    FunctionCall (
                        x)
                    FunctionCall (
                        y)))""",
        ),
        (
            "let var n : Integer in f()",
            """\
            Program (
                LetBlock (
                    Declaration (
                        VarDecl (
                            n
                            TypeDenoter (
                                Integer)))
                    FunctionCall (
                        f)))""",
        ),
        (
            "x = 'a' + 1.5 == (y)",
            """\
            Program (
                Assignment (
                    x
                    Expression (
                        StringLiteral (
                            'a')
                        Operator (
                            +)
                        FloatLiteral (
                            1.5)
                        Operator (
                            ==)
                        Expression (
                            IdentifierRef (
                                y)))))""",
        ),
        (
            "begin while a do b(1); c = 2 end",
            """\
            Program (
                BeginBlock (
                    Command (
                        WhileBlock (
                            Expression (
                                IdentifierRef (
                                    a))
                            FunctionCall (
                                b
                                Expression (
                                    IntegerLiteral (
                                        1))))
                        Assignment (
                            c
                            Expression (
                                IntegerLiteral (
                                    2))))))""",
        ),
    ],
)
def test_render(source: str, expected: str) -> None:
    program = parse_source(source)
    assert render(program) == dedent(expected)
    assert str(program) == render(program)


def test_render_subtree() -> None:
    node = Operator(TokenKind.LESS_EQUAL)
    assert render(node) == "Operator (\n    <=)"


def test_children_in_source_order() -> None:
    program = parse_source("let const k ~ 5; var v : T in f(k)")
    names = [type(n).__name__ for n in walk(program)]
    assert names == [
        "Program",
        "LetBlock",
        "Declaration",
        "ConstDecl",
        "Expression",
        "IntegerLiteral",
        "VarDecl",
        "TypeDenoter",
        "FunctionCall",
        "Expression",
        "IdentifierRef",
    ]


def test_children_of_call_without_argument() -> None:
    assert children(FunctionCall(ident("f"))) == ()


def test_children_rejects_non_nodes() -> None:
    with pytest.raises(TypeError, match="Not an AST node"):
        children("x")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        to_dict(42)  # type: ignore[arg-type]


def test_nodes_are_immutable() -> None:
    node = Assignment(ident("x"), Expression((IntegerLiteral(1),)))
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.expression = Expression((IntegerLiteral(2),))  # type: ignore[misc]
    assert isinstance(node.expression.items, tuple)


def test_structural_equality() -> None:
    a = parse_source("x = y + 1")
    b = parse_source("x = y + 1")
    c = parse_source("x = y + 2")
    assert a == b
    assert a != c


def test_to_dict_is_json_serializable() -> None:
    program = parse_source('let var s : Text in print("hi" + s)')
    encoded = to_dict(program)
    assert json.loads(json.dumps(encoded)) == encoded
    assert encoded["kind"] == "Program"
    let = encoded["command"]
    assert let["kind"] == "LetBlock"
    (var,) = let["declaration"]["children"]
    assert var == {
        "kind": "VarDecl",
        "name": "s",
        "line": 1,
        "col": 9,
        "type": {"kind": "TypeDenoter", "name": "Text", "line": 1, "col": 13},
    }
    call = let["body"]
    assert call["name"] == "print"
    assert [c["kind"] for c in call["expression"]["children"]] == [
        "StringLiteral",
        "Operator",
        "IdentifierRef",
    ]
    assert call["expression"]["children"][1] == {"kind": "Operator", "operator": "+"}


def test_to_dict_if_and_call_without_argument() -> None:
    encoded = to_dict(parse_source("if a then f() else g()"))["command"]
    assert encoded["kind"] == "IfBlock"
    assert encoded["then"]["expression"] is None
    assert encoded["else"]["name"] == "g"
    assert encoded["condition"]["children"][0]["name"] == "a"


def test_command_render_without_parser() -> None:
    node = Command((FunctionCall(ident("f")), FunctionCall(ident("g"))))
    assert render(node) == (
        "Command (\n"
        "    FunctionCall (\n"
        "        f)\n"
        "    FunctionCall (\n"
        "        g))"
    )


# Random well-formed programs

names = st.from_regex(r"[a-z][a-z0-9]{0,4}", fullmatch=True).filter(
    lambda s: s not in KEYWORD_WORDS
)
primaries = st.one_of(
    names,
    st.integers(min_value=0, max_value=999).map(str),
    st.sampled_from(["1.5", "0.25", "'txt'", '"quoted"']),
)
operators = st.sampled_from(["+", "-", "*", "/", "=", "==", "<", ">", "<=", ">="])
expressions = st.recursive(
    primaries,
    lambda inner: st.one_of(
        st.tuples(inner, operators, inner).map(" ".join),
        inner.map(lambda e: f"({e})"),
    ),
    max_leaves=6,
)
simple_commands = st.one_of(
    st.tuples(names, expressions).map(lambda t: f"{t[0]} = {t[1]}"),
    names.map(lambda n: f"{n}()"),
    st.tuples(names, expressions).map(lambda t: f"{t[0]}({t[1]})"),
)
declarations = st.one_of(
    st.tuples(names, expressions).map(lambda t: f"const {t[0]} ~ {t[1]}"),
    st.tuples(names, names).map(lambda t: f"var {t[0]} : {t[1]}"),
)
commands = st.recursive(
    simple_commands,
    lambda inner: st.one_of(
        st.tuples(expressions, inner, inner).map(
            lambda t: f"if {t[0]} then {t[1]} else {t[2]}"
        ),
        st.tuples(expressions, inner).map(lambda t: f"while {t[0]} do {t[1]}"),
        st.tuples(st.lists(declarations, min_size=1, max_size=3), inner).map(
            lambda t: f"let {'; '.join(t[0])} in {t[1]}"
        ),
        st.lists(inner, min_size=1, max_size=3).map(
            lambda cs: f"begin {'; '.join(cs)} end"
        ),
    ),
    max_leaves=8,
)


@given(commands)  # type: ignore[misc]
def test_render_is_idempotent(source: str) -> None:
    program = parse_source(source)
    first = render(program)
    assert render(program) == first
    assert render(parse_source(source)) == first
    assert isinstance(program, Program)


@given(commands)  # type: ignore[misc]
def test_every_node_is_reachable_and_encodable(source: str) -> None:
    program = parse_source(source)
    for node in walk(program):
        assert render(node)
    assert json.loads(json.dumps(to_dict(program)))["kind"] == "Program"


@given(commands)  # type: ignore[misc]
def test_identifiers_keep_source_text(source: str) -> None:
    program = parse_source(source)
    for node in walk(program):
        if isinstance(node, IdentifierRef):
            assert node.identifier.kind is TokenKind.IDENTIFIER
            assert node.identifier.text in source
