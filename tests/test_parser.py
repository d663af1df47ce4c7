"""Tests for the Elm parser."""

from __future__ import annotations

import pytest

from simplify.ast_nodes import (
    AllPattern,
    Application,
    AsPattern,
    CaseExpr,
    CustomTypeDeclaration,
    FunctionDeclaration,
    FunctionOrValue,
    IfBlock,
    InfixDeclaration,
    IntegerLit,
    LambdaExpr,
    LetDestructuring,
    LetExpr,
    ListExpr,
    NamedPattern,
    Negation,
    OperatorApplication,
    ParenthesizedExpr,
    PortDeclaration,
    PrefixOperator,
    RecordAccess,
    RecordAccessFunction,
    RecordExpr,
    RecordUpdate,
    StringLit,
    TupleExpr,
    TuplePattern,
    TypeAliasDeclaration,
    UnConsPattern,
    UnitExpr,
    VarPattern,
    expression_children,
)
from simplify.errors import SourceError
from simplify.source import SourceFile
from tests.helpers import parse, wrap


def parse_decl(source: str):
    """Parse and return the first declaration."""
    mod = parse(source)
    assert len(mod.declarations) >= 1
    return mod.declarations[0]


def parse_expr(expression: str):
    """Parse ``expression`` as the body of a declaration."""
    return parse(wrap(expression)).declarations[0].body


class TestModule:
    def test_header(self):
        mod = parse("module Main exposing (main)\n\nmain = 1\n")
        assert mod.name == ("Main",)
        assert mod.header.exposing.exposes("main")

    def test_dotted_name(self):
        mod = parse("module Page.Home exposing (..)\n\nview = 1\n")
        assert mod.name == ("Page", "Home")
        assert mod.header.exposing.everything

    def test_no_header(self):
        mod = parse("main = 1\n")
        assert mod.header is None
        assert mod.name == ("Main",)

    def test_port_module(self):
        mod = parse("port module Ports exposing (..)\n\nport send : String -> Cmd msg\n")
        assert mod.name == ("Ports",)
        assert isinstance(mod.declarations[0], PortDeclaration)
        assert mod.declarations[0].name == "send"

    def test_effect_module(self):
        mod = parse("effect module Fx where { command = MyCmd } exposing (..)\n\nx = 1\n")
        assert mod.name == ("Fx",)

    def test_imports(self):
        mod = parse(
            "module A exposing (..)\n\n"
            "import Html exposing (Html, div, text)\n"
            "import Html.Attributes as Attr\n"
            "import Maybe exposing (Maybe(..))\n"
            "import Parser exposing ((|.))\n\n"
            "x = 1\n"
        )
        html, attrs, maybe, parser = mod.imports
        assert html.exposing.exposes("div")
        assert attrs.module_name == ("Html", "Attributes")
        assert attrs.alias == "Attr"
        assert maybe.exposing.items[0].open
        assert parser.exposing.exposes("|.")


class TestDeclarations:
    def test_function(self):
        decl = parse_decl("add a b =\n    a + b\n")
        assert isinstance(decl, FunctionDeclaration)
        assert decl.name == "add"
        assert [p.name for p in decl.args] == ["a", "b"]
        assert decl.signature_range is None

    def test_signature_attached(self):
        decl = parse_decl("add : Int -> Int -> Int\nadd a b =\n    a + b\n")
        assert decl.signature_range is not None
        assert decl.range.start.row == 1

    def test_type_alias(self):
        decl = parse_decl("type alias Model =\n    { count : Int }\n")
        assert isinstance(decl, TypeAliasDeclaration)
        assert decl.is_record

    def test_custom_type(self):
        decl = parse_decl("type Msg\n    = Increment Int\n    | Decrement (Maybe Int)\n    | Reset\n")
        assert isinstance(decl, CustomTypeDeclaration)
        assert decl.constructors == ["Increment", "Decrement", "Reset"]

    def test_custom_type_record_argument(self):
        decl = parse_decl("type Shape = Circle { r : Float } | Square\n")
        assert decl.constructors == ["Circle", "Square"]

    def test_infix(self):
        decl = parse_decl("infix right 0 (<|) = apL\n")
        assert isinstance(decl, InfixDeclaration)
        assert decl.operator == "<|"

    def test_multiple_declarations(self):
        mod = parse("a = 1\n\nb = 2\n\nc = 3\n")
        assert [d.name for d in mod.declarations] == ["a", "b", "c"]


class TestExpressions:
    def test_literals(self):
        assert isinstance(parse_expr("1"), IntegerLit)
        assert parse_expr("0xFF").value == 255
        assert parse_expr("0xFF").hex
        assert isinstance(parse_expr('"s"'), StringLit)
        assert isinstance(parse_expr("()"), UnitExpr)

    def test_qualified_reference(self):
        node = parse_expr("List.map")
        assert isinstance(node, FunctionOrValue)
        assert node.module_name == ("List",)
        assert node.name == "map"

    def test_application(self):
        node = parse_expr("f a b")
        assert isinstance(node, Application)
        assert len(node.arguments) == 2

    def test_precedence(self):
        node = parse_expr("a + b * c")
        assert node.operator == "+"
        assert node.right.operator == "*"

    def test_left_associative(self):
        node = parse_expr("a - b - c")
        assert node.left.operator == "-"

    def test_right_associative(self):
        node = parse_expr("a :: b :: c")
        assert node.right.operator == "::"

    def test_pipes(self):
        node = parse_expr("x |> f |> g")
        assert node.operator == "|>"
        assert node.left.operator == "|>"

    def test_application_binds_tighter_than_operators(self):
        node = parse_expr("f a ++ g b")
        assert isinstance(node, OperatorApplication)
        assert isinstance(node.left, Application)

    def test_negation(self):
        node = parse_expr("-x")
        assert isinstance(node, Negation)

    def test_prefix_operator(self):
        node = parse_expr("(+)")
        assert isinstance(node, PrefixOperator)
        assert node.operator == "+"

    def test_parenthesized(self):
        assert isinstance(parse_expr("(a)"), ParenthesizedExpr)

    def test_tuple(self):
        node = parse_expr("( a, b )")
        assert isinstance(node, TupleExpr)

    def test_list(self):
        node = parse_expr("[ 1, 2, 3 ]")
        assert isinstance(node, ListExpr)
        assert len(node.elements) == 3

    def test_empty_list(self):
        assert parse_expr("[]").elements == []

    def test_record(self):
        node = parse_expr("{ a = 1, b = 2 }")
        assert isinstance(node, RecordExpr)
        assert [f.name for f in node.fields] == ["a", "b"]

    def test_record_update(self):
        node = parse_expr("{ model | count = 1 }")
        assert isinstance(node, RecordUpdate)
        assert node.record.name == "model"

    def test_record_access(self):
        node = parse_expr("model.user.name")
        assert isinstance(node, RecordAccess)
        assert node.field == "name"
        assert isinstance(node.record, RecordAccess)

    def test_record_access_function(self):
        node = parse_expr("List.map .name users")
        assert isinstance(node.arguments[0], RecordAccessFunction)

    def test_lambda(self):
        node = parse_expr("\\x y -> x")
        assert isinstance(node, LambdaExpr)
        assert len(node.args) == 2

    def test_if(self):
        node = parse_expr("if a then\n    b\n\nelse\n    c")
        assert isinstance(node, IfBlock)

    def test_let(self):
        node = parse_expr("let\n    x = 1\n    ( y, z ) = pair\nin\nx + y")
        assert isinstance(node, LetExpr)
        assert isinstance(node.declarations[0], FunctionDeclaration)
        assert isinstance(node.declarations[1], LetDestructuring)
        assert node.body.operator == "+"

    def test_case(self):
        node = parse_expr(
            "case msg of\n"
            "    Just (Foo x) ->\n"
            "        x\n\n"
            "    head :: _ ->\n"
            "        head\n\n"
            "    _ ->\n"
            "        0"
        )
        assert isinstance(node, CaseExpr)
        assert len(node.branches) == 3
        assert isinstance(node.branches[0].pattern, NamedPattern)
        assert isinstance(node.branches[1].pattern, UnConsPattern)
        assert isinstance(node.branches[2].pattern, AllPattern)

    def test_nested_case_in_branch(self):
        node = parse_expr(
            "case a of\n"
            "    1 ->\n"
            "        case b of\n"
            "            _ ->\n"
            "                2\n\n"
            "    _ ->\n"
            "        3"
        )
        assert len(node.branches) == 2
        assert isinstance(node.branches[0].body, CaseExpr)

    def test_patterns(self):
        node = parse_expr("\\( a, _ ) ({ b } as r) -> a")
        assert isinstance(node.args[0], TuplePattern)
        assert isinstance(node.args[1].pattern, AsPattern)
        assert isinstance(node.args[1].pattern.name, VarPattern)


class TestRanges:
    def test_every_node_addresses_its_text(self):
        text = wrap("List.map (\\x -> x + 1) [ 1, 2 ] |> List.filter ((<) 0)")
        source = SourceFile(text)
        root = parse(text).declarations[0].body

        def walk(node):
            yield node
            for child in expression_children(node):
                yield from walk(child)

        for node in walk(root):
            assert source.text_at(node.range).strip() == source.text_at(node.range)
        assert source.text_at(root.range) == "List.map (\\x -> x + 1) [ 1, 2 ] |> List.filter ((<) 0)"

    def test_operator_range(self):
        text = wrap("a ++ b")
        node = parse(text).declarations[0].body
        assert SourceFile(text).text_at(node.operator_range) == "++"


class TestErrors:
    def test_syntax_error(self):
        with pytest.raises(SourceError) as exc:
            parse("a = (1\n")
        assert exc.value.diagnostics

    def test_recovers_to_next_declaration(self):
        with pytest.raises(SourceError) as exc:
            parse("a = )\n\nb = )\n")
        assert len(exc.value.diagnostics) == 2

    def test_indented_declaration(self):
        with pytest.raises(SourceError):
            parse("  a = 1\n")
