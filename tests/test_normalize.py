"""Tests for structural equivalence of expressions."""

from __future__ import annotations

from simplify.normalize import are_distinct_literals, are_equivalent, literal_value
from tests.helpers import lookup_for, wrap


def pair(left: str, right: str, imports: str = ""):
    """Parse ``( left, right )`` and return both elements with the lookup table."""
    module, lookup = lookup_for(wrap(f"( {left}, {right} )", imports))
    first, second = module.declarations[0].body.elements
    return lookup, first, second


def equivalent(left: str, right: str, imports: str = "") -> bool:
    lookup, first, second = pair(left, right, imports)
    return are_equivalent(lookup, first, second)


class TestEquivalence:
    def test_same_reference(self):
        assert equivalent("x", "x")

    def test_different_references(self):
        assert not equivalent("x", "y")

    def test_parentheses_ignored(self):
        assert equivalent("(f a)", "f a")

    def test_pipes_are_applications(self):
        assert equivalent("a |> f", "f a")
        assert equivalent("f <| a", "f a")

    def test_partial_pipe(self):
        assert equivalent("b |> f a", "f a b")

    def test_numbers_by_value(self):
        assert equivalent("0x10", "16")
        assert equivalent("1.0", "1")

    def test_negated_number(self):
        assert equivalent("-(1)", "-1")

    def test_double_negation(self):
        assert equivalent("-(-x)", "x")

    def test_flipped_comparison(self):
        assert equivalent("a > b", "b < a")
        assert equivalent("a >= b", "b <= a")

    def test_list_building(self):
        assert equivalent("a :: [ b ]", "[ a, b ]")
        assert equivalent("[ a ] ++ [ b ]", "[ a, b ]")

    def test_string_concatenation(self):
        assert equivalent('"a" ++ "b"', '"ab"')

    def test_record_field_order(self):
        assert equivalent("{ a = 1, b = 2 }", "{ b = 2, a = 1 }")

    def test_qualified_and_exposed(self):
        assert equivalent("List.map f xs", "map f xs", imports="import List exposing (map)")

    def test_aliased_module(self):
        assert equivalent("L.map f xs", "List.map f xs", imports="import List as L")

    def test_different_operators(self):
        assert not equivalent("a + b", "a - b")

    def test_lambdas(self):
        assert equivalent("\\x -> x", "\\(x) -> (x)")

    def test_if(self):
        assert equivalent("if c then a else b", "if (c) then a else (b)")


class TestLiterals:
    def test_literal_value(self):
        lookup, first, second = pair('"s"', "True")
        assert literal_value(lookup, first) == ("string", "s")
        assert literal_value(lookup, second) == ("ref", ("Basics",), "True")

    def test_not_a_literal(self):
        lookup, first, _ = pair("x", "1")
        assert literal_value(lookup, first) is None

    def test_distinct_literals(self):
        lookup, first, second = pair("1", "2")
        assert are_distinct_literals(lookup, first, second)

    def test_same_literals(self):
        lookup, first, second = pair("1", "1.0")
        assert not are_distinct_literals(lookup, first, second)

    def test_unknown_side(self):
        lookup, first, second = pair("1", "x")
        assert not are_distinct_literals(lookup, first, second)
