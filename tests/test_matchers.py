"""Tests for the expression shape matchers."""

from __future__ import annotations

from simplify.ast_nodes import FunctionOrValue, IntegerLit, LambdaExpr, ParenthesizedExpr
from simplify.matchers import (
    BASICS,
    LIST,
    CallStyle,
    application_view,
    get_always_result,
    get_boolean,
    get_call_with_args,
    get_collapsed_cons,
    get_composition_chain,
    get_int,
    get_number,
    get_specific_call,
    get_tuple_projection,
    is_identity,
    is_just_function,
    is_reference_to,
    reduce_lambda,
    remove_parens,
)
from tests.helpers import lookup_for, wrap


def body_of(expression: str, imports: str = ""):
    """The parsed ``expression`` and the lookup table of its module."""
    module, lookup = lookup_for(wrap(expression, imports))
    return module.declarations[0].body, lookup


def name_of(node) -> str:
    node = remove_parens(node)
    assert isinstance(node, FunctionOrValue)
    return node.name


class TestReferences:
    def test_remove_parens(self):
        node, _ = body_of("((x))")
        assert isinstance(node, ParenthesizedExpr)
        assert name_of(node) == "x"

    def test_is_reference_to(self):
        node, lookup = body_of("(identity)")
        assert is_reference_to(lookup, node, BASICS, "identity")
        assert not is_reference_to(lookup, node, LIST, "identity")

    def test_get_boolean(self):
        node, lookup = body_of("True")
        assert get_boolean(lookup, node) is True
        node, lookup = body_of("False")
        assert get_boolean(lookup, node) is False
        node, lookup = body_of("flag")
        assert get_boolean(lookup, node) is None


class TestApplicationView:
    def test_prefix(self):
        node, _ = body_of("f a b")
        view = application_view(node)
        assert name_of(view.function) == "f"
        assert [name_of(a) for a in view.arguments] == ["a", "b"]
        assert view.style is CallStyle.PREFIX

    def test_nested_prefix(self):
        node, _ = body_of("(f a) b")
        view = application_view(node)
        assert [name_of(a) for a in view.arguments] == ["a", "b"]

    def test_pipe_left(self):
        node, _ = body_of("f a <| b")
        view = application_view(node)
        assert [name_of(a) for a in view.arguments] == ["a", "b"]
        assert view.style is CallStyle.PIPE_LEFT

    def test_pipe_right(self):
        node, _ = body_of("b |> f a")
        view = application_view(node)
        assert name_of(view.function) == "f"
        assert [name_of(a) for a in view.arguments] == ["a", "b"]
        assert view.style is CallStyle.PIPE_RIGHT
        assert view.pivot_range == node.right.range

    def test_pipe_into_bare_function(self):
        node, _ = body_of("b |> f")
        view = application_view(node)
        assert view.pivot_range is None
        assert [name_of(a) for a in view.arguments] == ["b"]

    def test_not_an_application(self):
        node, _ = body_of("a + b")
        assert application_view(node) is None


class TestCalls:
    def test_specific_call(self):
        node, lookup = body_of("List.map f xs")
        call = get_specific_call(lookup, node, LIST, "map")
        assert call is not None
        assert len(call.arguments) == 2
        assert name_of(call.second_arg) == "xs"
        assert call.third_arg is None

    def test_bare_reference(self):
        node, lookup = body_of("List.map")
        call = get_specific_call(lookup, node, LIST, "map")
        assert call.arguments == []

    def test_other_function(self):
        node, lookup = body_of("List.filter f xs")
        assert get_specific_call(lookup, node, LIST, "map") is None

    def test_argument_count(self):
        node, lookup = body_of("List.map f")
        assert get_call_with_args(lookup, node, LIST, "map", 2) is None
        assert get_call_with_args(lookup, node, LIST, "map", 1) is not None

    def test_eta_expanded_call(self):
        node, lookup = body_of("\\x -> List.map f x")
        call = get_specific_call(lookup, node, LIST, "map")
        assert call is not None
        assert len(call.arguments) == 1


class TestLambdas:
    def test_reduce_single(self):
        node, _ = body_of("\\x -> f x")
        assert name_of(reduce_lambda(node)) == "f"

    def test_reduce_keeps_leading_arguments(self):
        node, _ = body_of("\\x y -> f a x y")
        reduced = reduce_lambda(node)
        assert name_of(reduced.function) == "f"
        assert len(reduced.arguments) == 1

    def test_reduce_partially(self):
        node, _ = body_of("\\x y -> f y")
        reduced = reduce_lambda(node)
        assert isinstance(reduced, LambdaExpr)
        assert len(reduced.args) == 1

    def test_no_reduction_when_parameter_reused(self):
        node, _ = body_of("\\x -> f x x")
        assert reduce_lambda(node) is node

    def test_identity(self):
        for expression in ("identity", "\\x -> x", "(\\y -> y)", "\\x -> identity x"):
            node, lookup = body_of(expression)
            assert is_identity(lookup, node), expression

    def test_not_identity(self):
        for expression in ("\\x -> f x", "\\x y -> x", "id"):
            node, lookup = body_of(expression)
            assert not is_identity(lookup, node), expression

    def test_always(self):
        node, lookup = body_of("always 1")
        assert isinstance(get_always_result(lookup, node), IntegerLit)

    def test_ignoring_lambda(self):
        node, lookup = body_of("\\_ -> 1")
        assert isinstance(get_always_result(lookup, node), IntegerLit)

    def test_ignoring_first_of_two(self):
        node, lookup = body_of("\\_ y -> y")
        result = get_always_result(lookup, node)
        assert isinstance(result, LambdaExpr)
        assert len(result.args) == 1

    def test_just_function(self):
        for expression in ("Just", "\\x -> Just x"):
            node, lookup = body_of(expression)
            assert is_just_function(lookup, node), expression


class TestLiterals:
    def test_int(self):
        assert get_int(body_of("42")[0]) == 42
        assert get_int(body_of("0x10")[0]) == 16

    def test_negated_int(self):
        assert get_int(body_of("-(5)")[0]) == -5

    def test_number(self):
        assert get_number(body_of("1.5")[0]) == 1.5
        assert get_number(body_of("x")[0]) is None


class TestChains:
    def test_cons(self):
        node, _ = body_of("a :: b :: rest")
        chain = get_collapsed_cons(node)
        assert [name_of(e) for e in chain.consed] == ["a", "b"]
        assert name_of(chain.tail) == "rest"

    def test_forward_composition(self):
        node, _ = body_of("f >> g >> h")
        chain = get_composition_chain(node)
        assert [name_of(fn) for fn in chain.functions] == ["f", "g", "h"]
        assert name_of(chain.earliest) == "f"

    def test_backward_composition(self):
        node, _ = body_of("h << g << f")
        chain = get_composition_chain(node)
        assert [name_of(fn) for fn in chain.functions] == ["f", "g", "h"]
        assert name_of(chain.latest) == "h"

    def test_tuple_projection(self):
        node, lookup = body_of("Tuple.first")
        assert get_tuple_projection(lookup, node) == 0
        node, lookup = body_of("\\( _, b ) -> b")
        assert get_tuple_projection(lookup, node) == 1
        node, lookup = body_of("\\( a, b ) -> a")
        assert get_tuple_projection(lookup, node) is None
