"""Tests for module-name resolution of references."""

from __future__ import annotations

import pytest

from simplify.ast_nodes import CaseExpr, FunctionOrValue, expression_children
from simplify.source import Range
from simplify.symbols import BindingKind, LocalBindings
from tests.helpers import analyze, assert_no_errors, lookup_for, wrap


def _walk(node):
    yield node
    for child in expression_children(node):
        yield from _walk(child)


def resolved(expression: str, imports: str = "", extra: str = "") -> dict:
    """Map each written reference in ``expression`` to the module it resolves to."""
    module, lookup = lookup_for(wrap(expression, imports) + extra)
    result = {}
    for node in _walk(module.declarations[0].body):
        if isinstance(node, FunctionOrValue):
            written = ".".join((*node.module_name, node.name))
            result[written] = lookup.module_name_for(node.range)
    return result


class TestDefaultImports:
    def test_qualified(self):
        assert resolved("List.map f xs")["List.map"] == ("List",)

    def test_basics_unqualified(self):
        assert resolved("identity x")["identity"] == ("Basics",)

    def test_maybe_constructors(self):
        names = resolved("f (Just 1) Nothing")
        assert names["Just"] == ("Maybe",)
        assert names["Nothing"] == ("Maybe",)

    def test_result_constructors(self):
        assert resolved("Ok 1")["Ok"] == ("Result",)

    def test_cmd_alias(self):
        assert resolved("Cmd.none")["Cmd.none"] == ("Platform", "Cmd")

    def test_list_not_exposed(self):
        assert resolved("map f xs")["map"] is None

    def test_set_needs_import(self):
        assert resolved("Set.empty")["Set.empty"] is None


class TestImports:
    def test_import(self):
        assert resolved("Set.empty", "import Set")["Set.empty"] == ("Set",)

    def test_alias(self):
        assert resolved("D.empty", "import Dict as D")["D.empty"] == ("Dict",)

    def test_alias_hides_full_name(self):
        assert resolved("Dict.empty", "import Dict as D")["Dict.empty"] is None

    def test_exposed_value(self):
        assert resolved("map f xs", "import List exposing (map)")["map"] == ("List",)

    def test_exposing_everything(self):
        assert resolved("empty", "import Array exposing (..)")["empty"] == ("Array",)

    def test_unknown_module_exposing_everything(self):
        assert resolved("div [] []", "import Html exposing (..)")["div"] == ("Html",)

    def test_unknown_module_qualified(self):
        assert resolved("Html.text s", "import Html")["Html.text"] == ("Html",)

    def test_ambiguous_unknown_modules(self):
        imports = "import Html exposing (..)\nimport Svg exposing (..)"
        assert resolved("text s", imports)["text"] is None


class TestQualifiers:
    def _qualifier(self, module_name, imports=""):
        _, lookup = lookup_for(wrap("x", imports))
        return lookup.qualifier_for(module_name)

    def test_default_import(self):
        assert self._qualifier(("List",)) == "List"

    def test_default_alias(self):
        assert self._qualifier(("Platform", "Cmd")) == "Cmd"

    def test_explicit_alias_wins(self):
        assert self._qualifier(("List",), "import List as L") == "L"

    def test_exposing_import(self):
        assert self._qualifier(("Set",), "import Set exposing (fromList)") == "Set"

    def test_not_imported(self):
        assert self._qualifier(("Dict",)) is None


class TestOwnDeclarations:
    def test_own_function(self):
        names = resolved("helper 1", extra="\nhelper x =\n    x\n")
        assert names["helper"] == ("A",)

    def test_own_constructor_shadows_core(self):
        names = resolved("f Nothing", extra="\ntype Opt\n    = Nothing\n    | Some\n")
        assert names["Nothing"] == ("A",)

    def test_shadowed_constructor_is_not_simplified(self):
        source = wrap("Maybe.withDefault 0 Nothing") + "\ntype Opt\n    = Nothing\n    | Some\n"
        assert not analyze(source)

    def test_own_true_is_not_a_boolean(self):
        source = wrap("not True") + "\ntype Flag\n    = True\n    | Off\n"
        assert not analyze(source)


class TestLocalBindings:
    def test_lambda_argument(self):
        assert resolved("\\identity -> identity")["identity"] is None

    def test_let_binding(self):
        assert resolved("let\n    identity = 1\nin\nidentity")["identity"] is None

    def test_case_pattern(self):
        assert resolved("case m of\n    always ->\n        always")["always"] is None

    def test_function_argument(self):
        module, lookup = lookup_for("module A exposing (..)\n\n\nf identity =\n    identity\n")
        body = module.declarations[0].body
        assert lookup.module_name_for(body.range) is None

    def test_local_identity_is_not_simplified(self):
        assert_no_errors("\\identity -> List.map identity xs")

    def test_scope_ends_after_lambda(self):
        names = resolved("( \\identity -> identity, identity )")
        assert names["identity"] == ("Basics",)


class TestPatterns:
    def test_constructor_pattern(self):
        module, lookup = lookup_for(wrap("case m of\n    Just x ->\n        x\n\n    _ ->\n        0"))
        case = module.declarations[0].body
        assert isinstance(case, CaseExpr)
        pattern = case.branches[0].pattern
        assert lookup.module_name_for(pattern.name_range) == ("Maybe",)


class TestOperators:
    def test_basics_operator(self):
        module, lookup = lookup_for(wrap("a + b"))
        body = module.declarations[0].body
        assert lookup.module_name_for(body.operator_range) == ("Basics",)

    def test_cons(self):
        module, lookup = lookup_for(wrap("a :: b"))
        body = module.declarations[0].body
        assert lookup.module_name_for(body.operator_range) == ("List",)


class TestBindingFrames:
    def test_frame_scoping(self):
        bindings = LocalBindings()
        with bindings.frame():
            bindings.bind("x", BindingKind.ARGUMENT, Range.of(1, 1, 1, 2))
            with bindings.frame():
                bindings.bind("y", BindingKind.PATTERN, Range.of(2, 1, 2, 2))
                assert "x" in bindings
                assert bindings.depth == 2
            assert "y" not in bindings
            assert bindings.get("x").kind == BindingKind.ARGUMENT
        assert bindings.depth == 0
        assert bindings.get("x") is None

    def test_frame_closed_on_error(self):
        bindings = LocalBindings()
        with pytest.raises(ValueError):
            with bindings.frame():
                bindings.bind("x", BindingKind.LET_BINDING, Range.of(1, 1, 1, 2))
                raise ValueError("boom")
        assert "x" not in bindings
