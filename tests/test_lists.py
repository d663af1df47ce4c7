"""Tests for the List rules."""

from __future__ import annotations

from tests.helpers import analyze_expr, assert_fix, assert_no_errors


class TestEmptyList:
    def test_map_on_empty(self):
        assert_fix("List.map fn []", "[]")

    def test_empty_takes_precedence(self):
        assert_fix("List.map identity []", "[]")

    def test_piped_empty(self):
        assert_fix("[] |> List.filter f", "[]")

    def test_reverse_empty(self):
        assert_fix("List.reverse []", "[]")

    def test_map2_second_list(self):
        assert_fix("List.map2 f xs []", "[]")

    def test_unzip(self):
        assert_fix("List.unzip []", "( [], [] )")

    def test_partition(self):
        assert_fix("List.partition f []", "( [], [] )")

    def test_message(self):
        diag = assert_fix("List.map fn []", "[]")
        assert diag.message == "Using List.map on an empty list will result in an empty list"


class TestMap:
    def test_identity(self):
        assert_fix("List.map identity xs", "xs")

    def test_identity_lambda(self):
        assert_fix("List.map (\\y -> y) xs", "xs")

    def test_identity_piped(self):
        assert_fix("xs |> List.map identity", "xs")

    def test_identity_partial(self):
        assert_fix("List.map identity", "identity")

    def test_exposed_map(self):
        assert_fix("map identity xs", "xs", imports="import List exposing (map)")

    def test_aliased_module(self):
        assert_fix("L.map identity xs", "xs", imports="import List as L")

    def test_other_function(self):
        assert_no_errors("List.map f xs")


class TestFilter:
    def test_always_true(self):
        assert_fix("List.filter (always True) xs", "xs")

    def test_lambda_true(self):
        assert_fix("List.filter (\\_ -> True) xs", "xs")

    def test_always_true_partial(self):
        assert_fix("List.filter (always True)", "identity")

    def test_always_false(self):
        assert_fix("List.filter (always False) xs", "[]")

    def test_always_false_partial(self):
        assert_fix("List.filter (always False)", "always []")


class TestFilterMap:
    def test_just(self):
        assert_fix("List.filterMap Just xs", "xs")

    def test_always_nothing(self):
        assert_fix("List.filterMap (always Nothing) xs", "[]")


class TestConcat:
    def test_literals_merged(self):
        assert_fix("List.concat [ [ y, z ], [ w ] ]", "[ y, z, w ]")

    def test_single_element(self):
        assert_fix("List.concat [ xs ]", "xs")

    def test_run_of_literals(self):
        assert_fix("List.concat [ [ 1 ], xs, [ 2 ], [ 3 ] ]", "List.concat [ [ 1 ], xs, [ 2, 3 ] ]")

    def test_one_diagnostic_per_run(self):
        diagnostics = analyze_expr("List.concat [ [ 1 ], [ 2 ], xs, [ 3 ], [ 4 ] ]")
        assert len(diagnostics) == 2

    def test_concat_map_identity(self):
        assert_fix("List.concatMap identity xs", "List.concat xs")

    def test_concat_map_exposed(self):
        assert_fix("concatMap identity xs", "List.concat xs", imports="import List exposing (concatMap)")

    def test_concat_map_aliased(self):
        assert_fix("L.concatMap identity xs", "L.concat xs", imports="import List as L")

    def test_concat_map_singleton(self):
        assert_fix("List.concatMap List.singleton xs", "xs")


class TestQueries:
    def test_is_empty_empty(self):
        assert_fix("List.isEmpty []", "True")

    def test_is_empty_literal(self):
        assert_fix("List.isEmpty [ 1 ]", "False")

    def test_is_empty_cons(self):
        assert_fix("List.isEmpty (x :: xs)", "False")

    def test_length(self):
        assert_fix("List.length [ 1, 2, 3 ]", "3")

    def test_member_empty(self):
        assert_fix("List.member x []", "False")

    def test_all_empty(self):
        assert_fix("List.all f []", "True")

    def test_any_empty(self):
        assert_fix("List.any f []", "False")

    def test_all_always_true(self):
        assert_fix("List.all (always True) xs", "True")

    def test_any_always_false(self):
        assert_fix("List.any (always False) xs", "False")


class TestConstruction:
    def test_repeat_zero(self):
        assert_fix("List.repeat 0 str", "[]")

    def test_repeat_negative(self):
        assert_fix("List.repeat (-5) str", "[]")

    def test_repeat_one(self):
        assert_fix("List.repeat 1 str", "[ str ]")

    def test_repeat_many(self):
        assert_no_errors("List.repeat 2 str")

    def test_range_descending(self):
        assert_fix("List.range 6 3", "[]")

    def test_range_single(self):
        assert_fix("List.range 4 4", "[ 4 ]")

    def test_range_ascending(self):
        assert_no_errors("List.range 1 3")


class TestOrder:
    def test_double_reverse(self):
        assert_fix("List.reverse (List.reverse xs)", "xs")

    def test_sort_single(self):
        assert_fix("List.sort [ x ]", "[ x ]")


class TestFolds:
    def test_foldl_empty(self):
        assert_fix("List.foldl f 0 []", "0")

    def test_foldr_empty(self):
        assert_fix("List.foldr f init []", "init")

    def test_sum_empty(self):
        assert_fix("List.sum []", "0")

    def test_product_empty(self):
        assert_fix("List.product []", "1")

    def test_sum_single(self):
        assert_fix("List.sum [ x ]", "x")


class TestAccessors:
    def test_head_empty(self):
        assert_fix("List.head []", "Nothing")

    def test_head_literal(self):
        assert_fix("List.head [ 1, 2 ]", "Just 1")

    def test_head_cons(self):
        assert_fix("List.head (f x :: xs)", "Just (f x)")

    def test_tail_literal(self):
        assert_fix("List.tail [ 1, 2 ]", "Just [ 2 ]")

    def test_minimum_single(self):
        assert_fix("List.minimum [ x ]", "Just x")

    def test_maximum_empty(self):
        assert_fix("List.maximum []", "Nothing")


class TestSlicing:
    def test_take_zero(self):
        assert_fix("List.take 0 xs", "[]")

    def test_drop_zero(self):
        assert_fix("List.drop 0 xs", "xs")

    def test_take_some(self):
        assert_no_errors("List.take 2 xs")
