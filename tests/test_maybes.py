"""Tests for the Maybe and Result rules."""

from __future__ import annotations

from tests.helpers import assert_fix, assert_no_errors


class TestMaybeMap:
    def test_on_nothing(self):
        assert_fix("Maybe.map f Nothing", "Nothing")

    def test_identity(self):
        assert_fix("Maybe.map identity m", "m")

    def test_on_just(self):
        assert_fix("Maybe.map f (Just 1)", "Just (f 1)")

    def test_on_just_with_lambda(self):
        assert_fix("Maybe.map (\\n -> n + 1) (Just x)", "Just ((\\n -> n + 1) x)")

    def test_plain(self):
        assert_no_errors("Maybe.map f m")


class TestMaybeAndThen:
    def test_on_nothing(self):
        assert_fix("Maybe.andThen f Nothing", "Nothing")

    def test_just_function(self):
        assert_fix("Maybe.andThen Just m", "m")


class TestMaybeWithDefault:
    def test_on_nothing(self):
        assert_fix("Maybe.withDefault 0 Nothing", "0")

    def test_on_just(self):
        assert_fix("Maybe.withDefault 0 (Just 1)", "1")

    def test_piped(self):
        assert_fix("Just 1 |> Maybe.withDefault 0", "1")

    def test_local_value(self):
        assert_no_errors("let\n    nothing = 1\nin\nMaybe.withDefault 0 nothing")


class TestResult:
    def test_map_identity(self):
        assert_fix("Result.map identity r", "r")

    def test_map_on_error(self):
        assert_fix("Result.map f (Err e)", "(Err e)")

    def test_map_on_ok(self):
        assert_fix("Result.map f (Ok 1)", "Ok (f 1)")

    def test_map_error_on_ok(self):
        assert_fix("Result.mapError f (Ok 1)", "(Ok 1)")

    def test_map_error_identity(self):
        assert_fix("Result.mapError identity r", "r")

    def test_with_default_ok(self):
        assert_fix("Result.withDefault 0 (Ok 1)", "1")

    def test_with_default_err(self):
        assert_fix("Result.withDefault 0 (Err e)", "0")

    def test_to_maybe_ok(self):
        assert_fix("Result.toMaybe (Ok 1)", "Just 1")

    def test_to_maybe_err(self):
        assert_fix("Result.toMaybe (Err e)", "Nothing")
