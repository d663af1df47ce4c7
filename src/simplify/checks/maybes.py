"""Rules for Maybe and Result."""

from __future__ import annotations

from simplify.ast_nodes import Expr
from simplify.checks.helpers import as_argument
from simplify.dispatch import CheckInfo, function_check
from simplify.errors import Diagnostic
from simplify.fix import Edit
from simplify.matchers import (
    MAYBE,
    RESULT,
    FunctionCall,
    get_call_with_args,
    is_identity,
    is_just_function,
    is_nothing,
)


def _report(info: CheckInfo, message: str, detail: str, fixes: list[Edit]) -> list[Diagnostic]:
    return [Diagnostic(message=message, details=[detail], range=info.fn_range, fixes=fixes)]


def _identity_or_keep(info: CheckInfo, message: str) -> list[Diagnostic]:
    if info.second_arg is not None:
        return _report(info, message, "You can remove this call and replace it by the value itself.",
                       info.keep(info.second_arg))
    return _report(info, message, "You can replace this call by identity.",
                   info.replace_by("identity"))


def _constructor_call(info: CheckInfo, node: Expr | None, module: tuple[str, ...],
                      name: str) -> FunctionCall | None:
    if node is None:
        return None
    return get_call_with_args(info.lookup, node, module, name, 1)


def _mapped(info: CheckInfo, call: FunctionCall, function: Expr) -> str:
    """``C (f a)`` for a constructor call ``C a`` and a function ``f``."""
    value = call.arguments[0]
    applied = f"{as_argument(function, info.extract(function))} {as_argument(value, info.extract(value))}"
    return f"{info.extract(call.fn_range)} ({applied})"


# ── Maybe ────────────────────────────────────────────────────────


@function_check("Maybe", "map")
def check_maybe_map(info: CheckInfo) -> list[Diagnostic]:
    if info.second_arg is not None and is_nothing(info.lookup, info.second_arg):
        return _report(info, "Using Maybe.map on Nothing will result in Nothing",
                       "You can replace this call by Nothing.", info.keep(info.second_arg))
    if info.first_arg is None:
        return []
    if is_identity(info.lookup, info.first_arg):
        return _identity_or_keep(
            info, "Using Maybe.map with an identity function is the same as not using Maybe.map")
    just = _constructor_call(info, info.second_arg, MAYBE, "Just")
    if just is not None:
        return _report(info, "Calling Maybe.map on a value that is Just",
                       "The function can be called without Maybe.map.",
                       info.replace_by(_mapped(info, just, info.first_arg)))
    return []


@function_check("Maybe", "andThen")
def check_maybe_and_then(info: CheckInfo) -> list[Diagnostic]:
    if info.second_arg is not None and is_nothing(info.lookup, info.second_arg):
        return _report(info, "Using Maybe.andThen on Nothing will result in Nothing",
                       "You can replace this call by Nothing.", info.keep(info.second_arg))
    if info.first_arg is not None and is_just_function(info.lookup, info.first_arg):
        return _identity_or_keep(
            info, "Using Maybe.andThen with a function that will always return Just "
                  "is the same as not using Maybe.andThen")
    return []


@function_check("Maybe", "withDefault")
def check_maybe_with_default(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is None or info.second_arg is None:
        return []
    if is_nothing(info.lookup, info.second_arg):
        return _report(info, "Using Maybe.withDefault on Nothing will result in the default value",
                       "You can replace this call by the default value.", info.keep(info.first_arg))
    just = _constructor_call(info, info.second_arg, MAYBE, "Just")
    if just is not None:
        return _report(info, "Using Maybe.withDefault on a value that is Just will result in "
                             "that value",
                       "You can replace this call by the value wrapped in Just.",
                       info.keep(just.arguments[0]))
    return []


# ── Result ───────────────────────────────────────────────────────


@function_check("Result", "map")
def check_result_map(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is None:
        return []
    if is_identity(info.lookup, info.first_arg):
        return _identity_or_keep(
            info, "Using Result.map with an identity function is the same as not using Result.map")
    if _constructor_call(info, info.second_arg, RESULT, "Err") is not None:
        return _report(info, "Using Result.map on an error will result in the error",
                       "You can replace this call by the error itself.", info.keep(info.second_arg))
    ok = _constructor_call(info, info.second_arg, RESULT, "Ok")
    if ok is not None:
        return _report(info, "Calling Result.map on a value that is Ok",
                       "The function can be called without Result.map.",
                       info.replace_by(_mapped(info, ok, info.first_arg)))
    return []


@function_check("Result", "mapError")
def check_result_map_error(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is None:
        return []
    if is_identity(info.lookup, info.first_arg):
        return _identity_or_keep(
            info, "Using Result.mapError with an identity function is the same as not "
                  "using Result.mapError")
    if _constructor_call(info, info.second_arg, RESULT, "Ok") is not None:
        return _report(info, "Using Result.mapError on a value that is Ok will result in that value",
                       "You can replace this call by the value itself.", info.keep(info.second_arg))
    err = _constructor_call(info, info.second_arg, RESULT, "Err")
    if err is not None:
        return _report(info, "Calling Result.mapError on an error",
                       "The function can be called without Result.mapError.",
                       info.replace_by(_mapped(info, err, info.first_arg)))
    return []


@function_check("Result", "withDefault")
def check_result_with_default(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is None or info.second_arg is None:
        return []
    ok = _constructor_call(info, info.second_arg, RESULT, "Ok")
    if ok is not None:
        return _report(info, "Using Result.withDefault on a value that is Ok will result in "
                             "that value",
                       "You can replace this call by the value wrapped in Ok.",
                       info.keep(ok.arguments[0]))
    if _constructor_call(info, info.second_arg, RESULT, "Err") is not None:
        return _report(info, "Using Result.withDefault on an error will result in the default value",
                       "You can replace this call by the default value.", info.keep(info.first_arg))
    return []


@function_check("Result", "toMaybe")
def check_result_to_maybe(info: CheckInfo) -> list[Diagnostic]:
    ok = _constructor_call(info, info.first_arg, RESULT, "Ok")
    if ok is not None:
        value = ok.arguments[0]
        return _report(info, "Using Result.toMaybe on a value that is Ok will result in Just "
                             "that value",
                       "You can replace this call by the value itself wrapped in Just.",
                       info.replace_by("Just " + as_argument(value, info.extract(value))))
    if _constructor_call(info, info.first_arg, RESULT, "Err") is not None:
        return _report(info, "Using Result.toMaybe on an error will result in Nothing",
                       "You can replace this call by Nothing.", info.replace_by("Nothing"))
    return []
