"""Rules for Tuple, Set, Dict and Array."""

from __future__ import annotations

from simplify.checks.helpers import sibling_reference
from simplify.dispatch import (
    ARRAY_COLLECTION,
    DICT_COLLECTION,
    SET_COLLECTION,
    CheckInfo,
    Collection,
    FunctionCheck,
    function_check,
)
from simplify.errors import Diagnostic
from simplify.fix import Edit
from simplify.matchers import get_tuple_literal, is_empty_list, is_identity


def _report(info: CheckInfo, message: str, detail: str, fixes: list[Edit]) -> list[Diagnostic]:
    return [Diagnostic(message=message, details=[detail], range=info.fn_range, fixes=fixes)]


# ── Tuple ────────────────────────────────────────────────────────


def _projection(info: CheckInfo, index: int) -> list[Diagnostic]:
    elements = get_tuple_literal(info.first_arg) if info.first_arg is not None else None
    if elements is None:
        return []
    which = "first" if index == 0 else "second"
    return _report(info, f"Unnecessary use of Tuple.{which} on a known tuple",
                   f"You can replace this call by the {which} element of the tuple.",
                   info.keep(elements[index]))


@function_check("Tuple", "first")
def check_first(info: CheckInfo) -> list[Diagnostic]:
    return _projection(info, 0)


@function_check("Tuple", "second")
def check_second(info: CheckInfo) -> list[Diagnostic]:
    return _projection(info, 1)


@function_check("Tuple", "pair")
def check_pair(info: CheckInfo) -> list[Diagnostic]:
    if len(info.arguments) != 2:
        return []
    first, second = info.arguments
    text = f"( {info.extract(first)}, {info.extract(second)} )"
    return _report(info, "Tuple.pair can be replaced by a tuple literal",
                   "Calling Tuple.pair with both values is the same as writing the tuple.",
                   info.replace_by(text))


def _identity_map(info: CheckInfo, functions: int) -> list[Diagnostic]:
    if len(info.arguments) < functions:
        return []
    if not all(is_identity(info.lookup, f) for f in info.arguments[:functions]):
        return []
    message = f"Using {info.qualified_name} with identity is the same as not using it"
    tuple_arg = info.argument(functions)
    if tuple_arg is not None:
        return _report(info, message, "You can replace this call by the tuple itself.",
                       info.keep(tuple_arg))
    return _report(info, message, "You can replace this call by identity.",
                   info.replace_by("identity"))


@function_check("Tuple", "mapFirst")
def check_map_first(info: CheckInfo) -> list[Diagnostic]:
    return _identity_map(info, 1)


@function_check("Tuple", "mapSecond")
def check_map_second(info: CheckInfo) -> list[Diagnostic]:
    return _identity_map(info, 1)


@function_check("Tuple", "mapBoth")
def check_map_both(info: CheckInfo) -> list[Diagnostic]:
    return _identity_map(info, 2)


# ── Set, Dict and Array ──────────────────────────────────────────


def _unchanged(info: CheckInfo) -> list[Diagnostic]:
    return []


def _result_on_empty(collection: Collection, index: int, result: str) -> FunctionCheck:
    """A routine replacing the call by ``result`` when argument ``index`` is empty."""

    def routine(info: CheckInfo) -> list[Diagnostic]:
        arg = info.argument(index)
        if arg is None or not collection.is_empty(info.lookup, arg):
            return []
        return _report(info, f"The call to {info.qualified_name} will result in {result}",
                       f"Using {info.qualified_name} on an empty {collection.name} will "
                       f"result in {result}, you can replace this call by it.",
                       info.replace_by(result))

    return routine


def _from_empty_list(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is None or not is_empty_list(info.first_arg):
        return []
    empty = sibling_reference(info, "empty")
    if empty is None:
        return []
    return _report(info, f"The call to {info.qualified_name} will result in {empty}",
                   f"You can replace this call by {empty}.", info.replace_by(empty))


_COLLECTIONS = (
    ("Set", SET_COLLECTION, "size"),
    ("Dict", DICT_COLLECTION, "size"),
    ("Array", ARRAY_COLLECTION, "length"),
)

for _module, _collection, _size in _COLLECTIONS:
    function_check(_module, "map", empty=_collection, empty_arg=1)(_unchanged)
    function_check(_module, "filter", empty=_collection, empty_arg=1)(_unchanged)
    function_check(_module, "isEmpty")(_result_on_empty(_collection, 0, "True"))
    function_check(_module, _size)(_result_on_empty(_collection, 0, "0"))
    function_check(_module, "toList")(_result_on_empty(_collection, 0, "[]"))
    function_check(_module, "fromList")(_from_empty_list)

function_check("Array", "indexedMap", empty=ARRAY_COLLECTION, empty_arg=1)(_unchanged)
function_check("Set", "member")(_result_on_empty(SET_COLLECTION, 1, "False"))
function_check("Dict", "member")(_result_on_empty(DICT_COLLECTION, 1, "False"))
function_check("Dict", "get")(_result_on_empty(DICT_COLLECTION, 1, "Nothing"))
function_check("Dict", "keys")(_result_on_empty(DICT_COLLECTION, 0, "[]"))
function_check("Dict", "values")(_result_on_empty(DICT_COLLECTION, 0, "[]"))
