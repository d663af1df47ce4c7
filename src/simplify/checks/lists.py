"""Rules for the List module."""

from __future__ import annotations

from simplify.ast_nodes import Expr
from simplify.checks.helpers import as_argument, list_literal, rename_dropping_first_arg
from simplify.dispatch import LIST_COLLECTION, CheckInfo, empty_collection_diagnostic, function_check
from simplify.errors import Diagnostic
from simplify.fix import Edit, replace_range_by
from simplify.matchers import (
    LIST,
    get_call_with_args,
    get_collapsed_cons,
    get_int,
    get_list_literal,
    get_specific_call,
    is_always_boolean,
    is_always_nothing,
    is_empty_list,
    is_identity,
    is_just_function,
)
from simplify.source import Range


def _report(info: CheckInfo, message: str, detail: str, fixes: list[Edit]) -> list[Diagnostic]:
    return [Diagnostic(message=message, details=[detail], range=info.fn_range, fixes=fixes)]


def _identity_or_keep(info: CheckInfo, index: int, message: str) -> list[Diagnostic]:
    """The call does nothing: keep its list argument, or become ``identity`` when partial."""
    arg = info.argument(index)
    if arg is not None:
        return _report(info, message, "You can remove this call and replace it by the list itself.",
                       info.keep(arg))
    return _report(info, message, "You can replace this call by identity.",
                   info.replace_by("identity"))


def _always_empty(info: CheckInfo, index: int, message: str) -> list[Diagnostic]:
    """The call always results in ``[]``; partially applied it becomes ``always []``."""
    if info.argument(index) is not None:
        return _report(info, message, "You can replace this call by an empty list.",
                       info.replace_by("[]"))
    return _report(info, message, "You can replace this call by always [].",
                   info.replace_by("always []"))


def _is_singleton_function(info: CheckInfo, node: Expr) -> bool:
    call = get_specific_call(info.lookup, node, LIST, "singleton")
    return call is not None and not call.arguments


# ── Mapping and filtering ────────────────────────────────────────


@function_check("List", "map", empty=LIST_COLLECTION, empty_arg=1)
def check_map(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is not None and is_identity(info.lookup, info.first_arg):
        return _identity_or_keep(
            info, 1, "Using List.map with an identity function is the same as not using List.map")
    return []


@function_check("List", "indexedMap", empty=LIST_COLLECTION, empty_arg=1)
def check_indexed_map(info: CheckInfo) -> list[Diagnostic]:
    return []


@function_check("List", "filter", empty=LIST_COLLECTION, empty_arg=1)
def check_filter(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is None:
        return []
    value = is_always_boolean(info.lookup, info.first_arg)
    if value is True:
        return _identity_or_keep(
            info, 1, "Using List.filter with a function that will always return True "
                     "is the same as not using List.filter")
    if value is False:
        return _always_empty(
            info, 1, "Using List.filter with a function that will always return False "
                     "will result in an empty list")
    return []


@function_check("List", "filterMap", empty=LIST_COLLECTION, empty_arg=1)
def check_filter_map(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is None:
        return []
    if is_just_function(info.lookup, info.first_arg):
        return _identity_or_keep(
            info, 1, "Using List.filterMap with a function that will always return Just "
                     "is the same as not using List.filterMap")
    if is_always_nothing(info.lookup, info.first_arg):
        return _always_empty(
            info, 1, "Using List.filterMap with a function that will always return "
                     "Nothing will result in an empty list")
    return []


@function_check("List", "concatMap", empty=LIST_COLLECTION, empty_arg=1)
def check_concat_map(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is None:
        return []
    if is_identity(info.lookup, info.first_arg):
        renamed = rename_dropping_first_arg(info, "concat")
        if renamed is None:
            return []
        return _report(
            info, "Using List.concatMap with an identity function is the same as using List.concat",
            "You can replace this call by List.concat.", renamed)
    if _is_singleton_function(info, info.first_arg):
        return _identity_or_keep(
            info, 1, "Using List.concatMap with a function that wraps its argument in a "
                     "list is the same as not using List.concatMap")
    return []


@function_check("List", "concat", empty=LIST_COLLECTION, empty_arg=0)
def check_concat(info: CheckInfo) -> list[Diagnostic]:
    elements = get_list_literal(info.first_arg) if info.first_arg is not None else None
    if elements is None:
        return []
    if len(elements) == 1:
        return _report(
            info, "Unnecessary use of List.concat on a list with 1 element",
            "The value of the operation will be the element itself.",
            info.keep(elements[0]))

    runs: list[list[tuple[Expr, list[Expr]]]] = []
    current: list[tuple[Expr, list[Expr]]] = []
    for element in elements:
        inner = get_list_literal(element)
        if inner is None:
            if len(current) > 1:
                runs.append(current)
            current = []
        else:
            current.append((element, inner))
    if len(current) > 1:
        runs.append(current)

    diagnostics: list[Diagnostic] = []
    for run in runs:
        merged = list_literal([info.extract(e) for _, inner in run for e in inner])
        if len(run) == len(elements):
            fixes = info.replace_by(merged)
            message = "Expression could be simplified to be a single List"
        else:
            fixes = replace_range_by(Range(run[0][0].range.start, run[-1][0].range.end), merged)
            message = "Consecutive literal lists should be merged"
        diagnostics.append(Diagnostic(
            message=message,
            details=["Try moving all the elements into a single list."],
            range=Range(run[0][0].range.start, run[-1][0].range.end),
            fixes=fixes,
        ))
    return diagnostics


@function_check("List", "intersperse", empty=LIST_COLLECTION, empty_arg=1)
def check_intersperse(info: CheckInfo) -> list[Diagnostic]:
    return []


@function_check("List", "map2")
def check_map2(info: CheckInfo) -> list[Diagnostic]:
    for index in (1, 2):
        arg = info.argument(index)
        if arg is not None and is_empty_list(arg):
            return [empty_collection_diagnostic(info, LIST_COLLECTION, arg)]
    return []


@function_check("List", "unzip")
def check_unzip(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is not None and is_empty_list(info.first_arg):
        return _report(
            info, "Using List.unzip on an empty list will result in ( [], [] )",
            "You can replace this call by ( [], [] ).", info.replace_by("( [], [] )"))
    return []


@function_check("List", "partition")
def check_partition(info: CheckInfo) -> list[Diagnostic]:
    if info.second_arg is not None and is_empty_list(info.second_arg):
        return _report(
            info, "Using List.partition on an empty list will result in ( [], [] )",
            "You can replace this call by ( [], [] ).", info.replace_by("( [], [] )"))
    return []


# ── Order ────────────────────────────────────────────────────────


def _single_element_unchanged(info: CheckInfo, index: int) -> list[Diagnostic]:
    arg = info.argument(index)
    elements = get_list_literal(arg) if arg is not None else None
    if elements is not None and len(elements) == 1:
        return _report(
            info, f"Using {info.qualified_name} on a list with a single element "
                  "will result in the list itself",
            "You can replace this call by the given list.", info.keep(arg))
    return []


@function_check("List", "reverse", empty=LIST_COLLECTION, empty_arg=0)
def check_reverse(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is None:
        return []
    inner = get_call_with_args(info.lookup, info.first_arg, LIST, "reverse", 1)
    if inner is not None:
        return _report(
            info, "Unnecessary double List.reverse",
            "Reversing a list twice is the same as not reversing it.",
            info.keep(inner.arguments[0]))
    return _single_element_unchanged(info, 0)


@function_check("List", "sort", empty=LIST_COLLECTION, empty_arg=0)
def check_sort(info: CheckInfo) -> list[Diagnostic]:
    return _single_element_unchanged(info, 0)


@function_check("List", "sortBy", empty=LIST_COLLECTION, empty_arg=1)
def check_sort_by(info: CheckInfo) -> list[Diagnostic]:
    return _single_element_unchanged(info, 1)


@function_check("List", "sortWith", empty=LIST_COLLECTION, empty_arg=1)
def check_sort_with(info: CheckInfo) -> list[Diagnostic]:
    return _single_element_unchanged(info, 1)


# ── Slicing ──────────────────────────────────────────────────────


@function_check("List", "drop", empty=LIST_COLLECTION, empty_arg=1)
def check_drop(info: CheckInfo) -> list[Diagnostic]:
    count = get_int(info.first_arg) if info.first_arg is not None else None
    if count is not None and count <= 0:
        return _identity_or_keep(info, 1, f"Dropping {count} items from a list is the same as "
                                          "not dropping anything")
    return []


@function_check("List", "take", empty=LIST_COLLECTION, empty_arg=1)
def check_take(info: CheckInfo) -> list[Diagnostic]:
    count = get_int(info.first_arg) if info.first_arg is not None else None
    if count is not None and count <= 0:
        return _always_empty(info, 1, f"Taking {count} items from a list will result "
                                      "in an empty list")
    return []


# ── Construction ─────────────────────────────────────────────────


@function_check("List", "repeat")
def check_repeat(info: CheckInfo) -> list[Diagnostic]:
    """`List.repeat 1 x` becomes `[ x ]`, which keeps the list type of the call."""
    count = get_int(info.first_arg) if info.first_arg is not None else None
    if count is None:
        return []
    if count <= 0:
        return _always_empty(info, 1, "List.repeat will result in an empty list")
    if count == 1 and info.second_arg is not None:
        value = info.second_arg
        return _report(
            info, "List.repeat will result in a list with a single element",
            "You can replace this call by a list containing the element.",
            info.replace_by(list_literal([info.extract(value)])))
    return []


@function_check("List", "range")
def check_range(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is None or info.second_arg is None:
        return []
    low = get_int(info.first_arg)
    high = get_int(info.second_arg)
    if low is None or high is None:
        return []
    if low > high:
        return _report(
            info, "The call to List.range will result in []",
            "The second argument to List.range is bigger than the first one, therefore "
            "you can replace this list by an empty list.",
            info.replace_by("[]"))
    if low == high:
        return _report(
            info, "The call to List.range will result in a single element list",
            "Both arguments are equal, you can replace this call by a list with that number.",
            info.replace_by(list_literal([info.extract(info.first_arg)])))
    return []


# ── Queries ──────────────────────────────────────────────────────


def _literal_length(node: Expr) -> int | None:
    elements = get_list_literal(node)
    return len(elements) if elements is not None else None


def _is_non_empty(node: Expr) -> bool:
    elements = get_list_literal(node)
    if elements is not None:
        return bool(elements)
    return get_collapsed_cons(node) is not None


@function_check("List", "isEmpty")
def check_is_empty(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is None:
        return []
    if is_empty_list(info.first_arg):
        return _report(info, "The call to List.isEmpty will result in True",
                       "You can replace this call by True.", info.replace_by("True"))
    if _is_non_empty(info.first_arg):
        return _report(info, "The call to List.isEmpty will result in False",
                       "You can replace this call by False.", info.replace_by("False"))
    return []


@function_check("List", "length")
def check_length(info: CheckInfo) -> list[Diagnostic]:
    length = _literal_length(info.first_arg) if info.first_arg is not None else None
    if length is None:
        return []
    return _report(info, f"The length of the list is {length}",
                   "The length of the list can be determined by looking at the code.",
                   info.replace_by(str(length)))


@function_check("List", "member")
def check_member(info: CheckInfo) -> list[Diagnostic]:
    if info.second_arg is not None and is_empty_list(info.second_arg):
        return _report(info, "Using List.member on an empty list will result in False",
                       "You can replace this call by False.", info.replace_by("False"))
    return []


@function_check("List", "all")
def check_all(info: CheckInfo) -> list[Diagnostic]:
    if info.second_arg is not None and is_empty_list(info.second_arg):
        return _report(info, "The call to List.all will result in True",
                       "You can replace this call by True.", info.replace_by("True"))
    if info.first_arg is not None and is_always_boolean(info.lookup, info.first_arg) is True:
        text = "True" if info.second_arg is not None else "always True"
        return _report(info, "The call to List.all will result in True",
                       f"You can replace this call by {text}.", info.replace_by(text))
    return []


@function_check("List", "any")
def check_any(info: CheckInfo) -> list[Diagnostic]:
    if info.second_arg is not None and is_empty_list(info.second_arg):
        return _report(info, "The call to List.any will result in False",
                       "You can replace this call by False.", info.replace_by("False"))
    if info.first_arg is not None and is_always_boolean(info.lookup, info.first_arg) is False:
        text = "False" if info.second_arg is not None else "always False"
        return _report(info, "The call to List.any will result in False",
                       f"You can replace this call by {text}.", info.replace_by(text))
    return []


# ── Folds ────────────────────────────────────────────────────────


def _fold_over_empty(info: CheckInfo) -> list[Diagnostic]:
    if info.third_arg is not None and is_empty_list(info.third_arg):
        return _report(
            info, f"Using {info.qualified_name} on an empty list will result in the initial value",
            "You can replace this call by the initial value.", info.keep(info.second_arg))
    return []


@function_check("List", "foldl")
def check_foldl(info: CheckInfo) -> list[Diagnostic]:
    return _fold_over_empty(info)


@function_check("List", "foldr")
def check_foldr(info: CheckInfo) -> list[Diagnostic]:
    return _fold_over_empty(info)


def _sum_or_product(info: CheckInfo, neutral: str) -> list[Diagnostic]:
    elements = get_list_literal(info.first_arg) if info.first_arg is not None else None
    if elements is None:
        return []
    if not elements:
        return _report(info, f"Using {info.qualified_name} on an empty list will result in {neutral}",
                       f"You can replace this call by {neutral}.", info.replace_by(neutral))
    if len(elements) == 1:
        return _report(info, f"Using {info.qualified_name} on a list with a single element "
                             "will result in the element itself",
                       "You can replace this call by the single element itself.",
                       info.keep(elements[0]))
    return []


@function_check("List", "sum")
def check_sum(info: CheckInfo) -> list[Diagnostic]:
    return _sum_or_product(info, "0")


@function_check("List", "product")
def check_product(info: CheckInfo) -> list[Diagnostic]:
    return _sum_or_product(info, "1")


# ── Maybe-returning accessors ────────────────────────────────────


def _nothing_on_empty(info: CheckInfo) -> list[Diagnostic]:
    return _report(info, f"Using {info.qualified_name} on an empty list will result in Nothing",
                   "You can replace this call by Nothing.", info.replace_by("Nothing"))


def _just(info: CheckInfo, node: Expr) -> str:
    return "Just " + as_argument(node, info.extract(node))


@function_check("List", "head")
def check_head(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is None:
        return []
    if is_empty_list(info.first_arg):
        return _nothing_on_empty(info)
    elements = get_list_literal(info.first_arg)
    cons = get_collapsed_cons(info.first_arg)
    head = elements[0] if elements else (cons.consed[0] if cons is not None else None)
    if head is None:
        return []
    return _report(info, "Using List.head on a list with a first element will result in Just "
                         "that element",
                   "You can replace this call by Just the first list element.",
                   info.replace_by(_just(info, head)))


@function_check("List", "tail")
def check_tail(info: CheckInfo) -> list[Diagnostic]:
    if info.first_arg is None:
        return []
    if is_empty_list(info.first_arg):
        return _nothing_on_empty(info)
    elements = get_list_literal(info.first_arg)
    if elements:
        rest = list_literal([info.extract(e) for e in elements[1:]])
        return _report(info, "Using List.tail on a list with some elements will result in Just "
                             "the elements after the first",
                       "You can replace this call by Just the list elements after the first.",
                       info.replace_by(f"Just {rest}"))
    cons = get_collapsed_cons(info.first_arg)
    if cons is not None and len(cons.consed) == 1:
        return _report(info, "Using List.tail on a list with some elements will result in Just "
                             "the elements after the first",
                       "You can replace this call by Just the list elements after the first.",
                       info.replace_by(_just(info, cons.tail)))
    return []


def _minimum_or_maximum(info: CheckInfo) -> list[Diagnostic]:
    elements = get_list_literal(info.first_arg) if info.first_arg is not None else None
    if elements is None:
        return []
    if not elements:
        return _nothing_on_empty(info)
    if len(elements) == 1:
        return _report(info, f"Using {info.qualified_name} on a list with a single element "
                             "will result in Just the element itself",
                       "You can replace this call by Just the single element.",
                       info.replace_by(_just(info, elements[0])))
    return []


@function_check("List", "minimum")
def check_minimum(info: CheckInfo) -> list[Diagnostic]:
    return _minimum_or_maximum(info)


@function_check("List", "maximum")
def check_maximum(info: CheckInfo) -> list[Diagnostic]:
    return _minimum_or_maximum(info)
