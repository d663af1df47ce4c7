"""Rules for Platform.Cmd and Platform.Sub."""

from __future__ import annotations

from simplify.checks.helpers import list_literal, sibling_reference
from simplify.dispatch import CheckInfo, function_check
from simplify.errors import Diagnostic
from simplify.fix import replace_range_by
from simplify.matchers import get_list_literal, is_reference_to, remove_parens


def _none_text(info: CheckInfo) -> str | None:
    return sibling_reference(info, "none")


def _is_none(info: CheckInfo, node) -> bool:
    return is_reference_to(info.lookup, node, info.module_name, "none")


def check_batch(info: CheckInfo) -> list[Diagnostic]:
    elements = get_list_literal(info.first_arg) if info.first_arg is not None else None
    if elements is None:
        return []
    if not elements:
        none = _none_text(info)
        if none is None:
            return []
        return [Diagnostic(
            message=f"Replace by {none}",
            details=[f"{info.qualified_name} [] and {none} are equivalent but "
                     f"{none} is more idiomatic in Elm code."],
            range=info.fn_range,
            fixes=info.replace_by(none),
        )]
    if len(elements) == 1:
        return [Diagnostic(
            message="Unnecessary batch",
            details=[f"{info.qualified_name} with a single element is equal to that element."],
            range=info.fn_range,
            fixes=info.keep(elements[0]),
        )]
    kept = [e for e in elements if not _is_none(info, e)]
    if len(kept) == len(elements):
        return []
    # a written `none` already refers to the right module at this call site
    none = info.extract(next(e for e in elements if _is_none(info, e)))
    fixes = (info.replace_by(none) if not kept else
             replace_range_by(info.first_arg.range, list_literal([info.extract(e) for e in kept])))
    return [Diagnostic(
        message=f"Unnecessary {none}",
        details=[f"{none} does not add anything to a batch, it can be removed."],
        range=info.fn_range,
        fixes=fixes,
    )]


def check_map(info: CheckInfo) -> list[Diagnostic]:
    if info.second_arg is None or not _is_none(info, info.second_arg):
        return []
    none = info.extract(remove_parens(info.second_arg))
    return [Diagnostic(
        message=f"Using {info.qualified_name} on {none} will result in {none}",
        details=[f"You can replace this call by {none}."],
        range=info.fn_range,
        fixes=info.keep(info.second_arg),
    )]


for _module in ("Platform.Cmd", "Platform.Sub"):
    function_check(_module, "batch")(check_batch)
    function_check(_module, "map")(check_map)
