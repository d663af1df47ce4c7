"""Text helpers shared by rule routines."""

from __future__ import annotations

from typing import TYPE_CHECKING

from simplify.ast_nodes import (
    Application,
    CaseExpr,
    Expr,
    IfBlock,
    LambdaExpr,
    LetExpr,
    Negation,
    OperatorApplication,
)
from simplify.fix import Edit, RemoveRange, ReplaceRange, keep_only, replace_range_by
from simplify.source import Range

if TYPE_CHECKING:
    from simplify.dispatch import CheckInfo, Context

_LOOSE = (OperatorApplication, IfBlock, CaseExpr, LetExpr, LambdaExpr)

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def as_operand(node: Expr, text: str) -> str:
    """``text`` of ``node`` made safe as an operand of a binary operator."""
    return f"({text})" if isinstance(node, _LOOSE) else text


def as_argument(node: Expr, text: str) -> str:
    """``text`` of ``node`` made safe as a function argument."""
    if isinstance(node, _LOOSE + (Application, Negation)):
        return f"({text})"
    return text


def collapse_to(context: Context, parent: Range, kept: Expr) -> list[Edit]:
    """Replace ``parent`` by ``kept``.

    ``parent`` may be an operand of a binary operator, so a loose ``kept``
    is parenthesized to keep its grouping.
    """
    if isinstance(kept, _LOOSE):
        return replace_range_by(parent, as_operand(kept, context.extract(kept)))
    return keep_only(parent, kept.range)


def list_literal(items: list[str]) -> str:
    if not items:
        return "[]"
    return "[ " + ", ".join(items) + " ]"


def string_literal(value: str) -> str:
    """Elm source for a single-line string literal holding ``value``."""
    return '"' + "".join(_ESCAPES.get(ch, ch) for ch in value) + '"'


def sibling_reference(info: CheckInfo, name: str) -> str | None:
    """Spelling of ``name`` from the called function's module at this call site.

    A qualified call keeps its qualifier. An unqualified one may have been
    exposed on its own, so ``name`` goes through the import qualifier
    instead. None when the module is not imported by name.
    """
    written = info.extract(info.fn_range)
    if "." in written:
        return written[:written.rindex(".") + 1] + name
    qualifier = info.lookup.qualifier_for(info.module_name)
    return None if qualifier is None else f"{qualifier}.{name}"


def rename_dropping_first_arg(info: CheckInfo, new: str) -> list[Edit] | None:
    """Rewrite ``M.old f rest`` into ``M.new rest``."""
    reference = sibling_reference(info, new)
    if reference is None:
        return None
    first = info.arguments[0]
    return [
        ReplaceRange(info.fn_range, reference),
        RemoveRange(Range(info.fn_range.end, first.range.end)),
    ]
