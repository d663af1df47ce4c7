"""Rule dispatch: registries of check routines and the call-site descriptors
they receive.

Routines register for a qualified function, an operator symbol or a node
type. Every spelling of a call (``f a b``, ``f a <| b``, ``b |> f a``) is
normalised into one CheckInfo before lookup, so one routine handles all of
them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from simplify.ast_nodes import Expr, FunctionOrValue, OperatorApplication, ParenthesizedExpr
from simplify.errors import Diagnostic
from simplify.fix import Edit, keep_only, replace_range_by
from simplify.matchers import (
    CallStyle,
    application_view,
    is_empty_list,
    is_empty_string,
    is_reference_to,
)
from simplify.names import ModuleName, ModuleNameLookupTable
from simplify.source import Range, SourceFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Context:
    """What every routine may consult besides the node itself."""

    lookup: ModuleNameLookupTable
    source: SourceFile
    expect_nan: bool = False

    def extract(self, node: Expr | Range) -> str:
        rng = node if isinstance(node, Range) else node.range
        return self.source.text_at(rng)


@dataclass(frozen=True)
class CheckInfo:
    """A visited call site of a registered function."""

    context: Context
    module_name: ModuleName
    name: str
    parent_range: Range
    fn_range: Range
    arguments: list[Expr]
    style: CallStyle = CallStyle.PREFIX
    pivot_range: Range | None = None

    @property
    def lookup(self) -> ModuleNameLookupTable:
        return self.context.lookup

    @property
    def qualified_name(self) -> str:
        return '.'.join(self.module_name + (self.name,))

    def argument(self, index: int) -> Expr | None:
        return self.arguments[index] if index < len(self.arguments) else None

    @property
    def first_arg(self) -> Expr | None:
        return self.argument(0)

    @property
    def second_arg(self) -> Expr | None:
        return self.argument(1)

    @property
    def third_arg(self) -> Expr | None:
        return self.argument(2)

    def extract(self, node: Expr | Range) -> str:
        return self.context.extract(node)

    def keep(self, node: Expr) -> list[Edit]:
        """Replace the whole call by one of its arguments."""
        return keep_only(self.parent_range, node.range)

    def replace_by(self, text: str) -> list[Edit]:
        return replace_range_by(self.parent_range, text)


@dataclass(frozen=True)
class OperatorCheckInfo:
    """A visited binary operator application."""

    context: Context
    operator: str
    left: Expr
    right: Expr
    operator_range: Range
    parent_range: Range

    @property
    def lookup(self) -> ModuleNameLookupTable:
        return self.context.lookup

    def extract(self, node: Expr | Range) -> str:
        return self.context.extract(node)

    def keep(self, node: Expr) -> list[Edit]:
        return keep_only(self.parent_range, node.range)

    def replace_by(self, text: str) -> list[Edit]:
        return replace_range_by(self.parent_range, text)


FunctionCheck = Callable[[CheckInfo], list[Diagnostic]]
OperatorCheck = Callable[[OperatorCheckInfo], list[Diagnostic]]
ExpressionCheck = Callable[[Context, Expr], list[Diagnostic]]

FUNCTION_CHECKS: dict[tuple[ModuleName, str], FunctionCheck] = {}
OPERATOR_CHECKS: dict[str, list[OperatorCheck]] = {}
EXPRESSION_CHECKS: dict[type, list[ExpressionCheck]] = {}


# ── Empty collections ────────────────────────────────────────────


@dataclass(frozen=True)
class Collection:
    """A collection type whose empty value makes many operations trivial."""

    name: str
    is_empty: Callable[[ModuleNameLookupTable, Expr], bool] = field(compare=False)


def _is_empty_reference(module_name: ModuleName) -> Callable[[ModuleNameLookupTable, Expr], bool]:
    def is_empty(lookup: ModuleNameLookupTable, node: Expr) -> bool:
        return is_reference_to(lookup, node, module_name, "empty")
    return is_empty


LIST_COLLECTION = Collection("list", lambda lookup, node: is_empty_list(node))
STRING_COLLECTION = Collection("string", lambda lookup, node: is_empty_string(node))
SET_COLLECTION = Collection("set", _is_empty_reference(("Set",)))
DICT_COLLECTION = Collection("dict", _is_empty_reference(("Dict",)))
ARRAY_COLLECTION = Collection("array", _is_empty_reference(("Array",)))


def empty_collection_diagnostic(info: CheckInfo, collection: Collection, empty: Expr) -> Diagnostic:
    return Diagnostic(
        message=f"Using {info.qualified_name} on an empty {collection.name} "
                f"will result in an empty {collection.name}",
        details=[f"You can replace this call by an empty {collection.name}."],
        range=info.fn_range,
        fixes=info.keep(empty),
    )


# ── Registration ─────────────────────────────────────────────────


def function_check(
    module: str, name: str, *, empty: Collection | None = None, empty_arg: int = 0,
) -> Callable[[FunctionCheck], FunctionCheck]:
    """Register a routine for calls of ``module.name``.

    With ``empty``, a call whose argument at ``empty_arg`` is that collection's
    empty value is reported as such before the routine itself runs.
    """
    key = (tuple(module.split('.')), name)

    def decorator(routine: FunctionCheck) -> FunctionCheck:
        if empty is None:
            FUNCTION_CHECKS[key] = routine
            return routine

        def checked(info: CheckInfo) -> list[Diagnostic]:
            arg = info.argument(empty_arg)
            if arg is not None and empty.is_empty(info.lookup, arg):
                return [empty_collection_diagnostic(info, empty, arg)]
            return routine(info)

        checked.__name__ = routine.__name__
        checked.__doc__ = routine.__doc__
        FUNCTION_CHECKS[key] = checked
        return routine

    return decorator


def operator_check(*operators: str) -> Callable[[OperatorCheck], OperatorCheck]:
    def decorator(routine: OperatorCheck) -> OperatorCheck:
        for operator in operators:
            OPERATOR_CHECKS.setdefault(operator, []).append(routine)
        return routine
    return decorator


def expression_check(*node_types: type) -> Callable[[ExpressionCheck], ExpressionCheck]:
    def decorator(routine: ExpressionCheck) -> ExpressionCheck:
        for node_type in node_types:
            EXPRESSION_CHECKS.setdefault(node_type, []).append(routine)
        return routine
    return decorator


# ── Dispatch ─────────────────────────────────────────────────────


def call_site(context: Context, node: Expr) -> CheckInfo | None:
    """Describe ``node`` as a call of a registered function, if it is one."""
    # the call inside the parentheses is dispatched on its own
    if isinstance(node, ParenthesizedExpr):
        return None
    view = application_view(node)
    if view is None or not isinstance(view.function, FunctionOrValue):
        return None
    function = view.function
    module_name = context.lookup.module_name_for(function.range)
    if module_name is None or (module_name, function.name) not in FUNCTION_CHECKS:
        return None
    return CheckInfo(
        context=context,
        module_name=module_name,
        name=function.name,
        parent_range=node.range,
        fn_range=function.range,
        arguments=view.arguments,
        style=view.style,
        pivot_range=view.pivot_range,
    )


def dispatch(context: Context, node: Expr) -> tuple[list[Diagnostic], frozenset[Range]]:
    """Run every routine that applies to ``node``.

    Returns the diagnostics and the ranges of sub-nodes that must not be
    reported on separately (the inner call of a piped application).
    """
    diagnostics: list[Diagnostic] = []
    ignored: set[Range] = set()

    info = call_site(context, node)
    if info is not None:
        logger.debug("dispatching %s at %s", info.qualified_name, info.parent_range)
        diagnostics.extend(FUNCTION_CHECKS[(info.module_name, info.name)](info))
        if info.pivot_range is not None:
            ignored.add(info.pivot_range)

    if isinstance(node, OperatorApplication) and node.operator not in ("<|", "|>"):
        operator_info = OperatorCheckInfo(
            context, node.operator, node.left, node.right, node.operator_range, node.range,
        )
        for check in OPERATOR_CHECKS.get(node.operator, []):
            diagnostics.extend(check(operator_info))

    for check in EXPRESSION_CHECKS.get(type(node), []):
        diagnostics.extend(check(context, node))

    return diagnostics, frozenset(ignored)
