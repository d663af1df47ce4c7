"""Shape matchers: recognise canonical expression forms.

Every matcher strips redundant parentheses first, so ``((x))`` matches
wherever ``x`` does. A matcher never raises for a non-matching node; it
returns ``None`` (or ``False``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from simplify.ast_nodes import (
    AllPattern,
    Application,
    Expr,
    FloatLit,
    FunctionOrValue,
    IntegerLit,
    LambdaExpr,
    ListExpr,
    Negation,
    OperatorApplication,
    ParenthesizedExpr,
    ParenthesizedPattern,
    Pattern,
    StringLit,
    TupleExpr,
    TuplePattern,
    VarPattern,
    expression_children,
)
from simplify.names import ModuleName, ModuleNameLookupTable
from simplify.source import Range

BASICS: ModuleName = ("Basics",)
LIST: ModuleName = ("List",)
MAYBE: ModuleName = ("Maybe",)
RESULT: ModuleName = ("Result",)
TUPLE: ModuleName = ("Tuple",)


class CallStyle(Enum):
    PREFIX = auto()       # f a b
    PIPE_LEFT = auto()    # f a <| b
    PIPE_RIGHT = auto()   # b |> f a


# ── Parentheses ──────────────────────────────────────────────────


def remove_parens(node: Expr) -> Expr:
    while isinstance(node, ParenthesizedExpr):
        node = node.expr
    return node


def remove_parens_pattern(pattern: Pattern) -> Pattern:
    while isinstance(pattern, ParenthesizedPattern):
        pattern = pattern.pattern
    return pattern


# ── References ───────────────────────────────────────────────────


def is_reference_to(
    lookup: ModuleNameLookupTable, node: Expr, module_name: ModuleName, name: str,
) -> bool:
    node = remove_parens(node)
    return (
        isinstance(node, FunctionOrValue)
        and node.name == name
        and lookup.module_name_for(node.range) == module_name
    )


def is_local_reference(node: Expr, name: str) -> bool:
    node = remove_parens(node)
    return isinstance(node, FunctionOrValue) and node.module_name == () and node.name == name


def get_boolean(lookup: ModuleNameLookupTable, node: Expr) -> bool | None:
    """``True``/``False`` from Basics; a local constructor of that name does not count."""
    if is_reference_to(lookup, node, BASICS, "True"):
        return True
    if is_reference_to(lookup, node, BASICS, "False"):
        return False
    return None


def uses_name(node: Expr, name: str) -> bool:
    """Whether an unqualified reference to ``name`` occurs anywhere in ``node``."""
    if isinstance(node, FunctionOrValue):
        return node.module_name == () and node.name == name
    return any(uses_name(child, name) for child in expression_children(node))


# ── Applications ─────────────────────────────────────────────────


@dataclass(frozen=True)
class ApplicationView:
    """A call with its arguments in application order, whatever its spelling."""

    function: Expr
    arguments: list[Expr]
    style: CallStyle
    pivot_range: Range | None = None


def application_view(node: Expr) -> ApplicationView | None:
    """View ``f a b``, ``f a <| b`` and ``b |> f a`` uniformly as ``f [a, b]``."""
    node = remove_parens(node)
    match node:
        case Application(function=function, arguments=arguments):
            inner = application_view(function)
            if inner is not None and inner.style is CallStyle.PREFIX:
                return ApplicationView(inner.function, inner.arguments + arguments, CallStyle.PREFIX)
            return ApplicationView(remove_parens(function), list(arguments), CallStyle.PREFIX)
        case OperatorApplication(operator="<|", left=left, right=right):
            return _pivot(left, right, CallStyle.PIPE_LEFT)
        case OperatorApplication(operator="|>", left=left, right=right):
            return _pivot(right, left, CallStyle.PIPE_RIGHT)
    return None


def _pivot(function_side: Expr, argument: Expr, style: CallStyle) -> ApplicationView:
    inner = remove_parens(function_side)
    if isinstance(inner, Application):
        view = application_view(inner)
        if view is not None:
            return ApplicationView(view.function, view.arguments + [argument], style, inner.range)
    return ApplicationView(inner, [argument], style)


@dataclass(frozen=True)
class FunctionCall:
    """A recognised call of a specific qualified function."""

    node_range: Range
    fn_range: Range
    arguments: list[Expr]
    style: CallStyle
    pivot_range: Range | None = None

    @property
    def first_arg(self) -> Expr | None:
        return self.arguments[0] if self.arguments else None

    @property
    def second_arg(self) -> Expr | None:
        return self.arguments[1] if len(self.arguments) > 1 else None

    @property
    def third_arg(self) -> Expr | None:
        return self.arguments[2] if len(self.arguments) > 2 else None


def get_specific_call(
    lookup: ModuleNameLookupTable, node: Expr, module_name: ModuleName, name: str,
) -> FunctionCall | None:
    """Recognise ``module_name.name`` applied to zero or more arguments."""
    original = remove_parens(node)
    node = reduce_lambda(original) if isinstance(original, LambdaExpr) else original
    if isinstance(node, FunctionOrValue):
        if is_reference_to(lookup, node, module_name, name):
            return FunctionCall(original.range, node.range, [], CallStyle.PREFIX)
        return None
    view = application_view(node)
    if view is None or not is_reference_to(lookup, view.function, module_name, name):
        return None
    return FunctionCall(original.range, view.function.range, view.arguments, view.style, view.pivot_range)


def get_call_with_args(
    lookup: ModuleNameLookupTable, node: Expr, module_name: ModuleName, name: str, count: int,
) -> FunctionCall | None:
    """Like get_specific_call but only for exactly ``count`` arguments."""
    call = get_specific_call(lookup, node, module_name, name)
    if call is not None and len(call.arguments) == count:
        return call
    return None


def get_not_call(lookup: ModuleNameLookupTable, node: Expr) -> Expr | None:
    call = get_call_with_args(lookup, node, BASICS, "not", 1)
    return call.arguments[0] if call is not None else None


def get_just_call(lookup: ModuleNameLookupTable, node: Expr) -> Expr | None:
    call = get_call_with_args(lookup, node, MAYBE, "Just", 1)
    return call.arguments[0] if call is not None else None


def is_nothing(lookup: ModuleNameLookupTable, node: Expr) -> bool:
    return is_reference_to(lookup, node, MAYBE, "Nothing")


# ── Lambdas ──────────────────────────────────────────────────────


def reduce_lambda(node: LambdaExpr) -> Expr:
    """Eta-reduce ``\\a b -> f x a b`` towards ``f x``.

    One (parameter, trailing argument) pair is stripped at a time while the
    parameter is a plain variable that nothing else in the call mentions.
    """
    args = list(node.args)
    view = application_view(node.body)
    if view is None:
        return node
    call_args = list(view.arguments)
    while args and call_args:
        param = remove_parens_pattern(args[-1])
        last = remove_parens(call_args[-1])
        if not (isinstance(param, VarPattern) and is_local_reference(last, param.name)):
            break
        rest = call_args[:-1]
        if uses_name(view.function, param.name) or any(uses_name(a, param.name) for a in rest):
            break
        args.pop()
        call_args = rest
    if len(args) == len(node.args):
        return node

    function = view.function
    if call_args:
        function = Application(function, call_args, Range.between(function.range, call_args[-1].range))
    if args:
        return LambdaExpr(args, function, node.range)
    return function


def is_identity(lookup: ModuleNameLookupTable, node: Expr) -> bool:
    """``identity`` or ``\\x -> x`` (after eta-reduction)."""
    node = remove_parens(node)
    if is_reference_to(lookup, node, BASICS, "identity"):
        return True
    if not isinstance(node, LambdaExpr):
        return False
    reduced = reduce_lambda(node)
    if not isinstance(reduced, LambdaExpr):
        return is_identity(lookup, reduced)
    if len(reduced.args) != 1:
        return False
    param = remove_parens_pattern(reduced.args[0])
    return isinstance(param, VarPattern) and is_local_reference(reduced.body, param.name)


def get_always_result(lookup: ModuleNameLookupTable, node: Expr) -> Expr | None:
    """The value a constant function returns: ``always x`` or ``\\_ -> x``.

    For ``\\_ y -> e`` the remaining lambda ``\\y -> e`` is returned.
    """
    node = remove_parens(node)
    call = get_call_with_args(lookup, node, BASICS, "always", 1)
    if call is not None:
        return call.arguments[0]
    if isinstance(node, LambdaExpr) and node.args:
        if isinstance(remove_parens_pattern(node.args[0]), AllPattern):
            if len(node.args) == 1:
                return node.body
            return LambdaExpr(node.args[1:], node.body, node.range)
    return None


def is_always_boolean(lookup: ModuleNameLookupTable, node: Expr) -> bool | None:
    result = get_always_result(lookup, node)
    return get_boolean(lookup, result) if result is not None else None


def is_always_nothing(lookup: ModuleNameLookupTable, node: Expr) -> bool:
    result = get_always_result(lookup, node)
    return result is not None and is_nothing(lookup, result)


def is_just_function(lookup: ModuleNameLookupTable, node: Expr) -> bool:
    """``Just`` itself, or a lambda reducing to it."""
    node = remove_parens(node)
    if isinstance(node, LambdaExpr):
        node = reduce_lambda(node)
    return is_reference_to(lookup, node, MAYBE, "Just")


# ── Literals ─────────────────────────────────────────────────────


def get_list_literal(node: Expr) -> list[Expr] | None:
    node = remove_parens(node)
    if isinstance(node, ListExpr):
        return node.elements
    return None


def is_empty_list(node: Expr) -> bool:
    return get_list_literal(node) == []


def get_string_literal(node: Expr) -> str | None:
    node = remove_parens(node)
    if isinstance(node, StringLit):
        return node.value
    return None


def is_empty_string(node: Expr) -> bool:
    return get_string_literal(node) == ""


def get_int(node: Expr) -> int | None:
    """Integer value of a decimal or hex literal, negated or not."""
    node = remove_parens(node)
    if isinstance(node, IntegerLit):
        return node.value
    if isinstance(node, Negation):
        value = get_int(node.expr)
        return -value if value is not None else None
    return None


def get_number(node: Expr) -> int | float | None:
    node = remove_parens(node)
    if isinstance(node, FloatLit):
        return node.value
    if isinstance(node, Negation):
        value = get_number(node.expr)
        return -value if value is not None else None
    return get_int(node)


def get_tuple_literal(node: Expr) -> list[Expr] | None:
    node = remove_parens(node)
    if isinstance(node, TupleExpr) and len(node.elements) == 2:
        return node.elements
    return None


# ── Chains ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class ConsChain:
    consed: list[Expr]
    tail: Expr


def get_collapsed_cons(node: Expr) -> ConsChain | None:
    """``a :: b :: rest`` → consed ``[a, b]`` and tail ``rest``."""
    node = remove_parens(node)
    consed: list[Expr] = []
    while isinstance(node, OperatorApplication) and node.operator == "::":
        consed.append(node.left)
        node = remove_parens(node.right)
    if not consed:
        return None
    return ConsChain(consed, node)


@dataclass(frozen=True)
class CompositionChain:
    """Functions of a composition in the order they are applied."""

    functions: list[Expr]
    range: Range

    @property
    def earliest(self) -> Expr:
        return self.functions[0]

    @property
    def latest(self) -> Expr:
        return self.functions[-1]


def get_composition_chain(node: Expr) -> CompositionChain | None:
    """Flatten ``f >> g >> h`` or ``h << g << f`` into ``[f, g, h]``.

    Only unparenthesized segments using the same operator are flattened.
    """
    node = remove_parens(node)
    if not (isinstance(node, OperatorApplication) and node.operator in (">>", "<<")):
        return None
    return CompositionChain(_flatten_composition(node, node.operator), node.range)


def _flatten_composition(node: Expr, operator: str) -> list[Expr]:
    if not (isinstance(node, OperatorApplication) and node.operator == operator):
        return [node]
    left = _flatten_composition(node.left, operator)
    right = _flatten_composition(node.right, operator)
    return left + right if operator == ">>" else right + left


# ── Tuples ───────────────────────────────────────────────────────


def get_tuple_projection(lookup: ModuleNameLookupTable, node: Expr) -> int | None:
    """0 for a first-element projection, 1 for a second-element projection."""
    node = remove_parens(node)
    if is_reference_to(lookup, node, TUPLE, "first"):
        return 0
    if is_reference_to(lookup, node, TUPLE, "second"):
        return 1
    if not (isinstance(node, LambdaExpr) and len(node.args) == 1):
        return None
    pattern = remove_parens_pattern(node.args[0])
    if not (isinstance(pattern, TuplePattern) and len(pattern.elements) == 2):
        return None
    first, second = (remove_parens_pattern(p) for p in pattern.elements)
    if isinstance(first, VarPattern) and isinstance(second, AllPattern):
        return 0 if is_local_reference(node.body, first.name) else None
    if isinstance(first, AllPattern) and isinstance(second, VarPattern):
        return 1 if is_local_reference(node.body, second.name) else None
    return None
