"""Rules for Basics: identity, always, not, boolean and arithmetic operators,
equality, ``++``, ``::`` and function composition."""

from __future__ import annotations

from simplify.ast_nodes import Expr, Negation, OperatorApplication
from simplify.checks.helpers import as_argument, as_operand, list_literal
from simplify.dispatch import (
    CheckInfo,
    Context,
    OperatorCheckInfo,
    expression_check,
    function_check,
    operator_check,
)
from simplify.errors import Diagnostic
from simplify.fix import RemoveRange, ReplaceRange, keep_only, replace_range_by
from simplify.matchers import (
    BASICS,
    get_boolean,
    get_list_literal,
    get_not_call,
    get_number,
    get_string_literal,
    is_identity,
    is_reference_to,
    remove_parens,
)
from simplify.normalize import are_distinct_literals, are_equivalent
from simplify.source import Range

# ── Functions ────────────────────────────────────────────────────


@function_check("Basics", "identity")
def check_identity(info: CheckInfo) -> list[Diagnostic]:
    if len(info.arguments) != 1:
        return []
    return [Diagnostic(
        message="`identity` should be removed",
        details=["`identity` can be a useful function to be passed as arguments to "
                 "other functions, but calling it manually with an argument is the "
                 "same thing as writing the argument on its own."],
        range=info.fn_range,
        fixes=info.keep(info.arguments[0]),
    )]


@function_check("Basics", "always")
def check_always(info: CheckInfo) -> list[Diagnostic]:
    if len(info.arguments) != 2:
        return []
    return [Diagnostic(
        message="Expression can be replaced by the first argument given to `always`",
        details=["The second argument will be ignored because of the `always` call."],
        range=info.fn_range,
        fixes=info.keep(info.arguments[0]),
    )]


@function_check("Basics", "not")
def check_not(info: CheckInfo) -> list[Diagnostic]:
    if len(info.arguments) != 1:
        return []
    arg = info.arguments[0]

    value = get_boolean(info.lookup, arg)
    if value is not None:
        return [Diagnostic(
            message="Expression is equal to " + ("False" if value else "True"),
            details=["You can replace the call to `not` by the boolean value directly."],
            range=info.parent_range,
            fixes=info.replace_by("False" if value else "True"),
        )]

    inner = get_not_call(info.lookup, arg)
    if inner is not None:
        return [Diagnostic(
            message="Unnecessary double negation",
            details=["Negating a boolean value twice is the same thing as keeping the value as it was."],
            range=info.fn_range,
            fixes=info.keep(inner),
        )]

    comparison = remove_parens(arg)
    if isinstance(comparison, OperatorApplication) and comparison.operator in ("==", "/="):
        flipped = "/=" if comparison.operator == "==" else "=="
        return [Diagnostic(
            message=f"`not` is used on a {comparison.operator} operation",
            details=[f"You can remove the `not` call and use `{flipped}` instead."],
            range=info.fn_range,
            fixes=keep_only(info.parent_range, comparison.range)
            + replace_range_by(comparison.operator_range, flipped),
        )]
    return []


@expression_check(Negation)
def check_double_negation(context: Context, node: Expr) -> list[Diagnostic]:
    inner = remove_parens(node.expr)
    if not isinstance(inner, Negation):
        return []
    return [Diagnostic(
        message="Unnecessary double number negation",
        details=["Negating a number twice is the same as the number itself."],
        range=Range(node.range.start, inner.expr.range.start),
        fixes=keep_only(node.range, inner.expr.range),
    )]


# ── Boolean operators ────────────────────────────────────────────


def _comparison_is_always(info: OperatorCheckInfo, kept: Expr, value: bool) -> Diagnostic:
    return Diagnostic(
        message=f"Comparison is always {value}",
        details=["This condition will always result in the same value. "
                 "You may have hardcoded a value or mistyped a condition."],
        range=info.parent_range,
        fixes=info.keep(kept),
    )


def _unnecessary_check(info: OperatorCheckInfo, kept: Expr) -> Diagnostic:
    return Diagnostic(
        message="Part of the expression is unnecessary",
        details=["A part of this condition is unnecessary. You can remove it "
                 "and it would not impact the behavior of the program."],
        range=info.parent_range,
        fixes=info.keep(kept),
    )


@operator_check("||")
def check_or(info: OperatorCheckInfo) -> list[Diagnostic]:
    left = get_boolean(info.lookup, info.left)
    if left is True:
        return [_comparison_is_always(info, info.left, True)]
    if left is False:
        return [_unnecessary_check(info, info.right)]
    right = get_boolean(info.lookup, info.right)
    if right is True:
        return [_comparison_is_always(info, info.right, True)]
    if right is False:
        return [_unnecessary_check(info, info.left)]
    if are_equivalent(info.lookup, info.left, info.right):
        return [_unnecessary_check(info, info.left)]
    return []


@operator_check("&&")
def check_and(info: OperatorCheckInfo) -> list[Diagnostic]:
    left = get_boolean(info.lookup, info.left)
    if left is True:
        return [_unnecessary_check(info, info.right)]
    if left is False:
        return [_comparison_is_always(info, info.left, False)]
    right = get_boolean(info.lookup, info.right)
    if right is True:
        return [_unnecessary_check(info, info.left)]
    if right is False:
        return [_comparison_is_always(info, info.right, False)]
    if are_equivalent(info.lookup, info.left, info.right):
        return [_unnecessary_check(info, info.left)]
    return []


# ── Equality ─────────────────────────────────────────────────────


@operator_check("==", "/=")
def check_equality(info: OperatorCheckInfo) -> list[Diagnostic]:
    is_equal = info.operator == "=="
    for literal, other in ((info.right, info.left), (info.left, info.right)):
        value = get_boolean(info.lookup, literal)
        if value is None:
            continue
        if value == is_equal:
            return [Diagnostic(
                message="Unnecessary comparison with boolean",
                details=["The result of the expression will be the same with or "
                         "without the comparison."],
                range=info.parent_range,
                fixes=info.keep(other),
            )]
        return [Diagnostic(
            message="Unnecessary comparison with boolean",
            details=["The result of the expression will be the same as negating "
                     "the other side with `not`."],
            range=info.parent_range,
            fixes=info.replace_by("not " + as_argument(other, info.extract(other))),
        )]

    if are_distinct_literals(info.lookup, info.left, info.right):
        result = "False" if is_equal else "True"
        return [Diagnostic(
            message=f"Condition will always evaluate to {result}",
            details=["The values on both sides are different literals."],
            range=info.parent_range,
            fixes=info.replace_by(result),
        )]

    if not info.context.expect_nan and are_equivalent(info.lookup, info.left, info.right):
        result = "True" if is_equal else "False"
        return [Diagnostic(
            message=f"Condition will always evaluate to {result}",
            details=["The value on the left and on the right are the same."],
            range=info.parent_range,
            fixes=info.replace_by(result),
        )]
    return []


# ── Arithmetic ───────────────────────────────────────────────────


def _unnecessary_operation(info: OperatorCheckInfo, kept: Expr, description: str) -> Diagnostic:
    return Diagnostic(
        message=f"Unnecessary {description}",
        details=["This operation does not change the value it is applied to."],
        range=info.operator_range,
        fixes=info.keep(kept),
    )


@operator_check("+")
def check_plus(info: OperatorCheckInfo) -> list[Diagnostic]:
    if get_number(info.right) == 0:
        return [_unnecessary_operation(info, info.left, "addition with 0")]
    if get_number(info.left) == 0:
        return [_unnecessary_operation(info, info.right, "addition with 0")]
    return []


@operator_check("-")
def check_minus(info: OperatorCheckInfo) -> list[Diagnostic]:
    if get_number(info.right) == 0:
        return [_unnecessary_operation(info, info.left, "subtraction with 0")]
    return []


@operator_check("*")
def check_multiply(info: OperatorCheckInfo) -> list[Diagnostic]:
    if get_number(info.right) == 1:
        return [_unnecessary_operation(info, info.left, "multiplication by 1")]
    if get_number(info.left) == 1:
        return [_unnecessary_operation(info, info.right, "multiplication by 1")]
    if info.context.expect_nan:
        return []
    for zero in (info.right, info.left):
        if get_number(zero) == 0:
            return [Diagnostic(
                message="Multiplication by 0 should be replaced",
                details=["Multiplying by 0 will turn anything into 0."],
                range=info.operator_range,
                fixes=info.keep(zero),
            )]
    return []


@operator_check("/", "//")
def check_divide(info: OperatorCheckInfo) -> list[Diagnostic]:
    if get_number(info.right) == 1:
        return [_unnecessary_operation(info, info.left, "division by 1")]
    return []


# ── Lists and strings ────────────────────────────────────────────


@operator_check("++")
def check_append(info: OperatorCheckInfo) -> list[Diagnostic]:
    for empty, other in ((info.left, info.right), (info.right, info.left)):
        if get_string_literal(empty) == "":
            return [Diagnostic(
                message="Unnecessary concatenation with an empty string",
                details=["You should remove the concatenation with the empty string."],
                range=info.operator_range,
                fixes=info.keep(other),
            )]
        if get_list_literal(empty) == []:
            return [Diagnostic(
                message="Concatenating with a single list doesn't have any effect",
                details=["You should remove the concatenation with the empty list."],
                range=info.operator_range,
                fixes=info.keep(other),
            )]

    left = get_list_literal(info.left)
    right = get_list_literal(info.right)
    if left is not None and right is not None:
        items = [info.extract(e) for e in left + right]
        return [Diagnostic(
            message="Expression could be simplified to be a single List",
            details=["Try moving all the elements into a single list."],
            range=info.parent_range,
            fixes=info.replace_by(list_literal(items)),
        )]
    if left is not None and len(left) == 1:
        head = left[0]
        return [Diagnostic(
            message="Should use (::) instead of (++)",
            details=["Concatenating a list with a single value is the same as "
                     "using (::) on the list with the value."],
            range=info.operator_range,
            fixes=[
                ReplaceRange(info.left.range, as_operand(head, info.extract(head))),
                ReplaceRange(info.operator_range, "::"),
            ],
        )]
    return []


@operator_check("::")
def check_cons(info: OperatorCheckInfo) -> list[Diagnostic]:
    elements = get_list_literal(info.right)
    if elements is None:
        return []
    items = [info.extract(info.left)] + [info.extract(e) for e in elements]
    return [Diagnostic(
        message="Element added to the beginning of the list could be included in the list",
        details=["Try moving the element inside the list it is being added to."],
        range=info.operator_range,
        fixes=info.replace_by(list_literal(items)),
    )]


# ── Composition ──────────────────────────────────────────────────


def _written_order(node: Expr, operator: str) -> list[Expr]:
    """Functions of an unparenthesized composition chain, left to right as written."""
    if isinstance(node, OperatorApplication) and node.operator == operator:
        return _written_order(node.left, operator) + _written_order(node.right, operator)
    return [node]


def _is_not(info: OperatorCheckInfo, node: Expr) -> bool:
    return is_reference_to(info.lookup, node, BASICS, "not")


@operator_check(">>", "<<")
def check_composition(info: OperatorCheckInfo) -> list[Diagnostic]:
    if is_identity(info.lookup, info.left) or is_identity(info.lookup, info.right):
        kept = info.right if is_identity(info.lookup, info.left) else info.left
        return [Diagnostic(
            message="`identity` should be removed",
            details=["Composing a function with `identity` is the same as simply "
                     "referencing the function."],
            range=info.operator_range,
            fixes=info.keep(kept),
        )]

    left = _written_order(info.left, info.operator)
    right = _written_order(info.right, info.operator)
    if not (_is_not(info, left[-1]) and _is_not(info, right[0])):
        return []
    if len(left) == 1 and len(right) == 1:
        fixes = info.replace_by("identity")
    elif len(left) > 1:
        fixes = [RemoveRange(Range(left[-2].range.end, right[0].range.end))]
    else:
        fixes = [RemoveRange(Range(left[0].range.start, right[1].range.start))]
    return [Diagnostic(
        message="Unnecessary double negation",
        details=["Composing `not` with `not` makes both of them cancel each other out."],
        range=Range(left[-1].range.start, right[0].range.end),
        fixes=fixes,
    )]
