"""Rules for expression forms: if, case, record access and tuple projection."""

from __future__ import annotations

from simplify.ast_nodes import (
    Application,
    CaseExpr,
    Expr,
    IfBlock,
    LambdaExpr,
    OperatorApplication,
    RecordAccess,
    RecordExpr,
    bound_names,
)
from simplify.checks.helpers import as_argument, as_operand, collapse_to
from simplify.dispatch import Context, expression_check
from simplify.errors import Diagnostic
from simplify.fix import ReplaceRange, replace_range_by
from simplify.matchers import (
    application_view,
    get_boolean,
    get_not_call,
    get_tuple_literal,
    get_tuple_projection,
    remove_parens,
)
from simplify.normalize import are_equivalent
from simplify.source import Position, Range


def _if_keyword_range(node: IfBlock) -> Range:
    start = node.range.start
    return Range(start, Position(start.row, start.column + 2))


@expression_check(IfBlock)
def check_if(context: Context, node: IfBlock) -> list[Diagnostic]:
    lookup = context.lookup

    condition = get_boolean(lookup, node.condition)
    if condition is not None:
        kept = node.then_branch if condition else node.else_branch
        return [Diagnostic(
            message=f"The condition will always evaluate to {condition}",
            details=["The expression can be replaced by what is inside the "
                     f"'{'then' if condition else 'else'}' branch."],
            range=_if_keyword_range(node),
            fixes=collapse_to(context, node.range, kept),
        )]

    if are_equivalent(lookup, node.then_branch, node.else_branch):
        return [Diagnostic(
            message="The values in both branches is the same.",
            details=["The expression can be replaced by the contents of either branch."],
            range=_if_keyword_range(node),
            fixes=collapse_to(context, node.range, node.then_branch),
        )]

    then_value = get_boolean(lookup, node.then_branch)
    else_value = get_boolean(lookup, node.else_branch)
    if then_value is True and else_value is False:
        return [Diagnostic(
            message="The if expression's value is the same as the condition",
            details=["The expression can be replaced by the condition."],
            range=_if_keyword_range(node),
            fixes=collapse_to(context, node.range, node.condition),
        )]
    if then_value is False and else_value is True:
        text = "not " + as_argument(node.condition, context.extract(node.condition))
        return [Diagnostic(
            message="The if expression's value is the inverse of the condition",
            details=["The expression can be replaced by the condition wrapped by `not`."],
            range=_if_keyword_range(node),
            fixes=replace_range_by(node.range, text),
        )]

    negated = get_not_call(lookup, node.condition)
    if negated is not None:
        return [Diagnostic(
            message="The condition is negated",
            details=["Remove the `not` and swap the branches instead."],
            range=node.condition.range,
            fixes=[
                ReplaceRange(node.condition.range, context.extract(negated)),
                ReplaceRange(node.then_branch.range, context.extract(node.else_branch)),
                ReplaceRange(node.else_branch.range, context.extract(node.then_branch)),
            ],
        )]
    return []


@expression_check(CaseExpr)
def check_case(context: Context, node: CaseExpr) -> list[Diagnostic]:
    first = node.branches[0]
    if any(bound_names(branch.pattern) for branch in node.branches):
        return []
    if not all(are_equivalent(context.lookup, first.body, b.body) for b in node.branches[1:]):
        return []
    start = node.range.start
    return [Diagnostic(
        message="Unnecessary case expression",
        details=["All the branches of this case expression resolve to the same value. "
                 "You can remove the case expression and replace it with the body "
                 "of one of the branches."],
        range=Range(start, Position(start.row, start.column + 4)),
        fixes=collapse_to(context, node.range, first.body),
    )]


@expression_check(RecordAccess)
def check_record_access(context: Context, node: RecordAccess) -> list[Diagnostic]:
    record = remove_parens(node.record)
    if not isinstance(record, RecordExpr):
        return []
    setter = next((f for f in record.fields if f.name == node.field), None)
    if setter is None:
        return []
    return [Diagnostic(
        message="Field access can be simplified",
        details=["Accessing the field of a record that is being created can be "
                 "replaced by the value of that field."],
        range=node.field_range,
        fixes=replace_range_by(
            node.range, as_argument(setter.value, context.extract(setter.value)),
        ),
    )]


@expression_check(Application, OperatorApplication)
def check_tuple_projection(context: Context, node: Expr) -> list[Diagnostic]:
    """``(\\( a, _ ) -> a) ( x, y )`` and its pipe spellings.

    Qualified ``Tuple.first`` / ``Tuple.second`` calls go through the
    function registry instead.
    """
    view = application_view(node)
    if view is None or len(view.arguments) != 1:
        return []
    if not isinstance(remove_parens(view.function), LambdaExpr):
        return []
    index = get_tuple_projection(context.lookup, view.function)
    if index is None:
        return []
    elements = get_tuple_literal(view.arguments[0])
    if elements is None:
        return []
    kept = elements[index]
    return [Diagnostic(
        message="Unnecessary tuple projection",
        details=["Projecting out of a tuple literal can be replaced by the element itself."],
        range=view.function.range,
        fixes=replace_range_by(node.range, as_operand(kept, context.extract(kept))),
    )]
