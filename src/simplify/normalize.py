"""Normalization and structural equivalence of expressions.

Each expression is turned into a canonical nested tuple: parentheses are
dropped, references are replaced by the module they resolve to, pipes become
plain applications, number literals are compared by value and some
operators are rewritten into one preferred spelling. Two expressions are
equivalent when their canonical forms are equal. This is sound but
incomplete: ``False`` only means "not proven equal".
"""

from __future__ import annotations

from typing import Any

from simplify.ast_nodes import (
    AllPattern,
    AsPattern,
    CaseExpr,
    CharLit,
    CharPattern,
    Expr,
    FloatLit,
    FloatPattern,
    FunctionDeclaration,
    FunctionOrValue,
    IfBlock,
    IntegerLit,
    IntPattern,
    LambdaExpr,
    LetDestructuring,
    LetExpr,
    ListExpr,
    ListPattern,
    NamedPattern,
    Negation,
    OperatorApplication,
    ParenthesizedExpr,
    ParenthesizedPattern,
    Pattern,
    PrefixOperator,
    RecordAccess,
    RecordAccessFunction,
    RecordExpr,
    RecordPattern,
    RecordUpdate,
    StringLit,
    StringPattern,
    TupleExpr,
    TuplePattern,
    UnConsPattern,
    UnitExpr,
    UnitPattern,
    VarPattern,
)
from simplify.matchers import application_view
from simplify.names import ModuleNameLookupTable

Canonical = tuple[Any, ...]

# Comparisons written with the operands swapped.
_FLIPPED = {">": "<", ">=": "<="}


def normalize(lookup: ModuleNameLookupTable, node: Expr) -> Canonical:
    """Canonical form of an expression."""
    match node:
        case ParenthesizedExpr(expr=inner):
            return normalize(lookup, inner)
        case IntegerLit(value=value) | FloatLit(value=value):
            return ("number", value)
        case Negation(expr=inner):
            normalized = normalize(lookup, inner)
            if normalized[0] == "number":
                return ("number", -normalized[1])
            if normalized[0] == "negate":
                return normalized[1]
            return ("negate", normalized)
        case StringLit(value=value):
            return ("string", value)
        case CharLit(value=value):
            return ("char", value)
        case UnitExpr():
            return ("unit",)
        case FunctionOrValue(module_name=qualifier, name=name):
            resolved = lookup.module_name_for(node.range)
            if resolved is None:
                return ("var", qualifier, name)
            return ("ref", resolved, name)
        case PrefixOperator(operator=operator):
            return ("ref", lookup.module_name_for(node.range), operator)
        case OperatorApplication(operator=operator, left=left, right=right):
            if operator in ("<|", "|>"):
                return _normalize_application(lookup, node)
            return _normalize_operator(lookup, operator, left, right)
        case LambdaExpr(args=args, body=body):
            return ("lambda", tuple(normalize_pattern(a) for a in args), normalize(lookup, body))
        case IfBlock(condition=condition, then_branch=then_branch, else_branch=else_branch):
            return (
                "if",
                normalize(lookup, condition),
                normalize(lookup, then_branch),
                normalize(lookup, else_branch),
            )
        case CaseExpr(subject=subject, branches=branches):
            return (
                "case",
                normalize(lookup, subject),
                tuple(
                    (normalize_pattern(b.pattern), normalize(lookup, b.body))
                    for b in branches
                ),
            )
        case LetExpr(declarations=declarations, body=body):
            return (
                "let",
                tuple(_normalize_let_declaration(lookup, d) for d in declarations),
                normalize(lookup, body),
            )
        case TupleExpr(elements=elements):
            return ("tuple", *(normalize(lookup, e) for e in elements))
        case ListExpr(elements=elements):
            return ("list", *(normalize(lookup, e) for e in elements))
        case RecordExpr(fields=fields):
            return ("record", _normalize_fields(lookup, fields))
        case RecordUpdate(record=record, fields=fields):
            return ("update", normalize(lookup, record), _normalize_fields(lookup, fields))
        case RecordAccess(record=record, field=field):
            return ("access", normalize(lookup, record), field)
        case RecordAccessFunction(field=field):
            return ("accessor", field)
    return _normalize_application(lookup, node)


def _normalize_application(lookup: ModuleNameLookupTable, node: Expr) -> Canonical:
    view = application_view(node)
    if view is None:
        raise TypeError(f"cannot normalize {type(node).__name__}")
    function = normalize(lookup, view.function)
    arguments = tuple(normalize(lookup, a) for a in view.arguments)
    if function[0] == "app":
        return ("app", function[1], function[2] + arguments)
    return ("app", function, arguments)


def _normalize_operator(
    lookup: ModuleNameLookupTable, operator: str, left: Expr, right: Expr,
) -> Canonical:
    left_n = normalize(lookup, left)
    right_n = normalize(lookup, right)
    if operator in _FLIPPED:
        return ("op", _FLIPPED[operator], right_n, left_n)
    if operator == "::" and right_n[0] == "list":
        return ("list", left_n, *right_n[1:])
    if operator == "++" and left_n[0] == "list" and right_n[0] == "list":
        return ("list", *left_n[1:], *right_n[1:])
    if operator == "++" and left_n[0] == "string" and right_n[0] == "string":
        return ("string", left_n[1] + right_n[1])
    return ("op", operator, left_n, right_n)


def _normalize_fields(lookup: ModuleNameLookupTable, fields: list) -> Canonical:
    return tuple(sorted((f.name, normalize(lookup, f.value)) for f in fields))


def _normalize_let_declaration(
    lookup: ModuleNameLookupTable, decl: FunctionDeclaration | LetDestructuring,
) -> Canonical:
    if isinstance(decl, LetDestructuring):
        return ("destructure", normalize_pattern(decl.pattern), normalize(lookup, decl.body))
    return (
        "function",
        decl.name,
        tuple(normalize_pattern(a) for a in decl.args),
        normalize(lookup, decl.body),
    )


def normalize_pattern(pattern: Pattern) -> Canonical:
    match pattern:
        case ParenthesizedPattern(pattern=inner):
            return normalize_pattern(inner)
        case AllPattern():
            return ("_",)
        case UnitPattern():
            return ("unit",)
        case VarPattern(name=name):
            return ("var", name)
        case IntPattern(value=value) | FloatPattern(value=value):
            return ("number", value)
        case StringPattern(value=value):
            return ("string", value)
        case CharPattern(value=value):
            return ("char", value)
        case TuplePattern(elements=elements):
            return ("tuple", *(normalize_pattern(e) for e in elements))
        case ListPattern(elements=elements):
            return ("list", *(normalize_pattern(e) for e in elements))
        case RecordPattern(fields=fields):
            return ("record", *sorted(f.name for f in fields))
        case UnConsPattern(head=head, tail=tail):
            return ("cons", normalize_pattern(head), normalize_pattern(tail))
        case NamedPattern(module_name=module_name, name=name, args=args):
            return ("named", module_name, name, *(normalize_pattern(a) for a in args))
        case AsPattern(pattern=inner, name=name):
            return ("as", normalize_pattern(inner), name.name)
    raise TypeError(f"cannot normalize pattern {type(pattern).__name__}")


def are_equivalent(lookup: ModuleNameLookupTable, left: Expr, right: Expr) -> bool:
    """True only when both expressions are guaranteed to evaluate to the same value."""
    return normalize(lookup, left) == normalize(lookup, right)


_LITERAL_KINDS = frozenset({"number", "string", "char"})


def literal_value(lookup: ModuleNameLookupTable, node: Expr) -> Canonical | None:
    """The canonical form of a literal number, string, char or boolean."""
    normalized = normalize(lookup, node)
    if normalized[0] in _LITERAL_KINDS:
        return normalized
    if normalized[0] == "ref" and normalized[1] == ("Basics",) and normalized[2] in ("True", "False"):
        return normalized
    return None


def are_distinct_literals(lookup: ModuleNameLookupTable, left: Expr, right: Expr) -> bool:
    """True when both sides are literals that are known to differ."""
    left_value = literal_value(lookup, left)
    right_value = literal_value(lookup, right)
    return left_value is not None and right_value is not None and left_value != right_value
