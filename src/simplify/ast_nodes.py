"""AST node definitions for Elm modules."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from simplify.source import Range

# ── Patterns ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class AllPattern:
    range: Range


@dataclass(frozen=True)
class UnitPattern:
    range: Range


@dataclass(frozen=True)
class VarPattern:
    name: str
    range: Range


@dataclass(frozen=True)
class CharPattern:
    value: str
    range: Range


@dataclass(frozen=True)
class StringPattern:
    value: str
    range: Range


@dataclass(frozen=True)
class IntPattern:
    value: int
    range: Range


@dataclass(frozen=True)
class FloatPattern:
    value: float
    range: Range


@dataclass(frozen=True)
class TuplePattern:
    elements: list[Pattern]
    range: Range


@dataclass(frozen=True)
class ListPattern:
    elements: list[Pattern]
    range: Range


@dataclass(frozen=True)
class RecordPattern:
    fields: list[VarPattern]
    range: Range


@dataclass(frozen=True)
class UnConsPattern:
    head: Pattern
    tail: Pattern
    range: Range


@dataclass(frozen=True)
class NamedPattern:
    module_name: tuple[str, ...]
    name: str
    args: list[Pattern]
    name_range: Range
    range: Range


@dataclass(frozen=True)
class AsPattern:
    pattern: Pattern
    name: VarPattern
    range: Range


@dataclass(frozen=True)
class ParenthesizedPattern:
    pattern: Pattern
    range: Range


Pattern = Union[
    AllPattern, UnitPattern, VarPattern, CharPattern, StringPattern,
    IntPattern, FloatPattern, TuplePattern, ListPattern, RecordPattern,
    UnConsPattern, NamedPattern, AsPattern, ParenthesizedPattern,
]


# ── Expressions ──────────────────────────────────────────────────


@dataclass(frozen=True)
class UnitExpr:
    range: Range


@dataclass(frozen=True)
class IntegerLit:
    value: int
    hex: bool
    range: Range


@dataclass(frozen=True)
class FloatLit:
    value: float
    range: Range


@dataclass(frozen=True)
class StringLit:
    value: str
    multiline: bool
    range: Range


@dataclass(frozen=True)
class CharLit:
    value: str
    range: Range


@dataclass(frozen=True)
class FunctionOrValue:
    """A (possibly qualified) reference: ``map``, ``List.map``, ``Just``."""

    module_name: tuple[str, ...]
    name: str
    range: Range


@dataclass(frozen=True)
class PrefixOperator:
    operator: str
    range: Range


@dataclass(frozen=True)
class Application:
    function: Expr
    arguments: list[Expr]
    range: Range


@dataclass(frozen=True)
class OperatorApplication:
    operator: str
    left: Expr
    right: Expr
    operator_range: Range
    range: Range


@dataclass(frozen=True)
class Negation:
    expr: Expr
    range: Range


@dataclass(frozen=True)
class ParenthesizedExpr:
    expr: Expr
    range: Range


@dataclass(frozen=True)
class LambdaExpr:
    args: list[Pattern]
    body: Expr
    range: Range


@dataclass(frozen=True)
class IfBlock:
    condition: Expr
    then_branch: Expr
    else_branch: Expr
    range: Range


@dataclass(frozen=True)
class CaseBranch:
    pattern: Pattern
    body: Expr
    range: Range


@dataclass(frozen=True)
class CaseExpr:
    subject: Expr
    branches: list[CaseBranch]
    range: Range


@dataclass(frozen=True)
class LetExpr:
    declarations: list[LetDeclaration]
    body: Expr
    range: Range


@dataclass(frozen=True)
class TupleExpr:
    elements: list[Expr]
    range: Range


@dataclass(frozen=True)
class ListExpr:
    elements: list[Expr]
    range: Range


@dataclass(frozen=True)
class RecordSetter:
    name: str
    value: Expr
    range: Range


@dataclass(frozen=True)
class RecordExpr:
    fields: list[RecordSetter]
    range: Range


@dataclass(frozen=True)
class RecordUpdate:
    record: FunctionOrValue
    fields: list[RecordSetter]
    range: Range


@dataclass(frozen=True)
class RecordAccess:
    record: Expr
    field: str
    field_range: Range
    range: Range


@dataclass(frozen=True)
class RecordAccessFunction:
    field: str
    range: Range


Expr = Union[
    UnitExpr, IntegerLit, FloatLit, StringLit, CharLit,
    FunctionOrValue, PrefixOperator, Application, OperatorApplication,
    Negation, ParenthesizedExpr, LambdaExpr, IfBlock, CaseExpr, LetExpr,
    TupleExpr, ListExpr, RecordExpr, RecordUpdate, RecordAccess,
    RecordAccessFunction,
]


# ── Declarations ─────────────────────────────────────────────────


@dataclass(frozen=True)
class FunctionDeclaration:
    name: str
    name_range: Range
    args: list[Pattern]
    body: Expr
    signature_range: Range | None
    range: Range


@dataclass(frozen=True)
class LetDestructuring:
    pattern: Pattern
    body: Expr
    range: Range


LetDeclaration = Union[FunctionDeclaration, LetDestructuring]


@dataclass(frozen=True)
class TypeAliasDeclaration:
    name: str
    is_record: bool
    range: Range


@dataclass(frozen=True)
class CustomTypeDeclaration:
    name: str
    constructors: list[str]
    range: Range


@dataclass(frozen=True)
class PortDeclaration:
    name: str
    range: Range


@dataclass(frozen=True)
class InfixDeclaration:
    operator: str
    range: Range


Declaration = Union[
    FunctionDeclaration, TypeAliasDeclaration, CustomTypeDeclaration,
    PortDeclaration, InfixDeclaration,
]


# ── Module structure ─────────────────────────────────────────────


@dataclass(frozen=True)
class ExposedItem:
    name: str
    open: bool  # Type(..)
    range: Range


@dataclass(frozen=True)
class Exposing:
    everything: bool
    items: list[ExposedItem]
    range: Range

    def exposes(self, name: str) -> bool:
        return self.everything or any(item.name == name for item in self.items)


@dataclass(frozen=True)
class ModuleHeader:
    name: tuple[str, ...]
    exposing: Exposing
    range: Range


@dataclass(frozen=True)
class Import:
    module_name: tuple[str, ...]
    alias: str | None
    exposing: Exposing | None
    range: Range


@dataclass(frozen=True)
class Module:
    header: ModuleHeader | None
    imports: list[Import]
    declarations: list[Declaration]
    range: Range

    @property
    def name(self) -> tuple[str, ...]:
        return self.header.name if self.header is not None else ("Main",)


# ── Children ─────────────────────────────────────────────────────


def expression_children(expr: Expr) -> Iterator[Expr]:
    """Yield the direct sub-expressions of an expression in source order."""
    if isinstance(expr, Application):
        yield expr.function
        yield from expr.arguments
    elif isinstance(expr, OperatorApplication):
        yield expr.left
        yield expr.right
    elif isinstance(expr, (Negation, ParenthesizedExpr)):
        yield expr.expr
    elif isinstance(expr, LambdaExpr):
        yield expr.body
    elif isinstance(expr, IfBlock):
        yield expr.condition
        yield expr.then_branch
        yield expr.else_branch
    elif isinstance(expr, CaseExpr):
        yield expr.subject
        for branch in expr.branches:
            yield branch.body
    elif isinstance(expr, LetExpr):
        for decl in expr.declarations:
            yield decl.body
        yield expr.body
    elif isinstance(expr, (TupleExpr, ListExpr)):
        yield from expr.elements
    elif isinstance(expr, RecordExpr):
        for setter in expr.fields:
            yield setter.value
    elif isinstance(expr, RecordUpdate):
        yield expr.record
        for setter in expr.fields:
            yield setter.value
    elif isinstance(expr, RecordAccess):
        yield expr.record


def pattern_children(pattern: Pattern) -> Iterator[Pattern]:
    """Yield the direct sub-patterns of a pattern."""
    if isinstance(pattern, (TuplePattern, ListPattern)):
        yield from pattern.elements
    elif isinstance(pattern, RecordPattern):
        yield from pattern.fields
    elif isinstance(pattern, UnConsPattern):
        yield pattern.head
        yield pattern.tail
    elif isinstance(pattern, NamedPattern):
        yield from pattern.args
    elif isinstance(pattern, AsPattern):
        yield pattern.pattern
        yield pattern.name
    elif isinstance(pattern, ParenthesizedPattern):
        yield pattern.pattern


def bound_names(pattern: Pattern) -> list[VarPattern]:
    """All variables introduced by a pattern."""
    if isinstance(pattern, VarPattern):
        return [pattern]
    names: list[VarPattern] = []
    for child in pattern_children(pattern):
        names.extend(bound_names(child))
    return names
