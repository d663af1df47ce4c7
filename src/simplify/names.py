"""Name resolution: which module does each reference come from?

The lookup table is keyed by the range of each occurrence, so two identical
spellings of a name can resolve differently (one shadowed by a local binding,
one not).
"""

from __future__ import annotations

import logging

from simplify.ast_nodes import (
    CaseExpr,
    CustomTypeDeclaration,
    Expr,
    FunctionDeclaration,
    FunctionOrValue,
    Import,
    LambdaExpr,
    LetDestructuring,
    LetExpr,
    Module,
    NamedPattern,
    OperatorApplication,
    Pattern,
    PortDeclaration,
    PrefixOperator,
    RecordUpdate,
    TypeAliasDeclaration,
    bound_names,
    expression_children,
    pattern_children,
)
from simplify.source import Range
from simplify.stdlib import DEFAULT_IMPORTS, load_interface
from simplify.symbols import BindingKind, LocalBindings

logger = logging.getLogger(__name__)

ModuleName = tuple[str, ...]


class ModuleNameLookupTable:
    """Maps the range of every reference in a module to its defining module."""

    def __init__(self, module_name: ModuleName) -> None:
        self.module_name = module_name
        self._by_range: dict[Range, ModuleName | None] = {}
        self._qualifiers: dict[ModuleName, str] = {}

    def record(self, rng: Range, module_name: ModuleName | None) -> None:
        self._by_range[rng] = module_name

    def module_name_for(self, rng: Range) -> ModuleName | None:
        """The module a reference was imported from or defined in.

        None when the reference is a local binding or cannot be resolved.
        """
        return self._by_range.get(rng)

    def record_import(self, imp: Import) -> None:
        self._qualifiers.setdefault(imp.module_name, imp.alias or '.'.join(imp.module_name))

    def qualifier_for(self, module_name: ModuleName) -> str | None:
        """How this module refers to ``module_name`` qualified, None if not imported."""
        return self._qualifiers.get(module_name)

    def __len__(self) -> int:
        return len(self._by_range)


class _Resolver:
    """Resolves names against a module's imports and its own declarations."""

    def __init__(self, module: Module) -> None:
        self.module = module
        self.imports: list[Import] = list(module.imports) + DEFAULT_IMPORTS
        self.own_names: set[str] = set()
        for decl in module.declarations:
            match decl:
                case FunctionDeclaration(name=name) | PortDeclaration(name=name):
                    self.own_names.add(name)
                case CustomTypeDeclaration(constructors=constructors):
                    self.own_names.update(constructors)
                case TypeAliasDeclaration(name=name, is_record=True):
                    self.own_names.add(name)

    def resolve(self, qualifier: ModuleName, name: str, scopes: LocalBindings) -> ModuleName | None:
        if qualifier:
            return self._resolve_qualified(qualifier, name)
        if name in scopes:
            return None
        if name in self.own_names:
            return self.module.name
        return self._resolve_exposed(name)

    def _resolve_qualified(self, qualifier: ModuleName, name: str) -> ModuleName | None:
        written = '.'.join(qualifier)
        candidates = [
            imp for imp in self.imports
            if imp.alias == written or (imp.alias is None and '.'.join(imp.module_name) == written)
        ]
        unknown: list[ModuleName] = []
        for imp in candidates:
            interface = load_interface(imp.module_name)
            if interface is None:
                unknown.append(imp.module_name)
            elif interface.exposes_value(name):
                return imp.module_name
        if unknown:
            return unknown[0]
        return None

    def _resolve_exposed(self, name: str) -> ModuleName | None:
        # Explicitly exposed names first.
        for imp in self.imports:
            if imp.exposing is None or imp.exposing.everything:
                continue
            for item in imp.exposing.items:
                if item.name == name:
                    return imp.module_name
                if item.open:
                    interface = load_interface(imp.module_name)
                    if interface is not None and name in interface.types.get(item.name, ()):
                        return imp.module_name

        unknown_open: list[ModuleName] = []
        for imp in self.imports:
            if imp.exposing is None or not imp.exposing.everything:
                continue
            interface = load_interface(imp.module_name)
            if interface is None:
                unknown_open.append(imp.module_name)
            elif interface.exposes_value(name):
                return imp.module_name

        if len(unknown_open) == 1:
            return unknown_open[0]
        return None


def build_lookup_table(module: Module) -> ModuleNameLookupTable:
    """Resolve every reference, constructor pattern and operator in a module."""
    table = ModuleNameLookupTable(module.name)
    resolver = _Resolver(module)
    # explicit imports come first and take precedence over the default ones
    for imp in resolver.imports:
        table.record_import(imp)
    scopes = LocalBindings()

    def bind(pattern: Pattern, kind: BindingKind) -> None:
        for var in bound_names(pattern):
            scopes.bind(var.name, kind, var.range)

    def visit_pattern(pattern: Pattern) -> None:
        if isinstance(pattern, NamedPattern):
            table.record(
                pattern.name_range,
                resolver.resolve(pattern.module_name, pattern.name, scopes),
            )
        for child in pattern_children(pattern):
            visit_pattern(child)

    def visit_function(decl: FunctionDeclaration) -> None:
        with scopes.frame():
            for arg in decl.args:
                visit_pattern(arg)
                bind(arg, BindingKind.ARGUMENT)
            visit(decl.body)

    def visit(expr: Expr) -> None:
        match expr:
            case FunctionOrValue(module_name=qualifier, name=name):
                table.record(expr.range, resolver.resolve(qualifier, name, scopes))
                return
            case PrefixOperator(operator=operator):
                table.record(expr.range, resolver.resolve((), operator, scopes))
                return
            case OperatorApplication(operator=operator):
                table.record(expr.operator_range, resolver.resolve((), operator, scopes))
            case LambdaExpr(args=args, body=body):
                with scopes.frame():
                    for arg in args:
                        visit_pattern(arg)
                        bind(arg, BindingKind.LAMBDA_ARGUMENT)
                    visit(body)
                return
            case LetExpr(declarations=declarations, body=body):
                with scopes.frame():
                    # let bindings are visible in every sibling body
                    for decl in declarations:
                        if isinstance(decl, FunctionDeclaration):
                            scopes.bind(decl.name, BindingKind.LET_BINDING, decl.name_range)
                        else:
                            bind(decl.pattern, BindingKind.LET_BINDING)
                    for decl in declarations:
                        if isinstance(decl, LetDestructuring):
                            visit_pattern(decl.pattern)
                            visit(decl.body)
                        else:
                            visit_function(decl)
                    visit(body)
                return
            case CaseExpr(subject=subject, branches=branches):
                visit(subject)
                for branch in branches:
                    with scopes.frame():
                        visit_pattern(branch.pattern)
                        bind(branch.pattern, BindingKind.PATTERN)
                        visit(branch.body)
                return
            case RecordUpdate(record=record):
                table.record(record.range, resolver.resolve((), record.name, scopes))
                for setter in expr.fields:
                    visit(setter.value)
                return
        for child in expression_children(expr):
            visit(child)

    for decl in module.declarations:
        if isinstance(decl, FunctionDeclaration):
            visit_function(decl)

    logger.debug("resolved %d reference(s) in %s", len(table), '.'.join(module.name))
    return table
